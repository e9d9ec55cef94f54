"""
Server-rendered estimator page.
"""
from html import escape
from typing import Any, Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from ec2_estimator.core.config import Config
from ec2_estimator.domain.estimate_models import EstimateResult, RequestState
from ec2_estimator.domain.instance_catalog import instance_ids, lookup
from ec2_estimator.services.estimation_orchestrator import (
    EstimationOrchestrator,
    get_orchestrator,
)


router = APIRouter()

MISSING = "-"


def format_value(value: Any) -> str:
    """Render a result field; absent fields are shown as '-', never 0."""
    if value is None:
        return MISSING
    return escape(str(value))


def format_jpy(value: Any) -> str:
    """Render a yen amount with thousands separators."""
    if value is None:
        return MISSING
    if isinstance(value, bool):
        return escape(str(value))
    if isinstance(value, int):
        return f"{value:,}"
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return escape(str(value))
    if amount.is_integer():
        return f"{int(amount):,}"
    return f"{amount:,.2f}"


def _render_spec_panel(instance_type: str) -> str:
    # Reflects the last submitted type; the select may since have changed
    spec = lookup(instance_type)
    if spec is None:
        return ""
    note = f"<p>{escape(spec.note)}</p>" if spec.note else ""
    return (
        '<div class="spec">'
        f"<p>Hardware ({escape(instance_type)}, last submitted):</p>"
        f"<p>vCPU: {spec.vcpu}</p>"
        f"<p>Memory: {spec.memory_gib:g} GiB</p>"
        f"{note}"
        "</div>"
    )


def _render_result(result: EstimateResult) -> str:
    return (
        '<div class="result" style="margin-top: 24px; padding: 12px; border: 1px solid #ddd">'
        "<h2>Result</h2>"
        f"<p>Instance type: {format_value(result.instance_type)}</p>"
        f"<p>Storage: {format_value(result.storage_gb)} GB (gp3)</p>"
        f"<p>Exchange rate: {format_value(result.exchange_rate)} JPY / USD</p>"
        f"<p>EC2 (monthly, USD): {format_value(result.ec2_monthly_usd)}</p>"
        f"<p>Storage (monthly, USD): {format_value(result.storage_monthly_usd)}</p>"
        f"<p><b>Total (monthly, USD): {format_value(result.total_monthly_usd)}</b></p>"
        f"<p><b>Total (monthly, JPY): {format_jpy(result.total_monthly_jpy)} JPY</b></p>"
        "</div>"
    )


def render_page(
    state: RequestState,
    can_submit: bool,
    instance_type: str,
    hours: Any,
    storage: Any
) -> str:
    """
    Render the estimator page for the given form values and request state.

    Args:
        state: Current orchestrator request state
        can_submit: Whether the submit button is enabled
        instance_type: Selected instance type
        hours: Current hours field value
        storage: Current storage field value

    Returns:
        HTML document
    """
    options = "".join(
        f'<option value="{escape(option)}"{" selected" if option == instance_type else ""}>'
        f"{escape(option)}</option>"
        for option in instance_ids()
    )
    disabled = "" if can_submit else " disabled"
    button_label = "Calculate cost" if can_submit else "Calculating..."

    error_html = ""
    if state.error:
        error_html = f'<p class="error" style="color: crimson; margin-top: 16px">Error: {escape(state.error)}</p>'

    result_html = _render_result(state.result) if state.result is not None else ""

    return f"""<!DOCTYPE html>
<html>
<head>
    <title>EC2 Cost Estimator</title>
</head>
<body style="margin: 2rem; font-size: 1.1rem; max-width: 720px">
    <h1>EC2 Cost Estimator</h1>
    <form method="post" action="/estimate">
        <div style="margin-top: 12px">
            <label>Instance type:</label>
            <select name="instanceType">{options}</select>
        </div>
        {_render_spec_panel(instance_type)}
        <div style="margin-top: 12px">
            <label>Region:</label> <span>{escape(Config.ESTIMATE_REGION_LABEL)}</span>
        </div>
        <div style="margin-top: 12px">
            <label>Runtime per day (h):</label>
            <input type="number" name="hours" min="1" value="{escape(str(hours))}">
        </div>
        <div style="margin-top: 12px">
            <label>Storage (GB, gp3):</label>
            <input type="number" name="storage" min="1" placeholder="20 (GB)" value="{escape(str(storage))}">
        </div>
        <button type="submit" style="margin-top: 16px; padding: 8px 16px"{disabled}>{button_label}</button>
    </form>
    {error_html}
    {result_html}
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
async def root(
    instance_type: str = Query(Config.DEFAULT_INSTANCE_TYPE, alias="instanceType"),
    hours: Optional[str] = Query(None),
    storage: Optional[str] = Query(None),
    orchestrator: EstimationOrchestrator = Depends(get_orchestrator)
) -> HTMLResponse:
    """
    Root endpoint serving the estimator page.

    Query parameters carry the form values back after a submission.
    """
    return HTMLResponse(content=render_page(
        state=orchestrator.state,
        can_submit=orchestrator.can_submit,
        instance_type=instance_type,
        hours=Config.DEFAULT_HOURS if hours is None else hours,
        storage=Config.DEFAULT_STORAGE_GB if storage is None else storage,
    ))
