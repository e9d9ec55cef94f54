"""
API routes for submitting estimates and reading the request state.
"""
from typing import Dict, Any
from fastapi import APIRouter, Depends, Form
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field
from urllib.parse import urlencode

from ec2_estimator.core.config import Config
from ec2_estimator.services.estimation_orchestrator import (
    EstimationOrchestrator,
    get_orchestrator,
)


router = APIRouter()


class EstimateSubmitRequest(BaseModel):
    """
    Request model for submitting an estimate.

    Numeric fields are intentionally loose: the request builder coerces
    anything unusable to 0.
    """
    instanceType: str = Field(default=Config.DEFAULT_INSTANCE_TYPE, description="Catalog instance type")
    hours: Any = Field(default=Config.DEFAULT_HOURS, description="Daily runtime in hours")
    storage: Any = Field(default=Config.DEFAULT_STORAGE_GB, description="Storage size in GB (gp3)")


@router.post("/api/estimate")
async def submit_estimate(
    submit_request: EstimateSubmitRequest,
    orchestrator: EstimationOrchestrator = Depends(get_orchestrator)
) -> Dict[str, Any]:
    """
    Submit an estimate and return the resulting request state.

    Recoverable failures are reported in the state, not as HTTP errors.
    A submission while another is in flight returns the in-flight state.
    """
    state = await orchestrator.submit(
        submit_request.instanceType,
        submit_request.hours,
        submit_request.storage,
    )
    return {"status": "ok", "state": state.to_dict()}


@router.get("/api/estimate/state")
async def get_estimate_state(
    orchestrator: EstimationOrchestrator = Depends(get_orchestrator)
) -> Dict[str, Any]:
    """Return the current request state."""
    return {
        "status": "ok",
        "can_submit": orchestrator.can_submit,
        "state": orchestrator.state.to_dict(),
    }


@router.post("/estimate")
async def submit_estimate_form(
    instance_type: str = Form(Config.DEFAULT_INSTANCE_TYPE, alias="instanceType"),
    hours: str = Form(""),
    storage: str = Form(""),
    orchestrator: EstimationOrchestrator = Depends(get_orchestrator)
) -> RedirectResponse:
    """
    HTML form submission endpoint.

    Runs the estimate, then redirects back to the page which renders the
    resulting state along with the submitted form values.
    """
    await orchestrator.submit(instance_type, hours, storage)
    query = urlencode({"instanceType": instance_type, "hours": hours, "storage": storage})
    return RedirectResponse(url=f"/?{query}", status_code=303)
