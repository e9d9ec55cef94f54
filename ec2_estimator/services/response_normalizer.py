"""
Response normalizer service.
Reconciles the pricing service's response shapes into a single outcome.

The service is reachable either directly (flat JSON result) or through a
gateway integration that wraps the real payload as
`{"statusCode": 200, "body": "<json string>"}`. Both shapes, and partial or
unparsable bodies, normalize to an EstimateResult or an EstimateFailure.
"""
import json
import logging
from typing import Dict, Any, Union

from ec2_estimator.domain.estimate_models import (
    EstimateResult,
    EstimateFailure,
    EstimateOutcome,
    FailureKind,
)


logger = logging.getLogger(__name__)


def _parse_json_object(raw: Union[str, bytes, None]) -> Dict[str, Any]:
    """Parse raw JSON, absorbing malformed input and non-object values as {}."""
    if raw is None:
        return {}
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError, ValueError):
        return {}
    if not isinstance(parsed, dict):
        return {}
    return parsed


def unwrap_envelope(parsed: Dict[str, Any]) -> Dict[str, Any]:
    """
    Resolve the effective body of a parsed response.

    Args:
        parsed: Parsed response object

    Returns:
        The JSON-decoded `body` when it is a string, otherwise `parsed` itself
    """
    body = parsed.get("body")
    if isinstance(body, str):
        return _parse_json_object(body)
    return parsed


def normalize_response(
    status_code: int,
    ok: bool,
    raw_body: Union[str, bytes, None],
    reason_phrase: str = ""
) -> EstimateOutcome:
    """
    Normalize a pricing service response.

    Args:
        status_code: Transport-level HTTP status code
        ok: Whether the transport reported success (2xx)
        raw_body: Raw response body text
        reason_phrase: Transport-level status text (e.g., 'Bad Gateway')

    Returns:
        EstimateResult on success, EstimateFailure otherwise. Never raises for
        malformed bodies.
    """
    parsed = _parse_json_object(raw_body)
    effective_body = unwrap_envelope(parsed)

    # Either signal alone is sufficient
    if ok or parsed.get("statusCode") == 200:
        return EstimateResult(body=effective_body)

    error = effective_body.get("error")
    if error:
        if not isinstance(error, str):
            error = json.dumps(error)
        logger.warning(f"Pricing service reported an error (status {status_code}): {error}")
        return EstimateFailure(
            message=error,
            kind=FailureKind.SERVICE,
            status_code=status_code,
        )

    message = f"API error: {status_code}"
    if reason_phrase:
        message = f"{message} {reason_phrase}"
    logger.warning(f"Pricing service request failed: {message}")
    return EstimateFailure(
        message=message,
        kind=FailureKind.TRANSPORT,
        status_code=status_code,
    )
