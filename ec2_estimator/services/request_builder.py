"""
Request builder service.
Converts raw, user-editable form values into a canonical EstimateRequest.

Numeric inputs follow a permissive default-substitution rule: anything that is
not a usable non-negative number (cleared field, free text, NaN, infinity,
booleans, negatives) becomes 0 rather than rejecting the submission.
"""
import math
import logging
from typing import Any, Union

from ec2_estimator.core.config import Config
from ec2_estimator.domain.estimate_models import EstimateRequest
from ec2_estimator.domain.instance_catalog import is_known


logger = logging.getLogger(__name__)

Number = Union[int, float]


class UnknownInstanceTypeError(ValueError):
    """Raised when the requested instance type is not in the catalog."""
    pass


def coerce_number(value: Any) -> Number:
    """
    Coerce a raw form value to a non-negative number.

    Args:
        value: Raw value from a numeric form field (str, int, float, None, ...)

    Returns:
        The numeric value, or 0 when the value is not a usable number.
        Integral values are returned as int.
    """
    if isinstance(value, bool):
        return 0

    if not isinstance(value, (int, float, str)):
        return 0

    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return 0

    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0
    if number.is_integer():
        return int(number)
    return number


def build_estimate_request(
    instance_type: str,
    hours: Any,
    storage: Any
) -> EstimateRequest:
    """
    Build a canonical estimate request.

    Args:
        instance_type: Catalog instance type (e.g., 't3.micro')
        hours: Daily runtime in hours, raw form value
        storage: Storage size in GB, raw form value

    Returns:
        EstimateRequest with fixed region and currency

    Raises:
        UnknownInstanceTypeError: If instance_type is not in the catalog
    """
    if not is_known(instance_type):
        raise UnknownInstanceTypeError(f"Unknown instance type: {instance_type}")

    coerced_hours = coerce_number(hours)
    coerced_storage = coerce_number(storage)
    if coerced_hours != hours or coerced_storage != storage:
        logger.debug(
            f"Coerced form input hours={hours!r}->{coerced_hours}, "
            f"storage={storage!r}->{coerced_storage}"
        )

    return EstimateRequest(
        instance_type=instance_type,
        region=Config.ESTIMATE_REGION,
        currency=Config.ESTIMATE_CURRENCY,
        hours=coerced_hours,
        storage_gb=coerced_storage,
    )
