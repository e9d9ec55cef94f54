"""
Domain models for estimate requests and their outcomes.
Defines the canonical request payload, the normalized result and failure
records, and the request state owned by the orchestrator.
"""
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class EstimateRequest:
    """Canonical request sent to the pricing service."""
    instance_type: str
    region: str
    currency: str
    hours: Union[int, float]
    storage_gb: Union[int, float]

    def to_payload(self) -> Dict[str, Any]:
        """
        Convert to the JSON payload expected by the pricing service.

        Storage is sent under both `storageGB` and the legacy `storage` key;
        both always carry the same value.
        """
        return {
            "instanceType": self.instance_type,
            "region": self.region,
            "currency": self.currency,
            "hours": self.hours,
            "storageGB": self.storage_gb,
            "storage": self.storage_gb,
        }


@dataclass
class EstimateResult:
    """
    Normalized pricing service result.

    Wraps the effective response body verbatim. Every accessor returns None
    when the service omitted the field; missing costs are never reported as 0.
    """
    body: Dict[str, Any] = field(default_factory=dict)

    @property
    def instance_type(self) -> Optional[str]:
        return self.body.get("instanceType")

    @property
    def storage_gb(self) -> Optional[Any]:
        return self.body.get("storageGB")

    @property
    def exchange_rate(self) -> Optional[Any]:
        return self.body.get("exchangeRate")

    @property
    def ec2_monthly_usd(self) -> Optional[Any]:
        return self.body.get("ec2MonthlyUSD")

    @property
    def storage_monthly_usd(self) -> Optional[Any]:
        return self.body.get("storageMonthlyUSD")

    @property
    def total_monthly_usd(self) -> Optional[Any]:
        return self.body.get("totalMonthlyUSD")

    @property
    def total_monthly_jpy(self) -> Optional[Any]:
        return self.body.get("totalMonthlyJPY")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return dict(self.body)


class FailureKind(Enum):
    """Origin of an estimate failure."""
    TRANSPORT = "transport"  # Network failure or non-2xx without an error body
    SERVICE = "service"  # Service reported an explicit error


@dataclass
class EstimateFailure:
    """A failed estimate carrying a human-readable message."""
    message: str
    kind: FailureKind
    status_code: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "message": self.message,
            "kind": self.kind.value,
            "status_code": self.status_code,
        }


EstimateOutcome = Union[EstimateResult, EstimateFailure]


class RequestStatus(Enum):
    """Estimate request lifecycle states."""
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class RequestState:
    """
    Snapshot of the orchestrator's request state.

    `result` is only set when SUCCEEDED and `error` only when FAILED.
    """
    status: RequestStatus = RequestStatus.IDLE
    result: Optional[EstimateResult] = None
    error: Optional[str] = None

    @property
    def in_flight(self) -> bool:
        return self.status == RequestStatus.IN_FLIGHT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "status": self.status.value,
            "result": self.result.to_dict() if self.result is not None else None,
            "error": self.error,
        }
