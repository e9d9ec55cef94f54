"""
Estimation orchestrator.
Sequences request building, the pricing service call and response
normalization, and owns the single request state of the tool.
"""
from typing import Any, Optional
import asyncio
import logging

from ec2_estimator.core.config import Config, config as default_config
from ec2_estimator.domain.estimate_models import (
    EstimateFailure,
    RequestState,
    RequestStatus,
)
from ec2_estimator.services.estimate_client import EstimateClient
from ec2_estimator.services.request_builder import (
    build_estimate_request,
    UnknownInstanceTypeError,
)
from ec2_estimator.services.response_normalizer import normalize_response


logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error"
CANCELLED_MESSAGE = "Request cancelled"


class EstimationOrchestrator:
    """
    Runs estimate submissions through a single-request state machine.

    State machine:
    - IDLE: No submission yet
    - IN_FLIGHT: Waiting for the pricing service
    - SUCCEEDED: Holds the normalized result
    - FAILED: Holds a human-readable error message

    Transitions:
    - any settled state -> IN_FLIGHT: On submit, clearing result and error first
    - IN_FLIGHT -> SUCCEEDED / FAILED: When the call completes
    - IN_FLIGHT -> FAILED: When the call is cancelled (the cancellation propagates)
    - IN_FLIGHT -> IN_FLIGHT: A submit while in flight is ignored
    """

    def __init__(self, config: Config, client: EstimateClient = None):
        """
        Initialize the orchestrator.

        Args:
            config: Validated application configuration
            client: Pricing service client (defaults to one built from config)
        """
        self.config = config
        self.client = client or EstimateClient(config)
        self._state = RequestState()

    @property
    def state(self) -> RequestState:
        """Current request state (read-only for callers)."""
        return self._state

    @property
    def can_submit(self) -> bool:
        """Whether the submit action is enabled."""
        return not self._state.in_flight

    async def submit(self, instance_type: str, hours: Any, storage: Any) -> RequestState:
        """
        Submit an estimate and wait for its outcome.

        Args:
            instance_type: Catalog instance type
            hours: Daily runtime in hours, raw form value
            storage: Storage size in GB, raw form value

        Returns:
            The resulting RequestState. If a request is already in flight the
            current state is returned unchanged and nothing is dispatched.
        """
        if not self.can_submit:
            logger.info("Estimate submission ignored: a request is already in flight")
            return self._state

        self._state = RequestState(status=RequestStatus.IN_FLIGHT)

        try:
            request = build_estimate_request(instance_type, hours, storage)
        except UnknownInstanceTypeError as error:
            return self._fail(str(error))

        try:
            response = await self.client.post_estimate(request)
        except asyncio.CancelledError:
            logger.warning("Pricing service call cancelled")
            self._fail(CANCELLED_MESSAGE)
            raise
        except Exception as error:
            logger.warning(f"Pricing service call failed: {error}")
            return self._fail(str(error) or NETWORK_ERROR_MESSAGE)

        outcome = normalize_response(
            response.status_code,
            response.ok,
            response.text,
            response.reason_phrase,
        )
        if isinstance(outcome, EstimateFailure):
            return self._fail(outcome.message)

        logger.info(f"Estimate succeeded for {request.instance_type}")
        self._state = RequestState(status=RequestStatus.SUCCEEDED, result=outcome)
        return self._state

    def _fail(self, message: str) -> RequestState:
        self._state = RequestState(status=RequestStatus.FAILED, error=message)
        return self._state


# Global singleton instance (one orchestrator per running tool)
_orchestrator: Optional[EstimationOrchestrator] = None


def get_orchestrator() -> EstimationOrchestrator:
    """
    Get the global orchestrator instance.

    Returns:
        EstimationOrchestrator built from the module configuration
    """
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = EstimationOrchestrator(default_config)
    return _orchestrator
