"""
Pricing service API client.
Handles the outbound estimate call to the remote pricing service.
"""
from typing import Optional
from dataclasses import dataclass
import logging
import httpx

from ec2_estimator.core.config import Config, config as default_config
from ec2_estimator.domain.estimate_models import EstimateRequest


logger = logging.getLogger(__name__)


class EstimateTransportError(Exception):
    """Raised when the pricing service cannot be reached."""
    pass


@dataclass
class RawResponse:
    """Transport-level view of a pricing service response."""
    status_code: int
    ok: bool
    reason_phrase: str
    text: str


class EstimateClient:
    """Service for making pricing service API calls."""

    def __init__(
        self,
        config: Config = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the client.

        Args:
            config: Application configuration (defaults to module config)
            transport: Optional httpx transport, used to stub the network in tests
        """
        self.config = config or default_config
        self.url = self.config.ESTIMATE_URL
        self.timeout = self.config.ESTIMATE_API_TIMEOUT
        self.transport = transport
        self.headers = {
            "Content-Type": "application/json",
        }

    async def post_estimate(self, request: EstimateRequest) -> RawResponse:
        """
        POST an estimate request to the pricing service.

        Non-2xx responses are returned, not raised; the response normalizer
        decides whether the call succeeded.

        Args:
            request: Canonical estimate request

        Returns:
            RawResponse with status, success flag, reason phrase and body text

        Raises:
            EstimateTransportError: If the request times out or cannot connect
        """
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    self.url,
                    headers=self.headers,
                    json=request.to_payload(),
                    timeout=self.timeout,
                )
        except httpx.TimeoutException as error:
            raise EstimateTransportError(
                f"Pricing service request timed out after {self.timeout}s"
            ) from error
        except httpx.RequestError as error:
            raise EstimateTransportError(
                f"Failed to connect to pricing service: {str(error)}"
            ) from error

        logger.debug(f"Pricing service responded with status {response.status_code}")
        return RawResponse(
            status_code=response.status_code,
            ok=response.is_success,
            reason_phrase=response.reason_phrase,
            text=response.text,
        )
