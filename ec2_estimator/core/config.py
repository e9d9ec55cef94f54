"""
Configuration module for loading environment variables.
The pricing service endpoint must be provided through the environment.
"""
import math
import os
from typing import Optional


class ConfigurationError(ValueError):
    """Raised when required configuration is missing or invalid."""
    pass


class Config:
    """Application configuration loaded from environment variables."""

    # Fixed request constants (not user-selectable at this revision)
    ESTIMATE_REGION: str = "ap-northeast-1"
    ESTIMATE_REGION_LABEL: str = "ap-northeast-1 (Tokyo)"
    ESTIMATE_CURRENCY: str = "JPY"

    # Initial form values
    DEFAULT_INSTANCE_TYPE: str = "t3.micro"
    DEFAULT_HOURS: int = 24
    DEFAULT_STORAGE_GB: int = 20

    def __init__(
        self,
        api_base_url: Optional[str] = None,
        api_timeout: Optional[str] = None,
        log_level: Optional[str] = None
    ):
        """
        Read configuration, preferring explicit arguments over the environment.

        Args:
            api_base_url: Pricing service base URL (defaults to ESTIMATE_API_BASE_URL)
            api_timeout: Request timeout in seconds, 0 disables it (defaults to ESTIMATE_API_TIMEOUT)
            log_level: Logging level name (defaults to LOG_LEVEL)
        """
        if api_base_url is None:
            api_base_url = os.getenv("ESTIMATE_API_BASE_URL", "")
        if api_timeout is None:
            api_timeout = os.getenv("ESTIMATE_API_TIMEOUT", "30")

        self.ESTIMATE_API_BASE_URL: str = api_base_url.strip().rstrip("/")
        self.ESTIMATE_API_TIMEOUT_RAW: str = str(api_timeout)
        self.LOG_LEVEL: str = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()

    @property
    def ESTIMATE_URL(self) -> str:
        """Full URL of the estimate endpoint."""
        return f"{self.ESTIMATE_API_BASE_URL}/estimate"

    @property
    def ESTIMATE_API_TIMEOUT(self) -> Optional[float]:
        """Timeout in seconds, or None when disabled."""
        timeout = float(self.ESTIMATE_API_TIMEOUT_RAW)
        return timeout if timeout > 0 else None

    def validate(self) -> None:
        """
        Validates that required configuration values are set.

        Raises:
            ConfigurationError: If any required configuration is missing or invalid.
        """
        if not self.ESTIMATE_API_BASE_URL:
            raise ConfigurationError("ESTIMATE_API_BASE_URL is required")
        if not self.ESTIMATE_API_BASE_URL.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"ESTIMATE_API_BASE_URL must be a valid URL (got: {self.ESTIMATE_API_BASE_URL})"
            )

        try:
            timeout = float(self.ESTIMATE_API_TIMEOUT_RAW)
        except ValueError:
            raise ConfigurationError(
                f"ESTIMATE_API_TIMEOUT must be a number (got: {self.ESTIMATE_API_TIMEOUT_RAW})"
            )
        if not math.isfinite(timeout):
            raise ConfigurationError(
                f"ESTIMATE_API_TIMEOUT must be finite (got: {self.ESTIMATE_API_TIMEOUT_RAW})"
            )
        if timeout < 0:
            raise ConfigurationError("ESTIMATE_API_TIMEOUT must not be negative")


config = Config()
