"""
Main FastAPI application bootstrap.
Validates configuration and includes routers.
"""
import logging
from urllib.parse import urlparse

from fastapi import FastAPI

from ec2_estimator.core.config import config, ConfigurationError
from ec2_estimator.api.views import router as views_router
from ec2_estimator.api.instances import router as instances_router
from ec2_estimator.api.estimate import router as estimate_router


logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Validate configuration on startup
try:
    config.validate()
except ConfigurationError as error:
    # Refuse to start against an undefined endpoint
    raise RuntimeError(f"Configuration error: {error}") from error

# Log a safe summary of the pricing endpoint (host only)
logger.info(
    "Pricing service endpoint host=%s, timeout=%s",
    urlparse(config.ESTIMATE_API_BASE_URL).netloc,
    config.ESTIMATE_API_TIMEOUT
)


app = FastAPI(
    title="EC2 Cost Estimator",
    description="Monthly EC2 and gp3 storage cost estimates from a remote pricing service",
)

app.include_router(views_router)
app.include_router(instances_router)
app.include_router(estimate_router)


@app.get("/health")
async def health() -> dict:
    """Liveness endpoint."""
    return {"status": "ok"}
