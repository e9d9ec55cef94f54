"""
Instance catalog API endpoints.
"""
from typing import Dict, Any
from fastapi import APIRouter, HTTPException

from ec2_estimator.domain.instance_catalog import instance_ids, lookup


router = APIRouter(prefix="/api/instances", tags=["instances"])


@router.get("")
async def list_instances() -> Dict[str, Any]:
    """List catalog instance types with their hardware specs, in display order."""
    return {
        "status": "ok",
        "instances": [
            {"instanceType": instance_id, **lookup(instance_id).to_dict()}
            for instance_id in instance_ids()
        ],
    }


@router.get("/{instance_id}")
async def get_instance(instance_id: str) -> Dict[str, Any]:
    """
    Get the hardware spec for one instance type.

    Returns 404 if the instance type is not in the catalog.
    """
    spec = lookup(instance_id)
    if spec is None:
        raise HTTPException(
            status_code=404,
            detail=f"Instance type '{instance_id}' not found"
        )
    return {"status": "ok", "instanceType": instance_id, **spec.to_dict()}
