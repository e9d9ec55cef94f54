"""
Static catalog of the instance types offered by the estimator.
Maps instance identifiers to their hardware specification.
"""
from typing import Dict, List, Optional, Any
from dataclasses import dataclass


@dataclass(frozen=True)
class InstanceSpec:
    """Hardware specification for a single instance type."""
    vcpu: int
    memory_gib: float
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "vcpu": self.vcpu,
            "memoryGiB": self.memory_gib,
            "note": self.note,
        }


# Ordered smallest to largest; dict order is the display order
INSTANCE_CATALOG: Dict[str, InstanceSpec] = {
    "t3.micro": InstanceSpec(vcpu=2, memory_gib=1, note="Burstable, free tier eligible"),
    "t3.small": InstanceSpec(vcpu=2, memory_gib=2, note="Burstable"),
    "t3.medium": InstanceSpec(vcpu=2, memory_gib=4, note="Burstable"),
    "t3.large": InstanceSpec(vcpu=2, memory_gib=8, note="Burstable"),
    "t3.xlarge": InstanceSpec(vcpu=4, memory_gib=16, note="Burstable"),
    "t3.2xlarge": InstanceSpec(vcpu=8, memory_gib=32, note="Burstable"),
}


def lookup(instance_id: str) -> Optional[InstanceSpec]:
    """
    Look up the hardware spec for an instance type.

    Args:
        instance_id: Instance type identifier (e.g., 't3.micro')

    Returns:
        InstanceSpec, or None if the instance type is not in the catalog
    """
    return INSTANCE_CATALOG.get(instance_id)


def instance_ids() -> List[str]:
    """Return catalog instance types in display order."""
    return list(INSTANCE_CATALOG.keys())


def is_known(instance_id: str) -> bool:
    return instance_id in INSTANCE_CATALOG
