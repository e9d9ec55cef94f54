"""
Tests for the static instance catalog.
"""

import pytest
from dataclasses import FrozenInstanceError
from ec2_estimator.domain.instance_catalog import (
    INSTANCE_CATALOG,
    InstanceSpec,
    instance_ids,
    is_known,
    lookup,
)


@pytest.mark.parametrize("instance_id", list(INSTANCE_CATALOG))
def test_every_catalog_entry_has_positive_hardware(instance_id):
    """Every catalog spec has at least one vCPU and positive memory."""
    spec = lookup(instance_id)

    assert spec is not None
    assert isinstance(spec.vcpu, int)
    assert spec.vcpu >= 1
    assert spec.memory_gib > 0


def test_lookup_unknown_instance_returns_none():
    """Unknown instance types are absent, not an error."""
    assert lookup('m5.large') is None
    assert lookup('') is None


def test_instance_ids_are_in_display_order():
    """Instance types are listed smallest to largest."""
    assert instance_ids() == [
        't3.micro', 't3.small', 't3.medium',
        't3.large', 't3.xlarge', 't3.2xlarge',
    ]


def test_t3_medium_spec():
    """t3.medium has 2 vCPUs and 4 GiB of memory."""
    spec = lookup('t3.medium')

    assert spec.vcpu == 2
    assert spec.memory_gib == 4


def test_is_known():
    assert is_known('t3.2xlarge')
    assert not is_known('t3.nano')


def test_instance_spec_is_immutable():
    """Specs cannot be mutated after load."""
    spec = lookup('t3.micro')

    with pytest.raises(FrozenInstanceError):
        spec.vcpu = 64


def test_instance_spec_to_dict():
    spec = InstanceSpec(vcpu=4, memory_gib=16, note='Burstable')

    assert spec.to_dict() == {'vcpu': 4, 'memoryGiB': 16, 'note': 'Burstable'}
