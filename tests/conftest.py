"""Shared fixtures: the 32-core reference node and a 40 VM fleet."""

import pytest

from cluster_sizer.models import (
    FleetTotals,
    GrowthConfig,
    HardwareProfile,
    NodeCapacity,
    OvercommitConfig,
    RedundancyConfig,
    SizingSettings,
    StorageConfig,
    StorageMetric,
    VirtualizationOverhead,
    WorkloadDemand,
)


@pytest.fixture
def profile():
    return HardwareProfile(
        name="example-32c",
        physical_cores=32,
        threads=64,
        memory_gib=256,
        device_count=4,
        device_size_gib=800,
        local_storage_gib=3200,
    )


@pytest.fixture
def diskless_profile():
    return HardwareProfile(
        name="diskless-32c",
        physical_cores=32,
        threads=64,
        memory_gib=256,
    )


@pytest.fixture
def overcommit():
    return OvercommitConfig(cpu_ratio=5.0, memory_ratio=1.0,
                            hyperthreading=True, ht_multiplier=1.25)


@pytest.fixture
def storage():
    return StorageConfig(replica_factor=3, operational_capacity=0.75,
                         metadata_overhead=0.15)


@pytest.fixture
def redundancy():
    return RedundancyConfig(node_redundancy=2, eviction_threshold=0.96)


@pytest.fixture
def growth():
    return GrowthConfig(annual_growth_rate=0.0, planning_horizon_years=2,
                        storage_overhead=0.15,
                        storage_metric=StorageMetric.IN_USE)


@pytest.fixture
def settings(overcommit, storage, redundancy, growth):
    return SizingSettings(overcommit=overcommit, storage=storage,
                          redundancy=redundancy, growth=growth)


@pytest.fixture
def fleet():
    return FleetTotals(
        vm_count=40,
        vcpus=300,
        memory_mib=1000 * 1024,
        provisioned_gib=3000,
        in_use_gib=2000,
        disk_capacity_gib=4000,
    )


@pytest.fixture
def make_capacity():
    """Factory for NodeCapacity with only the fields the solver reads."""

    def _make(vcpu=100, memory=200, max_storage=1000, usable_storage=750,
              raw_storage=3000):
        return NodeCapacity(
            vcpu_capacity=vcpu,
            memory_capacity_gib=memory,
            max_usable_storage_gib=max_storage,
            usable_storage_gib=usable_storage,
            raw_storage_gib=raw_storage,
            storage_efficiency=0.0,
            available_cores=0,
            effective_cores=0,
            available_memory_gib=0,
            reserved_cpu=0,
            reserved_memory_gib=0,
        )

    return _make


@pytest.fixture
def make_demand():
    """Factory for WorkloadDemand with given projected totals."""

    def _make(vcpus=0, memory_gib=0.0, storage_gib=0.0, vm_count=10):
        overhead = VirtualizationOverhead(0, 0, 0, 0, 0, 0, vcpus, memory_gib * 1024)
        return WorkloadDemand(
            vm_count=vm_count,
            storage_metric=StorageMetric.IN_USE,
            base_vcpus=vcpus,
            base_memory_gib=memory_gib,
            base_storage_gib=storage_gib,
            overhead=overhead,
            annual_growth_rate=0.0,
            planning_horizon_years=0,
            storage_overhead=0.0,
            growth_multiplier=1.0,
            virt_overhead_multiplier=1.0,
            total_vcpus=vcpus,
            total_memory_gib=memory_gib,
            total_storage_gib=storage_gib,
        )

    return _make
