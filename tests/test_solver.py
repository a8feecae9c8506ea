"""Tests for the node count solver."""

import pytest

from cluster_sizer.capacity import calculate_node_capacity
from cluster_sizer.exceptions import CapacityError
from cluster_sizer.models import (
    FleetTotals,
    GrowthConfig,
    HardwareProfile,
    RedundancyConfig,
    Resource,
    StorageConfig,
)
from cluster_sizer.solver import nodes_needed, pick_limiting_factor, solve_node_count
from cluster_sizer.workload import aggregate_workload


def test_reference_cluster(profile, fleet, overcommit, storage, growth, redundancy):
    capacity = calculate_node_capacity(profile, overcommit, storage)
    demand = aggregate_workload(fleet, growth)
    req = solve_node_count(capacity, demand, redundancy)

    assert req.nodes_for_cpu_at_threshold == 3
    assert req.nodes_for_memory_at_threshold == 6
    assert req.nodes_for_storage_at_threshold == 4
    assert req.min_surviving_nodes == 6
    assert req.total_nodes == 8
    assert req.limiting_factor is Resource.MEMORY

    # Without the eviction discount
    assert req.nodes_for_cpu == 3
    assert req.nodes_for_memory == 5
    assert req.nodes_for_storage == 4
    assert req.base_nodes == 5


def test_quorum_floor(make_capacity, make_demand):
    req = solve_node_count(make_capacity(), make_demand(vcpus=1, memory_gib=1, storage_gib=1),
                           RedundancyConfig(node_redundancy=0))
    assert req.min_surviving_nodes == 3
    assert req.total_nodes == 3
    assert req.base_nodes == 3


def test_empty_workload_still_needs_quorum(make_capacity, make_demand):
    req = solve_node_count(make_capacity(), make_demand(), RedundancyConfig(node_redundancy=1))
    assert req.nodes_for_cpu_at_threshold == 0
    assert req.min_surviving_nodes == 3
    assert req.total_nodes == 4


@pytest.mark.parametrize("redundancy", [0, 1, 2, 5])
def test_total_is_surviving_plus_redundancy(make_capacity, make_demand, redundancy):
    req = solve_node_count(make_capacity(), make_demand(vcpus=950, memory_gib=400),
                           RedundancyConfig(node_redundancy=redundancy, eviction_threshold=0.9))
    assert req.min_surviving_nodes == 11  # ceil(950 / 90)
    assert req.total_nodes == req.min_surviving_nodes + redundancy
    assert req.node_redundancy == redundancy


def test_storage_uses_usable_capacity_without_threshold(make_capacity, make_demand):
    req = solve_node_count(make_capacity(usable_storage=750),
                           make_demand(storage_gib=7500),
                           RedundancyConfig(eviction_threshold=0.5))
    assert req.nodes_for_storage_at_threshold == 10
    assert req.limiting_factor is Resource.STORAGE


def test_external_storage_never_dominates(make_capacity, make_demand):
    capacity = make_capacity(max_storage=0, usable_storage=0, raw_storage=0)
    req = solve_node_count(capacity, make_demand(vcpus=10, memory_gib=10, storage_gib=10 ** 6),
                           RedundancyConfig())
    assert req.nodes_for_storage == 0
    assert req.nodes_for_storage_at_threshold == 0
    assert req.min_surviving_nodes == 3


def test_local_storage_too_small_for_demand(overcommit):
    node = HardwareProfile(name="small-disk", physical_cores=32, threads=64, memory_gib=256,
                           device_count=1, device_size_gib=30, local_storage_gib=30)
    storage = StorageConfig(replica_factor=3, operational_capacity=0.1, metadata_overhead=0.15)
    capacity = calculate_node_capacity(node, overcommit, storage)
    assert capacity.max_usable_storage_gib == 8
    assert capacity.usable_storage_gib == 0

    fleet = FleetTotals(vm_count=10, vcpus=20, memory_mib=40960, in_use_gib=50000)
    demand = aggregate_workload(fleet, GrowthConfig(annual_growth_rate=0, storage_overhead=0))
    with pytest.raises(CapacityError):
        solve_node_count(capacity, demand, RedundancyConfig())


def test_local_storage_floor_without_storage_demand(make_capacity, make_demand):
    capacity = make_capacity(max_storage=8, usable_storage=0, raw_storage=30)
    req = solve_node_count(capacity, make_demand(vcpus=10, memory_gib=10), RedundancyConfig())
    assert req.nodes_for_storage_at_threshold == 0
    assert req.min_surviving_nodes == 3


def test_cpu_limited(make_capacity, make_demand):
    req = solve_node_count(make_capacity(vcpu=100), make_demand(vcpus=1000, memory_gib=10),
                           RedundancyConfig(node_redundancy=1, eviction_threshold=1.0))
    assert req.limiting_factor is Resource.CPU
    assert req.min_surviving_nodes == 10
    assert req.total_nodes == 11


@pytest.mark.parametrize("cpu,memory,storage,expected", [
    (5, 5, 5, Resource.MEMORY),
    (5, 3, 5, Resource.STORAGE),
    (5, 5, 3, Resource.MEMORY),
    (6, 3, 3, Resource.CPU),
    (3, 3, 6, Resource.STORAGE),
    (0, 0, 0, Resource.MEMORY),
])
def test_limiting_factor_tie_break(cpu, memory, storage, expected):
    assert pick_limiting_factor(cpu, memory, storage) is expected


@pytest.mark.parametrize("demand,capacity,expected", [
    (100, 50, 2),
    (101, 50, 3),
    (0, 50, 0),
    (100, 0, 0),
    (100, 0.5, 200),
])
def test_nodes_needed(demand, capacity, expected):
    assert nodes_needed(demand, capacity) == expected
