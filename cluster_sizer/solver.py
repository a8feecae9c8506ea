# solver.py

"""Node count solver for N+X redundancy."""

import logging
import math

from .config import MIN_QUORUM_NODES
from .exceptions import CapacityError
from .models import (
    NodeCapacity, NodeRequirements, RedundancyConfig, Resource, WorkloadDemand,
)

logger = logging.getLogger(__name__)

def nodes_needed(demand: float, capacity_per_node: float) -> int:
    """Nodes required to carry demand; 0 when the node offers no capacity."""
    if capacity_per_node > 0:
        return math.ceil(demand / capacity_per_node)
    return 0

def pick_limiting_factor(cpu_nodes: int, memory_nodes: int, storage_nodes: int) -> Resource:
    """Resource needing the most nodes; ties go to memory, then storage."""
    if memory_nodes >= cpu_nodes and memory_nodes >= storage_nodes:
        return Resource.MEMORY
    if storage_nodes >= cpu_nodes and storage_nodes >= memory_nodes:
        return Resource.STORAGE
    return Resource.CPU

def solve_node_count(capacity: NodeCapacity, demand: WorkloadDemand,
                     redundancy: RedundancyConfig) -> NodeRequirements:
    """
    Find the smallest cluster that survives X node failures.

    The surviving nodes must carry the full projected demand with CPU and
    memory at or below the eviction threshold and storage at or below the
    operational capacity target (already part of usable storage).

    Args:
        capacity: Per-node capacity
        demand: Projected workload demand
        redundancy: Number of tolerated failures and eviction threshold

    Returns:
        NodeRequirements with per-resource and total node counts

    Raises:
        CapacityError: local storage too small to hold any of the demand
    """
    if (capacity.has_local_storage and capacity.usable_storage_gib <= 0
            and demand.total_storage_gib > 0):
        raise CapacityError(
            f"Node local storage ({capacity.raw_storage_gib} GiB raw) yields no "
            f"usable capacity for {demand.total_storage_gib:.1f} GiB of demand"
        )

    threshold = redundancy.eviction_threshold

    cpu_at_threshold = nodes_needed(demand.total_vcpus,
                                    capacity.vcpu_capacity * threshold)
    memory_at_threshold = nodes_needed(demand.total_memory_gib,
                                       capacity.memory_capacity_gib * threshold)
    storage_at_threshold = nodes_needed(demand.total_storage_gib,
                                        capacity.usable_storage_gib)

    min_surviving = max(MIN_QUORUM_NODES, cpu_at_threshold,
                        memory_at_threshold, storage_at_threshold)
    total_nodes = min_surviving + redundancy.node_redundancy

    # Without the eviction discount, for reporting only
    cpu_nodes = nodes_needed(demand.total_vcpus, capacity.vcpu_capacity)
    memory_nodes = nodes_needed(demand.total_memory_gib, capacity.memory_capacity_gib)
    storage_nodes = nodes_needed(demand.total_storage_gib, capacity.usable_storage_gib)
    base_nodes = max(MIN_QUORUM_NODES, cpu_nodes, memory_nodes, storage_nodes)

    limiting = pick_limiting_factor(cpu_at_threshold, memory_at_threshold,
                                    storage_at_threshold)

    logger.debug(f"Nodes at threshold: cpu={cpu_at_threshold}, "
                 f"memory={memory_at_threshold}, storage={storage_at_threshold}")
    logger.info(f"Minimum surviving nodes: {min_surviving}, total with "
                f"N+{redundancy.node_redundancy}: {total_nodes} "
                f"(limited by {limiting.value})")

    return NodeRequirements(
        total_vcpus=demand.total_vcpus,
        total_memory_gib=demand.total_memory_gib,
        total_storage_gib=demand.total_storage_gib,
        nodes_for_cpu=cpu_nodes,
        nodes_for_memory=memory_nodes,
        nodes_for_storage=storage_nodes,
        base_nodes=base_nodes,
        nodes_for_cpu_at_threshold=cpu_at_threshold,
        nodes_for_memory_at_threshold=memory_at_threshold,
        nodes_for_storage_at_threshold=storage_at_threshold,
        min_surviving_nodes=min_surviving,
        node_redundancy=redundancy.node_redundancy,
        total_nodes=total_nodes,
        limiting_factor=limiting,
    )
