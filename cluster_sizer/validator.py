# validator.py

"""Redundancy validation of a sized cluster."""

import logging
from typing import Optional

from .config import MIN_QUORUM_NODES
from .exceptions import CapacityError, ConfigurationError
from .models import (
    NodeCapacity, NodeRequirements, RedundancyConfig, StateValidation,
    StorageConfig, ValidationResult,
)

logger = logging.getLogger(__name__)

def utilization_percent(demand: float, active_nodes: int, capacity_per_node: float) -> float:
    """Per-node utilization when demand is spread over active nodes."""
    if active_nodes <= 0:
        return float('inf')
    if capacity_per_node <= 0:
        return 0.0
    return demand / active_nodes / capacity_per_node * 100

def _check_denominators(capacity: NodeCapacity, requirements: NodeRequirements) -> None:
    if capacity.vcpu_capacity <= 0 and requirements.total_vcpus > 0:
        raise CapacityError(
            f"Node has no vCPU capacity for {requirements.total_vcpus} vCPUs of demand"
        )
    if capacity.memory_capacity_gib <= 0 and requirements.total_memory_gib > 0:
        raise CapacityError(
            f"Node has no memory capacity for "
            f"{requirements.total_memory_gib:.1f} GiB of demand"
        )
    if (capacity.has_local_storage and capacity.usable_storage_gib <= 0
            and requirements.total_storage_gib > 0):
        raise CapacityError(
            f"Node local storage ({capacity.raw_storage_gib} GiB raw) yields no "
            f"usable capacity for {requirements.total_storage_gib:.1f} GiB of demand"
        )

def _evaluate_state(active_nodes: int, capacity: NodeCapacity,
                    requirements: NodeRequirements, eviction_threshold: float,
                    storage_threshold: float) -> StateValidation:
    cpu_util = utilization_percent(requirements.total_vcpus, active_nodes,
                                   capacity.vcpu_capacity)
    memory_util = utilization_percent(requirements.total_memory_gib, active_nodes,
                                      capacity.memory_capacity_gib)

    cpu_passes = cpu_util <= eviction_threshold * 100
    memory_passes = memory_util <= eviction_threshold * 100

    if capacity.has_local_storage:
        # Measured against the ceiling before the operational target
        storage_util = utilization_percent(requirements.total_storage_gib, active_nodes,
                                           capacity.max_usable_storage_gib)
        storage_passes = storage_util <= storage_threshold * 100
    else:
        storage_util = 0.0
        storage_passes = True

    quorum_passes = active_nodes >= MIN_QUORUM_NODES

    return StateValidation(
        active_nodes=active_nodes,
        cpu_utilization=cpu_util,
        memory_utilization=memory_util,
        storage_utilization=storage_util,
        cpu_passes=cpu_passes,
        memory_passes=memory_passes,
        storage_passes=storage_passes,
        quorum_passes=quorum_passes,
        all_pass=cpu_passes and memory_passes and storage_passes and quorum_passes,
    )

def validate_redundancy(capacity: NodeCapacity, requirements: NodeRequirements,
                        redundancy: RedundancyConfig, storage: StorageConfig,
                        total_nodes: Optional[int] = None,
                        failed_nodes: Optional[int] = None) -> ValidationResult:
    """
    Check per-node utilization with all nodes up and with X nodes down.

    A failing check is a normal result, not an error.

    Args:
        capacity: Per-node capacity
        requirements: Solver output with the projected demand
        redundancy: Tolerated failures and eviction threshold
        storage: Storage settings providing the operational capacity target
        total_nodes: Cluster size to check, defaults to the solver's total
        failed_nodes: Nodes assumed down, defaults to the configured redundancy

    Returns:
        ValidationResult for the healthy and degraded states

    Raises:
        ConfigurationError: failed_nodes negative or larger than total_nodes
        CapacityError: demand on a resource the node cannot hold at all
    """
    if total_nodes is None:
        total_nodes = requirements.total_nodes
    if failed_nodes is None:
        failed_nodes = redundancy.node_redundancy

    if failed_nodes < 0:
        raise ConfigurationError("failed_nodes", ">= 0", failed_nodes)
    if total_nodes < failed_nodes:
        raise ConfigurationError(
            "total_nodes", f">= failed_nodes ({failed_nodes})", total_nodes
        )
    _check_denominators(capacity, requirements)

    surviving_nodes = max(0, total_nodes - failed_nodes)
    eviction = redundancy.eviction_threshold
    operational = storage.operational_capacity

    healthy = _evaluate_state(total_nodes, capacity, requirements, eviction, operational)
    after_failure = _evaluate_state(surviving_nodes, capacity, requirements,
                                    eviction, operational)

    result = ValidationResult(
        total_nodes=total_nodes,
        failed_nodes=failed_nodes,
        surviving_nodes=surviving_nodes,
        eviction_threshold=eviction,
        storage_threshold=operational,
        healthy=healthy,
        after_failure=after_failure,
    )

    if result.all_pass:
        logger.info(f"N+{failed_nodes} validation passed with {surviving_nodes} "
                    f"of {total_nodes} nodes surviving")
    else:
        logger.warning(f"N+{failed_nodes} validation failed with {surviving_nodes} "
                       f"of {total_nodes} nodes surviving")
    logger.debug(f"After failure: CPU {after_failure.cpu_utilization:.1f}%, "
                 f"memory {after_failure.memory_utilization:.1f}%, "
                 f"storage {after_failure.storage_utilization:.1f}%")
    return result
