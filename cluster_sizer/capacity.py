# capacity.py

"""Per-node capacity calculation."""

import logging
import math
from typing import Optional

from .models import (
    HardwareProfile, NodeCapacity, OvercommitConfig, ReservedResources,
    StorageConfig,
)

logger = logging.getLogger(__name__)

def calculate_node_capacity(profile: HardwareProfile,
                            overcommit: OvercommitConfig,
                            storage: StorageConfig,
                            reserved: Optional[ReservedResources] = None) -> NodeCapacity:
    """
    Calculate the usable capacity of a single node.

    Reserved CPU and memory come off before overcommit is applied.
    Storage is reduced by replication and metadata overhead first, then by the
    operational capacity target. A node without local storage yields zero
    usable storage, which downstream means "not constrained by this node".

    Args:
        profile: Hardware profile of the node
        overcommit: Overcommit and hyperthreading settings
        storage: Replication and capacity settings
        reserved: Infrastructure reservations, defaults when omitted

    Returns:
        NodeCapacity for one node
    """
    reserved = reserved or ReservedResources()

    reserved_cpu = reserved.cpu(profile.device_count)
    reserved_memory = reserved.memory_gib(profile.device_count)

    available_cores = max(0, profile.physical_cores - reserved_cpu)
    if overcommit.hyperthreading:
        effective_cores = available_cores * overcommit.ht_multiplier
    else:
        effective_cores = available_cores
    vcpu_capacity = math.floor(effective_cores * overcommit.cpu_ratio)

    available_memory = max(0, profile.memory_gib - reserved_memory)
    memory_capacity = math.floor(available_memory * overcommit.memory_ratio)

    raw_storage = profile.local_storage_gib
    efficiency = (1 / storage.replica_factor) * (1 - storage.metadata_overhead)
    max_usable_storage = math.floor(raw_storage * efficiency)
    usable_storage = math.floor(max_usable_storage * storage.operational_capacity)

    logger.debug(f"Node {profile.name}: {vcpu_capacity} vCPUs, "
                 f"{memory_capacity} GiB memory, "
                 f"{usable_storage}/{max_usable_storage} GiB storage")

    return NodeCapacity(
        vcpu_capacity=vcpu_capacity,
        memory_capacity_gib=memory_capacity,
        max_usable_storage_gib=max_usable_storage,
        usable_storage_gib=usable_storage,
        raw_storage_gib=raw_storage,
        storage_efficiency=efficiency,
        available_cores=available_cores,
        effective_cores=effective_cores,
        available_memory_gib=available_memory,
        reserved_cpu=reserved_cpu,
        reserved_memory_gib=reserved_memory,
    )
