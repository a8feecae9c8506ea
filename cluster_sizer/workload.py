# workload.py

"""Workload aggregation and growth projection."""

import logging
from typing import Optional

from .config import MIB_PER_GIB
from .models import (
    FleetTotals, GrowthConfig, OverheadModel, WorkloadDemand,
)
from .overhead import calculate_overhead

logger = logging.getLogger(__name__)

def growth_multiplier(annual_growth_rate: float, years: float) -> float:
    """Compound growth factor over the planning horizon."""
    if annual_growth_rate == 0 or years == 0:
        return 1.0
    return (1 + annual_growth_rate) ** years

def aggregate_workload(fleet: FleetTotals, growth: GrowthConfig,
                       overhead_model: Optional[OverheadModel] = None) -> WorkloadDemand:
    """
    Project the fleet's demand to the end of the planning horizon.

    CPU and memory get virtualization overhead added. Storage uses the
    selected metric, grown at the annual rate and inflated by the storage
    virtualization overhead. An empty fleet has no demand at all.

    Args:
        fleet: Aggregate totals of the included VMs
        growth: Storage metric, growth and storage overhead settings
        overhead_model: Overhead coefficients, defaults when omitted

    Returns:
        WorkloadDemand with base and projected totals
    """
    metric = growth.storage_metric

    if fleet.vm_count == 0:
        base_vcpus = base_memory_mib = base_storage = 0
    else:
        base_vcpus = fleet.vcpus
        base_memory_mib = fleet.memory_mib
        base_storage = fleet.storage_gib(metric)

    overhead = calculate_overhead(fleet.vm_count, base_vcpus, base_memory_mib,
                                  overhead_model)

    base_memory_gib = base_memory_mib / MIB_PER_GIB
    total_memory_gib = base_memory_gib + overhead.memory_total_mib / MIB_PER_GIB

    multiplier = growth_multiplier(growth.annual_growth_rate,
                                   growth.planning_horizon_years)
    virt_multiplier = 1 + growth.storage_overhead
    total_storage = base_storage * multiplier * virt_multiplier

    logger.debug(f"Workload: {fleet.vm_count} VMs, {overhead.adjusted_vcpus} vCPUs, "
                 f"{total_memory_gib:.1f} GiB memory, "
                 f"{total_storage:.1f} GiB storage ({metric.value})")

    return WorkloadDemand(
        vm_count=fleet.vm_count,
        storage_metric=metric,
        base_vcpus=base_vcpus,
        base_memory_gib=base_memory_gib,
        base_storage_gib=base_storage,
        overhead=overhead,
        annual_growth_rate=growth.annual_growth_rate,
        planning_horizon_years=growth.planning_horizon_years,
        storage_overhead=growth.storage_overhead,
        growth_multiplier=multiplier,
        virt_overhead_multiplier=virt_multiplier,
        total_vcpus=overhead.adjusted_vcpus,
        total_memory_gib=total_memory_gib,
        total_storage_gib=total_storage,
    )
