# overhead.py

"""Virtualization overhead model."""

import logging
import math
from typing import Optional

from .models import OverheadModel, VirtualizationOverhead

logger = logging.getLogger(__name__)

def calculate_overhead(vm_count: int, guest_vcpus: float, guest_memory_mib: float,
                       model: Optional[OverheadModel] = None) -> VirtualizationOverhead:
    """
    Calculate the compute and memory cost of virtualizing a fleet.

    Overhead has a fixed part per VM (emulation and bookkeeping) and a part
    proportional to guest size.

    Args:
        vm_count: Number of VMs
        guest_vcpus: Total guest vCPUs
        guest_memory_mib: Total guest memory in MiB
        model: Overhead coefficients, defaults when omitted

    Returns:
        VirtualizationOverhead with the breakdown and adjusted totals
    """
    model = model or OverheadModel()

    cpu_fixed = vm_count * model.cpu_fixed_per_vm
    cpu_proportional = guest_vcpus * model.cpu_proportional
    cpu_total = cpu_fixed + cpu_proportional

    memory_fixed_mib = vm_count * model.memory_fixed_per_vm_mib
    memory_proportional_mib = guest_memory_mib * model.memory_proportional
    memory_total_mib = memory_fixed_mib + memory_proportional_mib

    overhead = VirtualizationOverhead(
        cpu_fixed=cpu_fixed,
        cpu_proportional=cpu_proportional,
        cpu_total=cpu_total,
        memory_fixed_mib=memory_fixed_mib,
        memory_proportional_mib=memory_proportional_mib,
        memory_total_mib=memory_total_mib,
        adjusted_vcpus=math.ceil(guest_vcpus + cpu_total),
        adjusted_memory_mib=guest_memory_mib + memory_total_mib,
    )
    logger.debug(f"Virtualization overhead for {vm_count} VMs: "
                 f"{cpu_total:.2f} vCPUs, {memory_total_mib:.0f} MiB")
    return overhead
