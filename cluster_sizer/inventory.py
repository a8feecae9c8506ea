# inventory.py

"""VM inventory loading and aggregation."""

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from .config import MIB_PER_GIB
from .exceptions import ConfigurationError, InventoryError
from .models import FleetTotals

logger = logging.getLogger(__name__)

POWERED_ON = "poweredOn"

def is_included(vm: Dict[str, Any], excluded: Iterable[str] = ()) -> bool:
    """Whether a VM counts towards the migrated fleet."""
    if vm.get("template", False):
        return False
    if vm.get("power_state", POWERED_ON) != POWERED_ON:
        return False
    return vm.get("name") not in set(excluded)

def aggregate_fleet(vms: List[Dict[str, Any]],
                    excluded: Optional[Iterable[str]] = None) -> FleetTotals:
    """
    Sum the demand of the included VMs.

    Templates, powered-off VMs and VMs named in ``excluded`` are left out.
    Memory and storage figures are read in MiB.

    Args:
        vms: VM records from the inventory
        excluded: Names of VMs excluded by the operator

    Returns:
        FleetTotals for the included VMs
    """
    excluded = set(excluded or ())
    included = [vm for vm in vms if is_included(vm, excluded)]
    skipped = len(vms) - len(included)
    if skipped:
        logger.info(f"Excluded {skipped} of {len(vms)} VMs from sizing")

    try:
        totals = FleetTotals(
            vm_count=len(included),
            vcpus=sum(vm.get("cpus", 0) for vm in included),
            memory_mib=sum(vm.get("memory_mib", 0) for vm in included),
            provisioned_gib=sum(vm.get("provisioned_mib", 0) for vm in included) / MIB_PER_GIB,
            in_use_gib=sum(vm.get("in_use_mib", 0) for vm in included) / MIB_PER_GIB,
            disk_capacity_gib=sum(vm.get("disk_capacity_mib", 0) for vm in included) / MIB_PER_GIB,
        )
    except (ConfigurationError, TypeError) as e:
        raise InventoryError(f"Invalid VM inventory: {e}")

    logger.debug(f"Fleet totals: {totals}")
    return totals

def load_fleet(path: str) -> FleetTotals:
    """Load a JSON inventory ``{"vms": [...], "excluded": [...]}`` and aggregate it."""
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InventoryError(f"Failed to read VM inventory {path}: {e}")

    if isinstance(data, list):
        vms, excluded = data, []
    elif isinstance(data, dict) and isinstance(data.get("vms"), list):
        vms, excluded = data["vms"], data.get("excluded", [])
    else:
        raise InventoryError(f"VM inventory {path} has no 'vms' list")

    if not all(isinstance(vm, dict) for vm in vms):
        raise InventoryError(f"VM inventory {path} contains non-object entries")

    logger.info(f"Loaded {len(vms)} VMs from {path}")
    return aggregate_fleet(vms, excluded)
