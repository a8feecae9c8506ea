# report.py

"""Text and JSON rendering of planning results."""

import json
from enum import Enum
from typing import Any, List, Sequence

from .models import SizingPlan, StateValidation

def to_dict(value: Any) -> Any:
    """Recursively convert results into JSON-serializable structures."""
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "_asdict"):
        return {k: to_dict(v) for k, v in value._asdict().items()}
    if hasattr(value, "__dataclass_fields__"):
        return {k: to_dict(getattr(value, k)) for k in value.__dataclass_fields__}
    if isinstance(value, dict):
        return {k: to_dict(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dict(v) for v in value]
    return value

def plan_to_dict(plan: SizingPlan) -> dict:
    data = to_dict(plan)
    data["validation"]["all_pass"] = plan.validation.all_pass
    return data

def format_json(plans: Sequence[SizingPlan]) -> str:
    return json.dumps([plan_to_dict(p) for p in plans], indent=2)

def _pct(value: float) -> str:
    return "n/a" if value == float('inf') else f"{value:.1f}%"

def _status(passes: bool) -> str:
    return "PASS" if passes else "FAIL"

def _state_lines(title: str, state: StateValidation, eviction: float,
                 storage: float) -> List[str]:
    return [
        f"  {title} ({state.active_nodes} nodes):",
        f"    CPU:     {_pct(state.cpu_utilization):>8} "
        f"(limit {eviction * 100:.0f}%)  {_status(state.cpu_passes)}",
        f"    Memory:  {_pct(state.memory_utilization):>8} "
        f"(limit {eviction * 100:.0f}%)  {_status(state.memory_passes)}",
        f"    Storage: {_pct(state.storage_utilization):>8} "
        f"(limit {storage * 100:.0f}%)  {_status(state.storage_passes)}",
        f"    Quorum:  {_status(state.quorum_passes)}",
    ]

def format_text_report(plan: SizingPlan) -> str:
    """Render one plan as a readable report."""
    profile, capacity = plan.profile, plan.capacity
    demand, req, val = plan.demand, plan.requirements, plan.validation

    lines = [
        f"Hardware profile: {profile.name}",
        f"  {profile.physical_cores} cores / {profile.threads} threads, "
        f"{profile.memory_gib} GiB memory, "
        f"{profile.device_count} x {profile.device_size_gib} GiB local storage",
        "",
        "Per-node capacity:",
        f"  vCPUs:   {capacity.vcpu_capacity} "
        f"({capacity.reserved_cpu:g} cores reserved)",
        f"  Memory:  {capacity.memory_capacity_gib} GiB "
        f"({capacity.reserved_memory_gib:g} GiB reserved)",
    ]
    if capacity.has_local_storage:
        lines.append(f"  Storage: {capacity.usable_storage_gib} GiB usable, "
                     f"{capacity.max_usable_storage_gib} GiB max")
    else:
        lines.append("  Storage: external")

    lines += [
        "",
        f"Projected workload ({demand.vm_count} VMs):",
        f"  vCPUs:   {demand.total_vcpus} "
        f"(base {demand.base_vcpus:g} + overhead {demand.overhead.cpu_total:.1f})",
        f"  Memory:  {demand.total_memory_gib:.1f} GiB "
        f"(base {demand.base_memory_gib:.1f})",
        f"  Storage: {demand.total_storage_gib:.1f} GiB "
        f"({demand.storage_metric.value}, growth x{demand.growth_multiplier:.2f}, "
        f"overhead x{demand.virt_overhead_multiplier:.2f})",
        "",
        "Node requirements:",
        f"  CPU:     {req.nodes_for_cpu} ({req.nodes_for_cpu_at_threshold} at threshold)",
        f"  Memory:  {req.nodes_for_memory} ({req.nodes_for_memory_at_threshold} at threshold)",
        f"  Storage: {req.nodes_for_storage} ({req.nodes_for_storage_at_threshold} at threshold)",
        f"  Minimum surviving nodes: {req.min_surviving_nodes}",
        f"  Total nodes (N+{req.node_redundancy}): {req.total_nodes}",
        f"  Limiting factor: {req.limiting_factor.value}",
        "",
        "Redundancy validation:",
    ]
    lines += _state_lines("Healthy", val.healthy, val.eviction_threshold,
                          val.storage_threshold)
    lines += _state_lines(f"{val.failed_nodes} nodes failed", val.after_failure,
                          val.eviction_threshold, val.storage_threshold)
    lines.append(f"  Overall: {_status(val.all_pass)}")
    return "\n".join(lines)

def format_comparison(plans: Sequence[SizingPlan]) -> str:
    """Table of candidate profiles ordered by total node count."""
    header = f"{'Profile':<32} {'Nodes':>5} {'Limit':<8} {'Valid':<5}"
    lines = [header, "-" * len(header)]
    for plan in sorted(plans, key=lambda p: (p.requirements.total_nodes, p.profile.name)):
        lines.append(
            f"{plan.profile.name:<32} {plan.requirements.total_nodes:>5} "
            f"{plan.requirements.limiting_factor.value:<8} "
            f"{_status(plan.validation.all_pass):<5}"
        )
    return "\n".join(lines)
