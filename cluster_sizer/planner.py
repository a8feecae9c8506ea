# planner.py

"""End-to-end cluster planning for one or many hardware profiles."""

import logging
from typing import Iterable, List, Optional

from .capacity import calculate_node_capacity
from .catalog import eligible_profiles
from .models import FleetTotals, HardwareProfile, SizingPlan, SizingSettings
from .solver import solve_node_count
from .validator import validate_redundancy
from .workload import aggregate_workload

logger = logging.getLogger(__name__)

def plan_cluster(profile: HardwareProfile, fleet: FleetTotals,
                 settings: Optional[SizingSettings] = None) -> SizingPlan:
    """Run capacity, workload, solver and validation for one profile."""
    settings = settings or SizingSettings()

    capacity = calculate_node_capacity(profile, settings.overcommit,
                                       settings.storage, settings.reserved)
    demand = aggregate_workload(fleet, settings.growth, settings.overhead)
    requirements = solve_node_count(capacity, demand, settings.redundancy)
    validation = validate_redundancy(capacity, requirements,
                                     settings.redundancy, settings.storage)

    return SizingPlan(
        profile=profile,
        capacity=capacity,
        demand=demand,
        requirements=requirements,
        validation=validation,
    )

def plan_profiles(profiles: Iterable[HardwareProfile], fleet: FleetTotals,
                  settings: Optional[SizingSettings] = None,
                  eligible_only: bool = True) -> List[SizingPlan]:
    """
    Plan every candidate profile with identical settings.

    Args:
        profiles: Candidate hardware profiles
        fleet: Aggregate fleet totals
        settings: Planning settings shared by all candidates
        eligible_only: Skip profiles not eligible for the orchestration target

    Returns:
        One SizingPlan per evaluated profile, in input order
    """
    settings = settings or SizingSettings()
    profiles = list(profiles)
    candidates = eligible_profiles(profiles) if eligible_only else profiles
    if len(candidates) < len(profiles):
        logger.debug(f"Skipping {len(profiles) - len(candidates)} ineligible profiles")

    plans = []
    for profile in candidates:
        logger.info(f"Planning cluster for profile {profile.name}")
        plans.append(plan_cluster(profile, fleet, settings))
    logger.info(f"Evaluated {len(plans)} hardware profiles")
    return plans
