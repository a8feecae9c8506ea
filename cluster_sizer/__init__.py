# __init__.py

"""Cluster capacity planning for VM migrations to container-native virtualization."""

from .capacity import calculate_node_capacity
from .exceptions import (
    CapacityError, CatalogError, ConfigurationError, InventoryError, SizingError,
)
from .models import (
    FleetTotals, GrowthConfig, HardwareProfile, NodeCapacity, NodeRequirements,
    OvercommitConfig, OverheadModel, RedundancyConfig, ReservedResources,
    Resource, SizingPlan, SizingSettings, StorageConfig, StorageMetric,
    ValidationResult, WorkloadDemand,
)
from .overhead import calculate_overhead
from .planner import plan_cluster, plan_profiles
from .solver import solve_node_count
from .validator import validate_redundancy
from .workload import aggregate_workload

__version__ = "0.1.0"
