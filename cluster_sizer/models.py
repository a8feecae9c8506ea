# models.py

"""Data models for the cluster sizer.

Inputs are frozen dataclasses validated on construction. Derived results are
NamedTuples with no behaviour beyond convenience properties, so they can be
serialized straight into reports.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from .config import (
    ALLOWED_REPLICA_FACTORS,
    CPU_OVERHEAD_FIXED_PER_VM, CPU_OVERHEAD_PROPORTIONAL,
    DEFAULT_ANNUAL_GROWTH_RATE, DEFAULT_CPU_OVERCOMMIT_RATIO,
    DEFAULT_EVICTION_THRESHOLD, DEFAULT_HT_MULTIPLIER,
    DEFAULT_HYPERTHREADING_ENABLED, DEFAULT_MEMORY_OVERCOMMIT_RATIO,
    DEFAULT_METADATA_OVERHEAD, DEFAULT_NODE_REDUNDANCY,
    DEFAULT_OPERATIONAL_CAPACITY, DEFAULT_PLANNING_HORIZON_YEARS,
    DEFAULT_REPLICA_FACTOR, DEFAULT_STORAGE_METRIC,
    DEFAULT_STORAGE_VIRT_OVERHEAD, MAX_HT_MULTIPLIER,
    MEMORY_OVERHEAD_FIXED_PER_VM_MIB, MEMORY_OVERHEAD_PROPORTIONAL,
    STORAGE_RESERVED_CPU_BASE, STORAGE_RESERVED_CPU_PER_DEVICE,
    STORAGE_RESERVED_MEMORY_BASE_GIB, STORAGE_RESERVED_MEMORY_PER_DEVICE_GIB,
    SYSTEM_RESERVED_CPU, SYSTEM_RESERVED_MEMORY_GIB,
)
from .exceptions import ConfigurationError

class StorageMetric(str, Enum):
    """Which VM storage figure drives the storage demand."""
    PROVISIONED = "provisioned"
    IN_USE = "in_use"
    DISK_CAPACITY = "disk_capacity"

class Resource(str, Enum):
    """Resource dimensions considered by the solver."""
    CPU = "cpu"
    MEMORY = "memory"
    STORAGE = "storage"

def _check_at_least(name: str, value, minimum) -> None:
    # NaN fails the comparison and is rejected too
    try:
        valid = value >= minimum
    except TypeError:
        valid = False
    if not valid:
        raise ConfigurationError(name, f">= {minimum}", value)

def _check_non_negative(name: str, value) -> None:
    _check_at_least(name, value, 0)

def _check_count(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigurationError(name, "a non-negative integer", value)

def _check_fraction(name: str, value, allow_zero: bool = False,
                    allow_one: bool = True) -> None:
    try:
        low_ok = value >= 0 if allow_zero else value > 0
        high_ok = value <= 1 if allow_one else value < 1
    except TypeError:
        low_ok = high_ok = False
    if not (low_ok and high_ok):
        low = "[0" if allow_zero else "(0"
        high = "1]" if allow_one else "1)"
        raise ConfigurationError(name, f"in {low}, {high}", value)

@dataclass(frozen=True)
class HardwareProfile:
    """A physical node type from the hardware catalog."""
    name: str
    physical_cores: int
    threads: int
    memory_gib: float
    device_count: int = 0
    device_size_gib: float = 0
    local_storage_gib: float = 0
    orchestration_eligible: bool = True

    def __post_init__(self):
        _check_count("physical_cores", self.physical_cores)
        _check_count("threads", self.threads)
        if self.threads < self.physical_cores:
            raise ConfigurationError(
                "threads", f">= physical_cores ({self.physical_cores})", self.threads
            )
        _check_non_negative("memory_gib", self.memory_gib)
        _check_count("device_count", self.device_count)
        _check_non_negative("device_size_gib", self.device_size_gib)
        _check_non_negative("local_storage_gib", self.local_storage_gib)

@dataclass(frozen=True)
class OvercommitConfig:
    cpu_ratio: float = DEFAULT_CPU_OVERCOMMIT_RATIO
    memory_ratio: float = DEFAULT_MEMORY_OVERCOMMIT_RATIO
    hyperthreading: bool = DEFAULT_HYPERTHREADING_ENABLED
    ht_multiplier: float = DEFAULT_HT_MULTIPLIER

    def __post_init__(self):
        _check_at_least("cpu_ratio", self.cpu_ratio, 1.0)
        _check_at_least("memory_ratio", self.memory_ratio, 1.0)
        if not self.hyperthreading:
            return
        try:
            valid = 1.0 <= self.ht_multiplier <= MAX_HT_MULTIPLIER
        except TypeError:
            valid = False
        if not valid:
            raise ConfigurationError(
                "ht_multiplier", f"in [1.0, {MAX_HT_MULTIPLIER}]", self.ht_multiplier
            )

@dataclass(frozen=True)
class StorageConfig:
    """Replicated software-defined storage settings."""
    replica_factor: int = DEFAULT_REPLICA_FACTOR
    operational_capacity: float = DEFAULT_OPERATIONAL_CAPACITY
    metadata_overhead: float = DEFAULT_METADATA_OVERHEAD

    def __post_init__(self):
        if (isinstance(self.replica_factor, bool)
                or self.replica_factor not in ALLOWED_REPLICA_FACTORS):
            raise ConfigurationError(
                "replica_factor",
                f"one of {', '.join(str(r) for r in ALLOWED_REPLICA_FACTORS)}",
                self.replica_factor,
            )
        _check_fraction("operational_capacity", self.operational_capacity)
        _check_fraction("metadata_overhead", self.metadata_overhead,
                        allow_zero=True, allow_one=False)

@dataclass(frozen=True)
class RedundancyConfig:
    """N+X redundancy settings."""
    node_redundancy: int = DEFAULT_NODE_REDUNDANCY
    eviction_threshold: float = DEFAULT_EVICTION_THRESHOLD

    def __post_init__(self):
        _check_count("node_redundancy", self.node_redundancy)
        _check_fraction("eviction_threshold", self.eviction_threshold)

@dataclass(frozen=True)
class GrowthConfig:
    """Storage metric choice and growth projection."""
    annual_growth_rate: float = DEFAULT_ANNUAL_GROWTH_RATE
    planning_horizon_years: float = DEFAULT_PLANNING_HORIZON_YEARS
    storage_overhead: float = DEFAULT_STORAGE_VIRT_OVERHEAD
    storage_metric: StorageMetric = StorageMetric(DEFAULT_STORAGE_METRIC)

    def __post_init__(self):
        _check_non_negative("annual_growth_rate", self.annual_growth_rate)
        _check_non_negative("planning_horizon_years", self.planning_horizon_years)
        _check_non_negative("storage_overhead", self.storage_overhead)
        try:
            metric = StorageMetric(self.storage_metric)
        except ValueError:
            raise ConfigurationError(
                "storage_metric",
                f"one of {', '.join(m.value for m in StorageMetric)}",
                self.storage_metric,
            )
        object.__setattr__(self, "storage_metric", metric)

@dataclass(frozen=True)
class OverheadModel:
    """Per-VM virtualization cost coefficients."""
    cpu_fixed_per_vm: float = CPU_OVERHEAD_FIXED_PER_VM
    cpu_proportional: float = CPU_OVERHEAD_PROPORTIONAL
    memory_fixed_per_vm_mib: float = MEMORY_OVERHEAD_FIXED_PER_VM_MIB
    memory_proportional: float = MEMORY_OVERHEAD_PROPORTIONAL

    def __post_init__(self):
        _check_non_negative("cpu_fixed_per_vm", self.cpu_fixed_per_vm)
        _check_non_negative("cpu_proportional", self.cpu_proportional)
        _check_non_negative("memory_fixed_per_vm_mib", self.memory_fixed_per_vm_mib)
        _check_non_negative("memory_proportional", self.memory_proportional)

@dataclass(frozen=True)
class ReservedResources:
    """CPU and memory held back on every node for infrastructure."""
    system_cpu: float = SYSTEM_RESERVED_CPU
    system_memory_gib: float = SYSTEM_RESERVED_MEMORY_GIB
    storage_cpu_base: float = STORAGE_RESERVED_CPU_BASE
    storage_cpu_per_device: float = STORAGE_RESERVED_CPU_PER_DEVICE
    storage_memory_base_gib: float = STORAGE_RESERVED_MEMORY_BASE_GIB
    storage_memory_per_device_gib: float = STORAGE_RESERVED_MEMORY_PER_DEVICE_GIB

    def __post_init__(self):
        for name in ("system_cpu", "system_memory_gib", "storage_cpu_base",
                     "storage_cpu_per_device", "storage_memory_base_gib",
                     "storage_memory_per_device_gib"):
            _check_non_negative(name, getattr(self, name))

    def storage_cpu(self, device_count: int) -> float:
        return self.storage_cpu_base + self.storage_cpu_per_device * device_count

    def storage_memory_gib(self, device_count: int) -> float:
        return self.storage_memory_base_gib + self.storage_memory_per_device_gib * device_count

    def cpu(self, device_count: int) -> float:
        return self.system_cpu + self.storage_cpu(device_count)

    def memory_gib(self, device_count: int) -> float:
        return self.system_memory_gib + self.storage_memory_gib(device_count)

@dataclass(frozen=True)
class FleetTotals:
    """Aggregate demand of the included VMs."""
    vm_count: int = 0
    vcpus: float = 0
    memory_mib: float = 0
    provisioned_gib: float = 0
    in_use_gib: float = 0
    disk_capacity_gib: float = 0

    def __post_init__(self):
        _check_count("vm_count", self.vm_count)
        for name in ("vcpus", "memory_mib", "provisioned_gib", "in_use_gib",
                     "disk_capacity_gib"):
            _check_non_negative(name, getattr(self, name))

    def storage_gib(self, metric: StorageMetric) -> float:
        metric = StorageMetric(metric)
        if metric is StorageMetric.PROVISIONED:
            return self.provisioned_gib
        if metric is StorageMetric.DISK_CAPACITY:
            return self.disk_capacity_gib
        return self.in_use_gib

@dataclass(frozen=True)
class SizingSettings:
    """Everything an operator tunes for one planning evaluation."""
    overcommit: OvercommitConfig = field(default_factory=OvercommitConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    redundancy: RedundancyConfig = field(default_factory=RedundancyConfig)
    growth: GrowthConfig = field(default_factory=GrowthConfig)
    overhead: OverheadModel = field(default_factory=OverheadModel)
    reserved: ReservedResources = field(default_factory=ReservedResources)

class VirtualizationOverhead(NamedTuple):
    """Compute and memory cost of running guests as VMs."""
    cpu_fixed: float
    cpu_proportional: float
    cpu_total: float
    memory_fixed_mib: float
    memory_proportional_mib: float
    memory_total_mib: float
    adjusted_vcpus: int
    adjusted_memory_mib: float

class NodeCapacity(NamedTuple):
    """Usable capacity of a single node."""
    vcpu_capacity: int
    memory_capacity_gib: int
    max_usable_storage_gib: int
    usable_storage_gib: int
    raw_storage_gib: float
    storage_efficiency: float
    available_cores: float
    effective_cores: float
    available_memory_gib: float
    reserved_cpu: float
    reserved_memory_gib: float

    @property
    def has_local_storage(self) -> bool:
        return self.raw_storage_gib > 0

class WorkloadDemand(NamedTuple):
    """Projected cluster demand at the end of the planning horizon."""
    vm_count: int
    storage_metric: StorageMetric
    base_vcpus: float
    base_memory_gib: float
    base_storage_gib: float
    overhead: VirtualizationOverhead
    annual_growth_rate: float
    planning_horizon_years: float
    storage_overhead: float
    growth_multiplier: float
    virt_overhead_multiplier: float
    total_vcpus: int
    total_memory_gib: float
    total_storage_gib: float

class NodeRequirements(NamedTuple):
    """Cluster-wide node counts and the binding resource."""
    total_vcpus: int
    total_memory_gib: float
    total_storage_gib: float
    nodes_for_cpu: int
    nodes_for_memory: int
    nodes_for_storage: int
    base_nodes: int
    nodes_for_cpu_at_threshold: int
    nodes_for_memory_at_threshold: int
    nodes_for_storage_at_threshold: int
    min_surviving_nodes: int
    node_redundancy: int
    total_nodes: int
    limiting_factor: Resource

class StateValidation(NamedTuple):
    """Per-node utilization for one cluster state (healthy or degraded)."""
    active_nodes: int
    cpu_utilization: float
    memory_utilization: float
    storage_utilization: float
    cpu_passes: bool
    memory_passes: bool
    storage_passes: bool
    quorum_passes: bool
    all_pass: bool

class ValidationResult(NamedTuple):
    """Redundancy check of a cluster size against its thresholds."""
    total_nodes: int
    failed_nodes: int
    surviving_nodes: int
    eviction_threshold: float
    storage_threshold: float
    healthy: StateValidation
    after_failure: StateValidation

    @property
    def all_pass(self) -> bool:
        return self.after_failure.all_pass

class SizingPlan(NamedTuple):
    """Full planning result for one hardware profile."""
    profile: HardwareProfile
    capacity: NodeCapacity
    demand: WorkloadDemand
    requirements: NodeRequirements
    validation: ValidationResult
