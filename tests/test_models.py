"""Tests for configuration validation."""

import math

import pytest

from cluster_sizer.exceptions import ConfigurationError
from cluster_sizer.models import (
    FleetTotals,
    GrowthConfig,
    HardwareProfile,
    OvercommitConfig,
    OverheadModel,
    RedundancyConfig,
    ReservedResources,
    StorageConfig,
    StorageMetric,
)


class TestStorageConfig:
    @pytest.mark.parametrize("replica_factor", [0, 1, 4, 2.5, True])
    def test_rejects_unsupported_replica_factor(self, replica_factor):
        with pytest.raises(ConfigurationError) as exc:
            StorageConfig(replica_factor=replica_factor)
        assert exc.value.field == "replica_factor"

    @pytest.mark.parametrize("value", [0, -0.1, 1.01, math.nan])
    def test_rejects_operational_capacity_outside_range(self, value):
        with pytest.raises(ConfigurationError) as exc:
            StorageConfig(operational_capacity=value)
        assert exc.value.field == "operational_capacity"

    @pytest.mark.parametrize("value", [1.0, -0.01])
    def test_rejects_metadata_overhead_outside_range(self, value):
        with pytest.raises(ConfigurationError):
            StorageConfig(metadata_overhead=value)

    def test_rejects_non_numeric_operational_capacity(self):
        with pytest.raises(ConfigurationError) as exc:
            StorageConfig(operational_capacity="most")
        assert exc.value.field == "operational_capacity"

    def test_boundaries_accepted(self):
        config = StorageConfig(replica_factor=2, operational_capacity=1.0,
                               metadata_overhead=0.0)
        assert config.replica_factor == 2


class TestOvercommitConfig:
    def test_rejects_cpu_ratio_below_one(self):
        with pytest.raises(ConfigurationError) as exc:
            OvercommitConfig(cpu_ratio=0.5)
        assert exc.value.field == "cpu_ratio"
        assert "0.5" in str(exc.value)

    def test_rejects_memory_ratio_below_one(self):
        with pytest.raises(ConfigurationError):
            OvercommitConfig(memory_ratio=0.9)

    @pytest.mark.parametrize("value", [0.5, 2.5])
    def test_rejects_ht_multiplier_out_of_range(self, value):
        with pytest.raises(ConfigurationError):
            OvercommitConfig(ht_multiplier=value)

    def test_ht_multiplier_ignored_without_hyperthreading(self):
        config = OvercommitConfig(hyperthreading=False, ht_multiplier=0.5)
        assert config.ht_multiplier == 0.5

    @pytest.mark.parametrize("field", ["cpu_ratio", "memory_ratio", "ht_multiplier"])
    def test_rejects_non_numeric_ratios(self, field):
        with pytest.raises(ConfigurationError) as exc:
            OvercommitConfig(**{field: "high"})
        assert exc.value.field == field


class TestRedundancyConfig:
    def test_rejects_negative_redundancy(self):
        with pytest.raises(ConfigurationError) as exc:
            RedundancyConfig(node_redundancy=-1)
        assert exc.value.field == "node_redundancy"

    @pytest.mark.parametrize("value", [0, 1.5])
    def test_rejects_eviction_threshold_outside_range(self, value):
        with pytest.raises(ConfigurationError):
            RedundancyConfig(eviction_threshold=value)

    def test_zero_redundancy_allowed(self):
        assert RedundancyConfig(node_redundancy=0).node_redundancy == 0


class TestGrowthConfig:
    def test_storage_metric_coerced_from_string(self):
        assert GrowthConfig(storage_metric="provisioned").storage_metric is StorageMetric.PROVISIONED

    def test_unknown_storage_metric(self):
        with pytest.raises(ConfigurationError) as exc:
            GrowthConfig(storage_metric="allocated")
        assert exc.value.field == "storage_metric"

    @pytest.mark.parametrize("field", ["annual_growth_rate", "planning_horizon_years",
                                       "storage_overhead"])
    def test_rejects_negative_values(self, field):
        with pytest.raises(ConfigurationError):
            GrowthConfig(**{field: -1})


class TestHardwareProfile:
    def test_threads_below_cores(self):
        with pytest.raises(ConfigurationError) as exc:
            HardwareProfile(name="bad", physical_cores=32, threads=16, memory_gib=256)
        assert exc.value.field == "threads"

    def test_negative_storage(self):
        with pytest.raises(ConfigurationError):
            HardwareProfile(name="bad", physical_cores=8, threads=16, memory_gib=64,
                            local_storage_gib=-1)

    def test_non_numeric_memory(self):
        with pytest.raises(ConfigurationError) as exc:
            HardwareProfile(name="bad", physical_cores=8, threads=16, memory_gib="lots")
        assert exc.value.field == "memory_gib"


def test_reserved_resources_scale_with_devices():
    reserved = ReservedResources()
    assert reserved.cpu(4) == 14
    assert reserved.memory_gib(4) == 45
    assert reserved.cpu(0) == 6
    assert reserved.memory_gib(0) == 25


def test_overhead_model_rejects_negative():
    with pytest.raises(ConfigurationError):
        OverheadModel(cpu_fixed_per_vm=-0.1)


class TestFleetTotals:
    def test_storage_by_metric(self, fleet):
        assert fleet.storage_gib(StorageMetric.PROVISIONED) == 3000
        assert fleet.storage_gib(StorageMetric.IN_USE) == 2000
        assert fleet.storage_gib("disk_capacity") == 4000

    def test_rejects_fractional_vm_count(self):
        with pytest.raises(ConfigurationError):
            FleetTotals(vm_count=1.5)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            FleetTotals(vcpus=-1)
