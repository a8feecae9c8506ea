# cli.py

"""Command-line interface for the cluster sizer."""

import argparse
import logging
import sys

from .catalog import fetch_profiles, find_profile, load_profiles
from .config import (
    DEFAULT_ANNUAL_GROWTH_RATE, DEFAULT_CPU_OVERCOMMIT_RATIO,
    DEFAULT_EVICTION_THRESHOLD, DEFAULT_HT_MULTIPLIER,
    DEFAULT_MEMORY_OVERCOMMIT_RATIO, DEFAULT_METADATA_OVERHEAD,
    DEFAULT_NODE_REDUNDANCY, DEFAULT_OPERATIONAL_CAPACITY,
    DEFAULT_PLANNING_HORIZON_YEARS, DEFAULT_REPLICA_FACTOR,
    DEFAULT_STORAGE_METRIC, DEFAULT_STORAGE_VIRT_OVERHEAD,
)
from .exceptions import SizingError
from .inventory import load_fleet
from .models import (
    GrowthConfig, OvercommitConfig, RedundancyConfig, SizingSettings,
    StorageConfig, StorageMetric,
)
from .planner import plan_cluster, plan_profiles
from .report import format_comparison, format_json, format_text_report
from .utils import get_catalog_token, get_catalog_url, setup_logging

logger = logging.getLogger(__name__)

def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Size a container-native virtualization cluster for a VM fleet"
    )
    parser.add_argument(
        "--fleet",
        required=True,
        help="JSON VM inventory file"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--profiles",
        help="JSON hardware profile catalog file"
    )
    source.add_argument(
        "--remote-catalog",
        action="store_true",
        help="Fetch profiles from the catalog endpoint in SIZER_CATALOG_URL"
    )
    parser.add_argument(
        "--region",
        help="Region filter for the remote catalog"
    )
    parser.add_argument(
        "--profile",
        help="Size a single profile instead of every eligible one"
    )
    parser.add_argument(
        "--include-ineligible",
        action="store_true",
        help="Also evaluate profiles not eligible for the orchestration target"
    )
    parser.add_argument(
        "--cpu-overcommit",
        type=float,
        default=DEFAULT_CPU_OVERCOMMIT_RATIO,
        help=f"CPU overcommit ratio (default: {DEFAULT_CPU_OVERCOMMIT_RATIO})"
    )
    parser.add_argument(
        "--memory-overcommit",
        type=float,
        default=DEFAULT_MEMORY_OVERCOMMIT_RATIO,
        help=f"Memory overcommit ratio (default: {DEFAULT_MEMORY_OVERCOMMIT_RATIO})"
    )
    parser.add_argument(
        "--no-hyperthreading",
        action="store_true",
        help="Do not count hyperthreading gains"
    )
    parser.add_argument(
        "--ht-multiplier",
        type=float,
        default=DEFAULT_HT_MULTIPLIER,
        help=f"Hyperthreading efficiency (default: {DEFAULT_HT_MULTIPLIER})"
    )
    parser.add_argument(
        "--replica-factor",
        type=int,
        default=DEFAULT_REPLICA_FACTOR,
        help=f"Storage replica count (default: {DEFAULT_REPLICA_FACTOR})"
    )
    parser.add_argument(
        "--operational-capacity",
        type=float,
        default=DEFAULT_OPERATIONAL_CAPACITY,
        help=f"Storage operational capacity fraction (default: {DEFAULT_OPERATIONAL_CAPACITY})"
    )
    parser.add_argument(
        "--metadata-overhead",
        type=float,
        default=DEFAULT_METADATA_OVERHEAD,
        help=f"Storage metadata overhead fraction (default: {DEFAULT_METADATA_OVERHEAD})"
    )
    parser.add_argument(
        "--redundancy",
        type=int,
        default=DEFAULT_NODE_REDUNDANCY,
        help=f"Node failures to tolerate (default: {DEFAULT_NODE_REDUNDANCY})"
    )
    parser.add_argument(
        "--eviction-threshold",
        type=float,
        default=DEFAULT_EVICTION_THRESHOLD,
        help=f"CPU/memory eviction threshold fraction (default: {DEFAULT_EVICTION_THRESHOLD})"
    )
    parser.add_argument(
        "--growth-rate",
        type=float,
        default=DEFAULT_ANNUAL_GROWTH_RATE,
        help=f"Annual storage growth rate (default: {DEFAULT_ANNUAL_GROWTH_RATE})"
    )
    parser.add_argument(
        "--horizon-years",
        type=float,
        default=DEFAULT_PLANNING_HORIZON_YEARS,
        help=f"Planning horizon in years (default: {DEFAULT_PLANNING_HORIZON_YEARS})"
    )
    parser.add_argument(
        "--storage-overhead",
        type=float,
        default=DEFAULT_STORAGE_VIRT_OVERHEAD,
        help=f"Storage virtualization overhead fraction (default: {DEFAULT_STORAGE_VIRT_OVERHEAD})"
    )
    parser.add_argument(
        "--storage-metric",
        choices=[m.value for m in StorageMetric],
        default=DEFAULT_STORAGE_METRIC,
        help=f"VM storage figure to size for (default: {DEFAULT_STORAGE_METRIC})"
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    return parser.parse_args(argv)

def build_settings(args) -> SizingSettings:
    """Build planning settings from parsed arguments."""
    return SizingSettings(
        overcommit=OvercommitConfig(
            cpu_ratio=args.cpu_overcommit,
            memory_ratio=args.memory_overcommit,
            hyperthreading=not args.no_hyperthreading,
            ht_multiplier=args.ht_multiplier,
        ),
        storage=StorageConfig(
            replica_factor=args.replica_factor,
            operational_capacity=args.operational_capacity,
            metadata_overhead=args.metadata_overhead,
        ),
        redundancy=RedundancyConfig(
            node_redundancy=args.redundancy,
            eviction_threshold=args.eviction_threshold,
        ),
        growth=GrowthConfig(
            annual_growth_rate=args.growth_rate,
            planning_horizon_years=args.horizon_years,
            storage_overhead=args.storage_overhead,
            storage_metric=args.storage_metric,
        ),
    )

def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = build_settings(args)
        fleet = load_fleet(args.fleet)

        if args.remote_catalog:
            profiles = fetch_profiles(get_catalog_url(), token=get_catalog_token(),
                                      region=args.region)
        else:
            profiles = load_profiles(args.profiles)

        if args.profile:
            plans = [plan_cluster(find_profile(profiles, args.profile), fleet, settings)]
        else:
            plans = plan_profiles(profiles, fleet, settings,
                                  eligible_only=not args.include_ineligible)

        if args.format == "json":
            print(format_json(plans))
        elif len(plans) == 1:
            print(format_text_report(plans[0]))
        else:
            print(format_comparison(plans))
        return 0

    except SizingError as e:
        logger.error(f"Sizing error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
