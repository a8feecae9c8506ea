# catalog.py

"""Hardware profile catalog access."""

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from .config import CATALOG_TIMEOUT
from .exceptions import CatalogError, ConfigurationError
from .models import HardwareProfile

logger = logging.getLogger(__name__)

# Catalog payloads use camelCase keys
_FIELD_ALIASES = {
    "name": ("name",),
    "physical_cores": ("physical_cores", "physicalCores"),
    "threads": ("threads", "vcpus"),
    "memory_gib": ("memory_gib", "memoryGiB"),
    "device_count": ("device_count", "nvmeDisks"),
    "device_size_gib": ("device_size_gib", "nvmeSizeGiB"),
    "local_storage_gib": ("local_storage_gib", "totalNvmeGiB"),
    "orchestration_eligible": ("orchestration_eligible", "roksSupported"),
}

def _lookup(entry: Dict[str, Any], field: str, default=None):
    for key in _FIELD_ALIASES[field]:
        if entry.get(key) is not None:
            return entry[key]
    return default

def parse_profile(entry: Dict[str, Any]) -> HardwareProfile:
    """Build a HardwareProfile from one catalog entry."""
    name = _lookup(entry, "name")
    if not name:
        raise CatalogError(f"Catalog entry without a name: {entry}")

    physical_cores = _lookup(entry, "physical_cores")
    if physical_cores is None:
        raise CatalogError(f"Profile {name} has no physical core count")
    memory_gib = _lookup(entry, "memory_gib")
    if memory_gib is None:
        raise CatalogError(f"Profile {name} has no memory size")

    device_count = _lookup(entry, "device_count", 0)
    device_size = _lookup(entry, "device_size_gib", 0)
    local_storage = _lookup(entry, "local_storage_gib")

    try:
        if local_storage is None:
            local_storage = device_count * device_size
        return HardwareProfile(
            name=name,
            physical_cores=physical_cores,
            threads=_lookup(entry, "threads", physical_cores),
            memory_gib=memory_gib,
            device_count=device_count,
            device_size_gib=device_size,
            local_storage_gib=local_storage,
            orchestration_eligible=bool(_lookup(entry, "orchestration_eligible", True)),
        )
    except (ConfigurationError, TypeError) as e:
        raise CatalogError(f"Invalid profile {name}: {e}")

def parse_profiles(data: Any) -> List[HardwareProfile]:
    """
    Parse a catalog payload into hardware profiles.

    Accepts either a plain list of entries or a mapping holding them under
    ``bareMetalProfiles`` or ``profiles``. Entries may also be grouped by
    family in a nested mapping.
    """
    entries = data
    if isinstance(data, dict):
        entries = data.get("bareMetalProfiles", data.get("profiles"))
        if entries is None:
            raise CatalogError("Catalog payload has no profiles")
    if isinstance(entries, dict):
        entries = [entry for family in entries.values() for entry in family]
    if not isinstance(entries, list):
        raise CatalogError(f"Unexpected catalog payload type: {type(entries).__name__}")

    profiles = [parse_profile(entry) for entry in entries]
    logger.debug(f"Parsed {len(profiles)} hardware profiles")
    return profiles

def load_profiles(path: str) -> List[HardwareProfile]:
    """Load hardware profiles from a JSON file."""
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Failed to read hardware catalog {path}: {e}")
    profiles = parse_profiles(data)
    logger.info(f"Loaded {len(profiles)} hardware profiles from {path}")
    return profiles

def fetch_profiles(url: str, token: Optional[str] = None,
                   region: Optional[str] = None, refresh: bool = False,
                   timeout: float = CATALOG_TIMEOUT) -> List[HardwareProfile]:
    """
    Fetch hardware profiles from a catalog endpoint.

    Args:
        url: Catalog endpoint
        token: Optional bearer token
        region: Optional region filter
        refresh: Ask the catalog to bypass its cache
        timeout: Request timeout in seconds

    Returns:
        List of HardwareProfile
    """
    params = {}
    if region:
        params["region"] = region
    if refresh:
        params["refresh"] = "true"
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    try:
        response = requests.get(url, params=params, headers=headers, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.RequestException as e:
        raise CatalogError(f"Failed to fetch hardware catalog from {url}: {e}")
    except ValueError as e:
        raise CatalogError(f"Hardware catalog at {url} returned invalid JSON: {e}")

    if isinstance(data, dict) and data.get("error"):
        raise CatalogError(f"Hardware catalog error: {data['error']}")
    if isinstance(data, dict) and data.get("cached"):
        logger.debug(f"Catalog response served from cache (age {data.get('cacheAge')})")

    profiles = parse_profiles(data)
    logger.info(f"Fetched {len(profiles)} hardware profiles from {url}")
    return profiles

def find_profile(profiles: Iterable[HardwareProfile], name: str) -> HardwareProfile:
    """Find a profile by name."""
    for profile in profiles:
        if profile.name == name:
            return profile
    raise CatalogError(f"Unknown hardware profile: {name}")

def eligible_profiles(profiles: Iterable[HardwareProfile]) -> List[HardwareProfile]:
    """Profiles that can host the orchestration target."""
    return [p for p in profiles if p.orchestration_eligible]
