# config.py

"""Configuration defaults for the cluster sizer."""

# Overcommit and hyperthreading
DEFAULT_CPU_OVERCOMMIT_RATIO = 4.0  # 4:1 vCPU to effective core
DEFAULT_MEMORY_OVERCOMMIT_RATIO = 1.0  # No memory overcommit
DEFAULT_HYPERTHREADING_ENABLED = True
DEFAULT_HT_MULTIPLIER = 1.25  # Effective gain from SMT, not a 2x
MAX_HT_MULTIPLIER = 2.0

# Software-defined storage
DEFAULT_REPLICA_FACTOR = 3
ALLOWED_REPLICA_FACTORS = (2, 3)
DEFAULT_OPERATIONAL_CAPACITY = 0.75  # Keep 25% free for rebalancing
DEFAULT_METADATA_OVERHEAD = 0.15

# Redundancy
DEFAULT_NODE_REDUNDANCY = 2  # N+2
DEFAULT_EVICTION_THRESHOLD = 0.96  # 4% buffer before eviction
MIN_QUORUM_NODES = 3

# Growth projection
DEFAULT_ANNUAL_GROWTH_RATE = 0.20
DEFAULT_PLANNING_HORIZON_YEARS = 2
DEFAULT_STORAGE_VIRT_OVERHEAD = 0.15  # Snapshots, clones, migration scratch
DEFAULT_STORAGE_METRIC = "in_use"

# Virtualization overhead per VM
CPU_OVERHEAD_FIXED_PER_VM = 0.27  # vCPU
CPU_OVERHEAD_PROPORTIONAL = 0.03
MEMORY_OVERHEAD_FIXED_PER_VM_MIB = 378
MEMORY_OVERHEAD_PROPORTIONAL = 0.03

# Per-node reservations
SYSTEM_RESERVED_CPU = 1  # Cores for platform system processes
SYSTEM_RESERVED_MEMORY_GIB = 4  # kubelet, monitoring, etc.
STORAGE_RESERVED_CPU_BASE = 5
STORAGE_RESERVED_CPU_PER_DEVICE = 2
STORAGE_RESERVED_MEMORY_BASE_GIB = 21
STORAGE_RESERVED_MEMORY_PER_DEVICE_GIB = 5

MIB_PER_GIB = 1024

# Hardware profile catalog
CATALOG_URL_ENV = "SIZER_CATALOG_URL"
CATALOG_TOKEN_ENV = "SIZER_CATALOG_TOKEN"
CATALOG_TIMEOUT = 30  # seconds

# Logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
