"""ChunkPurge: evict loaded cells that no player, keep-alive or origin anchor needs.

Usage:
    from chunkpurge import CellPos, LocalGrid, LocalObserverRegistry, Observer
    from chunkpurge import PeriodicDriver, PurgeSettings

    grid = LocalGrid("overworld")
    grid.load_area(CellPos(-20, -20), CellPos(20, 20))

    observers = LocalObserverRegistry(view_distance=8)
    observers.add(Observer(CellPos(0, 0), grid_name="overworld"))

    driver = PeriodicDriver(PurgeSettings(purge_interval=1), observers)
    driver.on_tick_start(grid)
    report = driver.on_tick_end(grid)
"""

__version__ = "2.0.0"

# Config
from chunkpurge.config import CommandError, ConfigCommand, ConfigSubcommand, PurgeSettings

# Core primitives
from chunkpurge.core import (
    Anchor,
    AnchorCategory,
    CellPos,
    find_region,
    union_regions,
)

# Retention
from chunkpurge.retention import (
    AnchorClassifier,
    EvictionPlan,
    PurgeReport,
    RetainedRegions,
    RetentionEngine,
    compute_eviction_set,
)

# Save handling
from chunkpurge.save import (
    BackupStatusProbe,
    SaveState,
    SaveStateController,
    TickState,
    TickStateRegistry,
)

# Scheduling
from chunkpurge.scheduling import PeriodicDriver

# Storage
from chunkpurge.storage import (
    UNLOAD_BATCH_CAP,
    Grid,
    LocalGrid,
    LocalObserverRegistry,
    Observer,
    ObserverRegistry,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "CellPos",
    "Anchor",
    "AnchorCategory",
    "find_region",
    "union_regions",
    # Retention
    "AnchorClassifier",
    "RetentionEngine",
    "compute_eviction_set",
    "EvictionPlan",
    "PurgeReport",
    "RetainedRegions",
    # Save
    "SaveStateController",
    "SaveState",
    "TickState",
    "TickStateRegistry",
    "BackupStatusProbe",
    # Scheduling
    "PeriodicDriver",
    # Storage
    "Grid",
    "ObserverRegistry",
    "Observer",
    "LocalGrid",
    "LocalObserverRegistry",
    "UNLOAD_BATCH_CAP",
    # Config
    "PurgeSettings",
    "ConfigCommand",
    "ConfigSubcommand",
    "CommandError",
]
