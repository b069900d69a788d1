"""Host collaborator protocols and in-memory implementations."""

from chunkpurge.storage.local import LoadedCell, LocalGrid, LocalObserverRegistry
from chunkpurge.storage.protocol import (
    UNLOAD_BATCH_CAP,
    BackupStatus,
    Grid,
    GridConfig,
    GridStorage,
    KeepAliveRegistry,
    Observer,
    ObserverRegistry,
    Persistence,
)

__all__ = [
    # Protocols
    "Grid",
    "GridStorage",
    "GridConfig",
    "KeepAliveRegistry",
    "Persistence",
    "ObserverRegistry",
    "BackupStatus",
    "Observer",
    "UNLOAD_BATCH_CAP",
    # Local
    "LocalGrid",
    "LocalObserverRegistry",
    "LoadedCell",
]
