"""Protocols for the host collaborators the purge logic consumes.

The host owns the loaded cells, the eviction backlog, the keep-alive
registry and the persistence flag. This package only reads them and
requests evictions.

Usage:
    grid = LocalGrid("overworld")          # or any object satisfying Grid
    observers = LocalObserverRegistry()    # or any ObserverRegistry
    driver = PeriodicDriver(settings, observers)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from collections.abc import Set as AbstractSet
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from chunkpurge.core.position import CellPos

UNLOAD_BATCH_CAP = 100
"""Max cells a host releases from its eviction backlog in one tick."""


class GridStorage(Protocol):
    """Source of the loaded-cell snapshot and sink for eviction requests."""

    def snapshot_loaded_cells(self) -> Mapping[CellPos, Any]:
        """Snapshot of loaded cells: coordinate -> opaque cell handle."""
        ...

    def pending_eviction_backlog_size(self) -> int:
        """Number of cells queued for eviction but not yet released."""
        ...

    def request_evict(self, handle: Any) -> None:
        """Queue a cell for eviction. Fire-and-forget."""
        ...


class KeepAliveRegistry(Protocol):
    """Externally registered persistent-load requests."""

    def keepalive_coordinates(self) -> AbstractSet[CellPos]:
        """Coordinates that must stay loaded along with their surroundings."""
        ...


class GridConfig(Protocol):
    """Static per-grid configuration."""

    name: str
    origin: CellPos
    retain_origin: bool


class Persistence(Protocol):
    """Persistence switch written by the save-state controller."""

    saving_disabled: bool


@runtime_checkable
class Grid(GridStorage, KeepAliveRegistry, GridConfig, Persistence, Protocol):
    """One host world: storage, keep-alive registry, config and save flag.

    Implementations must be hashable and weak-referenceable: per-grid tick
    state is keyed by instance and must not keep the grid alive.
    """


@dataclass(frozen=True, slots=True)
class Observer:
    """An actor whose presence keeps nearby cells loaded.

    Synthetic observers (automation, headless actors) never anchor cells.
    """

    pos: CellPos
    grid_name: str
    is_synthetic: bool = False


class ObserverRegistry(Protocol):
    """Host-wide registry of connected observers."""

    def active_observers(self) -> Sequence[Observer]:
        """All currently active observers across every grid."""
        ...

    def view_distance(self) -> int:
        """Host view distance in cells. Hosts without one return 0."""
        ...


class BackupStatus(Protocol):
    """Signal telling whether an external backup is in progress."""

    def is_backup_running(self) -> bool: ...
