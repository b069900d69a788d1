"""Local in-memory grid and observer registry.

Dict-based host stand-ins suitable for single-process use and testing.
They follow the host behaviour the purge logic is tuned for: evictions
are queued, and the queue is drained at most UNLOAD_BATCH_CAP cells per
tick, only while saving is enabled.

Usage:
    grid = LocalGrid("overworld", origin=CellPos(0, 0))
    grid.load_area(CellPos(-8, -8), CellPos(8, 8))
    observers = LocalObserverRegistry(view_distance=10)
    observers.add(Observer(CellPos(0, 0), grid_name="overworld"))
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from chunkpurge.core.position import CellPos
from chunkpurge.storage.protocol import UNLOAD_BATCH_CAP, Observer


@dataclass(slots=True)
class LoadedCell:
    """Default cell handle stored by LocalGrid."""

    pos: CellPos


class LocalGrid:
    """Simple in-memory grid.

    Structure:
        _loaded[pos] = handle
        _pending[pos] = handle  (insertion ordered eviction backlog)
        _positions[id(handle)] = {pos, ...}  (cells loaded under a handle)

    Args:
        name: Grid name, used in logs and to match observers.
        origin: Designated origin cell.
        retain_origin: Whether the origin region is kept resident.
    """

    def __init__(
        self,
        name: str,
        *,
        origin: CellPos | None = None,
        retain_origin: bool = True,
    ) -> None:
        self.name = name
        self.origin = origin if origin is not None else CellPos(0, 0)
        self.retain_origin = retain_origin
        self.saving_disabled = False
        self._loaded: dict[CellPos, Any] = {}
        self._pending: dict[CellPos, Any] = {}
        self._positions: dict[int, set[CellPos]] = {}
        self._keepalive: set[CellPos] = set()

    def __repr__(self) -> str:
        return f"LocalGrid({self.name!r}, loaded={len(self._loaded)})"

    # Loading

    def load(self, pos: CellPos, handle: Any = None) -> Any:
        """Load a cell, returning its handle. Cancels a pending eviction."""
        if pos not in self._loaded:
            handle = handle if handle is not None else LoadedCell(pos)
            self._loaded[pos] = handle
            self._positions.setdefault(id(handle), set()).add(pos)
        self._pending.pop(pos, None)
        return self._loaded[pos]

    def load_area(self, corner1: CellPos, corner2: CellPos) -> None:
        """Load every cell of the rectangle spanned by two inclusive corners."""
        for x in range(min(corner1.x, corner2.x), max(corner1.x, corner2.x) + 1):
            for z in range(min(corner1.z, corner2.z), max(corner1.z, corner2.z) + 1):
                self.load(CellPos(x, z))

    def load_all(self, positions: Iterable[CellPos]) -> None:
        for pos in positions:
            self.load(pos)

    def unload(self, pos: CellPos) -> bool:
        """Release a cell immediately. Returns True if it was loaded."""
        self._pending.pop(pos, None)
        return self._forget(pos)

    def is_loaded(self, pos: CellPos) -> bool:
        return pos in self._loaded

    # GridStorage

    def snapshot_loaded_cells(self) -> Mapping[CellPos, Any]:
        return dict(self._loaded)

    def pending_eviction_backlog_size(self) -> int:
        return len(self._pending)

    def request_evict(self, handle: Any) -> None:
        for pos in self._positions.get(id(handle), ()):
            self._pending[pos] = handle

    def _forget(self, pos: CellPos) -> bool:
        handle = self._loaded.pop(pos, None)
        if handle is None:
            return False
        positions = self._positions[id(handle)]
        positions.discard(pos)
        if not positions:
            del self._positions[id(handle)]
        return True

    def process_evictions(self, batch: int = UNLOAD_BATCH_CAP) -> list[CellPos]:
        """Release up to batch queued cells, oldest first.

        Nothing is released while saving is disabled.

        Returns:
            Coordinates released this call.
        """
        if self.saving_disabled:
            return []
        released: list[CellPos] = []
        for pos in list(self._pending)[:batch]:
            del self._pending[pos]
            self._forget(pos)
            released.append(pos)
        return released

    # KeepAliveRegistry

    def add_keepalive(self, pos: CellPos) -> None:
        self._keepalive.add(pos)

    def remove_keepalive(self, pos: CellPos) -> None:
        self._keepalive.discard(pos)

    def keepalive_coordinates(self) -> frozenset[CellPos]:
        return frozenset(self._keepalive)


class LocalObserverRegistry:
    """In-memory observer registry.

    Args:
        view_distance: Host view distance in cells.
    """

    def __init__(self, view_distance: int = 10) -> None:
        self._view_distance = view_distance
        self._observers: list[Observer] = []

    def add(self, observer: Observer) -> None:
        self._observers.append(observer)

    def remove(self, observer: Observer) -> None:
        """Remove one registration of observer. Missing observers are ignored."""
        if observer in self._observers:
            self._observers.remove(observer)

    def active_observers(self) -> list[Observer]:
        return list(self._observers)

    def view_distance(self) -> int:
        return self._view_distance

    def set_view_distance(self, view_distance: int) -> None:
        self._view_distance = view_distance
