"""Per-grid tick state and save states.

Tick state is held in a TickStateRegistry keyed weakly by grid instance:
a grid that the host drops is forgotten automatically, and the host can
also release it explicitly.
"""

from __future__ import annotations

import weakref
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from chunkpurge.storage.protocol import Grid


class SaveState(Enum):
    """Persistence state of a grid."""

    SAVE_ENABLED = auto()
    SAVE_DISABLED = auto()

    @classmethod
    def of(cls, grid: Grid) -> SaveState:
        return cls.SAVE_DISABLED if grid.saving_disabled else cls.SAVE_ENABLED


@dataclass(slots=True)
class TickState:
    """Mutable per-grid bookkeeping.

    Attributes:
        last_tick: Clock value at the grid's most recent end-of-tick.
        tick_timer: Ticks counted towards the next purge.
        should_disable: Start-of-tick latch: backlog was below the low-water mark.
        backlog_probe_failed: Backlog introspection failed once; treated as 0.
    """

    last_tick: float = 0.0
    tick_timer: int = 0
    should_disable: bool = False
    backlog_probe_failed: bool = False


class TickStateRegistry:
    """Lazily created TickState per grid, without keeping grids alive."""

    def __init__(self) -> None:
        self._states: weakref.WeakKeyDictionary[Grid, TickState] = weakref.WeakKeyDictionary()

    def get(self, grid: Grid) -> TickState:
        """Tick state for grid, created on first observation."""
        state = self._states.get(grid)
        if state is None:
            state = TickState()
            self._states[grid] = state
        return state

    def peek(self, grid: Grid) -> TickState | None:
        """Tick state for grid if it has been observed, without creating it."""
        return self._states.get(grid)

    def release(self, grid: Grid) -> bool:
        """Forget grid. Returns True if it had state."""
        return self._states.pop(grid, None) is not None

    def __contains__(self, grid: object) -> bool:
        return grid in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[Grid]:
        return iter(list(self._states.keys()))
