"""Retention results: retained regions per anchor category and eviction plans."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from chunkpurge.core.position import AnchorCategory, CellPos


@dataclass(frozen=True, slots=True)
class RetainedRegions:
    """Cells kept resident, grouped by the anchor category that claims them.

    A cell may belong to more than one category.
    """

    proximity: frozenset[CellPos] = frozenset()
    keepalive: frozenset[CellPos] = frozenset()
    origin: frozenset[CellPos] = frozenset()

    def union(self) -> frozenset[CellPos]:
        return self.proximity | self.keepalive | self.origin

    def counts(self) -> dict[AnchorCategory, int]:
        return {
            AnchorCategory.PROXIMITY: len(self.proximity),
            AnchorCategory.KEEPALIVE: len(self.keepalive),
            AnchorCategory.ORIGIN: len(self.origin),
        }


@dataclass(frozen=True, slots=True)
class EvictionPlan:
    """Cells to evict on this pass, with the category sizes that shaped it."""

    EMPTY: ClassVar[EvictionPlan]

    to_evict: frozenset[CellPos] = frozenset()
    proximity_count: int = 0
    keepalive_count: int = 0
    origin_count: int = 0

    @property
    def evicted_count(self) -> int:
        return len(self.to_evict)

    def is_empty(self) -> bool:
        return not self.to_evict


EvictionPlan.EMPTY = EvictionPlan()


@dataclass(slots=True)
class PurgeReport:
    """Observable outcome of one purge pass over a grid.

    Attributes:
        grid_name: Grid the pass ran on.
        plan: Eviction plan that was issued.
        loaded_count: Loaded cells in the snapshot the plan was built from.
        elapsed_ms: Wall time of the pass in milliseconds.
    """

    grid_name: str
    plan: EvictionPlan
    loaded_count: int = 0
    elapsed_ms: float = 0.0

    @property
    def evicted_count(self) -> int:
        return self.plan.evicted_count

    def summary(self, include_timing: bool = False) -> str:
        """Single-line description for logs."""
        text = (
            f"Queued {self.plan.evicted_count} cells out of {self.loaded_count}"
            f" for eviction in grid {self.grid_name}"
        )
        if include_timing:
            text += f" in {self.elapsed_ms:.1f} ms"
        return (
            f"{text}. ({self.plan.proximity_count} p, {self.plan.keepalive_count} k,"
            f" {self.plan.origin_count} o)"
        )
