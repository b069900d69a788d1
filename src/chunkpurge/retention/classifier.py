"""Anchor classification: which loaded cells each anchor category retains.

Usage:
    classifier = AnchorClassifier(settings, observers)
    regions = classifier.classify(grid, grid.snapshot_loaded_cells().keys())
    regions.proximity  # cells kept around observers
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from collections.abc import Set as AbstractSet

from chunkpurge.config.settings import PurgeSettings
from chunkpurge.core.position import Anchor, AnchorCategory, CellPos
from chunkpurge.core.region import union_regions
from chunkpurge.retention.models import RetainedRegions
from chunkpurge.storage.protocol import Grid, ObserverRegistry


class AnchorClassifier:
    """Builds anchors per category and unions the regions they retain.

    Anchors are derived fresh on every call; nothing is cached between
    passes, so classifying an unchanged snapshot twice gives equal results.

    Args:
        settings: Source of the per-category ignore radii.
        observers: Host observer registry, also supplying view distance.
    """

    def __init__(self, settings: PurgeSettings, observers: ObserverRegistry) -> None:
        self._settings = settings
        self._observers = observers

    def proximity_radius(self) -> int:
        return self._settings.proximity_radius + self._observers.view_distance()

    def proximity_anchors(self, grid: Grid) -> list[Anchor]:
        """One anchor per real observer currently on grid."""
        radius = self.proximity_radius()
        return [
            Anchor(observer.pos, AnchorCategory.PROXIMITY, radius)
            for observer in self._observers.active_observers()
            if observer.grid_name == grid.name and not observer.is_synthetic
        ]

    def keepalive_anchors(self, grid: Grid) -> list[Anchor]:
        """One anchor per keep-alive coordinate registered on grid."""
        radius = self._settings.keepalive_radius
        return [
            Anchor(pos, AnchorCategory.KEEPALIVE, radius)
            for pos in grid.keepalive_coordinates()
        ]

    def origin_anchors(self, grid: Grid) -> list[Anchor]:
        """The origin anchor, if grid keeps its origin region resident."""
        if not grid.retain_origin:
            return []
        return [Anchor(grid.origin, AnchorCategory.ORIGIN, self._settings.origin_radius)]

    @staticmethod
    def retained(loaded: AbstractSet[CellPos], anchors: Iterable[Anchor]) -> frozenset[CellPos]:
        """Union of the regions of all anchors, each bounded by its own radius."""
        seeds_by_radius: dict[int, list[CellPos]] = defaultdict(list)
        for anchor in anchors:
            seeds_by_radius[anchor.radius].append(anchor.pos)
        return frozenset().union(
            *(union_regions(loaded, seeds, radius) for radius, seeds in seeds_by_radius.items())
        )

    def classify(self, grid: Grid, loaded: AbstractSet[CellPos]) -> RetainedRegions:
        """Compute the retained cells of every category for grid.

        Args:
            grid: Grid supplying keep-alive coordinates and origin config.
            loaded: Coordinates of the grid's loaded cells.

        Returns:
            Retained regions per category. All empty when nothing is loaded.
        """
        if not loaded:
            return RetainedRegions()

        return RetainedRegions(
            proximity=self.retained(loaded, self.proximity_anchors(grid)),
            keepalive=self.retained(loaded, self.keepalive_anchors(grid)),
            origin=self.retained(loaded, self.origin_anchors(grid)),
        )
