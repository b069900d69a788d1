"""Retention engine: turn retained regions into eviction requests.

Usage:
    engine = RetentionEngine(settings, AnchorClassifier(settings, observers))
    report = engine.purge(grid)
    report.evicted_count
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from collections.abc import Set as AbstractSet
from typing import Any

from chunkpurge.config.settings import PurgeSettings
from chunkpurge.core.position import CellPos
from chunkpurge.retention.classifier import AnchorClassifier
from chunkpurge.retention.models import EvictionPlan, PurgeReport, RetainedRegions
from chunkpurge.storage.protocol import Grid

logger = logging.getLogger(__name__)


def compute_eviction_set(
    loaded: AbstractSet[CellPos],
    proximity: AbstractSet[CellPos],
    keepalive: AbstractSet[CellPos],
    origin: AbstractSet[CellPos],
) -> EvictionPlan:
    """Loaded cells claimed by no anchor category.

    The result is disjoint from every retained set by construction.
    """
    retained = RetainedRegions(
        frozenset(proximity), frozenset(keepalive), frozenset(origin)
    ).union()
    return EvictionPlan(
        to_evict=frozenset(pos for pos in loaded if pos not in retained),
        proximity_count=len(proximity),
        keepalive_count=len(keepalive),
        origin_count=len(origin),
    )


class RetentionEngine:
    """Plans and issues evictions for one grid per call.

    Args:
        settings: Purge settings (debug flag controls summary logging).
        classifier: Anchor classifier producing retained regions.
    """

    def __init__(self, settings: PurgeSettings, classifier: AnchorClassifier) -> None:
        self._settings = settings
        self._classifier = classifier

    def plan(self, grid: Grid) -> tuple[EvictionPlan, Mapping[CellPos, Any]]:
        """Snapshot grid and compute its eviction plan without issuing it.

        Returns:
            (plan, snapshot) where snapshot maps coordinates to cell handles.
        """
        loaded = grid.snapshot_loaded_cells()
        if not loaded:
            return EvictionPlan.EMPTY, loaded

        positions = loaded.keys()
        regions: RetainedRegions = self._classifier.classify(grid, positions)
        plan = compute_eviction_set(
            positions, regions.proximity, regions.keepalive, regions.origin
        )
        return plan, loaded

    def purge(self, grid: Grid) -> PurgeReport:
        """Request eviction of every loaded cell no anchor retains.

        One request is issued per evicted cell; the grid decides when the
        cells are actually released.
        """
        started = time.perf_counter()

        plan, loaded = self.plan(grid)
        for pos in plan.to_evict:
            grid.request_evict(loaded[pos])

        report = PurgeReport(
            grid_name=grid.name,
            plan=plan,
            loaded_count=len(loaded),
            elapsed_ms=(time.perf_counter() - started) * 1000.0,
        )

        if self._settings.debug and not plan.is_empty():
            logger.info(report.summary(include_timing=True))
        else:
            logger.debug(report.summary())
        return report
