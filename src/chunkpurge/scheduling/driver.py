"""Periodic driver: the entry point the host scheduler calls every tick.

Usage:
    driver = PeriodicDriver(settings, observers)

    # host loop, for every grid, every tick
    driver.on_tick_start(grid)
    ...  # host world tick
    driver.on_tick_end(grid)

    # host dropped the grid
    driver.release(grid)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from chunkpurge.config.settings import PurgeSettings
from chunkpurge.retention.classifier import AnchorClassifier
from chunkpurge.retention.engine import RetentionEngine
from chunkpurge.retention.models import PurgeReport
from chunkpurge.save.controller import SaveStateController
from chunkpurge.save.models import TickStateRegistry
from chunkpurge.save.signals import BackupStatusProbe
from chunkpurge.storage.protocol import BackupStatus, Grid, ObserverRegistry

logger = logging.getLogger(__name__)


class PeriodicDriver:
    """Runs the purge every purge_interval ticks and the save controller every tick.

    Grids are driven independently; each has its own tick state. Every
    call runs to completion before returning.

    Args:
        settings: Live purge settings, read on every tick.
        observers: Host observer registry.
        engine: Retention engine. Defaults to one built from settings.
        save_controller: Save-state controller. Defaults to one sharing
            this driver's tick states and backup probe. An injected
            controller brings its own registry and probe.
        tick_states: Per-grid state registry.
        backup_probe: Backup signal. Defaults to settings.backup_probe.
        clock: Time source for last-tick timestamps.

    Raises:
        ValueError: If save_controller is given together with a
            backup_probe or a different tick_states registry.
    """

    def __init__(
        self,
        settings: PurgeSettings,
        observers: ObserverRegistry,
        *,
        engine: RetentionEngine | None = None,
        save_controller: SaveStateController | None = None,
        tick_states: TickStateRegistry | None = None,
        backup_probe: BackupStatus | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._settings = settings
        self._observers = observers
        self._clock = clock
        self._engine = engine or RetentionEngine(settings, AnchorClassifier(settings, observers))
        if save_controller is None:
            self._tick_states = tick_states if tick_states is not None else TickStateRegistry()
            probe = backup_probe if backup_probe is not None else settings.backup_probe
            save_controller = SaveStateController(
                settings, self._tick_states, BackupStatusProbe.wrap(probe)
            )
        else:
            if backup_probe is not None:
                msg = "Pass backup_probe to the save controller, not the driver"
                raise ValueError(msg)
            if tick_states is not None and tick_states is not save_controller.tick_states:
                msg = "tick_states must be the save controller's registry"
                raise ValueError(msg)
            self._tick_states = save_controller.tick_states
        self._save_controller = save_controller

    @property
    def tick_states(self) -> TickStateRegistry:
        return self._tick_states

    @property
    def save_controller(self) -> SaveStateController:
        return self._save_controller

    def on_tick_start(self, grid: Grid) -> None:
        """Host hook: start of grid's tick."""
        self._save_controller.on_tick_start(grid)

    def on_tick_end(self, grid: Grid) -> PurgeReport | None:
        """Host hook: end of grid's tick.

        Returns:
            Report of the purge pass if one ran this tick, else None.
        """
        report = self._auto_purge(grid)
        self._save_controller.on_tick_end(grid)
        return report

    def release(self, grid: Grid) -> None:
        """Host hook: grid is gone; forget its state."""
        self._tick_states.release(grid)

    def has_real_observers(self) -> bool:
        """True if any non-synthetic observer is active anywhere on the host."""
        return any(not o.is_synthetic for o in self._observers.active_observers())

    def _auto_purge(self, grid: Grid) -> PurgeReport | None:
        tick_state = self._tick_states.get(grid)
        tick_state.last_tick = self._clock()

        if not self._settings.auto_purge_enabled:
            tick_state.tick_timer = 0
            return None

        tick_state.tick_timer += 1
        if tick_state.tick_timer < self._settings.purge_interval:
            return None
        tick_state.tick_timer = 0

        if not self.has_real_observers():
            logger.debug("Nobody online, skipping purge of grid %s", grid.name)
            return None

        return self._engine.purge(grid)
