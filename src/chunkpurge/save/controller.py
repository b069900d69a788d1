"""Save-state controller: hysteresis on the grid's eviction backlog.

A host only releases queued cells while saving is enabled, and releases
at most UNLOAD_BATCH_CAP of them per tick. Saving is therefore switched
off once the backlog has drained below that cap, and switched back on
only when it has grown to the configured high-water mark. The two
thresholds keep the flag from flapping when the backlog hovers near one
boundary.

    SAVE_ENABLED  --(backlog < UNLOAD_BATCH_CAP at tick start)-->  SAVE_DISABLED
    SAVE_DISABLED --(backlog >= save_high_water at tick end)--->  SAVE_ENABLED

Usage:
    controller = SaveStateController(settings, TickStateRegistry(), probe)
    controller.on_tick_start(grid)
    ...  # host tick
    controller.on_tick_end(grid)
"""

from __future__ import annotations

import logging

from chunkpurge.config.settings import PurgeSettings
from chunkpurge.save.models import SaveState, TickStateRegistry
from chunkpurge.save.signals import BackupStatusProbe
from chunkpurge.storage.protocol import UNLOAD_BATCH_CAP, BackupStatus, Grid

logger = logging.getLogger(__name__)


class SaveStateController:
    """Per-grid two-state machine driving grid.saving_disabled.

    Args:
        settings: Enables the controller and supplies the high-water mark.
        tick_states: Registry holding each grid's start-of-tick latch.
        backup_probe: Backup signal; no transition happens while it is on.
            Host objects are wrapped so a failing lookup reads as "no
            backup" from then on.
    """

    def __init__(
        self,
        settings: PurgeSettings,
        tick_states: TickStateRegistry | None = None,
        backup_probe: BackupStatus | None = None,
    ) -> None:
        self._settings = settings
        self._tick_states = tick_states if tick_states is not None else TickStateRegistry()
        self._backup_probe = BackupStatusProbe.wrap(backup_probe)

    @property
    def tick_states(self) -> TickStateRegistry:
        return self._tick_states

    def state(self, grid: Grid) -> SaveState:
        return SaveState.of(grid)

    def backlog_size(self, grid: Grid) -> int:
        """Pending eviction backlog of grid, or 0 once introspection has failed."""
        tick_state = self._tick_states.get(grid)
        if tick_state.backlog_probe_failed:
            return 0
        try:
            return grid.pending_eviction_backlog_size()
        except Exception:
            tick_state.backlog_probe_failed = True
            logger.warning(
                "Could not read eviction backlog of grid %s, not doing auto save handling.",
                grid.name,
                exc_info=True,
            )
            return 0

    def on_tick_start(self, grid: Grid) -> None:
        """Latch whether the backlog has drained enough to stop saving."""
        if not self._settings.auto_save_enabled or grid.saving_disabled:
            return
        tick_state = self._tick_states.get(grid)
        tick_state.should_disable = self.backlog_size(grid) < UNLOAD_BATCH_CAP

    def on_tick_end(self, grid: Grid) -> SaveState | None:
        """Apply at most one transition.

        Returns:
            The state entered, or None if nothing changed.
        """
        if not self._settings.auto_save_enabled:
            return None
        if self._backup_probe.is_backup_running():
            return None

        tick_state = self._tick_states.get(grid)
        if not grid.saving_disabled:
            if not tick_state.should_disable:
                return None
            grid.saving_disabled = True
            new_state = SaveState.SAVE_DISABLED
        else:
            if self.backlog_size(grid) < self._settings.save_high_water:
                return None
            grid.saving_disabled = False
            new_state = SaveState.SAVE_ENABLED

        if self._settings.debug:
            verb = "Disabled" if new_state is SaveState.SAVE_DISABLED else "Enabled"
            logger.info("%s saving for grid %s", verb, grid.name)
        return new_state
