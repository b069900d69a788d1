"""Tests for the periodic driver.

Why these tests exist:
- The purge must run exactly every purge_interval ticks per grid
- Nothing is purged while no real observer is online
- Settings changes (disable purge) must take effect on the next tick
"""

import pytest

from chunkpurge import (
    BackupStatusProbe,
    CellPos,
    LocalGrid,
    Observer,
    PeriodicDriver,
    PurgeReport,
    SaveStateController,
    TickStateRegistry,
)


@pytest.fixture
def clock():
    now = [1000.0]

    def tick() -> float:
        now[0] += 0.05
        return now[0]

    return tick


@pytest.fixture
def driver(settings, observers, clock) -> PeriodicDriver:
    settings.purge_interval = 3
    return PeriodicDriver(settings, observers, clock=clock)


@pytest.fixture
def loaded_grid(make_rectangle) -> LocalGrid:
    grid = LocalGrid("overworld", retain_origin=False)
    grid.load_all(make_rectangle(CellPos(-10, -10), CellPos(10, 10)))
    return grid


def run_tick(driver: PeriodicDriver, grid: LocalGrid) -> PurgeReport | None:
    driver.on_tick_start(grid)
    return driver.on_tick_end(grid)


def test_purge_runs_every_interval(driver, observers, loaded_grid):
    observers.add(Observer(CellPos(0, 0), grid_name="overworld"))

    results = [run_tick(driver, loaded_grid) for _ in range(7)]

    assert [r is not None for r in results] == [False, False, True, False, False, True, False]
    assert results[2].evicted_count > 0


def test_no_real_observers_skips_purge(driver, observers, loaded_grid):
    observers.add(Observer(CellPos(0, 0), grid_name="overworld", is_synthetic=True))

    assert all(run_tick(driver, loaded_grid) is None for _ in range(6))
    assert loaded_grid.pending_eviction_backlog_size() == 0
    assert driver.tick_states.get(loaded_grid).tick_timer == 0


def test_observer_on_another_grid_still_enables_purge(driver, observers, loaded_grid):
    """Presence is host wide: an empty grid is purged while anyone is online."""
    observers.add(Observer(CellPos(0, 0), grid_name="nether"))

    reports = [run_tick(driver, loaded_grid) for _ in range(3)]

    assert reports[2] is not None
    assert reports[2].evicted_count == 21 * 21


def test_disabling_purge_resets_timer(settings, driver, observers, loaded_grid):
    observers.add(Observer(CellPos(0, 0), grid_name="overworld"))
    run_tick(driver, loaded_grid)
    run_tick(driver, loaded_grid)
    assert driver.tick_states.get(loaded_grid).tick_timer == 2

    settings.auto_purge_enabled = False
    assert run_tick(driver, loaded_grid) is None
    assert driver.tick_states.get(loaded_grid).tick_timer == 0

    settings.auto_purge_enabled = True
    results = [run_tick(driver, loaded_grid) for _ in range(3)]
    assert [r is not None for r in results] == [False, False, True]


def test_last_tick_recorded_every_end_of_tick(driver, loaded_grid):
    run_tick(driver, loaded_grid)
    first = driver.tick_states.get(loaded_grid).last_tick
    run_tick(driver, loaded_grid)

    assert first == pytest.approx(1000.05)
    assert driver.tick_states.get(loaded_grid).last_tick > first


def test_grids_keep_separate_timers(driver, observers, loaded_grid, make_rectangle):
    observers.add(Observer(CellPos(0, 0), grid_name="overworld"))
    other = LocalGrid("nether", retain_origin=False)
    other.load_all(make_rectangle(CellPos(0, 0), CellPos(2, 2)))

    run_tick(driver, loaded_grid)
    run_tick(driver, loaded_grid)
    assert run_tick(driver, other) is None
    assert run_tick(driver, loaded_grid) is not None
    assert driver.tick_states.get(other).tick_timer == 1


def test_release_forgets_grid(driver, loaded_grid):
    run_tick(driver, loaded_grid)
    driver.release(loaded_grid)

    assert loaded_grid not in driver.tick_states


def test_end_of_tick_runs_save_controller(driver, loaded_grid):
    run_tick(driver, loaded_grid)

    assert loaded_grid.saving_disabled


def test_backup_probe_from_settings(settings, observers, loaded_grid):
    settings.backup_probe = "builtins:bool"
    driver = PeriodicDriver(settings, observers)

    run_tick(driver, loaded_grid)

    assert loaded_grid.saving_disabled


def test_explicit_backup_probe_blocks_save_toggle(settings, observers, loaded_grid):
    driver = PeriodicDriver(settings, observers, backup_probe=BackupStatusProbe(lambda: True))

    run_tick(driver, loaded_grid)

    assert not loaded_grid.saving_disabled


def test_injected_controller_shares_its_tick_states(settings, observers, loaded_grid):
    controller = SaveStateController(settings, TickStateRegistry())
    driver = PeriodicDriver(settings, observers, save_controller=controller)

    run_tick(driver, loaded_grid)
    assert driver.tick_states is controller.tick_states
    assert loaded_grid in controller.tick_states

    driver.release(loaded_grid)
    assert loaded_grid not in controller.tick_states


def test_injected_controller_rejects_conflicting_arguments(settings, observers):
    controller = SaveStateController(settings, TickStateRegistry())

    with pytest.raises(ValueError, match="backup_probe"):
        PeriodicDriver(
            settings, observers, save_controller=controller, backup_probe=BackupStatusProbe()
        )
    with pytest.raises(ValueError, match="tick_states"):
        PeriodicDriver(
            settings, observers, save_controller=controller, tick_states=TickStateRegistry()
        )
