"""End-to-end purge workflow against the in-memory host.

The host loop mirrors a real server tick: start hook, host work (which
releases queued cells only while saving is enabled), end hook.
"""

from chunkpurge import (
    CellPos,
    LocalGrid,
    LocalObserverRegistry,
    Observer,
    PeriodicDriver,
    PurgeSettings,
)


def host_tick(driver: PeriodicDriver, grid: LocalGrid) -> None:
    driver.on_tick_start(grid)
    grid.process_evictions()
    driver.on_tick_end(grid)


def make_world(make_rectangle):
    settings = PurgeSettings(
        _env_file=None, purge_interval=1, proximity_radius=1, keepalive_radius=1
    )
    observers = LocalObserverRegistry(view_distance=1)
    grid = LocalGrid("overworld", retain_origin=False)
    grid.load_all(make_rectangle(CellPos(-10, -10), CellPos(10, 10)))
    grid.add_keepalive(CellPos(8, 8))
    observers.add(Observer(CellPos(0, 0), grid_name="overworld"))
    return settings, observers, grid


def test_isolated_cells_are_released_and_saving_settles_off(make_rectangle):
    settings, observers, grid = make_world(make_rectangle)
    driver = PeriodicDriver(settings, observers)

    for _ in range(12):
        host_tick(driver, grid)

    expected = make_rectangle(CellPos(-2, -2), CellPos(2, 2)) | make_rectangle(
        CellPos(7, 7), CellPos(9, 9)
    )
    assert set(grid.snapshot_loaded_cells()) == expected
    assert grid.pending_eviction_backlog_size() == 0
    assert grid.saving_disabled


def test_saving_toggles_with_backlog(make_rectangle):
    settings, observers, grid = make_world(make_rectangle)
    driver = PeriodicDriver(settings, observers)
    history = []

    for _ in range(8):
        host_tick(driver, grid)
        history.append(grid.saving_disabled)

    # off once the empty backlog is seen, on when the purge queues 407 cells,
    # off again after the last partial batch drains.
    assert history[:2] == [True, False]
    assert history[-1] is True
    assert history.count(False) >= 3


def test_observer_moving_away_releases_old_area(make_rectangle):
    settings, observers, grid = make_world(make_rectangle)
    settings.save_high_water = 10  # small move: backlog never reaches the default 100
    grid.remove_keepalive(CellPos(8, 8))
    driver = PeriodicDriver(settings, observers)
    player = Observer(CellPos(0, 0), grid_name="overworld")

    for _ in range(10):
        host_tick(driver, grid)
    observers.remove(player)
    observers.add(Observer(CellPos(0, 20), grid_name="overworld"))
    grid.load_area(CellPos(-2, 18), CellPos(2, 22))
    for _ in range(10):
        host_tick(driver, grid)

    assert player not in observers.active_observers()
    assert set(grid.snapshot_loaded_cells()) == make_rectangle(CellPos(-2, 18), CellPos(2, 22))
