"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from chunkpurge import CellPos, LocalGrid, LocalObserverRegistry, PurgeSettings


def rectangle(corner1: CellPos, corner2: CellPos) -> set[CellPos]:
    """All cells of the rectangle spanned by two inclusive corners."""
    return {
        CellPos(x, z)
        for x in range(min(corner1.x, corner2.x), max(corner1.x, corner2.x) + 1)
        for z in range(min(corner1.z, corner2.z), max(corner1.z, corner2.z) + 1)
    }


@pytest.fixture
def settings() -> PurgeSettings:
    """Default settings, isolated from any .env file."""
    return PurgeSettings(_env_file=None)


@pytest.fixture
def grid() -> LocalGrid:
    """Empty grid named 'overworld' with origin retention off."""
    return LocalGrid("overworld", retain_origin=False)


@pytest.fixture
def observers() -> LocalObserverRegistry:
    """Observer registry with a view distance of 2."""
    return LocalObserverRegistry(view_distance=2)


@pytest.fixture
def make_rectangle():
    return rectangle
