"""Bounded flood fill over loaded cells.

A region is the set of loaded cells reachable from a seed through
orthogonally adjacent loaded cells. Cells touching only at a corner are
not connected.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from collections.abc import Set as AbstractSet

from chunkpurge.core.position import CellPos


def _within(value: int, origin: int, radius_limit: int) -> bool:
    return radius_limit <= 0 or abs(value - origin) <= radius_limit


def find_region(
    loaded: AbstractSet[CellPos], seed: CellPos, radius_limit: int = 0
) -> set[CellPos]:
    """Find the loaded cells connected to seed, within radius_limit of it.

    Scan-line fill: each dequeued cell is widened into a west/east span of
    loaded cells, the span is added to the region, and the loaded cells
    directly north (z+1) and south (z-1) of the span are queued.

    The radius is checked per axis against the seed itself, not against the
    edge of the fill, so a corridor that leaves the radius is cut off there
    even if it later bends back.

    Args:
        loaded: Coordinates of all loaded cells.
        seed: Starting coordinate.
        radius_limit: Max per-axis distance from seed. Zero or less = unbounded.

    Returns:
        Region containing seed, or an empty set if seed is not loaded.
    """
    region: set[CellPos] = set()
    if seed not in loaded:
        return region

    queue: deque[CellPos] = deque([seed])

    while queue:
        cell = queue.popleft()
        if cell in region:
            continue

        z = cell.z
        west = cell.x
        while CellPos(west - 1, z) in loaded and _within(west - 1, seed.x, radius_limit):
            west -= 1
        east = cell.x
        while CellPos(east + 1, z) in loaded and _within(east + 1, seed.x, radius_limit):
            east += 1

        north_ok = _within(z + 1, seed.z, radius_limit)
        south_ok = _within(z - 1, seed.z, radius_limit)

        for x in range(west, east + 1):
            region.add(CellPos(x, z))

            north = CellPos(x, z + 1)
            if north_ok and north in loaded and north not in region:
                queue.append(north)

            south = CellPos(x, z - 1)
            if south_ok and south in loaded and south not in region:
                queue.append(south)

    return region


def union_regions(
    loaded: AbstractSet[CellPos], seeds: Iterable[CellPos], radius_limit: int = 0
) -> frozenset[CellPos]:
    """Union of find_region over several seeds sharing one radius limit.

    Each seed's radius is measured from that seed, so regions of nearby
    seeds are computed independently and merged.
    """
    retained: set[CellPos] = set()
    for seed in seeds:
        retained |= find_region(loaded, seed, radius_limit)
    return frozenset(retained)
