"""Region finding: bounded flood fill over loaded cells."""

from chunkpurge.core.region.operations import find_region, union_regions

__all__ = [
    "find_region",
    "union_regions",
]
