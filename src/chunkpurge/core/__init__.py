"""Core functionalities: stateless primitives.

Architecture Note:
    core/ holds pure functions and immutable value types with no runtime
    state. For stateful services, see retention/, save/, and scheduling/.
"""

from chunkpurge.core.position import CELL_SIZE, Anchor, AnchorCategory, CellPos
from chunkpurge.core.region import find_region, union_regions

__all__ = [
    # Position
    "CELL_SIZE",
    "CellPos",
    "Anchor",
    "AnchorCategory",
    # Region
    "find_region",
    "union_regions",
]
