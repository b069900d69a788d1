"""Cell coordinates and anchors."""

from chunkpurge.core.position.models import CELL_SIZE, Anchor, AnchorCategory, CellPos

__all__ = [
    "CELL_SIZE",
    "CellPos",
    "Anchor",
    "AnchorCategory",
]
