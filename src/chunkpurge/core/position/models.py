"""Cell coordinates and retention anchors.

Usage:
    pos = CellPos(3, -7)
    spawn = CellPos.from_block(-20, 40)  # CellPos(x=-2, z=2)
    anchor = Anchor(pos, AnchorCategory.KEEPALIVE, radius=5)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

CELL_SIZE = 16
"""Width of a cell in block units, used when mapping block positions to cells."""


@dataclass(frozen=True, slots=True)
class CellPos:
    """Integer cell coordinate on the horizontal (x, z) plane.

    Identity is by value; instances are immutable and safe as set members
    and mapping keys.
    """

    x: int
    z: int

    def __hash__(self) -> int:
        return hash((self.x, self.z))

    def offset(self, dx: int = 0, dz: int = 0) -> CellPos:
        """Return the coordinate shifted by (dx, dz)."""
        return CellPos(self.x + dx, self.z + dz)

    @classmethod
    def from_block(cls, block_x: int, block_z: int, cell_size: int = CELL_SIZE) -> CellPos:
        """Map a block position to the cell containing it.

        Uses floor division so negative block coordinates land in the cell
        that actually contains them (block -1 is in cell -1, not cell 0).
        """
        return cls(block_x // cell_size, block_z // cell_size)


class AnchorCategory(Enum):
    """Reason a region of cells is kept resident."""

    PROXIMITY = auto()
    """Around an active, non-synthetic observer."""

    KEEPALIVE = auto()
    """Around an externally registered keep-alive request."""

    ORIGIN = auto()
    """Around the grid's designated origin cell."""


@dataclass(frozen=True, slots=True)
class Anchor:
    """Coordinate that justifies keeping its connected region loaded.

    A radius of zero or less means the region is bounded only by the
    edge of the loaded set.
    """

    pos: CellPos
    category: AnchorCategory
    radius: int = 0

    def is_bounded(self) -> bool:
        return self.radius > 0
