"""components.spatial — Block coordinates.

All positions are integer block coordinates in the host world.  Entity
positions arrive as floats and are floored onto the block grid.
"""

from __future__ import annotations
from dataclasses import dataclass
import math


def _half(total: int) -> int:
    """Integer half of *total*, truncated toward zero."""
    q = abs(total) // 2
    return -q if total < 0 else q


@dataclass(frozen=True)
class BlockPos:
    x: int = 0
    y: int = 0
    z: int = 0

    @classmethod
    def of(cls, x: float, y: float, z: float) -> BlockPos:
        """The block containing the point ``(x, y, z)``."""
        return cls(math.floor(x), math.floor(y), math.floor(z))

    def distance_sq(self, other: BlockPos) -> int:
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return dx * dx + dy * dy + dz * dz

    def midpoint(self, other: BlockPos) -> BlockPos:
        """Component-wise average, truncated toward zero: (0,0,0)~(15,0,0) → (7,0,0)."""
        return BlockPos(
            _half(self.x + other.x),
            _half(self.y + other.y),
            _half(self.z + other.z),
        )

    def add(self, other: BlockPos) -> BlockPos:
        return BlockPos(self.x + other.x, self.y + other.y, self.z + other.z)

    def center(self) -> tuple[float, float, float]:
        """World-space centre of the block (where labels are anchored)."""
        return (self.x + 0.5, self.y + 0.5, self.z + 0.5)

    def __str__(self) -> str:
        return f"{self.x} {self.y} {self.z}"
