"""Grid container pixel geometry and hit-testing helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass

from gridfit.core.models import GridItem


@dataclass(frozen=True, slots=True)
class GridLayout:
    """Pixel layout for a top-left-origin, downward-growing grid."""

    cell_size: float = 100.0
    spacing: float = 5.0

    @property
    def pitch(self) -> float:
        """Distance between the origins of neighbouring cells."""
        return self.cell_size + self.spacing

    def span(self, count: int) -> float:
        """Return pixel extent covered by ``count`` adjacent cells."""
        if count <= 0:
            return 0.0
        return count * self.cell_size + (count - 1) * self.spacing

    def container_size(self, width: int, height: int) -> tuple[float, float]:
        return self.span(width), self.span(height)

    def footprint_size(self, item: GridItem) -> tuple[float, float]:
        return self.span(item.width), self.span(item.height)

    def cell_origin(self, x: int, y: int) -> tuple[float, float]:
        """Return the top-left corner of a cell in container space."""
        return x * self.pitch, -y * self.pitch

    def point_to_cell(self, px: float, py: float) -> tuple[int, int]:
        """Convert a container-space point to unclamped cell coordinates."""
        return math.floor(px / self.pitch), math.floor(-py / self.pitch)
