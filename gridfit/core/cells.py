"""Flat cell arena indexed by ``y * width + x``."""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from gridfit.core.models import Cell


class CellBuffer:
    """Row-major buffer of cells for a ``width`` x ``height`` grid."""

    __slots__ = ("width", "height", "_cells")

    def __init__(self, width: int, height: int, cells: list[Cell] | None = None) -> None:
        self.width = width
        self.height = height
        if cells is None:
            cells = [Cell(x, y) for y in range(height) for x in range(width)]
        if len(cells) != width * height:
            raise ValueError(f"Expected {width * height} cells, got {len(cells)}.")
        self._cells = cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def index(self, x: int, y: int) -> int:
        return y * self.width + x

    def contains(self, x: int, y: int) -> bool:
        """Return whether the coordinate is inside buffer bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> Cell | None:
        if not self.contains(x, y):
            return None
        return self._cells[self.index(x, y)]

    def cells_in_rect(self, start_x: int, start_y: int, width: int, height: int) -> list[Cell]:
        """Return cells covered by the rectangle, clipped to bounds."""
        x0 = max(0, start_x)
        y0 = max(0, start_y)
        x1 = min(self.width, start_x + width)
        y1 = min(self.height, start_y + height)
        return [self._cells[y * self.width + x] for y in range(y0, y1) for x in range(x0, x1)]

    def occupancy_mask(self) -> np.ndarray:
        """Return a ``(height, width)`` boolean occupancy array."""
        flat = np.fromiter((cell.is_occupied for cell in self._cells), dtype=bool, count=len(self._cells))
        return flat.reshape((self.height, self.width))

    def reallocate(self, new_width: int, new_height: int) -> tuple[CellBuffer, list[Cell], list[Cell]]:
        """Build a resized buffer.

        Cells in the overlapping region are carried over by identity, cells
        outside the new bounds are returned as discarded, and fresh empty cells
        are created for coordinates that did not exist before.
        """
        cells: list[Cell] = []
        created: list[Cell] = []
        for y in range(new_height):
            for x in range(new_width):
                if x < self.width and y < self.height:
                    cells.append(self._cells[self.index(x, y)])
                    continue
                cell = Cell(x, y)
                cells.append(cell)
                created.append(cell)
        discarded = [cell for cell in self._cells if cell.x >= new_width or cell.y >= new_height]
        return CellBuffer(new_width, new_height, cells), discarded, created
