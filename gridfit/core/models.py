"""Core domain models for grid occupancy."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

UNPLACED: tuple[int, int] = (-1, -1)


@dataclass(eq=False, slots=True)
class GridItem:
    """Rectangular occupant with a fixed footprint and a grid anchor."""

    width: int = 1
    height: int = 1
    item_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    grid_x: int = UNPLACED[0]
    grid_y: int = UNPLACED[1]

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Item footprint must be at least 1x1, got {self.width}x{self.height}.")

    def set_grid_position(self, x: int, y: int) -> None:
        """Record the anchor; (-1, -1) marks the item unplaced."""
        self.grid_x = x
        self.grid_y = y

    @property
    def anchor(self) -> tuple[int, int]:
        return self.grid_x, self.grid_y

    @property
    def is_placed(self) -> bool:
        return self.grid_x != UNPLACED[0] and self.grid_y != UNPLACED[1]

    def footprint(self) -> list[tuple[int, int]]:
        """Compute covered coordinates at the current anchor."""
        if not self.is_placed:
            return []
        return [
            (x, y)
            for y in range(self.grid_y, self.grid_y + self.height)
            for x in range(self.grid_x, self.grid_x + self.width)
        ]


@dataclass(eq=False, slots=True)
class Cell:
    """Single addressable grid location."""

    x: int
    y: int
    occupying_item: GridItem | None = None

    @property
    def is_occupied(self) -> bool:
        return self.occupying_item is not None

    def set_occupied(self, item: GridItem) -> None:
        self.occupying_item = item

    def set_free(self) -> None:
        self.occupying_item = None


@dataclass(frozen=True, slots=True)
class CellHit:
    """Result of mapping a container-space point to a cell."""

    x: int
    y: int
    in_bounds: bool
