"""Grid occupancy engine: placement, removal, queries and resize."""

from __future__ import annotations

import logging

import numpy as np

from gridfit.core.cells import CellBuffer
from gridfit.core.layout import GridLayout
from gridfit.core.models import UNPLACED, Cell, CellHit, GridItem
from gridfit.core.presenter import CellPresenter, NullCellPresenter
from gridfit.infra.config import GridConfig
from gridfit.infra.logging import grid_fields

logger = logging.getLogger(__name__)


class GridEngine:
    """Single source of truth for cell occupancy.

    The engine owns its cell arena and replaces it wholesale on resize. Placed
    items are tracked in a non-owning registry that keeps insertion order.
    Expected rejections (out of bounds, conflicts, size limits, occupied
    shrink) are reported as ``False`` and leave state unchanged.
    """

    def __init__(self, config: GridConfig, presenter: CellPresenter | None = None) -> None:
        self._config = config
        self._layout = GridLayout(cell_size=config.cell_size, spacing=config.spacing)
        self._presenter: CellPresenter = presenter if presenter is not None else NullCellPresenter()
        self._cells = CellBuffer(config.width, config.height)
        self._placed: list[GridItem] = []
        self._presenter.cells_created(list(self._cells))
        self._presenter.container_resized(*self.container_size())
        logger.debug("grid_initialized width=%d height=%d", self.width, self.height)

    @property
    def config(self) -> GridConfig:
        return self._config

    @property
    def layout(self) -> GridLayout:
        return self._layout

    @property
    def width(self) -> int:
        return self._cells.width

    @property
    def height(self) -> int:
        return self._cells.height

    @property
    def placed_items(self) -> tuple[GridItem, ...]:
        """Snapshot of items known to the grid."""
        return tuple(self._placed)

    def in_bounds(self, x: int, y: int) -> bool:
        return self._cells.contains(x, y)

    def cell_at(self, x: int, y: int) -> Cell | None:
        """Return the cell at a coordinate, or None outside bounds."""
        return self._cells.cell_at(x, y)

    def item_at(self, x: int, y: int) -> GridItem | None:
        cell = self._cells.cell_at(x, y)
        return cell.occupying_item if cell is not None else None

    def occupancy_mask(self) -> np.ndarray:
        """Return a ``(height, width)`` boolean occupancy array."""
        return self._cells.occupancy_mask()

    def container_size(self) -> tuple[float, float]:
        return self._layout.container_size(self.width, self.height)

    def cell_origin(self, x: int, y: int) -> tuple[float, float]:
        return self._layout.cell_origin(x, y)

    # Placement

    def can_place(
        self,
        start_x: int,
        start_y: int,
        width: int,
        height: int,
        ignore: GridItem | None = None,
    ) -> bool:
        """Return whether a footprint fits in bounds without foreign occupants."""
        if width < 1 or height < 1:
            return False
        if start_x < 0 or start_y < 0 or start_x + width > self.width or start_y + height > self.height:
            return False
        for cell in self._cells.cells_in_rect(start_x, start_y, width, height):
            if cell.is_occupied and cell.occupying_item is not ignore:
                return False
        return True

    def place(self, item: GridItem, start_x: int, start_y: int) -> bool:
        """Place or move an item so its anchor sits at ``(start_x, start_y)``."""
        if not self.can_place(start_x, start_y, item.width, item.height, item):
            logger.debug(
                "place_rejected item=%s anchor=(%d,%d) size=%dx%d",
                item.item_id,
                start_x,
                start_y,
                item.width,
                item.height,
            )
            return False

        self.remove(item)
        for cell in self._cells.cells_in_rect(start_x, start_y, item.width, item.height):
            cell.set_occupied(item)
        item.set_grid_position(start_x, start_y)
        if item not in self._placed:
            self._placed.append(item)
        logger.debug("item_placed item=%s anchor=(%d,%d)", item.item_id, start_x, start_y)
        return True

    def remove(self, item: GridItem) -> None:
        """Free an item's cells; registry membership is kept."""
        if not item.is_placed:
            return
        # Clipped to current bounds so removal after a shrink stays safe.
        for cell in self._cells.cells_in_rect(item.grid_x, item.grid_y, item.width, item.height):
            if cell.occupying_item is item:
                cell.set_free()
        item.set_grid_position(*UNPLACED)

    def clear(self) -> None:
        """Remove every known item and empty the registry."""
        for item in list(self._placed):
            self.remove(item)
        self._placed.clear()

    def find_free_anchor(
        self,
        width: int,
        height: int,
        ignore: GridItem | None = None,
    ) -> tuple[int, int] | None:
        """Return the first anchor, row-major, where the footprint fits."""
        for y in range(self.height - height + 1):
            for x in range(self.width - width + 1):
                if self.can_place(x, y, width, height, ignore):
                    return x, y
        return None

    def place_anywhere(self, item: GridItem) -> bool:
        """Place an item at the first free anchor."""
        anchor = self.find_free_anchor(item.width, item.height, item)
        if anchor is None:
            return False
        return self.place(item, *anchor)

    # Coordinates and presentation

    def map_point_to_cell(self, px: float, py: float) -> CellHit:
        """Map a container-space point to unclamped cell coordinates."""
        x, y = self._layout.point_to_cell(px, py)
        return CellHit(x=x, y=y, in_bounds=self.in_bounds(x, y))

    def highlight(self, start_x: int, start_y: int, width: int, height: int, valid: bool) -> None:
        """Show placement feedback for the in-bounds part of a footprint."""
        self.clear_highlight()
        for cell in self._cells.cells_in_rect(start_x, start_y, width, height):
            self._presenter.highlight_cell(cell, valid)

    def clear_highlight(self) -> None:
        for cell in self._cells:
            self._presenter.clear_cell_highlight(cell)

    # Resize

    def resize(self, new_width: int, new_height: int) -> bool:
        """Resize the grid, keeping every surviving cell and its occupant."""
        if new_width < self._config.min_size or new_height < self._config.min_size:
            logger.warning(
                "resize_rejected reason=below_minimum requested=%dx%d min=%d",
                new_width,
                new_height,
                self._config.min_size,
                extra=self._log_fields(),
            )
            return False
        if new_width > self._config.max_width or new_height > self._config.max_height:
            logger.warning(
                "resize_rejected reason=above_maximum requested=%dx%d max=%dx%d",
                new_width,
                new_height,
                self._config.max_width,
                self._config.max_height,
                extra=self._log_fields(),
            )
            return False
        if new_width < self.width or new_height < self.height:
            if self._removed_region_occupied(new_width, new_height):
                logger.warning(
                    "resize_rejected reason=occupied_region requested=%dx%d current=%dx%d",
                    new_width,
                    new_height,
                    self.width,
                    self.height,
                    extra=self._log_fields(),
                )
                return False
        self._reallocate(new_width, new_height)
        return True

    def _log_fields(self) -> dict[str, int]:
        return grid_fields(self.width, self.height)

    def _removed_region_occupied(self, new_width: int, new_height: int) -> bool:
        mask = self._cells.occupancy_mask()
        return bool(mask[:, new_width:].any() or mask[new_height:, :].any())

    def _reallocate(self, new_width: int, new_height: int) -> None:
        old_width, old_height = self.width, self.height
        buffer, discarded, created = self._cells.reallocate(new_width, new_height)
        self._cells = buffer
        if discarded:
            self._presenter.cells_discarded(discarded)
        if created:
            self._presenter.cells_created(created)
        self._presenter.container_resized(*self.container_size())
        logger.info(
            "grid_resized from=%dx%d to=%dx%d created=%d discarded=%d",
            old_width,
            old_height,
            new_width,
            new_height,
            len(created),
            len(discarded),
            extra=self._log_fields(),
        )

    def add_column(self) -> bool:
        return self.resize(self.width + 1, self.height)

    def add_row(self) -> bool:
        return self.resize(self.width, self.height + 1)

    def add_columns(self, count: int) -> bool:
        return self.resize(self.width + count, self.height)

    def add_rows(self, count: int) -> bool:
        return self.resize(self.width, self.height + count)

    def remove_column(self) -> bool:
        """Drop the rightmost column if it is empty."""
        if self.width <= self._config.min_size:
            return False
        edge = self._cells.cells_in_rect(self.width - 1, 0, 1, self.height)
        if any(cell.is_occupied for cell in edge):
            logger.warning(
                "remove_column_rejected column=%d reason=occupied", self.width - 1, extra=self._log_fields()
            )
            return False
        return self.resize(self.width - 1, self.height)

    def remove_row(self) -> bool:
        """Drop the bottom row if it is empty."""
        if self.height <= self._config.min_size:
            return False
        edge = self._cells.cells_in_rect(0, self.height - 1, self.width, 1)
        if any(cell.is_occupied for cell in edge):
            logger.warning(
                "remove_row_rejected row=%d reason=occupied", self.height - 1, extra=self._log_fields()
            )
            return False
        return self.resize(self.width, self.height - 1)

    def set_grid_size(self, width: int, height: int) -> bool:
        return self.resize(width, height)


def initialize(config: GridConfig | None = None, presenter: CellPresenter | None = None) -> GridEngine:
    """Create a ready grid engine from configuration."""
    return GridEngine(config if config is not None else GridConfig(), presenter=presenter)
