"""Rendering collaborator contract for grid cells."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from gridfit.core.models import Cell


class CellPresenter(Protocol):
    """Presentation hooks the engine drives; state is never read back."""

    def highlight_cell(self, cell: Cell, valid: bool) -> None:
        """Show placement feedback on a cell."""

    def clear_cell_highlight(self, cell: Cell) -> None:
        """Restore the cell's normal presentation."""

    def cells_created(self, cells: Sequence[Cell]) -> None:
        """Create visuals for newly allocated cells."""

    def cells_discarded(self, cells: Sequence[Cell]) -> None:
        """Destroy visuals for cells that left the grid."""

    def container_resized(self, width_px: float, height_px: float) -> None:
        """Resize the grid container."""


class NullCellPresenter:
    """Presenter that ignores every call."""

    def highlight_cell(self, cell: Cell, valid: bool) -> None:
        return None

    def clear_cell_highlight(self, cell: Cell) -> None:
        return None

    def cells_created(self, cells: Sequence[Cell]) -> None:
        return None

    def cells_discarded(self, cells: Sequence[Cell]) -> None:
        return None

    def container_resized(self, width_px: float, height_px: float) -> None:
        return None
