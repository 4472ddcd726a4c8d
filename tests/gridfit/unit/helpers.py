from __future__ import annotations

from collections.abc import Sequence

from gridfit.core.models import Cell


class RecordingPresenter:
    def __init__(self) -> None:
        self.highlighted: dict[tuple[int, int], bool] = {}
        self.calls: list[tuple[str, tuple]] = []
        self.live: set[tuple[int, int]] = set()
        self.container: tuple[float, float] | None = None

    def highlight_cell(self, cell: Cell, valid: bool) -> None:
        self.highlighted[(cell.x, cell.y)] = valid
        self.calls.append(("highlight_cell", (cell.x, cell.y, valid)))

    def clear_cell_highlight(self, cell: Cell) -> None:
        self.highlighted.pop((cell.x, cell.y), None)

    def cells_created(self, cells: Sequence[Cell]) -> None:
        self.live.update((cell.x, cell.y) for cell in cells)
        self.calls.append(("cells_created", (len(cells),)))

    def cells_discarded(self, cells: Sequence[Cell]) -> None:
        self.live.difference_update((cell.x, cell.y) for cell in cells)
        self.calls.append(("cells_discarded", (len(cells),)))

    def container_resized(self, width_px: float, height_px: float) -> None:
        self.container = (width_px, height_px)
