"""Drag interaction state machine over the grid engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from gridfit.core.grid import GridEngine
from gridfit.core.models import UNPLACED, CellHit, GridItem

logger = logging.getLogger(__name__)


class DragPhase(StrEnum):
    """Drag interaction phase."""

    IDLE = "IDLE"
    DRAGGING = "DRAGGING"
    COMMITTED = "COMMITTED"
    REVERTED = "REVERTED"


class RevertPolicy(StrEnum):
    """What happens to a dragged item when the drop is rejected."""

    RESTORE = "RESTORE"
    DROP = "DROP"


@dataclass(frozen=True, slots=True)
class HeldItemState:
    """Item currently held by the pointer."""

    item: GridItem | None
    previous: tuple[int, int]
    grab_offset: tuple[int, int]


EMPTY_HOLD = HeldItemState(item=None, previous=UNPLACED, grab_offset=(0, 0))


@dataclass(frozen=True, slots=True)
class DragOutcome:
    """Result of a drag step."""

    handled: bool
    phase: DragPhase
    target: tuple[int, int] | None = None
    valid: bool = False
    restored: bool = False
    status: str | None = None


def grab_offset_from_cell(item: GridItem, x: int, y: int) -> tuple[int, int]:
    """Offset of the grabbed cell from the item's anchor, zero outside the footprint."""
    if not item.is_placed:
        return 0, 0
    dx = x - item.grid_x
    dy = y - item.grid_y
    if 0 <= dx < item.width and 0 <= dy < item.height:
        return dx, dy
    return 0, 0


def anchor_from_grab_offset(hit: CellHit, grab_offset: tuple[int, int]) -> tuple[int, int]:
    return hit.x - grab_offset[0], hit.y - grab_offset[1]


class DragController:
    """Idle -> Dragging -> {Committed, Reverted} driven by container-space points."""

    def __init__(self, engine: GridEngine, revert_policy: RevertPolicy = RevertPolicy.RESTORE) -> None:
        self._engine = engine
        self._revert_policy = revert_policy
        self._phase = DragPhase.IDLE
        self._held = EMPTY_HOLD

    @property
    def phase(self) -> DragPhase:
        return self._phase

    @property
    def held(self) -> HeldItemState:
        return self._held

    def begin(self, item: GridItem, px: float, py: float) -> DragOutcome:
        """Pick up an item, lifting it off the grid."""
        if self._phase is DragPhase.DRAGGING:
            return DragOutcome(handled=False, phase=self._phase)
        hit = self._engine.map_point_to_cell(px, py)
        self._held = HeldItemState(
            item=item,
            previous=item.anchor,
            grab_offset=grab_offset_from_cell(item, hit.x, hit.y),
        )
        self._engine.remove(item)
        self._phase = DragPhase.DRAGGING
        logger.debug("drag_begin item=%s previous=%s", item.item_id, self._held.previous)
        return DragOutcome(handled=True, phase=self._phase, status=f"Holding {item.item_id}.")

    def move(self, px: float, py: float) -> DragOutcome:
        """Preview a drop at the given point."""
        item = self._held.item
        if self._phase is not DragPhase.DRAGGING or item is None:
            return DragOutcome(handled=False, phase=self._phase)
        hit = self._engine.map_point_to_cell(px, py)
        if not hit.in_bounds:
            self._engine.clear_highlight()
            return DragOutcome(handled=True, phase=self._phase)
        target = anchor_from_grab_offset(hit, self._held.grab_offset)
        valid = self._engine.can_place(target[0], target[1], item.width, item.height, item)
        self._engine.highlight(target[0], target[1], item.width, item.height, valid)
        return DragOutcome(handled=True, phase=self._phase, target=target, valid=valid)

    def end(self, px: float, py: float) -> DragOutcome:
        """Drop the held item at the given point."""
        item = self._held.item
        if self._phase is not DragPhase.DRAGGING or item is None:
            return DragOutcome(handled=False, phase=self._phase)
        self._engine.clear_highlight()
        hit = self._engine.map_point_to_cell(px, py)
        if hit.in_bounds:
            target = anchor_from_grab_offset(hit, self._held.grab_offset)
            if self._engine.place(item, *target):
                self._phase = DragPhase.COMMITTED
                self._held = EMPTY_HOLD
                logger.debug("drag_committed item=%s anchor=%s", item.item_id, target)
                return DragOutcome(
                    handled=True,
                    phase=self._phase,
                    target=target,
                    valid=True,
                    status=f"Placed {item.item_id}.",
                )
        return self._revert("Invalid drop position.")

    def cancel(self) -> DragOutcome:
        """Abort the drag and apply the revert policy."""
        if self._phase is not DragPhase.DRAGGING:
            return DragOutcome(handled=False, phase=self._phase)
        self._engine.clear_highlight()
        return self._revert("Drag cancelled.")

    def reset(self) -> DragOutcome:
        """Return a finished interaction to idle."""
        if self._phase is DragPhase.DRAGGING:
            return DragOutcome(handled=False, phase=self._phase)
        self._phase = DragPhase.IDLE
        self._held = EMPTY_HOLD
        return DragOutcome(handled=True, phase=self._phase)

    def _revert(self, status: str) -> DragOutcome:
        item = self._held.item
        previous = self._held.previous
        restored = False
        if item is not None and self._revert_policy is RevertPolicy.RESTORE and previous != UNPLACED:
            restored = self._engine.place(item, *previous)
            if not restored:
                logger.warning("drag_restore_failed item=%s previous=%s", item.item_id, previous)
        self._phase = DragPhase.REVERTED
        self._held = EMPTY_HOLD
        return DragOutcome(
            handled=True,
            phase=self._phase,
            target=previous if restored else None,
            restored=restored,
            status=status,
        )
