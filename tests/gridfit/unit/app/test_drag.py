from gridfit.app.drag import (
    DragController,
    DragPhase,
    RevertPolicy,
    anchor_from_grab_offset,
    grab_offset_from_cell,
)
from gridfit.core.grid import GridEngine
from gridfit.core.models import UNPLACED, CellHit, GridItem


def _point(x: int, y: int) -> tuple[float, float]:
    """Container-space point at the middle of a 100px cell with 5px spacing."""
    return x * 105.0 + 50.0, -(y * 105.0 + 50.0)


def test_grab_offset_helpers() -> None:
    item = GridItem(width=2, height=2)
    item.set_grid_position(1, 1)
    assert grab_offset_from_cell(item, 2, 2) == (1, 1)
    assert grab_offset_from_cell(item, 0, 0) == (0, 0)
    assert anchor_from_grab_offset(CellHit(3, 2, True), (1, 1)) == (2, 1)


def test_drag_commits_to_new_position(engine: GridEngine) -> None:
    item = GridItem(width=2, height=1, item_id="bow")
    engine.place(item, 0, 0)
    drag = DragController(engine)

    began = drag.begin(item, *_point(1, 0))
    assert began.handled
    assert drag.phase is DragPhase.DRAGGING
    assert drag.held.grab_offset == (1, 0)
    assert not item.is_placed

    preview = drag.move(*_point(2, 2))
    assert preview.target == (1, 2)
    assert preview.valid

    done = drag.end(*_point(2, 2))
    assert done.phase is DragPhase.COMMITTED
    assert item.anchor == (1, 2)
    assert engine.item_at(2, 2) is item
    assert engine.item_at(0, 0) is None


def test_move_highlights_and_clears_outside(engine: GridEngine, presenter) -> None:
    blocker = GridItem()
    item = GridItem()
    engine.place(blocker, 1, 1)
    drag = DragController(engine)
    drag.begin(item, *_point(0, 0))

    blocked = drag.move(*_point(1, 1))
    assert not blocked.valid
    assert presenter.highlighted == {(1, 1): False}

    outside = drag.move(-20.0, 20.0)
    assert outside.handled
    assert outside.target is None
    assert presenter.highlighted == {}


def test_rejected_drop_restores_previous_anchor(engine: GridEngine, presenter) -> None:
    blocker = GridItem()
    item = GridItem()
    engine.place(blocker, 2, 2)
    engine.place(item, 0, 0)
    drag = DragController(engine, revert_policy=RevertPolicy.RESTORE)
    drag.begin(item, *_point(0, 0))
    drag.move(*_point(2, 2))

    outcome = drag.end(*_point(2, 2))
    assert outcome.phase is DragPhase.REVERTED
    assert outcome.restored
    assert outcome.target == (0, 0)
    assert item.anchor == (0, 0)
    assert presenter.highlighted == {}


def test_restore_fails_when_previous_cell_was_taken(engine: GridEngine) -> None:
    item = GridItem()
    engine.place(item, 0, 0)
    drag = DragController(engine)
    drag.begin(item, *_point(0, 0))
    intruder = GridItem()
    engine.place(intruder, 0, 0)

    outcome = drag.end(-500.0, 500.0)
    assert outcome.phase is DragPhase.REVERTED
    assert not outcome.restored
    assert item.anchor == UNPLACED


def test_drop_policy_leaves_item_unplaced(engine: GridEngine) -> None:
    item = GridItem()
    engine.place(item, 1, 0)
    drag = DragController(engine, revert_policy=RevertPolicy.DROP)
    drag.begin(item, *_point(1, 0))
    outcome = drag.cancel()
    assert outcome.phase is DragPhase.REVERTED
    assert not outcome.restored
    assert not item.is_placed


def test_wrong_phase_calls_are_unhandled(engine: GridEngine) -> None:
    item = GridItem()
    drag = DragController(engine)
    assert not drag.move(0.0, 0.0).handled
    assert not drag.end(0.0, 0.0).handled
    assert not drag.cancel().handled

    drag.begin(item, *_point(0, 0))
    assert not drag.begin(GridItem(), 0.0, 0.0).handled
    assert not drag.reset().handled

    drag.end(*_point(0, 0))
    assert drag.phase is DragPhase.COMMITTED
    assert drag.reset().phase is DragPhase.IDLE
    assert drag.held.item is None
