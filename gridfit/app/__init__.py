"""Interaction flows built on the grid engine."""

from gridfit.app.drag import DragController, DragOutcome, DragPhase, HeldItemState, RevertPolicy

__all__ = ["DragController", "DragOutcome", "DragPhase", "HeldItemState", "RevertPolicy"]
