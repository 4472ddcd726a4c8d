"""Grid occupancy and placement engine."""

from gridfit.core.grid import GridEngine, initialize
from gridfit.core.models import UNPLACED, Cell, CellHit, GridItem
from gridfit.infra.config import GridConfig

__all__ = ["UNPLACED", "Cell", "CellHit", "GridConfig", "GridEngine", "GridItem", "initialize"]
