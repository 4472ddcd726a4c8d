from __future__ import annotations

import pytest

from gridfit.core.grid import GridEngine, initialize
from gridfit.infra.config import GridConfig
from tests.gridfit.unit.helpers import RecordingPresenter


@pytest.fixture
def config() -> GridConfig:
    return GridConfig(width=3, height=3, cell_size=100.0, spacing=5.0, min_size=1, max_width=10, max_height=10)


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def engine(config: GridConfig, presenter: RecordingPresenter) -> GridEngine:
    return initialize(config, presenter=presenter)


@pytest.fixture
def engine_factory(presenter: RecordingPresenter):
    def _make(width: int = 3, height: int = 3, **overrides: object) -> GridEngine:
        return initialize(GridConfig(width=width, height=height, **overrides), presenter=presenter)

    return _make
