from gridfit.core.layout import GridLayout
from gridfit.core.models import GridItem


def test_pitch_and_span() -> None:
    layout = GridLayout(cell_size=100.0, spacing=5.0)
    assert layout.pitch == 105.0
    assert layout.span(1) == 100.0
    assert layout.span(3) == 310.0
    assert layout.span(0) == 0.0


def test_container_and_footprint_size() -> None:
    layout = GridLayout(cell_size=100.0, spacing=5.0)
    assert layout.container_size(3, 2) == (310.0, 205.0)
    assert layout.footprint_size(GridItem(width=2, height=1)) == (205.0, 100.0)


def test_cell_origin_grows_downward() -> None:
    layout = GridLayout(cell_size=100.0, spacing=5.0)
    assert layout.cell_origin(0, 0) == (0.0, 0.0)
    assert layout.cell_origin(2, 1) == (210.0, -105.0)


def test_point_to_cell_floors_and_inverts_vertical_axis() -> None:
    layout = GridLayout(cell_size=100.0, spacing=5.0)
    assert layout.point_to_cell(0.0, 0.0) == (0, 0)
    assert layout.point_to_cell(104.9, -104.9) == (0, 0)
    assert layout.point_to_cell(105.0, -105.0) == (1, 1)
    assert layout.point_to_cell(-1.0, 1.0) == (-1, -1)
