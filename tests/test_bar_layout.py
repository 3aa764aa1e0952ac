from datetime import timedelta

import pytest

from date_utils import DateRange, compute_range
from layout import build_timeline_layout, grid_positions, layout_bars, timeline_height
from timeline_models import Project, Settings


def test_bars_follow_list_order_and_row_height(day):
    projects = [
        Project(description="A", start_date=day(0), end_date=day(7)),
        Project(description="B", start_date=day(3), end_date=day(14)),
    ]
    rng = compute_range(projects)
    bars = layout_bars(projects, rng, 700.0)

    assert [b.description for b in bars] == ["A", "B"]
    assert [b.y for b in bars] == [0.0, 40.0]
    assert all(b.height == 30.0 for b in bars)
    assert bars[0].x_start == pytest.approx(43.75)
    assert bars[0].width == pytest.approx(700.0 * 7 / 16)
    assert bars[1].project_id == projects[1].id


def test_empty_collection_gives_no_bars(day0):
    rng = compute_range([], now=day0)
    assert layout_bars([], rng, 700.0) == []


def test_zero_length_project_floors_to_min_width(day):
    p = Project(description="Point", start_date=day(1), end_date=day(1))
    bar = layout_bars([p], compute_range([p]), 700.0)[0]
    assert bar.width == 2.0
    assert bar.center_x == pytest.approx(350.0)
    assert bar.left == pytest.approx(349.0)


def test_inverted_project_floors_to_min_width(day):
    p = Project(description="Backwards", start_date=day(4), end_date=day(2))
    bar = layout_bars([p], DateRange(day(0), day(8)), 800.0)[0]
    assert bar.x_end < bar.x_start
    assert bar.width == 2.0
    # Centred on the raw midpoint of the span.
    assert bar.center_x == pytest.approx(300.0)


def test_custom_row_geometry(day):
    projects = [Project(description=str(i), start_date=day(i), end_date=day(i + 1)) for i in range(3)]
    bars = layout_bars(projects, compute_range(projects), 300.0, row_height=25.0, bar_height=20.0, min_width=5.0)
    assert [b.y for b in bars] == [0.0, 25.0, 50.0]
    assert all(b.height == 20.0 for b in bars)


def test_grid_lines_are_centred_in_columns():
    assert grid_positions(600.0, 6) == [50.0, 150.0, 250.0, 350.0, 450.0, 550.0]
    assert grid_positions(600.0, 0) == []


def test_height_has_a_floor():
    s = Settings()
    assert timeline_height(0, s) == 200.0
    assert timeline_height(20, s) == 20.0 + 20.0 + 20 * 40.0 + 2 * 16.0


def test_full_layout(day):
    projects = [
        Project(description="A", start_date=day(0), end_date=day(7)),
        Project(description="B", start_date=day(9), end_date=day(3)),
    ]
    layout = build_timeline_layout(projects, Settings(), now=day(0))

    assert layout.rng == DateRange(day(-1), day(10))
    assert len(layout.ticks) == 7
    assert layout.ticks[0].x == 0.0
    assert layout.ticks[-1].x == pytest.approx(700.0)
    assert layout.ticks[0].label == "Dec 9"
    assert len(layout.grid_xs) == 6
    assert len(layout.bars) == 2
    assert layout.inverted == (projects[1].id,)


def test_full_layout_empty_uses_now(day0):
    layout = build_timeline_layout([], Settings(), now=day0)
    assert layout.bars == ()
    assert layout.rng.start == day0
    assert layout.rng.end - layout.rng.start == timedelta(days=14)
