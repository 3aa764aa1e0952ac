from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from date_utils import DateRange, compute_range, format_tick_label, generate_ticks, x_position
from timeline_models import Project, Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BarLayout:
    project_id: UUID
    description: str
    index: int
    x_start: float
    x_end: float
    width: float
    y: float
    height: float

    @property
    def center_x(self) -> float:
        # Midpoint of the raw span; a floored bar is centred here too.
        return self.x_start + (self.x_end - self.x_start) / 2.0

    @property
    def left(self) -> float:
        return self.center_x - self.width / 2.0


@dataclass(frozen=True)
class TickMark:
    when: datetime
    x: float
    label: str


@dataclass(frozen=True)
class TimelineLayout:
    rng: DateRange
    width: float
    height: float
    ticks: Tuple[TickMark, ...]
    grid_xs: Tuple[float, ...]
    bars: Tuple[BarLayout, ...]
    inverted: Tuple[UUID, ...]


def layout_bars(
    projects: Sequence[Project],
    rng: DateRange,
    width: float,
    *,
    row_height: float = 40.0,
    bar_height: float = 30.0,
    min_width: float = 2.0,
) -> List[BarLayout]:
    """
    One bar per project, stacked one row per list position.

    Bars never get narrower than ``min_width`` so zero-length and inverted
    projects stay visible as a thin mark.
    """
    out: List[BarLayout] = []
    for i, p in enumerate(projects):
        x0 = x_position(p.start_date, rng, width)
        x1 = x_position(p.end_date, rng, width)
        out.append(
            BarLayout(
                project_id=p.id,
                description=p.description,
                index=i,
                x_start=x0,
                x_end=x1,
                width=max(x1 - x0, min_width),
                y=i * row_height,
                height=bar_height,
            )
        )
    return out


def grid_positions(width: float, columns: int) -> List[float]:
    """One guide line centred in each of ``columns`` equal columns."""
    if columns <= 0:
        return []
    col_w = width / columns
    return [(c + 0.5) * col_w for c in range(columns)]


def layout_ticks(rng: DateRange, width: float, count: int = 7, *, whole_days: bool = False) -> List[TickMark]:
    return [
        TickMark(when=t, x=x_position(t, rng, width), label=format_tick_label(t))
        for t in generate_ticks(rng, count, whole_days=whole_days)
    ]


def timeline_height(n_rows: int, settings: Settings) -> float:
    body = (
        settings.header_height
        + settings.bar_top_offset
        + max(n_rows, 1) * settings.row_height
        + 2 * settings.padding
    )
    return max(body, settings.min_height)


def build_timeline_layout(
    projects: Sequence[Project],
    settings: Settings,
    now: Optional[datetime] = None,
) -> TimelineLayout:
    """Everything the rendering surface needs for one pass, computed fresh."""
    if now is None:
        now = settings.now()

    rng = compute_range(
        projects,
        now,
        padding_days=settings.padding_days,
        empty_days=settings.empty_range_days,
    )
    bars = layout_bars(
        projects,
        rng,
        settings.width,
        row_height=settings.row_height,
        bar_height=settings.bar_height,
        min_width=settings.min_bar_width,
    )
    ticks = layout_ticks(rng, settings.width, settings.tick_count, whole_days=settings.whole_day_ticks)
    inverted = tuple(p.id for p in projects if p.is_inverted)

    logger.debug(
        "Timeline layout: %d bar(s), range %s .. %s",
        len(bars),
        rng.start.isoformat(),
        rng.end.isoformat(),
    )

    return TimelineLayout(
        rng=rng,
        width=settings.width,
        height=timeline_height(len(bars), settings),
        ticks=tuple(ticks),
        grid_xs=tuple(grid_positions(settings.width, settings.grid_columns)),
        bars=tuple(bars),
        inverted=inverted,
    )
