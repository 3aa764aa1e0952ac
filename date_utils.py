from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from timeline_models import Project

_SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def contains(self, d: datetime) -> bool:
        return self.start <= d <= self.end


def add_days(d: datetime, days: int) -> Optional[datetime]:
    """
    Shift ``d`` by whole days.

    Returns None when the result falls outside what datetime can represent,
    so callers choose their own fallback.
    """
    try:
        return d + timedelta(days=days)
    except OverflowError:
        return None


def compute_range(
    projects: Iterable[Project],
    now: Optional[datetime] = None,
    *,
    padding_days: int = 1,
    empty_days: int = 14,
) -> DateRange:
    """
    Visible date interval for a set of projects.

      - no projects: [now, now + empty_days]
      - otherwise:   [earliest date - padding_days, latest date + padding_days]

    Both start and end dates of every project count, so inverted projects
    still fall inside the interval.
    """
    dates: List[datetime] = []
    for p in projects:
        dates.append(p.start_date)
        dates.append(p.end_date)

    if not dates:
        if now is None:
            now = datetime.now()
        end = add_days(now, empty_days)
        return DateRange(now, end if end is not None else now)

    lo = min(dates)
    hi = max(dates)
    start = add_days(lo, -padding_days)
    end = add_days(hi, padding_days)
    return DateRange(start if start is not None else lo, end if end is not None else hi)


def x_position(d: datetime, rng: DateRange, width: float) -> float:
    """
    Linear map of ``d`` onto [0, width] across ``rng``.

    Not clamped: dates outside the range land outside [0, width].
    An empty range maps everything to 0.
    """
    total = rng.duration.total_seconds()
    if total <= 0:
        return 0.0
    return (d - rng.start).total_seconds() / total * width


def generate_ticks(rng: DateRange, count: int = 7, *, whole_days: bool = False) -> List[datetime]:
    """
    ``count`` evenly spaced dates from rng.start to rng.end.

    With ``whole_days`` the step is floored to whole days, which can leave
    the last tick short of rng.end (or collapse all ticks on short ranges).
    """
    if count <= 0:
        return []
    if count == 1:
        return [rng.start]

    total = rng.duration
    if total <= timedelta(0):
        return [rng.start] * count

    if whole_days:
        step_days = int(total.total_seconds() // (_SECONDS_PER_DAY * (count - 1)))
        out: List[datetime] = []
        for i in range(count):
            tick = add_days(rng.start, i * step_days)
            out.append(tick if tick is not None else rng.start)
        return out

    step = total / (count - 1)
    ticks = [rng.start + step * i for i in range(count - 1)]
    # Pin the last tick so rounding in the step never drifts it off rng.end.
    ticks.append(rng.end)
    return ticks


def format_tick_label(d: datetime) -> str:
    """Short axis label, e.g. 'Dec 10'."""
    return f"{d.strftime('%b')} {d.day}"
