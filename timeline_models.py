from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Literal, Optional
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator

HEX_COLOR_RE = r"^#?[0-9A-Fa-f]{6}$"


class Settings(BaseModel):
    """Screen and timeline geometry. All lengths are in canvas units (pixels)."""

    width: float = Field(default=700.0, gt=0)
    padding: float = Field(default=16.0, ge=0)
    header_height: float = Field(default=20.0, ge=0)
    row_height: float = Field(default=40.0, gt=0)
    bar_height: float = Field(default=30.0, gt=0)
    bar_top_offset: float = Field(default=20.0, ge=0)
    min_bar_width: float = Field(default=2.0, ge=0)
    min_height: float = Field(default=200.0, ge=0)

    tick_count: int = Field(default=7, ge=0)
    grid_columns: int = Field(default=6, ge=0)
    whole_day_ticks: bool = Field(default=False)

    padding_days: int = Field(default=1, ge=0)
    empty_range_days: int = Field(default=14, ge=1)

    bar_color: str = Field(default="#007AFF")
    bar_alpha: float = Field(default=0.7, ge=0.0, le=1.0)
    font_family: str = Field(default="Helvetica")  # Falls back at render-time if not found.
    caption_font_size: float = Field(default=12.0, gt=0)
    dpi: int = Field(default=100, ge=50, le=600)

    arrangement: Literal["split", "stacked"] = Field(default="split")
    timezone: Optional[str] = Field(default=None)

    @field_validator("bar_color")
    @classmethod
    def _normalize_bar_color(cls, v: str) -> str:
        import re

        v = (v or "").strip()
        if not re.match(HEX_COLOR_RE, v):
            raise ValueError("bar_color must be a hex like #007AFF.")
        if not v.startswith("#"):
            v = "#" + v
        return v.upper()

    @field_validator("font_family")
    @classmethod
    def _font_not_empty(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            return "Helvetica"
        return v

    @field_validator("timezone")
    @classmethod
    def _tz_known(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            return None
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown timezone: {v!r}") from None
        return v

    def now(self) -> datetime:
        """
        Current wall-clock time, naive like every stored project date.
        Read in the configured zone when one is set, else local time.
        """
        if self.timezone:
            return datetime.now(tz=ZoneInfo(self.timezone)).replace(tzinfo=None)
        return datetime.now()


class Project(BaseModel):
    id: UUID = Field(default_factory=uuid4, frozen=True)
    description: str
    start_date: datetime
    end_date: datetime

    @field_validator("description")
    @classmethod
    def _desc_strip(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("start_date", "end_date")
    @classmethod
    def _naive_local(cls, v: datetime) -> datetime:
        # Aware and naive datetimes cannot be compared; keep local wall time only.
        if v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

    @property
    def is_inverted(self) -> bool:
        return self.end_date < self.start_date


def sample_projects(now: datetime) -> List[Project]:
    """The two projects the screen starts with, relative to ``now``."""
    return [
        Project(
            description="Sample Project 3",
            start_date=now,
            end_date=now + timedelta(days=7),
        ),
        Project(
            description="Sample Project 2",
            start_date=now + timedelta(days=3),
            end_date=now + timedelta(days=14),
        ),
    ]
