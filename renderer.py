from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

import matplotlib
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from layout import TimelineLayout, build_timeline_layout
from timeline_models import Project, Settings

logger = logging.getLogger(__name__)

GRID_COLOR = "#808080"
GRID_ALPHA = 0.1
TEXT_COLOR = "#1A1A1A"
BAR_TEXT_COLOR = "#FFFFFF"
BAR_TEXT_PAD = 4.0


def _font_family_available(family: str) -> bool:
    family = (family or "").strip()
    if not family:
        return False
    # Matplotlib stores font names; check case-insensitively.
    fam_lower = family.lower()
    from matplotlib import font_manager as fm
    for f in fm.fontManager.ttflist:
        if f.name.lower() == fam_lower:
            return True
    return False


def resolve_font_family(preferred: str) -> str:
    """
    Returns a font family name that matplotlib can actually render.
    Priority:
      1) preferred, if available
      2) Arial, if available
      3) DejaVu Sans (matplotlib default)
    """
    preferred = (preferred or "").strip()
    if preferred and _font_family_available(preferred):
        return preferred
    if _font_family_available("Arial"):
        return "Arial"
    return "DejaVu Sans"


def _ellipsis(line: str, width: int) -> str:
    if width <= 1:
        return "…"
    line = line.rstrip()
    if len(line) <= width:
        return line
    return line[: width - 1].rstrip() + "…"


def fit_single_line(text: str, width_px: float, font_px: float) -> str:
    """
    Truncate ``text`` to one line that fits ``width_px``.
    0.55 is a rough average glyph width relative to the font size.
    """
    text = " ".join((text or "").split())
    if not text:
        return ""
    max_chars = int(width_px / (font_px * 0.55))
    if max_chars <= 0:
        return ""
    return _ellipsis(text, max_chars)


def _px_to_pt(px: float, dpi: int) -> float:
    return px * 72.0 / dpi


def render_layout(layout: TimelineLayout, settings: Settings) -> plt.Figure:
    """Draw a precomputed layout. Axes are in canvas units with y growing downwards."""
    font_family = resolve_font_family(settings.font_family)
    matplotlib.rcParams["font.family"] = font_family

    pad = settings.padding
    fig_w_px = layout.width + 2 * pad
    fig_h_px = layout.height

    fig = plt.figure(figsize=(fig_w_px / settings.dpi, fig_h_px / settings.dpi), dpi=settings.dpi)
    ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
    ax.set_xlim(-pad, layout.width + pad)
    ax.set_ylim(fig_h_px - pad, -pad)
    ax.axis("off")
    fig.patch.set_facecolor("white")

    font_pt = _px_to_pt(settings.caption_font_size, settings.dpi)
    body_top = settings.header_height
    body_bottom = fig_h_px - 2 * pad

    # Date markers
    for tick in layout.ticks:
        ax.text(
            tick.x,
            settings.header_height / 2.0,
            tick.label,
            ha="center",
            va="center",
            fontsize=font_pt,
            color=TEXT_COLOR,
            zorder=3,
        )

    # Background grid
    if layout.grid_xs:
        ax.vlines(
            list(layout.grid_xs),
            body_top,
            body_bottom,
            colors=GRID_COLOR,
            alpha=GRID_ALPHA,
            linewidth=_px_to_pt(1.0, settings.dpi),
            zorder=0,
        )

    # Project bars
    for bar in layout.bars:
        top = body_top + bar.y + settings.bar_top_offset
        ax.add_patch(
            Rectangle(
                (bar.left, top),
                bar.width,
                bar.height,
                facecolor=settings.bar_color,
                edgecolor="none",
                alpha=settings.bar_alpha,
                zorder=2,
            )
        )
        label = fit_single_line(bar.description, bar.width - 2 * BAR_TEXT_PAD, settings.caption_font_size)
        if label:
            ax.text(
                bar.center_x,
                top + bar.height / 2.0,
                label,
                ha="center",
                va="center",
                fontsize=font_pt,
                color=BAR_TEXT_COLOR,
                clip_on=True,
                zorder=3,
            )

    return fig


def render_timeline(
    projects: Sequence[Project],
    settings: Settings,
    *,
    now: Optional[datetime] = None,
) -> Tuple[plt.Figure, List[str]]:
    """
    Builds the timeline figure. Returns (fig, warnings).

    warnings: one message per project whose end date is before its start date.
    Those projects are still drawn, as a minimum-width mark.
    """
    layout = build_timeline_layout(projects, settings, now)

    warnings: List[str] = []
    by_id = {p.id: p for p in projects}
    for pid in layout.inverted:
        p = by_id[pid]
        msg = f"'{p.description}' ends before it starts ({p.end_date:%Y-%m-%d} < {p.start_date:%Y-%m-%d})."
        logger.warning(msg)
        warnings.append(msg)

    return render_layout(layout, settings), warnings
