from __future__ import annotations

from datetime import datetime
from io import BytesIO
from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt

from renderer import render_timeline
from timeline_models import Project, Settings


def _render_bytes(
    projects: Sequence[Project],
    settings: Settings,
    *,
    fmt: str,
    now: Optional[datetime] = None,
) -> Tuple[bytes, List[str]]:
    fig, warnings = render_timeline(projects, settings, now=now)
    bio = BytesIO()
    try:
        fig.savefig(bio, format=fmt, dpi=settings.dpi, facecolor="white")
    finally:
        # Important: close to avoid memory growth in Streamlit
        plt.close(fig)
    return bio.getvalue(), warnings


def preview_png(
    projects: Sequence[Project],
    settings: Settings,
    *,
    now: Optional[datetime] = None,
) -> Tuple[bytes, List[str]]:
    """Screen-resolution PNG plus the renderer's warnings."""
    return _render_bytes(projects, settings, fmt="png", now=now)


def export_png_bytes(
    projects: Sequence[Project],
    settings: Settings,
    *,
    dpi: int = 300,
    now: Optional[datetime] = None,
) -> bytes:
    # Rendering at the target DPI keeps fonts and line widths proportional.
    settings2 = settings.model_copy(update={"dpi": dpi})
    png, _ = _render_bytes(projects, settings2, fmt="png", now=now)
    return png


def export_pdf_bytes(
    projects: Sequence[Project],
    settings: Settings,
    *,
    now: Optional[datetime] = None,
) -> bytes:
    pdf, _ = _render_bytes(projects, settings, fmt="pdf", now=now)
    return pdf
