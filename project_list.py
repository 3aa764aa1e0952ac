from __future__ import annotations

from datetime import datetime
from typing import Sequence

import pandas as pd

from timeline_models import Project

LIST_COLUMNS = ["Description", "Start", "End", "Dates"]


def format_list_date(d: datetime) -> str:
    """Long date style, e.g. 'December 10, 2024'."""
    return f"{d.strftime('%B')} {d.day}, {d.year}"


def format_date_span(p: Project) -> str:
    return f"{format_list_date(p.start_date)} - {format_list_date(p.end_date)}"


def project_list_frame(projects: Sequence[Project]) -> pd.DataFrame:
    """List-view rows in collection order."""
    rows = [
        {
            "Description": p.description,
            "Start": format_list_date(p.start_date),
            "End": format_list_date(p.end_date),
            "Dates": format_date_span(p),
        }
        for p in projects
    ]
    return pd.DataFrame(rows, columns=LIST_COLUMNS)
