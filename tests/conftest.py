import sys
from datetime import datetime, timedelta
from pathlib import Path

# Force a headless backend for matplotlib before any pyplot imports.
import matplotlib

matplotlib.use("Agg")

import pytest

# Ensure project root is on sys.path for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def day0() -> datetime:
    return datetime(2024, 12, 10, 9, 30)


@pytest.fixture
def day(day0):
    def _day(n: float) -> datetime:
        return day0 + timedelta(days=n)

    return _day
