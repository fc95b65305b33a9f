from __future__ import annotations

from datetime import datetime

import pytest


@pytest.fixture
def fixed_now() -> datetime:
    # Monday
    return datetime(2026, 2, 2, 9, 0, 0)
