from __future__ import annotations

import pytest

from gameclock import timebase
from gameclock.timebase import ManualTimeSource


@pytest.fixture
def clock() -> ManualTimeSource:
    """Manually driven time source starting at an arbitrary non-zero epoch."""
    return ManualTimeSource(start=1000.0)


@pytest.fixture(autouse=True)
def _reset_default_source():
    timebase.set_default_time_source(None)
    yield
    timebase.set_default_time_source(None)
