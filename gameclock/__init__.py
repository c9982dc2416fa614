"""
gameclock

A pausable, speed-scaled stopwatch for games and simulations.

This package intentionally contains *small* primitives (one stopwatch + pluggable time
sources) so a game loop can measure logical time without sampling the wall clock itself.
"""

from __future__ import annotations

from gameclock.stopwatch import Stopwatch, StopwatchPausedError
from gameclock.timebase import (
    BrowserTimeSource,
    ManualTimeSource,
    PygameTimeSource,
    SleepUnsupportedError,
    SystemTimeSource,
    TimeSource,
    create_time_source,
    default_time_source,
    set_default_time_source,
)

__all__ = [
    "__version__",
    "Stopwatch",
    "StopwatchPausedError",
    "SleepUnsupportedError",
    "TimeSource",
    "SystemTimeSource",
    "PygameTimeSource",
    "BrowserTimeSource",
    "ManualTimeSource",
    "create_time_source",
    "default_time_source",
    "set_default_time_source",
]

__version__ = "0.1.0"
