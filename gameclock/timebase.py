"""
Time source adapters.

The stopwatch never reads a clock directly. It asks a `TimeSource` for "now" (float
seconds, arbitrary epoch) and, where the host can block a thread, for a sleep:

- `SystemTimeSource`: native processes (time.perf_counter / time.sleep)
- `PygameTimeSource`: pygame's millisecond ticks, for code that already runs a pygame loop
- `BrowserTimeSource`: single-threaded browser hosts (pygbag / pyodide); no blocking sleep
- `ManualTimeSource`: externally driven time for deterministic simulation and tests

This is the only module allowed to touch wall-clock APIs (see tools/clock_guard.py).
"""

from __future__ import annotations

import sys
import time
from abc import ABC, abstractmethod
from typing import Optional

import pygame

from gameclock import config


class SleepUnsupportedError(RuntimeError):
    """Raised when a blocking sleep is requested from a host that cannot block."""


class TimeSource(ABC):
    """Abstract base class for time sources."""

    @abstractmethod
    def now(self) -> float:
        """Return the current reading in seconds. Only differences are meaningful."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Source name for logging/debugging."""
        pass

    @property
    def can_sleep(self) -> bool:
        """Whether `sleep()` blocks the calling thread on this host."""
        return False

    def sleep(self, seconds: float) -> None:
        raise SleepUnsupportedError(f"time source '{self.name}' has no blocking sleep")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SystemTimeSource(TimeSource):
    """Monotonic performance counter of the running interpreter."""

    @property
    def name(self) -> str:
        return "system"

    @property
    def can_sleep(self) -> bool:
        return True

    def now(self) -> float:
        return time.perf_counter()

    def sleep(self, seconds: float) -> None:
        # May overshoot (OS scheduler granularity).
        if seconds > 0:
            time.sleep(seconds)


class PygameTimeSource(TimeSource):
    """
    pygame ticks converted to seconds.

    Millisecond resolution. pygame reports 0 until `pygame.init()` has been called.
    """

    @property
    def name(self) -> str:
        return "pygame"

    @property
    def can_sleep(self) -> bool:
        return True

    def now(self) -> float:
        return pygame.time.get_ticks() / 1000.0

    def sleep(self, seconds: float) -> None:
        ms = int(round(seconds * 1000.0))
        if ms > 0:
            pygame.time.delay(ms)


class BrowserTimeSource(TimeSource):
    """
    Time source for browser-hosted builds.

    The page's event loop must never be blocked, so there is no sleep here;
    pace frames with the host's frame callback instead.
    """

    @property
    def name(self) -> str:
        return "browser"

    def now(self) -> float:
        return time.perf_counter()


class ManualTimeSource(TimeSource):
    """
    Externally driven time.

    `sleep()` advances the reading instead of blocking, so code that paces itself with
    `Stopwatch.sleep_until()` runs instantly and deterministically.
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    @property
    def name(self) -> str:
        return "manual"

    @property
    def can_sleep(self) -> bool:
        return True

    def now(self) -> float:
        return self._now

    def set(self, seconds: float) -> None:
        self._now = float(seconds)

    def advance(self, seconds: float) -> None:
        self._now += float(seconds)

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            self._now += seconds

    def __repr__(self) -> str:
        return f"ManualTimeSource(now={self._now!r})"


def is_browser_host() -> bool:
    """True when running inside a browser-hosted interpreter (pygbag, pyodide)."""
    return sys.platform == "emscripten"


def create_time_source(name: str) -> TimeSource:
    """Create the time source registered under `name`."""
    key = str(name).strip().lower()
    if key == "auto":
        return BrowserTimeSource() if is_browser_host() else SystemTimeSource()
    elif key == "system":
        return SystemTimeSource()
    elif key == "pygame":
        return PygameTimeSource()
    elif key == "browser":
        return BrowserTimeSource()
    elif key == "manual":
        return ManualTimeSource()
    raise ValueError(f"Unknown time source: {name!r} (expected one of {', '.join(config.CLOCK_SOURCES)})")


_DEFAULT_SOURCE: Optional[TimeSource] = None


def default_time_source() -> TimeSource:
    """
    Return the process-wide default time source.

    Chosen once from `config.CLOCK_SOURCE` and reused so every stopwatch created without
    an explicit source measures against the same clock.
    """
    global _DEFAULT_SOURCE
    if _DEFAULT_SOURCE is None:
        _DEFAULT_SOURCE = create_time_source(config.CLOCK_SOURCE)
    return _DEFAULT_SOURCE


def set_default_time_source(source: Optional[TimeSource]) -> None:
    """
    Override the default time source.

    If set to None, the next `default_time_source()` call selects again from config.
    """
    global _DEFAULT_SOURCE
    _DEFAULT_SOURCE = source
