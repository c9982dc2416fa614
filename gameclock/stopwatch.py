"""
Pausable, speed-scaled stopwatch for game loops and simulations.

Logical time is always `(end_time - start_time) * speed`, where `end_time` is the frozen
pause instant while paused and a fresh time-source reading while running. Every mutation
below only moves `start_time` (and `paused_at`) so that formula keeps holding.
"""

from __future__ import annotations

import math
from typing import Optional

from gameclock import config
from gameclock.timebase import SleepUnsupportedError, TimeSource, default_time_source


class StopwatchPausedError(RuntimeError):
    """Raised by `Stopwatch.sleep_until()` on a paused stopwatch (caller misuse)."""


def _unscale(value: float, speed: float) -> float:
    """`value / speed` with IEEE-754 results (inf / nan) for a zero speed."""
    if speed == 0:
        if value == 0 or math.isnan(value):
            return math.nan
        return math.copysign(math.inf, value) * math.copysign(1.0, speed)
    return value / speed


def debug_log(msg: str) -> None:
    if not config.DEBUG_CLOCK:
        return
    print(f"[clock] {msg}")


class Stopwatch:
    """
    A stopwatch which tracks time in seconds.

    `speed` scales raw time into logical time: `Stopwatch(speed=1.0 / 60.0)` counts in
    minutes, `Stopwatch(speed=2.0)` runs twice as fast as the time source. Speed is not
    validated; zero or negative values give frozen or backwards-running time.
    """

    def __init__(self, speed: float = 1.0, time_source: Optional[TimeSource] = None):
        self._source = time_source if time_source is not None else default_time_source()
        self._speed = speed
        self.start_time: float = self._source.now()
        self.paused_at: Optional[float] = None

    @classmethod
    def with_speed(cls, speed: float, time_source: Optional[TimeSource] = None) -> "Stopwatch":
        """Create a stopwatch which advances `speed` units for every raw second."""
        return cls(speed=speed, time_source=time_source)

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def time_source(self) -> TimeSource:
        return self._source

    def is_paused(self) -> bool:
        return self.paused_at is not None

    def pause(self) -> None:
        """Pause the stopwatch. Does nothing if it is already paused."""
        if self.is_paused():
            return
        self.paused_at = self._source.now()
        debug_log(f"pause at t={self.get_time():.4f}")

    def unpause(self) -> None:
        """Resume the stopwatch. Does nothing if it is already running."""
        if not self.is_paused():
            return
        # Re-anchor on a fresh reading so the logical time frozen by pause() carries over.
        elapsed = self.get_time()
        self.start_time = self._source.now() - _unscale(elapsed, self._speed)
        self.paused_at = None
        debug_log(f"unpause at t={elapsed:.4f}")

    def toggle_pause(self) -> None:
        if self.is_paused():
            self.unpause()
        else:
            self.pause()

    def get_time(self) -> float:
        """Return the current logical time."""
        return (self._end_time() - self.start_time) * self._speed

    def set_time(self, cur_time: float) -> None:
        """
        Set the current logical time.

        While paused the pause instant stays the end time, so the stopwatch remains paused
        at exactly `cur_time`.
        """
        self.start_time = self._end_time() - _unscale(cur_time, self._speed)
        debug_log(f"set t={cur_time:.4f} paused={self.is_paused()}")

    def reset(self) -> None:
        """Reset the stopwatch to zero."""
        self.set_time(0.0)

    def add_time(self, time_diff: float) -> None:
        """Advance the stopwatch by `time_diff` (negative values rewind it)."""
        self.start_time -= _unscale(time_diff, self._speed)
        debug_log(f"add {time_diff:+.4f} -> t={self.get_time():.4f}")

    def sleep_until(self, time: float) -> None:
        """
        Block until this stopwatch reaches `time`.

        Sleeps `time / speed - get_time()` raw seconds. Only `time` is unscaled, so with
        `speed != 1` the sleep does not land exactly on `time`; at the default speed it does.
        May sleep slightly longer than requested (OS sleep semantics), so most games should
        rely on vsync or a frame limiter rather than this for a steady frame rate. Returns
        immediately if the interval is not positive.

        On hosts that cannot block (browser builds) this method stands in for one that
        does not exist: it always raises `SleepUnsupportedError` and never falls back to a
        non-blocking wait.

        Raises:
            StopwatchPausedError: the stopwatch is paused and would never reach `time`.
            SleepUnsupportedError: the time source has no blocking sleep.
        """
        if self.is_paused():
            raise StopwatchPausedError("sleep_until() called on a paused stopwatch")
        if not self._source.can_sleep:
            raise SleepUnsupportedError(f"time source '{self._source.name}' has no blocking sleep")
        time_diff = _unscale(time, self._speed) - self.get_time()
        if time_diff > 0:
            debug_log(f"sleep {time_diff:.4f}s until t={time:.4f}")
            self._source.sleep(time_diff)

    def copy(self) -> "Stopwatch":
        """Return an independent stopwatch with the same state and time source."""
        other = type(self).__new__(type(self))
        other._source = self._source
        other._speed = self._speed
        other.start_time = self.start_time
        other.paused_at = self.paused_at
        return other

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> "Stopwatch":
        # The time source is an external clock, never duplicated.
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Stopwatch):
            return NotImplemented
        return (
            self.start_time == other.start_time
            and self.paused_at == other.paused_at
            and self._speed == other._speed
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        state = "paused" if self.is_paused() else "running"
        return f"Stopwatch(t={self.get_time():.4f}, speed={self._speed!r}, {state}, source={self._source.name})"

    def _end_time(self) -> float:
        if self.paused_at is None:
            return self._source.now()
        return self.paused_at
