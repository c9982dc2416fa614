"""
Configuration settings for gameclock.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        print(f"[gameclock] WARN: ignoring {name}={raw!r} (not a number), using {default}")
        return default


# Time source settings
CLOCK_SOURCE = os.getenv("GAMECLOCK_SOURCE", "auto")  # auto, system, pygame, browser, manual
CLOCK_SOURCES = ("auto", "system", "pygame", "browser", "manual")

# Speed used by the CLI when --speed is not given (1.0 = seconds, 1/60 = minutes)
DEFAULT_SPEED = _env_float("GAMECLOCK_SPEED", 1.0)

# Debug logging (GAMECLOCK_DEBUG=1 to see stopwatch state transitions)
DEBUG_CLOCK = _env_flag("GAMECLOCK_DEBUG")

# Demo loop settings
DEMO_FPS = 60
DEMO_SECONDS = 3.0
