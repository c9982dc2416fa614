"""
gameclock - a pausable, speed-scaled stopwatch for games and simulations.

Usage:
    python main.py demo [--fps 60] [--seconds 3] [--speed 1.0] [--source auto]
    python main.py sources

Sources:
    auto    - browser source on emscripten builds, system source otherwise
    system  - time.perf_counter / time.sleep
    pygame  - pygame ticks / pygame.time.delay
    browser - no blocking sleep (cannot run the demo)
    manual  - simulated time, demo runs instantly
"""
import sys

from gameclock.cli import main


if __name__ == "__main__":
    sys.exit(main())
