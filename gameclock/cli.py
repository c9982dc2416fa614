from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Callable, Optional

from . import __version__
from . import config
from .stopwatch import Stopwatch, StopwatchPausedError
from .timebase import SleepUnsupportedError, TimeSource, create_time_source


@dataclass
class DemoResult:
    frames: int
    logical_time: float
    raw_elapsed: float
    pauses: int = 0


def run_demo(
    *,
    source: TimeSource,
    fps: int = config.DEMO_FPS,
    seconds: float = config.DEMO_SECONDS,
    speed: float = 1.0,
    pause_at: Optional[float] = None,
    pause_for: float = 0.0,
    emit: Callable[[str], None] = print,
) -> DemoResult:
    """
    Fixed-rate frame loop paced by `Stopwatch.sleep_until()`.

    Frames are paced by a unit-speed `frames` stopwatch (frame `n` is due at `n / fps`)
    while `game` runs at `speed`. If `pause_at` is given (logical units) both are paused
    once for `pause_for` raw seconds; the frame schedule resumes where it stopped.
    """
    game = Stopwatch(speed=speed, time_source=source)
    frames = Stopwatch(time_source=source)
    wall = Stopwatch(time_source=source)
    total_frames = int(seconds * fps)
    pauses = 0
    next_report = 1.0

    for frame in range(1, total_frames + 1):
        frames.sleep_until(frame / fps)

        if pause_at is not None and pauses == 0 and game.get_time() >= pause_at:
            game.pause()
            frames.pause()
            pauses += 1
            emit(f"[gameclock] paused at t={game.get_time():.3f} for {pause_for:.2f}s")
            wall.sleep_until(wall.get_time() + pause_for)
            game.unpause()
            frames.unpause()
            emit(f"[gameclock] resumed at t={game.get_time():.3f}")

        if frames.get_time() >= next_report:
            emit(f"[gameclock] frame={frame} t={game.get_time():.3f} raw={wall.get_time():.3f}")
            next_report += 1.0

    return DemoResult(
        frames=total_frames,
        logical_time=game.get_time(),
        raw_elapsed=wall.get_time(),
        pauses=pauses,
    )


def cmd_demo(args: argparse.Namespace) -> int:
    try:
        source = create_time_source(args.source)
    except ValueError as e:
        print(f"[gameclock] ERROR: {e}", file=sys.stderr)
        return 2
    if not source.can_sleep:
        print(f"[gameclock] ERROR: time source '{source.name}' cannot pace a blocking loop", file=sys.stderr)
        return 2

    print(f"[gameclock] demo source={source.name} fps={args.fps} seconds={args.seconds} speed={args.speed}")
    try:
        result = run_demo(
            source=source,
            fps=int(args.fps),
            seconds=float(args.seconds),
            speed=float(args.speed),
            pause_at=args.pause_at,
            pause_for=float(args.pause_for),
        )
    except (StopwatchPausedError, SleepUnsupportedError) as e:
        print(f"[gameclock] ERROR: {e}", file=sys.stderr)
        return 2

    print(
        f"[gameclock] done frames={result.frames} t={result.logical_time:.3f} "
        f"raw={result.raw_elapsed:.3f} pauses={result.pauses}"
    )
    return 0


def cmd_sources(args: argparse.Namespace) -> int:
    for name in config.CLOCK_SOURCES:
        source = create_time_source(name)
        marker = "*" if name == config.CLOCK_SOURCE else " "
        sleep = "blocking sleep" if source.can_sleep else "no sleep"
        print(f"{marker} {name:<8} -> {source.name:<8} ({sleep})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="gameclock", description="Pausable, speed-scaled stopwatch")
    ap.add_argument("--version", action="store_true", help="print version and exit")
    sp = ap.add_subparsers(dest="cmd")

    p_demo = sp.add_parser("demo", help="run a fixed-rate frame loop paced by the stopwatch")
    p_demo.add_argument("--fps", type=int, default=config.DEMO_FPS, help=f"frames per raw second (default: {config.DEMO_FPS})")
    p_demo.add_argument("--seconds", type=float, default=config.DEMO_SECONDS, help="raw seconds of frames to run")
    p_demo.add_argument("--speed", type=float, default=config.DEFAULT_SPEED, help="logical units per raw second")
    p_demo.add_argument(
        "--source",
        default=config.CLOCK_SOURCE,
        help=f"time source ({', '.join(config.CLOCK_SOURCES)}; browser cannot block and is rejected)",
    )
    p_demo.add_argument("--pause-at", type=float, default=None, help="pause once at this logical time")
    p_demo.add_argument("--pause-for", type=float, default=0.5, help="raw seconds to stay paused")
    p_demo.set_defaults(func=cmd_demo)

    p_sources = sp.add_parser("sources", help="list available time sources")
    p_sources.set_defaults(func=cmd_sources)

    return ap


def main(argv: list[str] | None = None) -> int:
    ap = build_parser()
    ns = ap.parse_args(argv)
    if ns.version:
        print(__version__)
        return 0
    if not hasattr(ns, "func"):
        ap.print_help()
        return 2
    return int(ns.func(ns))
