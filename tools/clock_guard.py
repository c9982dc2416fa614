"""
Clock guard (static check).

Purpose:
- Keep every wall-clock read and blocking sleep behind gameclock/timebase.py so the
  stopwatch stays driven by an injectable time source (manual time in tests, pygame ticks
  in a game loop, no sleep on browser hosts).

What we flag (outside the adapter module):
- Clock reads: time.time(), time.monotonic(), time.perf_counter() (+ _ns variants),
  pygame.time.get_ticks(), datetime.now()/utcnow()
- Blocking sleeps: time.sleep(), pygame.time.delay(), pygame.time.wait()

We intentionally DO NOT scan:
- tests/** (tests may sleep for real to smoke-test the system source)
- gameclock/timebase.py (this contains the adapters)
"""

from __future__ import annotations

import argparse
import ast
import json
import sys
from pathlib import Path
from typing import Iterable


PROJECT_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_SCAN_DIRS = [
    PROJECT_ROOT / "gameclock",
]

DEFAULT_EXCLUDE_FILES = [
    PROJECT_ROOT / "gameclock" / "timebase.py",
]

_TIME_READS = {
    "time",
    "time_ns",
    "monotonic",
    "monotonic_ns",
    "perf_counter",
    "perf_counter_ns",
}

_PYGAME_TIME_READS = {"get_ticks"}
_PYGAME_TIME_SLEEPS = {"delay", "wait"}

_DATETIME_READS = {"now", "utcnow"}


def _attr_chain(node: ast.AST) -> list[str] | None:
    """Dotted name of a call target, e.g. ["pygame", "time", "get_ticks"]."""
    if isinstance(node, ast.Name):
        return [node.id]
    if isinstance(node, ast.Attribute):
        base = _attr_chain(node.value)
        if base is None:
            return None
        return [*base, node.attr]
    return None


def _relative(path: Path, root: Path) -> str:
    try:
        return str(path.resolve().relative_to(root.resolve()))
    except ValueError:
        return str(path)


def classify_call(chain: list[str]) -> tuple[str, str] | None:
    """Return (kind, detail) for a forbidden call chain, else None."""
    if len(chain) == 2 and chain[0] == "time":
        if chain[1] in _TIME_READS:
            return "wall_clock_read", f"time.{chain[1]}() outside the time-source adapters; inject a TimeSource."
        if chain[1] == "sleep":
            return "blocking_sleep", "time.sleep() outside the time-source adapters; use Stopwatch.sleep_until()."
    if chain[:2] == ["pygame", "time"] and len(chain) == 3:
        if chain[2] in _PYGAME_TIME_READS:
            return "wall_clock_read", "pygame.time.get_ticks() outside the time-source adapters; use PygameTimeSource."
        if chain[2] in _PYGAME_TIME_SLEEPS:
            return "blocking_sleep", f"pygame.time.{chain[2]}() outside the time-source adapters; use Stopwatch.sleep_until()."
    if chain[-1] in _DATETIME_READS and "datetime" in chain:
        return "wall_clock_read", "datetime.now()/utcnow() used for timing; use a Stopwatch."
    return None


def scan_source(src: str, *, filename: str) -> list[dict]:
    try:
        tree = ast.parse(src, filename=filename)
    except SyntaxError as e:
        return [
            {
                "kind": "parse_error",
                "file": filename,
                "line": int(e.lineno or 0),
                "col": int(e.offset or 0),
                "detail": f"SyntaxError: {e.msg}",
            }
        ]

    findings: list[dict] = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue
        chain = _attr_chain(node.func)
        if not chain:
            continue
        hit = classify_call(chain)
        if hit is None:
            continue
        kind, detail = hit
        findings.append(
            {
                "kind": kind,
                "file": filename,
                "line": node.lineno,
                "col": node.col_offset,
                "detail": detail,
            }
        )
    return findings


def _iter_py_files(roots: Iterable[Path], *, exclude_files: list[Path]) -> list[Path]:
    excluded = {p.resolve() for p in exclude_files}
    out: list[Path] = []
    for root in roots:
        if not root.exists():
            continue
        candidates = [root] if root.is_file() else root.rglob("*.py")
        for p in candidates:
            if p.suffix.lower() == ".py" and p.resolve() not in excluded:
                out.append(p)
    return sorted(set(out))


def scan_paths(
    roots: Iterable[Path],
    *,
    exclude_files: list[Path] | None = None,
    root: Path = PROJECT_ROOT,
) -> list[dict]:
    findings: list[dict] = []
    files = _iter_py_files(roots, exclude_files=list(exclude_files or []))
    for file_path in files:
        src = file_path.read_text(encoding="utf-8", errors="replace")
        findings.extend(scan_source(src, filename=_relative(file_path, root)))
    return findings


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Flag wall-clock access outside gameclock/timebase.py")
    ap.add_argument("paths", nargs="*", help="files/dirs to scan (default: gameclock/)")
    ap.add_argument("--json", action="store_true", help="print findings as json")
    ns = ap.parse_args(argv)

    roots = [Path(p) for p in ns.paths] if ns.paths else DEFAULT_SCAN_DIRS
    findings = scan_paths(roots, exclude_files=DEFAULT_EXCLUDE_FILES)

    if ns.json:
        print(json.dumps(findings, indent=2))
    else:
        for f in findings:
            print(f"{f['file']}:{f['line']}:{f['col']}: {f['kind']}: {f['detail']}")
        print(f"[clock_guard] {len(findings)} finding(s)")
    return 1 if findings else 0


if __name__ == "__main__":
    sys.exit(main())
