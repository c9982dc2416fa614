import importlib.util
from pathlib import Path

import pytest

GUARD_PATH = Path(__file__).resolve().parents[1] / "tools" / "clock_guard.py"


@pytest.fixture(scope="module")
def guard():
    spec = importlib.util.spec_from_file_location("clock_guard", GUARD_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_flags_wall_clock_reads_and_sleeps(guard):
    src = "\n".join(
        [
            "import time, pygame, datetime",
            "a = time.time()",
            "b = time.perf_counter()",
            "c = pygame.time.get_ticks()",
            "time.sleep(1)",
            "pygame.time.wait(5)",
            "d = datetime.datetime.now()",
        ]
    )
    findings = guard.scan_source(src, filename="sim.py")
    kinds = [(f["line"], f["kind"]) for f in findings]
    assert sorted(kinds) == [
        (2, "wall_clock_read"),
        (3, "wall_clock_read"),
        (4, "wall_clock_read"),
        (5, "blocking_sleep"),
        (6, "blocking_sleep"),
        (7, "wall_clock_read"),
    ]


def test_ignores_stopwatch_usage(guard):
    src = "\n".join(
        [
            "from gameclock import Stopwatch",
            "sw = Stopwatch()",
            "sw.sleep_until(sw.get_time() + 1)",
            "time = sw.get_time()",
        ]
    )
    assert guard.scan_source(src, filename="game.py") == []


def test_reports_parse_errors(guard):
    findings = guard.scan_source("def broken(:\n", filename="bad.py")
    assert len(findings) == 1
    assert findings[0]["kind"] == "parse_error"


def test_scan_paths_skips_excluded_files(guard, tmp_path):
    (tmp_path / "adapters.py").write_text("import time\ntime.sleep(0)\n", encoding="utf-8")
    (tmp_path / "loop.py").write_text("import time\nt = time.monotonic()\n", encoding="utf-8")

    findings = guard.scan_paths([tmp_path], exclude_files=[tmp_path / "adapters.py"], root=tmp_path)
    assert [f["file"] for f in findings] == ["loop.py"]


def test_package_is_clean(guard):
    assert guard.main([]) == 0
