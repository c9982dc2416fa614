import pytest

from gameclock import __version__
from gameclock.cli import main, run_demo
from gameclock.timebase import ManualTimeSource


def test_run_demo_paces_frames_on_manual_time():
    source = ManualTimeSource()
    lines = []
    result = run_demo(source=source, fps=30, seconds=2.0, emit=lines.append)

    assert result.frames == 60
    assert result.pauses == 0
    assert result.logical_time == pytest.approx(2.0)
    assert result.raw_elapsed == pytest.approx(2.0)
    assert source.now() == pytest.approx(2.0)
    assert any(line.startswith("[gameclock] frame=") for line in lines)


def test_run_demo_scaled_speed():
    source = ManualTimeSource()
    result = run_demo(source=source, fps=10, seconds=3.0, speed=0.5, emit=lambda _: None)

    assert result.logical_time == pytest.approx(1.5)
    assert result.raw_elapsed == pytest.approx(3.0)


def test_run_demo_pause_excludes_paused_raw_time():
    source = ManualTimeSource()
    lines = []
    result = run_demo(
        source=source,
        fps=10,
        seconds=2.0,
        pause_at=0.5,
        pause_for=4.0,
        emit=lines.append,
    )

    assert result.pauses == 1
    assert result.logical_time == pytest.approx(2.0)
    assert result.raw_elapsed == pytest.approx(6.0)
    assert any("paused at" in line for line in lines)
    assert any("resumed at" in line for line in lines)


def test_main_demo_with_manual_source(capsys):
    code = main(["demo", "--source", "manual", "--fps", "20", "--seconds", "1"])
    out = capsys.readouterr().out
    assert code == 0
    assert "source=manual" in out
    assert "done frames=20" in out


def test_main_demo_rejects_unknown_source(capsys):
    code = main(["demo", "--source", "sundial"])
    assert code == 2
    assert "ERROR" in capsys.readouterr().err


def test_main_demo_rejects_non_blocking_source(capsys):
    code = main(["demo", "--source", "browser"])
    assert code == 2
    assert "cannot pace" in capsys.readouterr().err


def test_main_sources_lists_adapters(capsys):
    assert main(["sources"]) == 0
    out = capsys.readouterr().out
    for name in ("system", "pygame", "browser", "manual"):
        assert name in out
    assert "no sleep" in out


def test_main_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == __version__


def test_main_without_command_prints_help(capsys):
    assert main([]) == 2
    assert "usage" in capsys.readouterr().out.lower()


def test_demo_help_lists_every_source(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["demo", "--help"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    for name in ("auto", "system", "pygame", "browser", "manual"):
        assert name in out
