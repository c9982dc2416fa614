from gameclock import config


def test_env_float_parses_numbers(monkeypatch):
    monkeypatch.setenv("GAMECLOCK_SPEED", "0.5")
    assert config._env_float("GAMECLOCK_SPEED", 1.0) == 0.5


def test_env_float_falls_back_on_garbage(monkeypatch, capsys):
    monkeypatch.setenv("GAMECLOCK_SPEED", "fast")
    assert config._env_float("GAMECLOCK_SPEED", 1.0) == 1.0
    assert "WARN" in capsys.readouterr().out


def test_env_float_uses_default_when_unset(monkeypatch):
    monkeypatch.delenv("GAMECLOCK_SPEED", raising=False)
    assert config._env_float("GAMECLOCK_SPEED", 1.0) == 1.0


def test_env_flag(monkeypatch):
    monkeypatch.setenv("GAMECLOCK_DEBUG", "yes")
    assert config._env_flag("GAMECLOCK_DEBUG") is True
    monkeypatch.setenv("GAMECLOCK_DEBUG", "0")
    assert config._env_flag("GAMECLOCK_DEBUG") is False
