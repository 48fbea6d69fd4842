import pytest
from pydantic import ValidationError

from skidodge.config.settings import GameSettings, Settings, get_settings
from skidodge.main import apply_args, parse_args


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.display.canvas_width == 700
    assert settings.game.total_cols == 10
    assert settings.game.friction == 0.9
    assert settings.game.collision_factor == 0.7
    assert settings.game.debug_grid is False


def test_environment_override(monkeypatch):
    monkeypatch.setenv("SKIDODGE_GAME__SPAWN_RATE", "0.2")
    monkeypatch.setenv("SKIDODGE_DEBUG", "true")
    settings = Settings(_env_file=None)
    assert settings.game.spawn_rate == 0.2
    assert settings.debug is True


@pytest.mark.parametrize("field,value", [
    ("spawn_rate", 1.5),
    ("spawn_rate", -0.1),
    ("total_cols", 0),
    ("collision_factor", 0),
])
def test_invalid_game_settings(field, value):
    with pytest.raises(ValidationError):
        GameSettings(**{field: value})


def test_command_line_overrides():
    settings = Settings(_env_file=None)
    args = parse_args(["--debug-grid", "--seed", "42", "--fps", "30"])
    merged = apply_args(settings, args)

    assert merged.game.debug_grid is True
    assert merged.game.seed == 42
    assert merged.display.fps == 30
    assert merged.debug is False


def test_command_line_overrides_leave_cached_settings_alone(monkeypatch):
    monkeypatch.delenv("SKIDODGE_GAME__SEED", raising=False)
    get_settings.cache_clear()
    try:
        cached = get_settings()
        merged = apply_args(cached, parse_args(["--debug", "--debug-grid", "--seed", "7"]))

        assert merged.debug is True
        assert merged.game.seed == 7
        assert get_settings() is cached
        assert cached.debug is False
        assert cached.game.debug_grid is False
        assert cached.game.seed is None
    finally:
        get_settings.cache_clear()
