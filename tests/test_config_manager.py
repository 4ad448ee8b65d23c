"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from photostash.config import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    ConfigManager,
    PhotostashConfig,
    assign_dotted,
    env_layer,
    resolve_settings,
)


def _fresh_manager(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, env: dict[str, str] | None = None
) -> ConfigManager:
    monkeypatch.setenv("HOME", str(tmp_path))
    return ConfigManager(env=env or {})


def test_ensure_exists_creates_default_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)

    path = manager.ensure_exists()

    assert path == tmp_path / ".photostash" / "config.yaml"
    assert manager.config_path == DEFAULT_CONFIG_PATH.expanduser()
    text = path.read_text(encoding="utf-8")
    assert "Photostash configuration file" in text
    assert "Last updated:" in text

    config = manager.load(include_env=False)
    assert config == PhotostashConfig()
    assert config.validation.max_file_size_bytes == 10 * 1024 * 1024
    assert config.storage.key == "photoStorage"


def test_environment_overrides_the_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env = {
        "PHOTOSTASH__STORAGE__MAX_BYTES": "2000",
        "PHOTOSTASH__LOGGING__LEVEL": "ERROR",
        "UNRELATED": "ignored",
    }
    manager = _fresh_manager(tmp_path, monkeypatch, env)
    manager.update("storage.key", "fromFile")
    manager.update("storage.max_bytes", 1000)

    config = manager.load()
    file_only = manager.load(include_env=False)

    assert config.storage.key == "fromFile"
    assert config.storage.max_bytes == 2000
    assert config.logging.level == "ERROR"
    assert file_only.storage.max_bytes == 1000
    assert file_only.logging.level == "WARNING"


def test_env_layer_parses_values_as_yaml() -> None:
    layer = env_layer(
        {
            "PHOTOSTASH__VALIDATION__ALLOWED_TYPES": "[image/png, image/gif]",
            "PHOTOSTASH__CLI__QUIET_DEFAULT": "true",
            "PHOTOSTASH__STORAGE__KEY": "gallery: [",
            "PHOTOSTASH__": "empty",
        }
    )

    assert layer == {
        "validation": {"allowed_types": ["image/png", "image/gif"]},
        "cli": {"quiet_default": True},
        "storage": {"key": "gallery: ["},
    }


def test_update_rejects_invalid_values_without_writing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    manager.ensure_exists()
    before = manager.read_text()

    with pytest.raises(ConfigError):
        manager.update("logging.level", "LOUD")
    with pytest.raises(ConfigError):
        manager.update("logging.level.name", "DEBUG")

    assert manager.read_text() == before


def test_assign_dotted_creates_sections() -> None:
    data: dict = {"storage": {"key": "a"}}

    assign_dotted(data, "storage.max_bytes", 5)
    assign_dotted(data, " cli . quiet_default ", True)

    assert data == {"storage": {"key": "a", "max_bytes": 5}, "cli": {"quiet_default": True}}
    with pytest.raises(ConfigError):
        assign_dotted(data, " . ", 1)


def test_invalid_yaml_raises_config_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    manager.ensure_exists()

    manager.config_path.write_text("- not-a-mapping", encoding="utf-8")

    with pytest.raises(ConfigError):
        manager.load()


@pytest.mark.parametrize(
    "overrides",
    [
        {"validation": {"max_file_size_mb": "not-an-int"}},
        {"logging": {"level": "LOUD"}},
        {"storage": {"unknown": True}},
    ],
)
def test_resolve_settings_invalid_value_raises(overrides: dict) -> None:
    with pytest.raises(ConfigError):
        resolve_settings(overrides)


def test_resolve_settings_later_layers_win() -> None:
    config = resolve_settings(
        {"storage": {"key": "file", "max_bytes": 10}},
        None,
        {"storage": {"key": "env"}},
    )

    assert config.storage.key == "env"
    assert config.storage.max_bytes == 10
