"""Configuration management for Photostash."""

from __future__ import annotations

import os
import textwrap
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError
from .models import PhotostashConfig
from .resolver import ENV_PREFIX, assign_dotted, env_layer, resolve_settings

DEFAULT_CONFIG_PATH = Path("~/.photostash/config.yaml")
_CONFIG_HEADER = textwrap.dedent(
    """\
    # Photostash configuration file
    # Created on first run; change values with `photostash config set KEY --value VALUE`.
    """
)


class ConfigManager:
    """Own the YAML settings file and combine it with environment overrides."""

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            config_path: Settings file location; defaults to ``~/.photostash/config.yaml``.
            env: Environment mapping consulted for ``PHOTOSTASH__`` overrides.
        """
        self._config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._env = env if env is not None else os.environ

    @property
    def config_path(self) -> Path:
        """Return the resolved configuration path."""
        return self._config_path

    def load(self, *, include_env: bool = True) -> PhotostashConfig:
        """Return the effective settings, creating the file on first use.

        Args:
            include_env: Whether ``PHOTOSTASH__`` variables override the file.

        Returns:
            PhotostashConfig: Validated settings.

        Raises:
            ConfigError: If the file or an environment override is invalid.
        """
        self.ensure_exists()
        env_values = env_layer(self._env) if include_env else None
        return resolve_settings(self.read_values(), env_values)

    def update(self, key: str, value: Any) -> PhotostashConfig:
        """Write ``value`` at dotted ``key`` in the settings file.

        The file is only rewritten when the result still validates.

        Args:
            key: Dotted path such as ``storage.max_bytes``.
            value: Parsed value to store.

        Returns:
            PhotostashConfig: Settings described by the updated file alone.

        Raises:
            ConfigError: If the key is malformed or the new value is invalid.
        """
        self.ensure_exists()
        values = self.read_values()
        assign_dotted(values, key, value)
        updated = resolve_settings(values)
        self._write_file(values)
        return updated

    def ensure_exists(self) -> Path:
        """Create a settings file holding the defaults if none exists."""
        if not self._config_path.exists():
            self._write_file(PhotostashConfig().model_dump(mode="python"))
        return self._config_path

    def read_values(self) -> dict[str, Any]:
        """Return the mapping stored in the settings file.

        Raises:
            ConfigError: If the file is not YAML or not a mapping.
        """
        if not self._config_path.exists():
            return {}
        try:
            raw = yaml.safe_load(self._config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse configuration file: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level.")
        return raw

    def read_text(self) -> str:
        """Return the settings file contents, or an empty string."""
        if not self._config_path.exists():
            return ""
        return self._config_path.read_text(encoding="utf-8")

    def _write_file(self, values: Mapping[str, Any]) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        body = yaml.safe_dump(dict(values), sort_keys=False)
        self._config_path.write_text(
            f"{_CONFIG_HEADER}# Last updated: {stamp}\n{body}", encoding="utf-8"
        )


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "ENV_PREFIX",
    "PhotostashConfig",
    "ConfigError",
    "assign_dotted",
    "env_layer",
    "resolve_settings",
]
