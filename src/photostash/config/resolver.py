"""Layer the sources of Photostash settings into one validated model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import PhotostashConfig

ENV_PREFIX = "PHOTOSTASH__"


def env_layer(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``PHOTOSTASH__SECTION__KEY`` variables into nested settings.

    Each value is parsed as YAML, so ``PHOTOSTASH__STORAGE__MAX_BYTES=2000``
    becomes an integer and ``[image/png, image/gif]`` becomes a list.
    Unparseable values are kept as plain strings.

    Args:
        environ: Environment mapping, usually ``os.environ``.

    Returns:
        dict[str, Any]: Nested mapping of the overrides found.

    Raises:
        ConfigError: If two variables disagree on whether a key is a section.
    """
    layer: dict[str, Any] = {}
    for name, raw in sorted(environ.items()):
        if not name.startswith(ENV_PREFIX):
            continue
        key = ".".join(part.lower() for part in name[len(ENV_PREFIX) :].split("__") if part)
        if not key:
            continue
        try:
            value: Any = yaml.safe_load(raw)
        except yaml.YAMLError:
            value = raw
        assign_dotted(layer, key, value)
    return layer


def assign_dotted(data: dict[str, Any], key: str, value: Any) -> None:
    """Store ``value`` at a dotted ``key`` such as ``storage.max_bytes``.

    Missing sections are created along the way.

    Raises:
        ConfigError: If the key is empty or passes through a non-section value.
    """
    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise ConfigError("Keys must be dotted paths such as 'storage.key'.")

    node = data
    for segment in segments[:-1]:
        child = node.setdefault(segment, {})
        if not isinstance(child, dict):
            raise ConfigError(f"Cannot assign {key}: '{segment}' is not a section.")
        node = child
    node[segments[-1]] = value


def resolve_settings(*layers: Mapping[str, Any] | None) -> PhotostashConfig:
    """Apply ``layers`` over the defaults, later layers winning, and validate.

    Args:
        *layers: Nested mappings in increasing precedence (file, then
            environment). ``None`` entries are skipped.

    Returns:
        PhotostashConfig: Validated settings.

    Raises:
        ConfigError: If the combined values fail validation.
    """
    merged = PhotostashConfig().model_dump(mode="python")
    for layer in layers:
        if layer:
            merged = _overlay(merged, layer)

    try:
        return PhotostashConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def _overlay(base: dict[str, Any], layer: Mapping[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in layer.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            result[key] = _overlay(current, value)
        else:
            result[key] = value
    return result


__all__ = ["ENV_PREFIX", "assign_dotted", "env_layer", "resolve_settings"]
