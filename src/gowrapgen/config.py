"""Layered decorator configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

from .description import load_document
from .errors import ConfigError
from .merge import merge_maps

CONFIG_ENV = "GOWRAPGEN_CONFIG"


def env_config_paths(env: Mapping[str, str] | None = None) -> list[Path]:
    """Return base config layers listed in `GOWRAPGEN_CONFIG` (os.pathsep-separated)."""
    env = os.environ if env is None else env
    raw = env.get(CONFIG_ENV, "")
    return [Path(p) for p in raw.split(os.pathsep) if p]


def load_config(paths: list[Path], *, env: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Merge config documents in order; later layers win on leaf collisions.

    Layers named by `GOWRAPGEN_CONFIG` come first, then `paths`.
    """
    config: dict[str, Any] = {}
    for p in [*env_config_paths(env), *paths]:
        merge_maps(config, load_document(Path(p)))
    return config


def section_name(kind: str) -> str:
    # "log" -> "Log", "trace" -> "Trace"
    return kind[:1].upper() + kind[1:]


def decorator_fields(config: Mapping[str, Any], kind: str) -> list[tuple[str, str]]:
    """Return the `(key, go_expression)` pairs configured for a decorator kind."""
    section = config.get(section_name(kind))
    if section is None:
        return []
    if not isinstance(section, dict):
        raise ConfigError(f"config section {section_name(kind)!r} must be an object")
    fields: list[tuple[str, str]] = []
    for key, expr in section.items():
        if not isinstance(expr, str):
            raise ConfigError(
                f"config {section_name(kind)}.{key}: expected a Go expression string, "
                f"got {type(expr).__name__}"
            )
        fields.append((key, expr))
    return fields
