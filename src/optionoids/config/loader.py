"""
optionoids: settings loader.

File: src/optionoids/config/loader.py
Last updated: 2026-10-19

Purpose
- Load effective settings from defaults, a settings file and env vars.

What is included in this file
- Precedence logic: env (OPTIONOIDS_) > file > defaults.
- TOML loading via ``tomllib``, including the ``[tool.optionoids]`` table of
  ``pyproject.toml``; YAML loading via PyYAML.
- Deterministic environment variable mapping and boolean coercion.

Functional requirements
- Reject invalid settings via schema validation.
- A missing implicit settings file is not an error; a missing explicit one is.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

import yaml

from optionoids.config.schema import (
    OptionoidsSettings,
    assert_valid_settings,
    default_settings,
    merge_settings,
)
from optionoids.constants import (
    DEFAULT_SETTINGS_FILE,
    ENV_PREFIX,
    PYPROJECT_FILE,
    PYPROJECT_TABLE,
)

SUPPORTED_SETTINGS_SUFFIXES: Final[tuple[str, ...]] = (".toml", ".yaml", ".yml")

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})


class SettingsLoadError(ValueError):
    """Raised when settings cannot be read or env overrides cannot be coerced."""


def load_settings(
    settings_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> OptionoidsSettings:
    """Load effective settings with deterministic precedence: env > file > defaults."""

    resolved_path = _resolve_settings_path(settings_path)
    explicit_path = settings_path is not None
    env_map = dict(os.environ if environ is None else environ)

    file_payload = load_settings_file(resolved_path, required=explicit_path)
    merged = merge_settings(default_settings(), file_payload)
    assert_valid_settings(merged)

    merged = merge_settings(merged, _collect_env_overrides(merged, env_map))
    return assert_valid_settings(merged)


def load_settings_file(path: str | Path, *, required: bool = True) -> dict[str, Any]:
    """Load one raw settings mapping from a TOML or YAML file."""

    settings_path = Path(path)
    if not settings_path.exists():
        if required:
            raise SettingsLoadError(f"settings file not found: {settings_path}")
        return {}

    suffix = settings_path.suffix.lower()
    if suffix not in SUPPORTED_SETTINGS_SUFFIXES:
        supported = ", ".join(SUPPORTED_SETTINGS_SUFFIXES)
        raise SettingsLoadError(
            f"unsupported settings file extension {suffix!r}; expected one of {supported}"
        )

    if suffix == ".toml":
        parsed = _load_toml(settings_path)
        if settings_path.name == PYPROJECT_FILE:
            parsed = _pyproject_table(parsed, settings_path)
    else:
        parsed = _load_yaml(settings_path)

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise SettingsLoadError(f"settings root must be an object: {settings_path}")
    return parsed


def _resolve_settings_path(settings_path: str | Path | None) -> Path:
    if settings_path is None:
        return (Path.cwd() / DEFAULT_SETTINGS_FILE).resolve()
    return Path(settings_path).expanduser().resolve()


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise SettingsLoadError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise SettingsLoadError(f"unable to read settings file {path}: {exc}") from exc


def _load_yaml(path: Path) -> object:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise SettingsLoadError(f"invalid YAML in {path}: {exc}") from exc
    except OSError as exc:
        raise SettingsLoadError(f"unable to read settings file {path}: {exc}") from exc


def _pyproject_table(document: Mapping[str, object], path: Path) -> dict[str, Any]:
    cursor: object = document
    for part in PYPROJECT_TABLE:
        if not isinstance(cursor, Mapping) or part not in cursor:
            return {}
        cursor = cursor[part]
    if not isinstance(cursor, dict):
        raise SettingsLoadError(f"[{'.'.join(PYPROJECT_TABLE)}] must be a table: {path}")
    return cursor


def _collect_env_overrides(
    settings: Mapping[str, object], environ: Mapping[str, str]
) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for section in sorted(settings):
        if section == "meta":
            continue
        values = settings[section]
        if not isinstance(values, Mapping):
            continue
        for key in sorted(values):
            env_name = _env_name_for_path((section, key))
            raw = environ.get(env_name)
            if raw is None:
                continue
            overrides.setdefault(section, {})[key] = _coerce_bool(raw, env_name, (section, key))
    return overrides


def _coerce_bool(raw: str, env_name: str, path: tuple[str, ...]) -> bool:
    lowered = raw.strip().lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise SettingsLoadError(
        f"{env_name} -> {'.'.join(path)} must be a boolean (true/false/1/0/yes/no/on/off)"
    )


def _env_name_for_path(path: tuple[str, ...]) -> str:
    return ENV_PREFIX + "_".join(part.upper() for part in path)


__all__ = [
    "SUPPORTED_SETTINGS_SUFFIXES",
    "SettingsLoadError",
    "load_settings",
    "load_settings_file",
]
