"""
optionoids: settings schema and validation.

File: src/optionoids/config/schema.py
Last updated: 2026-10-19

Purpose
- Define authoritative settings defaults and strict validation rules.

What is included in this file
- Schema versioning with migration guidance.
- Validation of required fields, types and unknown keys with dotted paths.
- Deterministic deep-merge helper used by the loader.
- The process-wide active settings slot read by new checkers.

Functional requirements
- Validate settings payloads and return structured issues (field path + message).

Non-functional requirements
- No side effects at import time; nothing is read from disk here.
"""

from __future__ import annotations

import copy
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final, TypedDict

from optionoids.constants import SETTINGS_SCHEMA_VERSION

SettingsSchemaVersion: Final[int] = SETTINGS_SCHEMA_VERSION


class MetaSettings(TypedDict):
    schema_version: int


class CheckerSection(TypedDict):
    log_failures: bool


class BlankSection(TypedDict):
    whitespace_is_blank: bool


class SettingsPayload(TypedDict):
    meta: MetaSettings
    checker: CheckerSection
    blank: BlankSection


DEFAULT_SETTINGS: Final[SettingsPayload] = {
    "meta": {
        "schema_version": SettingsSchemaVersion,
    },
    "checker": {
        "log_failures": True,
    },
    "blank": {
        "whitespace_is_blank": False,
    },
}


@dataclass(frozen=True, slots=True)
class OptionoidsSettings:
    """Validated, immutable settings consumed by checkers."""

    log_failures: bool = True
    whitespace_is_blank: bool = False
    schema_version: int = SettingsSchemaVersion

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> OptionoidsSettings:
        return cls(
            log_failures=payload["checker"]["log_failures"],
            whitespace_is_blank=payload["blank"]["whitespace_is_blank"],
            schema_version=payload["meta"]["schema_version"],
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "meta": {"schema_version": self.schema_version},
            "checker": {"log_failures": self.log_failures},
            "blank": {"whitespace_is_blank": self.whitespace_is_blank},
        }


@dataclass(frozen=True, slots=True)
class SettingsValidationIssue:
    """Single structured validation failure."""

    path: str
    message: str


@dataclass(frozen=True, slots=True)
class SettingsValidationResult:
    """Validation result with parsed settings when no issues were found."""

    settings: OptionoidsSettings | None
    issues: tuple[SettingsValidationIssue, ...]

    @property
    def is_valid(self) -> bool:
        return self.settings is not None and not self.issues


class SettingsValidationError(ValueError):
    """Raised when strict settings validation fails."""

    def __init__(self, issues: Sequence[SettingsValidationIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(f"invalid settings:\n{rendered}")


class _IssueCollector:
    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[SettingsValidationIssue] = []

    def add(self, path: str, message: str) -> None:
        self._items.append(SettingsValidationIssue(path=path, message=message))

    def items(self) -> tuple[SettingsValidationIssue, ...]:
        return tuple(self._items)

    @property
    def has_issues(self) -> bool:
        return bool(self._items)


_ACTIVE_SETTINGS_LOCK = threading.Lock()
_ACTIVE_SETTINGS: OptionoidsSettings | None = None


def default_settings() -> SettingsPayload:
    """Return a deep copy of the built-in defaults."""

    return copy.deepcopy(DEFAULT_SETTINGS)


def migration_guidance(found_version: int) -> str:
    """Return deterministic migration guidance for a schema version mismatch."""

    if found_version < SettingsSchemaVersion:
        return (
            f"schema version {found_version} is older than supported {SettingsSchemaVersion}; "
            "upgrade the settings file to the current schema"
        )
    if found_version > SettingsSchemaVersion:
        return (
            f"schema version {found_version} is newer than supported {SettingsSchemaVersion}; "
            "upgrade optionoids"
        )
    return "schema version is current"


def merge_settings(base: Mapping[str, object], overlay: Mapping[str, object]) -> dict[str, Any]:
    """Deep-merge ``overlay`` onto a copy of ``base``."""

    merged = copy.deepcopy(dict(base))
    _merge_into(merged, overlay)
    return merged


def validate_settings(payload: Mapping[str, object] | object) -> SettingsValidationResult:
    """Validate a full settings payload and return structured issues."""

    issues = _IssueCollector()
    root = _as_object(payload, "<root>", issues)
    if root is None:
        return SettingsValidationResult(settings=None, issues=issues.items())

    sections = {"meta", "checker", "blank"}
    _reject_unknown_keys(root, sections, "", issues)
    _require_keys(root, sections, "", issues)

    out: dict[str, Any] = {}
    meta = _section(root, "meta", issues)
    if meta is not None:
        out["meta"] = _validate_meta(meta, "meta", issues)
    checker = _section(root, "checker", issues)
    if checker is not None:
        out["checker"] = _validate_flags(checker, "checker", issues, fields=("log_failures",))
    blank = _section(root, "blank", issues)
    if blank is not None:
        out["blank"] = _validate_flags(blank, "blank", issues, fields=("whitespace_is_blank",))

    if issues.has_issues:
        return SettingsValidationResult(settings=None, issues=issues.items())
    return SettingsValidationResult(
        settings=OptionoidsSettings.from_payload(out), issues=issues.items()
    )


def assert_valid_settings(payload: Mapping[str, object] | object) -> OptionoidsSettings:
    """Validate settings and raise ``SettingsValidationError`` on failure."""

    result = validate_settings(payload)
    if result.settings is None:
        raise SettingsValidationError(result.issues)
    return result.settings


def activate_settings(settings: OptionoidsSettings | None) -> None:
    """Install process-wide settings for checkers built without explicit settings.

    Passing ``None`` restores the built-in defaults.
    """

    if settings is not None and not isinstance(settings, OptionoidsSettings):
        raise TypeError(f"expected OptionoidsSettings, got {type(settings).__name__}")
    with _ACTIVE_SETTINGS_LOCK:
        global _ACTIVE_SETTINGS
        _ACTIVE_SETTINGS = settings


def get_active_settings() -> OptionoidsSettings:
    """Return the active settings, falling back to the built-in defaults."""

    with _ACTIVE_SETTINGS_LOCK:
        active = _ACTIVE_SETTINGS
    if active is None:
        return OptionoidsSettings()
    return active


def _section(
    payload: Mapping[str, object], key: str, issues: _IssueCollector
) -> dict[str, object] | None:
    if key not in payload:
        return None
    return _as_object(payload[key], key, issues)


def _validate_meta(
    payload: Mapping[str, object], path: str, issues: _IssueCollector
) -> dict[str, Any]:
    _reject_unknown_keys(payload, {"schema_version"}, path, issues)
    _require_keys(payload, {"schema_version"}, path, issues)

    out: dict[str, Any] = {}
    if "schema_version" in payload:
        version_path = _join(path, "schema_version")
        parsed = _as_int(payload["schema_version"], version_path, issues)
        if parsed is not None:
            out["schema_version"] = parsed
            if parsed != SettingsSchemaVersion:
                issues.add(version_path, migration_guidance(parsed))
    return out


def _validate_flags(
    payload: Mapping[str, object],
    path: str,
    issues: _IssueCollector,
    *,
    fields: tuple[str, ...],
) -> dict[str, Any]:
    allowed = set(fields)
    _reject_unknown_keys(payload, allowed, path, issues)
    _require_keys(payload, allowed, path, issues)

    out: dict[str, Any] = {}
    for key in fields:
        if key not in payload:
            continue
        parsed = _as_bool(payload[key], _join(path, key), issues)
        if parsed is not None:
            out[key] = parsed
    return out


def _as_object(value: object, path: str, issues: _IssueCollector) -> dict[str, object] | None:
    if not isinstance(value, Mapping):
        issues.add(path, f"expected object, got {type(value).__name__}")
        return None
    out: dict[str, object] = {}
    for key, item in value.items():
        if not isinstance(key, str):
            issues.add(path, f"object key must be string, got {type(key).__name__}")
            continue
        out[key] = item
    return out


def _as_bool(value: object, path: str, issues: _IssueCollector) -> bool | None:
    if isinstance(value, bool):
        return value
    issues.add(path, f"expected boolean, got {type(value).__name__}")
    return None


def _as_int(value: object, path: str, issues: _IssueCollector) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        issues.add(path, f"expected integer, got {type(value).__name__}")
        return None
    return value


def _reject_unknown_keys(
    payload: Mapping[str, object],
    allowed: set[str],
    path: str,
    issues: _IssueCollector,
) -> None:
    for key in sorted(payload):
        if key not in allowed:
            issues.add(_join(path, key), "unknown field")


def _require_keys(
    payload: Mapping[str, object],
    required: set[str],
    path: str,
    issues: _IssueCollector,
) -> None:
    for key in sorted(required):
        if key not in payload:
            issues.add(_join(path, key), "missing required field")


def _join(path: str, key: str) -> str:
    if not path:
        return key
    return f"{path}.{key}"


def _merge_into(target: dict[str, Any], overlay: Mapping[str, object]) -> None:
    for key, value in overlay.items():
        if isinstance(value, Mapping):
            existing = target.get(key)
            if isinstance(existing, dict):
                _merge_into(existing, value)
            else:
                nested: dict[str, Any] = {}
                _merge_into(nested, value)
                target[key] = nested
        else:
            target[key] = copy.deepcopy(value)


__all__ = [
    "DEFAULT_SETTINGS",
    "OptionoidsSettings",
    "SettingsPayload",
    "SettingsSchemaVersion",
    "SettingsValidationError",
    "SettingsValidationIssue",
    "SettingsValidationResult",
    "activate_settings",
    "assert_valid_settings",
    "default_settings",
    "get_active_settings",
    "merge_settings",
    "migration_guidance",
    "validate_settings",
]
