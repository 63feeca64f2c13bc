"""Stable constants shared across the checker and settings layers."""

from __future__ import annotations

from typing import Final

# Schema version for the settings file contract.
SETTINGS_SCHEMA_VERSION: Final[int] = 1

# Settings discovery.
DEFAULT_SETTINGS_FILE: Final[str] = "optionoids.toml"
PYPROJECT_FILE: Final[str] = "pyproject.toml"
PYPROJECT_TABLE: Final[tuple[str, ...]] = ("tool", "optionoids")
ENV_PREFIX: Final[str] = "OPTIONOIDS_"

# Structured log event names.
CHECK_FAILED_EVENT: Final[str] = "optionoids_check_failed"

# Check names carried by RequiredDataUnavailable.
CHECK_PRESENT: Final[str] = "present"
CHECK_ONE_REQUIRED: Final[str] = "one_required"

__all__ = [
    "CHECK_FAILED_EVENT",
    "CHECK_ONE_REQUIRED",
    "CHECK_PRESENT",
    "DEFAULT_SETTINGS_FILE",
    "ENV_PREFIX",
    "PYPROJECT_FILE",
    "PYPROJECT_TABLE",
    "SETTINGS_SCHEMA_VERSION",
]
