"""
optionoids: fluent checks for option mappings.

File: src/optionoids/__init__.py
Last updated: 2026-10-19

Purpose
- Package root. Exposes the checker, its error taxonomy, the ``expecting`` /
  ``checking`` entry points and the settings API.

Functional requirements
- No side effects at import time (no settings loading, no logging setup).

Example::

    from optionoids import expecting

    def connect(**kwargs):
        expecting(kwargs, ["host", "port"]).required().that("port").of_type(int)
"""

from optionoids.adapter import OptionsDict, checking, expecting
from optionoids.checker import Checker
from optionoids.config import (
    OptionoidsSettings,
    SettingsLoadError,
    SettingsValidationError,
    activate_settings,
    get_active_settings,
    load_settings,
)
from optionoids.errors import (
    ErrorKind,
    ExpectedMultipleKeys,
    MissingKeys,
    OptionoidsError,
    RequiredDataUnavailable,
    UnexpectedBlankValue,
    UnexpectedKeys,
    UnexpectedMultipleKeys,
    UnexpectedNilValue,
    UnexpectedNonNilValue,
    UnexpectedPopulatedValue,
    UnexpectedValueType,
    UnexpectedValueVariant,
)
from optionoids.values import is_blank

__version__ = "0.1.0"

__all__ = [
    "Checker",
    "ErrorKind",
    "ExpectedMultipleKeys",
    "MissingKeys",
    "OptionoidsError",
    "OptionoidsSettings",
    "OptionsDict",
    "RequiredDataUnavailable",
    "SettingsLoadError",
    "SettingsValidationError",
    "UnexpectedBlankValue",
    "UnexpectedKeys",
    "UnexpectedMultipleKeys",
    "UnexpectedNilValue",
    "UnexpectedNonNilValue",
    "UnexpectedPopulatedValue",
    "UnexpectedValueType",
    "UnexpectedValueVariant",
    "__version__",
    "activate_settings",
    "checking",
    "expecting",
    "get_active_settings",
    "is_blank",
    "load_settings",
]
