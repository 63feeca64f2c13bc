"""Settings schema, validation and loading for optionoids."""

from optionoids.config.loader import (
    SUPPORTED_SETTINGS_SUFFIXES,
    SettingsLoadError,
    load_settings,
    load_settings_file,
)
from optionoids.config.schema import (
    DEFAULT_SETTINGS,
    OptionoidsSettings,
    SettingsSchemaVersion,
    SettingsValidationError,
    SettingsValidationIssue,
    SettingsValidationResult,
    activate_settings,
    assert_valid_settings,
    default_settings,
    get_active_settings,
    merge_settings,
    migration_guidance,
    validate_settings,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "SUPPORTED_SETTINGS_SUFFIXES",
    "OptionoidsSettings",
    "SettingsLoadError",
    "SettingsSchemaVersion",
    "SettingsValidationError",
    "SettingsValidationIssue",
    "SettingsValidationResult",
    "activate_settings",
    "assert_valid_settings",
    "default_settings",
    "get_active_settings",
    "load_settings",
    "load_settings_file",
    "merge_settings",
    "migration_guidance",
    "validate_settings",
]
