"""
optionoids: unit tests for the settings loader

File: tests/unit/config/test_loader.py
Last updated: 2026-10-19

Purpose
- Validate settings loading from defaults, TOML/YAML/pyproject files and env overrides.

What this test file covers
- Precedence: env > file > defaults.
- Implicit vs explicit settings file handling.
- Env var boolean coercion and error reporting.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from optionoids.config.loader import SettingsLoadError, load_settings, load_settings_file
from optionoids.config.schema import OptionoidsSettings, SettingsValidationError


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_when_no_file_is_present(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert load_settings(environ={}) == OptionoidsSettings()


def test_implicit_settings_file_is_discovered(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write(tmp_path / "optionoids.toml", "[checker]\nlog_failures = false\n")
    monkeypatch.chdir(tmp_path)

    assert load_settings(environ={}) == OptionoidsSettings(log_failures=False)


def test_toml_file_overrides_defaults(tmp_path: Path) -> None:
    path = _write(tmp_path / "custom.toml", "[blank]\nwhitespace_is_blank = true\n")

    settings = load_settings(path, environ={})

    assert settings.whitespace_is_blank is True
    assert settings.log_failures is True


def test_yaml_file_is_supported(tmp_path: Path) -> None:
    path = _write(tmp_path / "optionoids.yaml", "checker:\n  log_failures: false\n")

    assert load_settings(path, environ={}).log_failures is False


def test_empty_yaml_file_means_defaults(tmp_path: Path) -> None:
    path = _write(tmp_path / "optionoids.yml", "")

    assert load_settings(path, environ={}) == OptionoidsSettings()


def test_pyproject_tool_table(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "pyproject.toml",
        '[project]\nname = "demo"\n\n[tool.optionoids.checker]\nlog_failures = false\n',
    )

    assert load_settings(path, environ={}).log_failures is False


def test_pyproject_without_tool_table_means_defaults(tmp_path: Path) -> None:
    path = _write(tmp_path / "pyproject.toml", '[project]\nname = "demo"\n')

    assert load_settings_file(path) == {}


def test_env_overrides_file(tmp_path: Path) -> None:
    path = _write(tmp_path / "optionoids.toml", "[checker]\nlog_failures = false\n")

    settings = load_settings(
        path,
        environ={
            "OPTIONOIDS_CHECKER_LOG_FAILURES": "yes",
            "OPTIONOIDS_BLANK_WHITESPACE_IS_BLANK": "on",
        },
    )

    assert settings == OptionoidsSettings(log_failures=True, whitespace_is_blank=True)


def test_invalid_env_boolean_is_rejected(tmp_path: Path) -> None:
    path = _write(tmp_path / "optionoids.toml", "")

    with pytest.raises(SettingsLoadError, match="OPTIONOIDS_CHECKER_LOG_FAILURES"):
        load_settings(path, environ={"OPTIONOIDS_CHECKER_LOG_FAILURES": "maybe"})


def test_missing_explicit_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(SettingsLoadError, match="settings file not found"):
        load_settings(tmp_path / "absent.toml", environ={})


def test_unsupported_suffix_is_rejected(tmp_path: Path) -> None:
    path = _write(tmp_path / "optionoids.json", "{}")

    with pytest.raises(SettingsLoadError, match="unsupported settings file extension"):
        load_settings(path, environ={})


def test_malformed_files_are_rejected(tmp_path: Path) -> None:
    bad_toml = _write(tmp_path / "bad.toml", "[checker\n")
    bad_yaml = _write(tmp_path / "bad.yaml", "checker: [\n")
    list_yaml = _write(tmp_path / "list.yaml", "- 1\n- 2\n")

    with pytest.raises(SettingsLoadError, match="invalid TOML"):
        load_settings(bad_toml, environ={})
    with pytest.raises(SettingsLoadError, match="invalid YAML"):
        load_settings(bad_yaml, environ={})
    with pytest.raises(SettingsLoadError, match="settings root must be an object"):
        load_settings(list_yaml, environ={})


def test_invalid_values_fail_schema_validation(tmp_path: Path) -> None:
    path = _write(tmp_path / "optionoids.toml", '[checker]\nlog_failures = "often"\n')

    with pytest.raises(SettingsValidationError) as excinfo:
        load_settings(path, environ={})

    assert excinfo.value.issues[0].path == "checker.log_failures"
