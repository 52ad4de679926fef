# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the settings file parser."""

from pathlib import Path

import pytest

from simplegit.config import SETTINGS_FILE_NAME, Settings, SettingsError, load_settings
from simplegit.git.errors import ConfigurationError

# ###############
# Helpers
# ###############


def _write_settings(tmp_path: Path, content: str) -> Path:
    """Write a settings file and return its path."""
    settings_file = tmp_path / SETTINGS_FILE_NAME
    settings_file.write_text(content, encoding="utf-8")
    return settings_file


# ###############
# Normal Cases
# ###############


def test_minimal_settings(tmp_path: Path) -> None:
    """Only the executable path is required."""
    settings = load_settings(_write_settings(tmp_path, "executable-path: /usr/bin/git\n"))

    assert settings == Settings(executable_path="/usr/bin/git", retry_count=1, credentials_file=None)


def test_full_settings(tmp_path: Path) -> None:
    """The credentials file is resolved next to the settings file."""
    content = """\
executable-path: git
retry-count: 3
credentials-file: secrets/credentials.yaml
"""
    settings = load_settings(_write_settings(tmp_path, content))

    assert settings.executable_path == "git"
    assert settings.retry_count == 3
    assert settings.credentials_file == tmp_path / "secrets" / "credentials.yaml"


def test_zero_retry_count_is_accepted(tmp_path: Path) -> None:
    """Values below one are kept; the checkout treats them as one attempt."""
    settings = load_settings(_write_settings(tmp_path, "executable-path: git\nretry-count: 0\n"))
    assert settings.retry_count == 0


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SettingsError, match="not found"):
        load_settings(tmp_path / SETTINGS_FILE_NAME)


def test_missing_executable_path(tmp_path: Path) -> None:
    with pytest.raises(SettingsError, match="missing required field 'executable-path'"):
        load_settings(_write_settings(tmp_path, "retry-count: 2\n"))


def test_blank_executable_path(tmp_path: Path) -> None:
    with pytest.raises(SettingsError, match="must not be blank"):
        load_settings(_write_settings(tmp_path, "executable-path: '  '\n"))


def test_non_integer_retry_count(tmp_path: Path) -> None:
    with pytest.raises(SettingsError, match="'retry-count' must be an integer"):
        load_settings(_write_settings(tmp_path, "executable-path: git\nretry-count: many\n"))


def test_boolean_retry_count(tmp_path: Path) -> None:
    with pytest.raises(SettingsError, match="'retry-count' must be an integer"):
        load_settings(_write_settings(tmp_path, "executable-path: git\nretry-count: true\n"))


def test_invalid_yaml(tmp_path: Path) -> None:
    with pytest.raises(SettingsError, match="Invalid YAML"):
        load_settings(_write_settings(tmp_path, "executable-path: [\n"))


def test_not_a_mapping(tmp_path: Path) -> None:
    with pytest.raises(SettingsError, match="must be a YAML mapping"):
        load_settings(_write_settings(tmp_path, "- git\n"))


def test_settings_error_is_configuration_error() -> None:
    assert issubclass(SettingsError, ConfigurationError)
