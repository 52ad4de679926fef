# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the SimpleGit settings file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from simplegit.git.errors import ConfigurationError

# ###############
# Public Interface
# ###############

SETTINGS_FILE_NAME = ".simplegit.yaml"


class SettingsError(ConfigurationError):
    """Raised when a settings file is invalid or cannot be loaded."""


@dataclass
class Settings:
    """Installation-wide SimpleGit settings.

    Attributes:
        executable_path: The git binary used for every command.
        retry_count: Number of checkout attempts before a build fails.
        credentials_file: Optional credential store, resolved against the
            directory of the settings file.
    """

    executable_path: str
    retry_count: int = 1
    credentials_file: Path | None = None


def load_settings(path: Path) -> Settings:
    """Load and parse a SimpleGit settings file.

    Args:
        path: Path to the `.simplegit.yaml` file.

    Returns:
        A Settings instance populated from the file.

    Raises:
        SettingsError: If the file cannot be read or the settings are invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SettingsError(f"Settings file not found: {path}") from None
    except OSError as exc:
        raise SettingsError(f"Cannot read settings file: {exc}") from exc

    return _parse_settings(text, base_dir=path.parent, source_label=str(path))


# ################
# Implementation
# ################


def _parse_settings(text: str, base_dir: Path, source_label: str = "<string>") -> Settings:
    """Parse settings YAML text into a Settings instance.

    Raises:
        SettingsError: If the YAML is invalid or required fields are missing.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SettingsError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise SettingsError(f"{source_label}: settings must be a YAML mapping")

    executable_path = _require_string(data, "executable-path", source_label)
    if not executable_path.strip():
        raise SettingsError(f"{source_label}: 'executable-path' must not be blank")

    retry_count = 1
    if "retry-count" in data:
        value = data["retry-count"]
        if isinstance(value, bool) or not isinstance(value, int):
            raise SettingsError(f"{source_label}: 'retry-count' must be an integer")
        retry_count = value

    credentials_file = None
    if data.get("credentials-file") is not None:
        credentials_file = base_dir / _require_string(data, "credentials-file", source_label)

    return Settings(
        executable_path=executable_path,
        retry_count=retry_count,
        credentials_file=credentials_file,
    )


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a required string field from a mapping, raising SettingsError if missing."""
    if key not in mapping:
        raise SettingsError(f"{source_label}: missing required field '{key}'")
    value = mapping[key]
    if not isinstance(value, str):
        raise SettingsError(f"{source_label}: '{key}' must be a string")
    return value
