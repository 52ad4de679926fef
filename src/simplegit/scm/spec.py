# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Per-job repository settings."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from simplegit.git.errors import ConfigurationError
from simplegit.scm.metadata import default_revision_range

# ###############
# Public Interface
# ###############


class JobConfigError(ConfigurationError):
    """Raised when a job file cannot be read or is invalid."""


class RepositorySpec(BaseModel):
    """What to check out, and how.

    The revision range defaults are applied once, when the spec is created:
    a blank end becomes ``HEAD`` and a blank start becomes ``<end>^``.  The
    values may still contain ``$NAME`` references, which are expanded only
    when a checkout runs.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    remote_url: str = Field(alias="remote-url")
    ref_spec: list[str] = Field(alias="ref-spec", default_factory=list)
    revision_range_start: str = Field(alias="revision-range-start", default="")
    revision_range_end: str = Field(alias="revision-range-end", default="")
    expand_merges: bool = Field(alias="expand-merges", default=False)
    include_merge_commits: bool = Field(alias="include-merge-commits", default=False)
    clear_workspace: bool = Field(alias="clear-workspace", default=False)
    git_logging: bool = Field(alias="git-logging", default=False)
    credentials: str | None = None

    @field_validator("ref_spec", mode="before")
    @classmethod
    def _split_ref_spec(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            return value.split("\n")
        return value

    @field_validator("revision_range_start", "revision_range_end", mode="before")
    @classmethod
    def _none_to_blank(cls, value: object) -> object:
        return "" if value is None else value

    @model_validator(mode="after")
    def _apply_revision_defaults(self) -> RepositorySpec:
        self.revision_range_start, self.revision_range_end = default_revision_range(
            self.revision_range_start, self.revision_range_end
        )
        return self


def load_repository_spec(path: Path) -> RepositorySpec:
    """Load and validate a job file.

    Raises:
        JobConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise JobConfigError(f"Cannot read job file '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise JobConfigError(f"Invalid YAML in job file '{path}': {exc}") from exc

    if not isinstance(data, dict):
        raise JobConfigError(f"{path}: job file must be a YAML mapping")

    try:
        return RepositorySpec.model_validate(data)
    except ValidationError as exc:
        raise JobConfigError(f"Invalid job file '{path}': {exc}") from exc
