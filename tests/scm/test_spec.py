# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the repository spec model and job file loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from simplegit.git.errors import ConfigurationError
from simplegit.scm.spec import JobConfigError, RepositorySpec, load_repository_spec

# ###############
# Helpers
# ###############

_URL = "git@example.com:team/repo.git"


def _write_job(tmp_path: Path, content: str) -> Path:
    job_file = tmp_path / "job.yaml"
    job_file.write_text(content, encoding="utf-8")
    return job_file


# ###############
# Normal Cases
# ###############


def test_minimal_spec_defaults() -> None:
    """Only the remote URL is required; the range defaults to HEAD^..HEAD."""
    spec = RepositorySpec(remote_url=_URL)

    assert spec.ref_spec == []
    assert spec.revision_range_end == "HEAD"
    assert spec.revision_range_start == "HEAD^"
    assert spec.expand_merges is False
    assert spec.include_merge_commits is False
    assert spec.clear_workspace is False
    assert spec.git_logging is False
    assert spec.credentials is None


def test_blank_start_defaults_to_parent_of_configured_end() -> None:
    spec = RepositorySpec(remote_url=_URL, revision_range_end="$BRANCH", revision_range_start="  ")
    assert spec.revision_range_start == "$BRANCH^"
    assert spec.revision_range_end == "$BRANCH"


def test_none_range_values_are_defaulted() -> None:
    spec = RepositorySpec(remote_url=_URL, revision_range_start=None, revision_range_end=None)
    assert (spec.revision_range_start, spec.revision_range_end) == ("HEAD^", "HEAD")


def test_ref_spec_string_is_split_per_line() -> None:
    spec = RepositorySpec(remote_url=_URL, ref_spec="+refs/heads/*:refs/remotes/origin/*\nrefs/tags/v1")
    assert spec.ref_spec == ["+refs/heads/*:refs/remotes/origin/*", "refs/tags/v1"]


def test_load_full_job_file(tmp_path: Path) -> None:
    """Every option is read from its kebab-case key."""
    content = """\
remote-url: git@example.com:team/repo.git
ref-spec: |
  +refs/heads/*:refs/remotes/origin/*
revision-range-start: v1.0
revision-range-end: $BRANCH
expand-merges: true
include-merge-commits: true
clear-workspace: true
git-logging: true
credentials: deploy-key
"""
    spec = load_repository_spec(_write_job(tmp_path, content))

    assert spec.remote_url == _URL
    assert spec.ref_spec == ["+refs/heads/*:refs/remotes/origin/*", ""]
    assert spec.revision_range_start == "v1.0"
    assert spec.revision_range_end == "$BRANCH"
    assert spec.expand_merges is True
    assert spec.include_merge_commits is True
    assert spec.clear_workspace is True
    assert spec.git_logging is True
    assert spec.credentials == "deploy-key"


def test_load_ref_spec_list(tmp_path: Path) -> None:
    content = "remote-url: x\nref-spec:\n  - refs/heads/main\n  - refs/tags/*\n"
    spec = load_repository_spec(_write_job(tmp_path, content))
    assert spec.ref_spec == ["refs/heads/main", "refs/tags/*"]


# ###############
# Error Cases
# ###############


def test_missing_remote_url_is_invalid() -> None:
    with pytest.raises(ValidationError):
        RepositorySpec()


def test_unknown_key_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(JobConfigError, match="Invalid job file"):
        load_repository_spec(_write_job(tmp_path, "remote-url: x\nbranch: main\n"))


def test_missing_job_file(tmp_path: Path) -> None:
    with pytest.raises(JobConfigError, match="Cannot read job file"):
        load_repository_spec(tmp_path / "missing.yaml")


def test_invalid_yaml(tmp_path: Path) -> None:
    with pytest.raises(JobConfigError, match="Invalid YAML"):
        load_repository_spec(_write_job(tmp_path, "remote-url: [\n"))


def test_job_file_must_be_mapping(tmp_path: Path) -> None:
    with pytest.raises(JobConfigError, match="must be a YAML mapping"):
        load_repository_spec(_write_job(tmp_path, "- remote-url: x\n"))


def test_job_config_error_is_configuration_error() -> None:
    assert issubclass(JobConfigError, ConfigurationError)
