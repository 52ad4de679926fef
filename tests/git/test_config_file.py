# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for adding fetch refspecs to a repository config file."""

import os
import stat
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from simplegit.git.config_file import add_fetch_refspec
from simplegit.git.errors import SimpleGitError
from simplegit.git.host import LocalHost

# ###############
# Helpers
# ###############

_CONFIG = """\
[core]
\trepositoryformatversion = 0
\tbare = false
[remote "origin"]
\turl = git@example.com:team/repo.git
\tfetch = +refs/heads/*:refs/remotes/origin/*
[branch "main"]
\tremote = origin
\tmerge = refs/heads/main
"""

_PR_REFSPEC = "+refs/pull/*:refs/remotes/origin/pr/*"


def _git_dir(tmp_path: Path, content: str = _CONFIG) -> Path:
    git_dir = tmp_path / ".git"
    git_dir.mkdir()
    (git_dir / "config").write_text(content, encoding="utf-8")
    return git_dir


# ###############
# Normal Cases
# ###############


def test_adds_refspec_under_remote_section(tmp_path: Path) -> None:
    """The new fetch line directly follows the remote's section header."""
    git_dir = _git_dir(tmp_path)

    add_fetch_refspec(LocalHost(), git_dir, "origin", _PR_REFSPEC)

    lines = (git_dir / "config").read_text(encoding="utf-8").splitlines()
    header = lines.index('[remote "origin"]')
    assert lines[header + 1] == f"\tfetch = {_PR_REFSPEC}"
    assert "\tfetch = +refs/heads/*:refs/remotes/origin/*" in lines


def test_existing_refspec_is_not_duplicated(tmp_path: Path) -> None:
    """Adding a refspec twice leaves a single fetch line for it."""
    git_dir = _git_dir(tmp_path)

    add_fetch_refspec(LocalHost(), git_dir, "origin", _PR_REFSPEC)
    add_fetch_refspec(LocalHost(), git_dir, "origin", _PR_REFSPEC)

    content = (git_dir / "config").read_text(encoding="utf-8")
    assert content.count(f"fetch = {_PR_REFSPEC}") == 1


def test_other_sections_are_preserved(tmp_path: Path) -> None:
    """Lines unrelated to the refspec are kept verbatim."""
    git_dir = _git_dir(tmp_path)

    add_fetch_refspec(LocalHost(), git_dir, "origin", _PR_REFSPEC)

    content = (git_dir / "config").read_text(encoding="utf-8")
    for line in _CONFIG.splitlines():
        assert line in content


def test_unknown_remote_leaves_config_unchanged(tmp_path: Path) -> None:
    """Without a matching section, nothing is added."""
    git_dir = _git_dir(tmp_path)

    add_fetch_refspec(LocalHost(), git_dir, "upstream", _PR_REFSPEC)

    assert (git_dir / "config").read_text(encoding="utf-8") == _CONFIG


def test_permissions_are_kept(tmp_path: Path) -> None:
    """The rewritten config keeps the permission bits of the old one."""
    git_dir = _git_dir(tmp_path)
    os.chmod(git_dir / "config", 0o644)

    add_fetch_refspec(LocalHost(), git_dir, "origin", _PR_REFSPEC)

    assert stat.S_IMODE(os.stat(git_dir / "config").st_mode) == 0o644
    assert sorted(p.name for p in git_dir.iterdir()) == ["config"]


def test_bytes_outside_utf8_survive(tmp_path: Path) -> None:
    """A Latin-1 branch name in the config is written back byte for byte."""
    git_dir = tmp_path / ".git"
    git_dir.mkdir()
    original = b'[remote "origin"]\n\turl = x\n[branch "caf\xe9"]\n\tremote = origin\n'
    (git_dir / "config").write_bytes(original)

    add_fetch_refspec(LocalHost(), git_dir, "origin", _PR_REFSPEC)

    assert b'[branch "caf\xe9"]' in (git_dir / "config").read_bytes()


def test_edit_goes_through_host(tmp_path: Path) -> None:
    """Reading and replacing the config are delegated to the host."""
    host = MagicMock()
    host.read_file.return_value = '[remote "origin"]\n\turl = x\n'

    add_fetch_refspec(host, tmp_path / ".git", "origin", _PR_REFSPEC)

    host.read_file.assert_called_once_with(tmp_path / ".git" / "config")
    host.replace_file.assert_called_once_with(
        tmp_path / ".git" / "config",
        f'[remote "origin"]\n\tfetch = {_PR_REFSPEC}\n\turl = x\n',
    )
    assert not (tmp_path / ".git").exists()


# ###############
# Error Cases
# ###############


def test_missing_config_raises(tmp_path: Path) -> None:
    """A repository without a config file cannot be edited."""
    git_dir = tmp_path / ".git"
    git_dir.mkdir()

    with pytest.raises(SimpleGitError, match="Cannot read git config file"):
        add_fetch_refspec(LocalHost(), git_dir, "origin", _PR_REFSPEC)


def test_undeletable_config_raises(tmp_path: Path) -> None:
    """The edit fails if the original config cannot be removed."""
    git_dir = _git_dir(tmp_path)

    with patch.object(Path, "unlink", side_effect=PermissionError("read-only")):
        with pytest.raises(SimpleGitError, match="could not replace git config file"):
            add_fetch_refspec(LocalHost(), git_dir, "origin", _PR_REFSPEC)

    assert (git_dir / "config").read_text(encoding="utf-8") == _CONFIG
    assert sorted(p.name for p in git_dir.iterdir()) == ["config"]


def test_host_replace_failure_raises(tmp_path: Path) -> None:
    host = MagicMock()
    host.read_file.return_value = _CONFIG
    host.replace_file.side_effect = OSError("disk full")

    with pytest.raises(SimpleGitError, match="disk full"):
        add_fetch_refspec(host, tmp_path / ".git", "origin", _PR_REFSPEC)
