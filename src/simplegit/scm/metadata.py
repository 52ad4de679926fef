# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Revision range defaults and commit metadata extraction."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeGuard

from simplegit.git.errors import ParseError
from simplegit.scm.environment import expand

if TYPE_CHECKING:
    from simplegit.git.facade import Git

# ###############
# Public Interface
# ###############

DEFAULT_REVISION = "HEAD"
VARIABLE_PREFIX = "SIMPLE_GIT_"

NEWLINE = "%n"
HASH = "%H"
COMMITTER_NAME = "%cn"
AUTHOR_NAME = "%an"
COMMITTER_EMAIL = "%ce"
AUTHOR_EMAIL = "%ae"

METADATA_FORMAT = NEWLINE.join([HASH, COMMITTER_NAME, AUTHOR_NAME, COMMITTER_EMAIL, AUTHOR_EMAIL])
MESSAGE_FORMAT = "%B"


@dataclass(frozen=True)
class CommitMetadata:
    """Identity and message of the commit a workspace was checked out at."""

    hash: str
    committer_name: str
    author_name: str
    committer_email: str
    author_email: str
    commit_message: str

    def to_variables(self, prefix: str = VARIABLE_PREFIX) -> dict[str, str]:
        """Return the build variables exported for this commit."""
        return {
            f"{prefix}HEAD": self.hash,
            f"{prefix}COMMITTER": self.committer_name,
            f"{prefix}AUTHOR": self.author_name,
            f"{prefix}COMMITTER_EMAIL": self.committer_email,
            f"{prefix}AUTHOR_EMAIL": self.author_email,
            f"{prefix}COMMIT_MESSAGE": self.commit_message,
        }


def default_revision_range(start: str | None, end: str | None) -> tuple[str, str]:
    """Apply the defaults used when a repository spec is created.

    A blank end becomes ``HEAD``; a blank start becomes ``<end>^``.  Variable
    references are not expanded, so an end of ``$BRANCH`` yields a start of
    ``$BRANCH^``.

    Returns:
        ``(start, end)``.
    """
    resolved_end = end if _is_set(end) else DEFAULT_REVISION
    resolved_start = start if _is_set(start) else f"{resolved_end}^"
    return resolved_start, resolved_end


def resolve_revision_range(start: str | None, end: str | None, environment: Mapping[str, str]) -> tuple[str, str]:
    """Expand a configured revision range and apply the checkout-time defaults.

    A range whose end expands to nothing falls back to ``HEAD``; a start that
    expands to nothing falls back to ``<expanded end>^1``.

    Returns:
        ``(start, end)``.
    """
    expanded_end = expand(end, environment)
    resolved_end = expanded_end if _is_set(expanded_end) else DEFAULT_REVISION
    expanded_start = expand(start, environment)
    resolved_start = expanded_start if _is_set(expanded_start) else f"{resolved_end}^1"
    return resolved_start, resolved_end


def parse_commit_metadata(fields_output: str, message: str) -> CommitMetadata:
    """Build a :class:`CommitMetadata` from ``git log`` output.

    Args:
        fields_output: Output of ``git log -n1 --pretty=METADATA_FORMAT``:
            hash, committer name, author name, committer email, and author
            email on consecutive lines.
        message: Output of ``git log -n1 --pretty=%B``.

    Raises:
        ParseError: If *fields_output* has fewer than five lines.
    """
    lines = fields_output.splitlines()
    if len(lines) < 5:
        raise ParseError(f"Expected 5 lines of commit metadata from git log, got {len(lines)}: {fields_output!r}")
    return CommitMetadata(
        hash=lines[0],
        committer_name=lines[1],
        author_name=lines[2],
        committer_email=lines[3],
        author_email=lines[4],
        commit_message=message,
    )


def resolve_commit_metadata(git: Git) -> CommitMetadata:
    """Query the metadata of the commit currently checked out by *git*."""
    fields_output = git.log("-n1", f"--pretty={METADATA_FORMAT}")
    message = git.log("-n1", f"--pretty={MESSAGE_FORMAT}")
    return parse_commit_metadata(fields_output, message)


# ################
# Implementation
# ################


def _is_set(value: str | None) -> TypeGuard[str]:
    return value is not None and bool(value.strip())
