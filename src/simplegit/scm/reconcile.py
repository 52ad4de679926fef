# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Brings a workspace to the requested revision of a remote repository.

A checkout either reuses the repository already in the workspace or clones
a fresh one:

1. With an existing ``.git``, local changes and untracked files are
   discarded, ``origin`` is repointed if the remote URL changed, and the
   requested refspecs are fetched before checking out the end revision.
   If any of this fails, the workspace is wiped.
2. Without a ``.git`` (initially, after a wipe, or after the clear-workspace
   option), the remote is cloned into the workspace, fetched, and checked
   out at the end revision.

A failing attempt is retried from an empty workspace until the retry budget
is spent.  Once the workspace is at the end revision, the commit metadata
and the ``whatchanged`` text of the configured range are returned.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from simplegit.git.credentials import Credential
from simplegit.git.errors import CheckoutError, ExecutionError, TransientRepositoryError
from simplegit.git.facade import Git
from simplegit.git.host import Workspace
from simplegit.scm.environment import expand
from simplegit.scm.metadata import CommitMetadata, resolve_commit_metadata, resolve_revision_range
from simplegit.scm.spec import RepositorySpec

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

ORIGIN = "origin"


@dataclass(frozen=True)
class CheckoutResult:
    """Everything a checkout hands back to the build host.

    Attributes:
        metadata: The commit the workspace ended up at.
        changeset: Raw ``git whatchanged`` text for the configured range.
        head_summary: Output of ``git log -n1`` for the checked-out commit.
    """

    metadata: CommitMetadata
    changeset: str
    head_summary: str

    @property
    def variables(self) -> dict[str, str]:
        return self.metadata.to_variables()


def checkout(
    spec: RepositorySpec,
    workspace: Workspace,
    *,
    git_executable: str,
    environment: Mapping[str, str],
    credential: Credential | None = None,
    retry_count: int = 1,
    log_sink: logging.Logger | None = None,
) -> CheckoutResult:
    """Check out *spec* into *workspace*.

    Args:
        spec: The repository, revision range, and options to check out.
        workspace: Target workspace.  Its contents may be deleted.
        git_executable: Path or name of the git binary.
        environment: Build environment snapshot used to expand ``$NAME``
            references in the remote URL, refspecs, and revision range.
        credential: Credential for clone, fetch, and pull.
        retry_count: Number of attempts before giving up.  Values below 1
            are treated as 1.
        log_sink: Logger receiving progress output.  Defaults to this
            module's logger.

    Returns:
        The checked-out commit's metadata and the changeset of the range.

    Raises:
        ConfigurationError: If *git_executable* is blank.  Raised before the
            workspace is touched.
        CheckoutError: If every attempt failed.
        ParseError: If the commit metadata could not be parsed.
        ExecutionError: If a git command failed after the workspace was
            reconciled.
    """
    log = log_sink or logger
    log.info("SimpleGit: checking out")

    git = Git(
        git_executable,
        workspace,
        log_sink=log if spec.git_logging else None,
        credential=credential,
    )

    remote_url = expand(spec.remote_url, environment) or ""
    refspecs = _expand_refspecs(spec.ref_spec, environment)
    revision_range_start, revision_range_end = resolve_revision_range(
        spec.revision_range_start, spec.revision_range_end, environment
    )

    if spec.clear_workspace:
        log.info("Clear Workspace enabled: deleting contents of %s.", workspace.path)
        workspace.delete_contents()

    attempts = max(retry_count, 1)
    for attempt in range(1, attempts + 1):
        try:
            _reconcile(git, workspace, remote_url, refspecs, revision_range_end, log)
            break
        except ExecutionError as exc:
            _log_failure(log, f"Checkout attempt {attempt} of {attempts} failed.", exc)
            if attempt == attempts:
                raise CheckoutError(f"Checkout of '{remote_url}' failed after {attempts} attempt(s): {exc}") from exc
            log.info("Deleting contents of %s before retrying.", workspace.path)
            workspace.delete_contents()

    head_summary = git.show_head()
    log.info("%s", head_summary)

    metadata = resolve_commit_metadata(git)
    changeset = git.what_changed(
        revision_range_start,
        revision_range_end,
        spec.expand_merges,
        spec.include_merge_commits,
    )
    return CheckoutResult(metadata=metadata, changeset=changeset, head_summary=head_summary)


# ################
# Implementation
# ################

_BANNER = "----------------------"


def _expand_refspecs(ref_spec: Sequence[str], environment: Mapping[str, str]) -> list[str]:
    """Expand the refspec lines as one block, so a variable may hold several lines."""
    expanded = expand("\n".join(ref_spec), environment) or ""
    return [line for line in expanded.split("\n") if line.strip()]


def _reconcile(
    git: Git,
    workspace: Workspace,
    remote_url: str,
    refspecs: list[str],
    revision: str,
    log: logging.Logger,
) -> None:
    """Run one attempt: update the existing repository, else clone a new one."""
    if workspace.has_repository():
        try:
            _update_existing(git, remote_url, refspecs, revision)
        except TransientRepositoryError as exc:
            _log_failure(
                log,
                "An error has occurred while cleaning up existing repository. "
                "Cleaning workspace and checking out clean.",
                exc.cause,
            )
            workspace.delete_contents()

    # not an else: the branch above wipes the workspace when it fails
    if not workspace.has_repository():
        _clone_fresh(git, remote_url, refspecs, revision)


def _update_existing(git: Git, remote_url: str, refspecs: list[str], revision: str) -> None:
    try:
        git.reset()
        git.clean()

        current_url = git.remote_get_url(ORIGIN)
        if current_url is not None and current_url != remote_url:
            git.remote_set_url(ORIGIN, remote_url)

        git.fetch(ORIGIN, *refspecs)
        git.checkout(revision)
        git.rev_parse("HEAD")
    except ExecutionError as exc:
        raise TransientRepositoryError(exc) from exc


def _clone_fresh(git: Git, remote_url: str, refspecs: list[str], revision: str) -> None:
    git.clone_repo(remote_url)
    git.fetch(ORIGIN, *refspecs)
    git.checkout(revision)
    git.rev_parse("HEAD")


def _log_failure(log: logging.Logger, message: str, exc: ExecutionError) -> None:
    log.warning(_BANNER)
    log.warning(message)
    log.warning(_BANNER)
    log.warning("Command: %s", " ".join(exc.command))
    log.warning("Exit code: %d", exc.exit_code)
    log.warning("%s", exc.output)
    log.warning(_BANNER)
