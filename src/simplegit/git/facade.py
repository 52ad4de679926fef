# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""The subset of git operations SimpleGit needs for checkout and diff."""

from __future__ import annotations

import logging

from simplegit.git.config_file import add_fetch_refspec
from simplegit.git.credentials import Credential, ssh_transport
from simplegit.git.executor import CommandExecutor
from simplegit.git.host import Workspace

# ###############
# Public Interface
# ###############


class Git:
    """Typed git operations on one workspace.

    Only the operations that talk to a remote (clone, fetch, pull) run with
    *credential*; everything else is a plain local invocation.

    Args:
        git_executable: Path or name of the git binary.
        workspace: The workspace holding (or about to hold) the repository.
        log_sink: Receives command echoes and diagnostic output.  ``None``
            keeps git quiet.
        credential: Optional credential for network operations.

    Raises:
        ConfigurationError: If *git_executable* is blank.
    """

    def __init__(
        self,
        git_executable: str,
        workspace: Workspace,
        log_sink: logging.Logger | None = None,
        credential: Credential | None = None,
    ) -> None:
        self._executor = CommandExecutor(git_executable, workspace, log_sink)
        self._credential = credential

    @property
    def workspace(self) -> Workspace:
        return self._executor.workspace

    @property
    def log_sink(self) -> logging.Logger | None:
        return self._executor.log_sink

    def reset(self, *parameters: str) -> None:
        """Run ``git reset --hard`` followed by any extra *parameters*."""
        self._execute("reset", "--hard", *parameters)

    def clean(self) -> None:
        """Remove untracked files and directories, including ignored ones."""
        self._execute("clean", "-f", "-d", "-x")

    def pull(self, remote: str, branch: str) -> None:
        self._execute_remote("pull", remote, branch)

    def fetch(self, remote: str, *refspecs: str) -> None:
        """Fetch from *remote*.

        Blank refspecs are skipped; when none remain, git falls back to the
        remote's configured refspecs.
        """
        trimmed = [refspec.strip() for refspec in refspecs]
        self._execute_remote("fetch", remote, *[refspec for refspec in trimmed if refspec])

    def checkout(self, commitish: str) -> None:
        self._execute("checkout", commitish)

    def clone_repo(self, remote_url: str) -> None:
        """Clone *remote_url* directly into the workspace root."""
        self._execute_remote("clone", remote_url, ".")

    def remote_get_url(self, remote: str) -> str | None:
        """Return the URL of *remote*, or ``None`` if there is no such remote."""
        tokens = self._execute("remote", "-v").split()
        # each line reads "<name> <url> (fetch|push)"
        for name, url, _ in zip(tokens[0::3], tokens[1::3], tokens[2::3]):
            if name == remote:
                return url
        return None

    def remote_set_url(self, remote: str, url: str) -> None:
        self._execute("remote", "set-url", remote, url)

    def add_fetch(self, remote: str, refspec: str) -> None:
        """Add *refspec* to the fetch refspecs configured for *remote*."""
        if self.log_sink is not None:
            self.log_sink.info("adding refspec '%s' to remote '%s'", refspec, remote)
        add_fetch_refspec(self.workspace.host, self.workspace.git_dir, remote, refspec)

    def show_head(self) -> str:
        return self._execute("log", "-n1")

    def log(self, *parameters: str) -> str:
        return self._execute("log", *parameters)

    def what_changed(
        self,
        revision_range_start: str,
        revision_range_end: str,
        expand_merges: bool,
        include_merge_commits: bool,
    ) -> str:
        """Return the raw ``git whatchanged`` text for ``start..end``.

        Args:
            revision_range_start: Exclusive start of the range.
            revision_range_end: Inclusive end of the range.
            expand_merges: When False, ``-m`` is passed so merges are shown
                against each parent in collapsed form.
            include_merge_commits: When True, only first-parent history is
                traversed.
        """
        args = ["whatchanged"]
        if include_merge_commits:
            args.append("--first-parent")
        if not expand_merges:
            args.append("-m")
        args.extend(["--pretty=raw", "--no-abbrev", "-M", f"{revision_range_start}..{revision_range_end}"])

        result = self._execute(*args)
        if self.log_sink is not None:
            self.log_sink.info("%s", result)
        return result

    def rev_parse(self, parameters: str) -> None:
        """Log ``git rev-parse <parameters>``.  Does nothing without a log sink."""
        if self.log_sink is None:
            return
        self.log_sink.info("%s", self._execute("rev-parse", parameters))

    def _execute(self, *args: str) -> str:
        return self._executor.execute(args).output

    def _execute_remote(self, *args: str) -> str:
        with ssh_transport(self.workspace.host, self._credential) as env:
            return self._executor.execute(args, env=env).output
