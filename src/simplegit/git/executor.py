# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Runs the git executable inside a workspace and interprets its exit code."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from simplegit.git.errors import ConfigurationError, ExecutionError
from simplegit.git.host import Workspace

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class CommandResult:
    """The merged stdout/stderr text of a successful git invocation."""

    output: str
    exit_code: int = 0


class CommandExecutor:
    """Executes git commands rooted at a workspace.

    Args:
        git_executable: Path or name of the git binary.  Must not be blank.
        workspace: The workspace used as working directory for every command.
        log_sink: When set, every command line is echoed to it before it runs.

    Raises:
        ConfigurationError: If *git_executable* is blank.
    """

    def __init__(
        self,
        git_executable: str,
        workspace: Workspace,
        log_sink: logging.Logger | None = None,
    ) -> None:
        if not git_executable or not git_executable.strip():
            raise ConfigurationError(
                "No git executable path is specified. Set 'executable-path' in the SimpleGit settings."
            )
        self.git_executable = git_executable
        self.workspace = workspace
        self.log_sink = log_sink

    def execute(
        self,
        args: Sequence[str],
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        """Run ``git <args>`` in the workspace and wait for it to finish.

        Args:
            args: Arguments passed to git, without the executable itself.
            env: Variables set on top of the inherited environment.

        Returns:
            The full captured output of a command that exited with code 0.

        Raises:
            ExecutionError: If the command exits with any other code.
            ConfigurationError: If the executable cannot be started.
        """
        command = [self.git_executable, *args]
        if self.log_sink is not None:
            self.log_sink.info("\t- Executing: `%s`", " ".join(command))

        try:
            exit_code, output = self.workspace.host.run(command, cwd=self.workspace.path, env=env)
        except FileNotFoundError as exc:
            raise ConfigurationError(f"Cannot execute '{self.git_executable}': {exc}") from exc

        if exit_code != 0:
            raise ExecutionError(command, exit_code, output)
        return CommandResult(output=output, exit_code=exit_code)
