# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error types raised while driving the git executable."""

from collections.abc import Sequence

# ###############
# Public Interface
# ###############


class SimpleGitError(Exception):
    """Base class for every error raised by SimpleGit."""


class ExecutionError(SimpleGitError):
    """Raised when a git subprocess exits with a non-zero code.

    Attributes:
        command: The full command line that was executed.
        exit_code: The exit code reported by the subprocess.
        output: The complete merged stdout/stderr text of the subprocess.
    """

    def __init__(self, command: Sequence[str], exit_code: int, output: str) -> None:
        self.command = list(command)
        self.exit_code = exit_code
        self.output = output
        super().__init__(f"Git exited with a value of: {exit_code}. {output.strip()}")


class ConfigurationError(SimpleGitError):
    """Raised when SimpleGit is not configured well enough to run at all."""


class ParseError(SimpleGitError):
    """Raised when git output does not have the expected shape."""


class TransientRepositoryError(SimpleGitError):
    """Raised when an existing repository could not be brought up to date.

    The engine recovers from this error by wiping the workspace and cloning
    again, so it never escapes a checkout.
    """

    def __init__(self, cause: ExecutionError) -> None:
        self.cause = cause
        super().__init__(f"Existing repository could not be reconciled: {cause}")


class CheckoutError(SimpleGitError):
    """Raised when a checkout fails on every attempt of its retry budget."""
