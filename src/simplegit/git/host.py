# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Execution hosts and workspace handles.

Every filesystem and process operation SimpleGit performs goes through a
:class:`Host`.  The only implementation shipped here is :class:`LocalHost`,
which acts on the machine running SimpleGit; a remote backend only has to
provide the same operations.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

# ###############
# Public Interface
# ###############

GIT_DIR_NAME = ".git"


class Host(Protocol):
    """The operations SimpleGit needs from the machine that owns a workspace."""

    def run(
        self,
        command: Sequence[str],
        cwd: Path,
        env: Mapping[str, str] | None = None,
    ) -> tuple[int, str]:
        """Run *command* in *cwd* and return its exit code and merged output."""
        ...

    def create_temp_file(self, prefix: str, suffix: str, content: str, mode: int) -> str:
        """Write *content* to a new temporary file with permission bits *mode*."""
        ...

    def delete_file(self, path: str) -> None:
        """Delete the file at *path* if it exists."""
        ...

    def exists(self, path: Path) -> bool:
        """Return True if *path* exists."""
        ...

    def delete_contents(self, directory: Path) -> None:
        """Delete everything inside *directory*, keeping the directory itself."""
        ...

    def read_file(self, path: Path) -> str:
        """Return the text of the file at *path*."""
        ...

    def replace_file(self, path: Path, content: str) -> None:
        """Replace the file at *path* with *content*, keeping its permission bits."""
        ...


class LocalHost:
    """A :class:`Host` acting on the local machine."""

    def run(
        self,
        command: Sequence[str],
        cwd: Path,
        env: Mapping[str, str] | None = None,
    ) -> tuple[int, str]:
        """Run *command* and block until it exits.

        stderr is redirected into stdout so that the returned text keeps the
        order in which the process emitted it.  Bytes that are not valid
        UTF-8 are replaced with U+FFFD.  *env* is applied on top of the
        inherited environment.

        Raises:
            FileNotFoundError: If the executable or *cwd* does not exist.
        """
        process_env = None
        if env:
            process_env = {**os.environ, **env}
        result = subprocess.run(
            list(command),
            cwd=str(cwd),
            env=process_env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
        return result.returncode, result.stdout

    def create_temp_file(self, prefix: str, suffix: str, content: str, mode: int) -> str:
        fd, path = tempfile.mkstemp(prefix=prefix, suffix=suffix)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
            os.chmod(path, mode)
        except OSError:
            Path(path).unlink(missing_ok=True)
            raise
        return path

    def delete_file(self, path: str) -> None:
        Path(path).unlink(missing_ok=True)

    def exists(self, path: Path) -> bool:
        return path.exists()

    def delete_contents(self, directory: Path) -> None:
        if not directory.is_dir():
            return
        for child in directory.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()

    def read_file(self, path: Path) -> str:
        # surrogateescape lets bytes that are not UTF-8 survive a rewrite
        return path.read_text(encoding="utf-8", errors="surrogateescape")

    def replace_file(self, path: Path, content: str) -> None:
        """Write *content* next to *path*, delete *path*, then move the new file in.

        Raises:
            OSError: If the new file cannot be written or *path* cannot be
                deleted.  The temporary file is removed and *path* is left
                as it was.
        """
        fd, temp_path = tempfile.mkstemp(prefix="temp", suffix=path.name, dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape") as handle:
                handle.write(content)
            shutil.copymode(path, temp_path)
            path.unlink()
        except Exception:
            os.remove(temp_path)
            raise
        shutil.move(temp_path, path)


@dataclass(frozen=True)
class Workspace:
    """A build workspace directory on a :class:`Host`.

    Attributes:
        path: The workspace root.  Git commands run with this as their
            working directory.
        host: The host owning *path*.
    """

    path: Path
    host: Host = field(default_factory=LocalHost)

    @property
    def git_dir(self) -> Path:
        return self.path / GIT_DIR_NAME

    def has_repository(self) -> bool:
        """Return True if a ``.git`` entry exists directly inside the workspace."""
        return self.host.exists(self.git_dir)

    def delete_contents(self) -> None:
        self.host.delete_contents(self.path)
