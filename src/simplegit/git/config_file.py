# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""In-place edits of a repository's ``.git/config`` file."""

from pathlib import Path

from simplegit.git.errors import SimpleGitError
from simplegit.git.host import Host

# ###############
# Public Interface
# ###############


def add_fetch_refspec(host: Host, git_dir: Path, remote: str, refspec: str) -> None:
    """Add a ``fetch = <refspec>`` line to the ``[remote "<remote>"]`` section.

    The config file is read and replaced through *host*, so the edit happens
    on the machine that owns the repository.  Any existing line identical to
    the new one is dropped, so the refspec appears exactly once, directly
    under the section header.  If the remote has no section, the file is
    rewritten unchanged.

    Args:
        host: The host owning *git_dir*.
        git_dir: The repository's ``.git`` directory.
        remote: Remote name, e.g. ``origin``.
        refspec: The fetch refspec to add.

    Raises:
        SimpleGitError: If the config file cannot be read or replaced.
    """
    config_file = git_dir / "config"
    line_to_add = f"fetch = {refspec}"
    section_header = f'[remote "{remote}"]'

    try:
        lines = host.read_file(config_file).splitlines()
    except OSError as exc:
        raise SimpleGitError(f"Cannot read git config file '{config_file}': {exc}") from exc

    rewritten: list[str] = []
    for line in lines:
        trimmed = line.strip()
        if trimmed != line_to_add:
            rewritten.append(line)
        if trimmed == section_header:
            rewritten.append(f"\t{line_to_add}")

    try:
        host.replace_file(config_file, "\n".join(rewritten) + "\n")
    except OSError as exc:
        raise SimpleGitError(f"could not replace git config file: {config_file}: {exc}") from exc
