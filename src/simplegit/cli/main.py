# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the SimpleGit command-line interface."""

import argparse
import logging
import os
import sys
from pathlib import Path

import yaml
from yachalk import chalk

from simplegit.config import SETTINGS_FILE_NAME, Settings, load_settings
from simplegit.git.errors import SimpleGitError

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the SimpleGit CLI."""
    parser = argparse.ArgumentParser(
        prog="simplegit",
        description="SimpleGit - reconcile a build workspace with a remote git repository",
    )
    parser.add_argument(
        "--settings",
        default=None,
        help=f"Path to the settings file (default: ./{SETTINGS_FILE_NAME})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # checkout subcommand
    checkout_parser = subparsers.add_parser(
        "checkout",
        help="Check out a job's repository into a workspace",
        description=(
            "Bring the workspace to the end of the job's revision range, then write "
            "the changeset of the range and the commit variables."
        ),
    )
    checkout_parser.add_argument(
        "workspace",
        help="Workspace directory to check out into",
    )
    checkout_parser.add_argument(
        "--job",
        required=True,
        help="YAML file describing the repository, revision range, and options",
    )
    checkout_parser.add_argument(
        "--changelog",
        default=None,
        help="File receiving the raw whatchanged output of the revision range",
    )
    checkout_parser.add_argument(
        "--variables",
        default=None,
        help="YAML file receiving the exported commit variables (default: stdout)",
    )

    # credentials subcommand
    subparsers.add_parser(
        "credentials",
        help="List the SSH private-key credentials available to jobs",
        description="List the id and description of every SSH private-key credential.",
    )

    # add-fetch subcommand
    add_fetch_parser = subparsers.add_parser(
        "add-fetch",
        help="Add a fetch refspec to a remote of a workspace repository",
        description="Add a 'fetch = <refspec>' line to a remote section of .git/config.",
    )
    add_fetch_parser.add_argument("workspace", help="Workspace directory holding the repository")
    add_fetch_parser.add_argument("remote", help="Remote name, e.g. origin")
    add_fetch_parser.add_argument("refspec", help="Fetch refspec to add")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _configure_logging(args.debug)
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

_logger = logging.getLogger("simplegit")


def _configure_logging(debug: bool) -> None:
    """Send SimpleGit log records to stderr as plain messages."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    _logger.setLevel(logging.DEBUG if debug else logging.INFO)
    if not _logger.handlers:
        _logger.addHandler(handler)


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    try:
        if args.command == "checkout":
            return _cmd_checkout(args)
        if args.command == "credentials":
            return _cmd_credentials(args)
        if args.command == "add-fetch":
            return _cmd_add_fetch(args)
    except SimpleGitError as exc:
        print(chalk.red(f"Error: {exc}"), file=sys.stderr)
        return 1
    return 0


def _load_settings(args: argparse.Namespace) -> Settings:
    settings_path = Path(args.settings) if args.settings else Path.cwd() / SETTINGS_FILE_NAME
    return load_settings(settings_path)


def _cmd_checkout(args: argparse.Namespace) -> int:
    """Handle the checkout subcommand."""
    from simplegit.git.credentials import CredentialStore, find_ssh_credential, load_credential_store
    from simplegit.git.host import Workspace
    from simplegit.scm.reconcile import checkout
    from simplegit.scm.spec import load_repository_spec

    directory = Path(args.workspace).resolve()
    if not directory.is_dir():
        print(chalk.red(f"Error: workspace '{directory}' does not exist."), file=sys.stderr)
        return 1

    settings = _load_settings(args)
    spec = load_repository_spec(Path(args.job))

    credential = None
    if spec.credentials:
        store = CredentialStore()
        if settings.credentials_file is not None:
            store = load_credential_store(settings.credentials_file)
        credential = find_ssh_credential(store, spec.credentials)
        if credential is None:
            _logger.warning("No SSH private-key credential '%s' found; continuing without one.", spec.credentials)

    result = checkout(
        spec,
        Workspace(directory),
        git_executable=settings.executable_path,
        environment=dict(os.environ),
        credential=credential,
        retry_count=settings.retry_count,
    )

    if args.changelog:
        changelog = Path(args.changelog)
        if changelog.exists():
            changelog.unlink()
        changelog.write_text(result.changeset, encoding="utf-8")

    variables = yaml.safe_dump(result.variables, default_flow_style=False, sort_keys=True)
    if args.variables:
        Path(args.variables).write_text(variables, encoding="utf-8")
    else:
        print(variables, end="")

    print(chalk.green(f"Checked out {result.metadata.hash[:8]} into '{directory}'."), file=sys.stderr)
    return 0


def _cmd_credentials(args: argparse.Namespace) -> int:
    """Handle the credentials subcommand."""
    from simplegit.git.credentials import list_ssh_credentials, load_credential_store

    settings = _load_settings(args)

    print("None")
    if settings.credentials_file is None:
        return 0

    store = load_credential_store(settings.credentials_file)
    for credential_id, description in list_ssh_credentials(store):
        print(f"{credential_id}: {description}" if description else credential_id)
    return 0


def _cmd_add_fetch(args: argparse.Namespace) -> int:
    """Handle the add-fetch subcommand."""
    from simplegit.git.facade import Git
    from simplegit.git.host import Workspace

    directory = Path(args.workspace).resolve()
    workspace = Workspace(directory)
    if not workspace.has_repository():
        print(chalk.red(f"Error: no git repository found at '{directory}'."), file=sys.stderr)
        return 1

    settings = _load_settings(args)
    git = Git(settings.executable_path, workspace, log_sink=_logger)
    git.add_fetch(args.remote, args.refspec)
    print(f"Added refspec '{args.refspec}' to remote '{args.remote}'.")
    return 0
