# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Git process execution, credentials, and repository operations."""

from simplegit.git.config_file import add_fetch_refspec
from simplegit.git.credentials import (
    GIT_SSH_VARIABLE,
    Credential,
    CredentialStore,
    CredentialStoreError,
    SSHPrivateKeyCredential,
    UsernamePasswordCredential,
    find_ssh_credential,
    list_ssh_credentials,
    load_credential_store,
    ssh_transport,
    with_credential,
)
from simplegit.git.errors import (
    CheckoutError,
    ConfigurationError,
    ExecutionError,
    ParseError,
    SimpleGitError,
    TransientRepositoryError,
)
from simplegit.git.executor import CommandExecutor, CommandResult
from simplegit.git.facade import Git
from simplegit.git.host import GIT_DIR_NAME, Host, LocalHost, Workspace

__all__ = [
    "CheckoutError",
    "CommandExecutor",
    "CommandResult",
    "ConfigurationError",
    "Credential",
    "CredentialStore",
    "CredentialStoreError",
    "ExecutionError",
    "GIT_DIR_NAME",
    "GIT_SSH_VARIABLE",
    "Git",
    "Host",
    "LocalHost",
    "ParseError",
    "SSHPrivateKeyCredential",
    "SimpleGitError",
    "TransientRepositoryError",
    "UsernamePasswordCredential",
    "Workspace",
    "add_fetch_refspec",
    "find_ssh_credential",
    "list_ssh_credentials",
    "load_credential_store",
    "ssh_transport",
    "with_credential",
]
