# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Credential store and short-lived SSH key provisioning for git transports."""

from __future__ import annotations

import shlex
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Literal, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from simplegit.git.errors import ConfigurationError
from simplegit.git.host import Host

# ###############
# Public Interface
# ###############

GIT_SSH_VARIABLE = "GIT_SSH"

_T = TypeVar("_T")


class CredentialStoreError(ConfigurationError):
    """Raised when the credential store file cannot be read or is invalid."""


class SSHPrivateKeyCredential(BaseModel):
    """An SSH private key used for authenticated fetch, pull, and clone."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    kind: Literal["ssh-private-key"] = "ssh-private-key"
    id: str
    description: str = ""
    username: str = ""
    private_keys: list[str] = Field(alias="private-keys", min_length=1)


class UsernamePasswordCredential(BaseModel):
    """A username/password pair.  Stored but never used for git transports."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    kind: Literal["username-password"] = "username-password"
    id: str
    description: str = ""
    username: str
    password: str


Credential = Annotated[
    SSHPrivateKeyCredential | UsernamePasswordCredential,
    Field(discriminator="kind"),
]


class CredentialStore(BaseModel):
    """All credentials known to SimpleGit."""

    model_config = ConfigDict(extra="forbid")

    credentials: list[Credential] = Field(default_factory=list)


def load_credential_store(path: Path) -> CredentialStore:
    """Load and validate a credential store file.

    An empty file is treated as a store without credentials.

    Raises:
        CredentialStoreError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CredentialStoreError(f"Cannot read credential store '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise CredentialStoreError(f"Invalid YAML in credential store '{path}': {exc}") from exc

    if data is None:
        data = {}

    try:
        return CredentialStore.model_validate(data)
    except ValidationError as exc:
        raise CredentialStoreError(f"Invalid credential store '{path}': {exc}") from exc


def find_ssh_credential(store: CredentialStore, credential_id: str | None) -> SSHPrivateKeyCredential | None:
    """Return the SSH private-key credential with *credential_id*, if any.

    Credentials of any other kind never match.
    """
    if not credential_id:
        return None
    for credential in store.credentials:
        if isinstance(credential, SSHPrivateKeyCredential) and credential.id == credential_id:
            return credential
    return None


def list_ssh_credentials(store: CredentialStore) -> list[tuple[str, str]]:
    """Return ``(id, description)`` for every SSH private-key credential."""
    return [
        (credential.id, credential.description)
        for credential in store.credentials
        if isinstance(credential, SSHPrivateKeyCredential)
    ]


@contextmanager
def ssh_transport(host: Host, credential: Credential | None) -> Iterator[dict[str, str] | None]:
    """Provide a git transport environment that authenticates with *credential*.

    For an SSH private-key credential, the key is written to a temporary file
    readable only by its owner, next to a wrapper script that runs ``ssh -i``
    with that key.  The yielded mapping points ``GIT_SSH`` at the script.  On
    exit the script is deleted first, then the key, whatever happened inside
    the block.

    Any other credential, or none, yields ``None``.
    """
    if not isinstance(credential, SSHPrivateKeyCredential):
        yield None
        return

    with _temp_file(host, _key_material(credential), "ssh", ".pem", 0o700) as key_path:
        wrapper = f'#!/bin/bash\nssh -i {shlex.quote(key_path)} "$@"\n'
        with _temp_file(host, wrapper, "gitSsh", ".sh", 0o755) as script_path:
            yield {GIT_SSH_VARIABLE: script_path}


def with_credential(
    host: Host,
    credential: Credential | None,
    operation: Callable[[dict[str, str] | None], _T],
) -> _T:
    """Call *operation* with the transport environment for *credential*."""
    with ssh_transport(host, credential) as env:
        return operation(env)


# ################
# Implementation
# ################


@contextmanager
def _temp_file(host: Host, content: str, prefix: str, suffix: str, mode: int) -> Iterator[str]:
    path = host.create_temp_file(prefix, suffix, content, mode)
    try:
        yield path
    finally:
        host.delete_file(path)


def _key_material(credential: SSHPrivateKeyCredential) -> str:
    # ssh rejects key files without a final newline
    key = credential.private_keys[0]
    return key if key.endswith("\n") else key + "\n"
