# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Workspace reconciliation for build checkouts."""

from simplegit.scm.environment import expand
from simplegit.scm.metadata import (
    DEFAULT_REVISION,
    METADATA_FORMAT,
    VARIABLE_PREFIX,
    CommitMetadata,
    default_revision_range,
    parse_commit_metadata,
    resolve_commit_metadata,
    resolve_revision_range,
)
from simplegit.scm.reconcile import ORIGIN, CheckoutResult, checkout
from simplegit.scm.spec import JobConfigError, RepositorySpec, load_repository_spec

__all__ = [
    "CheckoutResult",
    "CommitMetadata",
    "DEFAULT_REVISION",
    "JobConfigError",
    "METADATA_FORMAT",
    "ORIGIN",
    "RepositorySpec",
    "VARIABLE_PREFIX",
    "checkout",
    "default_revision_range",
    "expand",
    "load_repository_spec",
    "parse_commit_metadata",
    "resolve_commit_metadata",
    "resolve_revision_range",
]
