# Copyright 2026 SimpleGit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Expansion of ``$NAME`` and ``${NAME}`` references against a build environment."""

import re
from collections.abc import Mapping

# ###############
# Public Interface
# ###############

_VARIABLE_RE = re.compile(r"\$(?:\{([A-Za-z0-9_.]+)\}|([A-Za-z0-9_]+))")


def expand(value: str | None, environment: Mapping[str, str]) -> str | None:
    """Replace variable references in *value* with their values from *environment*.

    References to names missing from *environment* are left exactly as written.
    """
    if value is None:
        return None

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1) or match.group(2)
        return environment.get(name, match.group(0))

    return _VARIABLE_RE.sub(_replace, value)
