"""``$variable`` substitution for template text and command strings."""

from __future__ import annotations

import re
from typing import Mapping

__all__ = ["IDENTIFIER_CHARS", "substitute"]


IDENTIFIER_CHARS = "A-Za-z0-9_"

# An empty run is a solitary ``$`` and is emitted as-is.
_TOKEN_PATTERN = re.compile(rf"\$(?P<name>[{IDENTIFIER_CHARS}]*)")


def substitute(text: str, variables: Mapping[str, str]) -> str:
    """Replace ``$name`` tokens in ``text`` with values from ``variables``.

    The scan runs once from left to right. After each ``$`` the longest run of
    ASCII letters, digits and underscores is taken as the variable name. Known
    names are replaced by their value verbatim, without substituting again
    inside the value. Unknown names and a ``$`` that is not followed by an
    identifier character are copied unchanged, so the function never fails.

    There is no escape syntax: a literal ``$name`` cannot be written when
    ``name`` is a known variable.
    """

    def replace(match: re.Match[str]) -> str:
        name = match.group("name")
        if name and name in variables:
            return variables[name]
        return match.group(0)

    return _TOKEN_PATTERN.sub(replace, text)
