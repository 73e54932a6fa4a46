"""String case conversion used when deriving service and function names.

Words are split the way the JS ``change-case`` family splits them, so names
generated here match those produced by existing serverless tooling:

* runs of characters that are not letters or digits (including ``_``)
  separate words and are dropped;
* a lowercase letter or digit followed by an uppercase letter starts a new
  word (``userId`` -> ``user id``);
* an uppercase run followed by a capitalised word is split before the last
  capital (``HTTPServer`` -> ``http server``);
* every word is lowercased.

Example::

    >>> kebab_case("UserProfiles")
    'user-profiles'
    >>> dot_case("orderStatus")
    'order.status'
    >>> pascal_case("user_id")
    'UserId'
"""

from __future__ import annotations

import re
from typing import Final

_LOWER_UPPER_PATTERN: Final = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_PATTERN: Final = re.compile(r"([A-Z])([A-Z][a-z])")
_SEPARATOR_PATTERN: Final = re.compile(r"[\W_]+")


def split_words(value: str) -> list[str]:
    """Split *value* into lowercase words."""
    value = _LOWER_UPPER_PATTERN.sub(r"\1 \2", value)
    value = _ACRONYM_PATTERN.sub(r"\1 \2", value)
    return [word.lower() for word in _SEPARATOR_PATTERN.split(value) if word]


def kebab_case(value: str) -> str:
    """Convert *value* to ``kebab-case``."""
    return "-".join(split_words(value))


def dot_case(value: str) -> str:
    """Convert *value* to ``dot.case``."""
    return ".".join(split_words(value))


def pascal_case(value: str) -> str:
    """Convert *value* to ``PascalCase``.

    A word starting with a digit is joined with ``_`` so that
    ``"version 2"`` becomes ``Version_2`` rather than ``Version2``.
    """
    parts: list[str] = []
    for index, word in enumerate(split_words(value)):
        if index and word[0].isdigit():
            parts.append("_")
        parts.append(word[0].upper() + word[1:])
    return "".join(parts)
