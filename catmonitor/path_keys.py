"""Hierarchical path keys shared by the context linker and the status panel.

A path is a sequence of segments. The notations accept ``:`` and ``.``
interchangeably as separators and ignore whitespace, so every comparison
goes through :func:`normalize` first and then works on ``:`` boundaries.
"""
from __future__ import annotations

import re

SEPARATOR = ":"

_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize(value: str | None) -> str:
    """Unify separators to ``:`` and strip all whitespace."""
    if not value:
        return ""
    return _WHITESPACE_PATTERN.sub("", value.replace(".", SEPARATOR))


def is_prefix_of(prefix: str, path: str) -> bool:
    """True when ``prefix`` is ``path`` itself or one of its ancestors."""
    if path == prefix:
        return True
    return path.startswith(prefix + SEPARATOR)


def parent(path: str) -> str | None:
    head, sep, _ = path.rpartition(SEPARATOR)
    if not sep:
        return None
    return head


def are_siblings_or_equal(a: str, b: str) -> bool:
    if a == b:
        return True
    parent_a = parent(a)
    parent_b = parent(b)
    return parent_a is not None and parent_b is not None and parent_a == parent_b
