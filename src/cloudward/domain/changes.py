"""Typed replacements for key-based "has this attribute changed" lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import ImportIdError

if TYPE_CHECKING:
    from collections.abc import Iterable


def changed_fields(old: object, new: object, names: Iterable[str]) -> frozenset[str]:
    """Return the attribute names whose values differ between ``old`` and ``new``."""

    return frozenset(name for name in names if getattr(old, name) != getattr(new, name))


def has_changes(old: object, new: object, *names: str) -> bool:
    return bool(changed_fields(old, new, names))


def split_import_id(value: str, *parts: str) -> tuple[str, ...]:
    """Split ``value`` on ``/`` into exactly ``len(parts)`` non-empty segments.

    ``parts`` names the segments and is only used to build the error message.
    """

    segments = value.split("/")
    if len(segments) != len(parts) or not all(segments):
        expected = "/".join(f"<{part}>" for part in parts)
        raise ImportIdError(
            f"invalid format specified for import ID, want '{expected}', but got '{value}'"
        )
    return tuple(segments)
