"""Request body helpers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence


def remove_nil(value: object) -> object:
    """Drop ``None`` entries from mappings recursively, including maps left empty."""

    if isinstance(value, Mapping):
        result: dict[object, object] = {}
        for key, item in value.items():
            if item is None:
                continue
            cleaned = remove_nil(item)
            if isinstance(cleaned, dict) and not cleaned:
                continue
            result[key] = cleaned
        return result
    if isinstance(value, Sequence) and not isinstance(value, str | bytes):
        return [remove_nil(item) for item in value]
    return value


def ignore_empty[T](value: T | None) -> T | None:
    """Map empty strings and empty collections to ``None`` so they are left out.

    ``False`` and ``0`` are real values and are kept.
    """

    if value is None:
        return None
    if isinstance(value, str | bytes | Mapping | Sequence | set | frozenset) and not value:
        return None
    return value
