"""Key normalization and value predicates used by the checker."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Sized
from types import UnionType
from typing import Any, TypeAlias

TypePredicate: TypeAlias = Callable[[Any], bool]
TypeDescriptor: TypeAlias = type | UnionType | TypePredicate

_NESTED_KEY_CONTAINERS: tuple[type, ...] = (list, tuple, set, frozenset)


def normalize_keys(keys: Iterable[object] | object) -> tuple[Hashable, ...]:
    """Flatten nested key sequences, drop ``None`` and deduplicate in first-seen order.

    A bare key (string or any non-container value) is treated as a one-key filter.
    """

    seen: dict[Hashable, None] = {}
    for key in _flatten(keys):
        if key is None:
            continue
        seen.setdefault(key, None)
    return tuple(seen)


def _flatten(value: object) -> Iterable[Any]:
    if isinstance(value, _NESTED_KEY_CONTAINERS):
        for item in value:
            yield from _flatten(item)
    else:
        yield value


def is_blank(value: object, *, whitespace_is_blank: bool = False) -> bool:
    """Return whether ``value`` counts as blank.

    ``None``, empty text, empty bytes and empty sized containers are blank.
    ``False`` and ``0`` are not. Whitespace-only text is blank only when
    ``whitespace_is_blank`` is set.
    """

    if value is None:
        return True
    if isinstance(value, str):
        return not (value.strip() if whitespace_is_blank else value)
    if isinstance(value, (bytes, bytearray)):
        return not (bytes(value).strip() if whitespace_is_blank else value)
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def matches_descriptor(value: object, descriptor: TypeDescriptor) -> bool:
    if isinstance(descriptor, (type, UnionType)):
        return isinstance(value, descriptor)
    return bool(descriptor(value))


def validate_descriptors(descriptors: Iterable[object]) -> tuple[TypeDescriptor, ...]:
    validated: list[TypeDescriptor] = []
    for descriptor in descriptors:
        if not isinstance(descriptor, (type, UnionType)) and not callable(descriptor):
            raise TypeError(
                "type descriptors must be classes, unions or predicates, "
                f"got {type(descriptor).__name__}"
            )
        validated.append(descriptor)
    if not validated:
        raise ValueError("at least one type descriptor is required")
    return tuple(validated)


def descriptor_name(descriptor: TypeDescriptor) -> str:
    if isinstance(descriptor, UnionType):
        return repr(descriptor)
    name = getattr(descriptor, "__name__", None)
    if isinstance(name, str) and name and name != "<lambda>":
        return name
    return repr(descriptor)


__all__ = [
    "TypeDescriptor",
    "TypePredicate",
    "descriptor_name",
    "is_blank",
    "matches_descriptor",
    "normalize_keys",
    "validate_descriptors",
]
