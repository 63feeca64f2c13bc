"""Closed error taxonomy raised (hard mode) or collected (soft mode) by checkers."""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from enum import StrEnum
from typing import Any, ClassVar


class ErrorKind(StrEnum):
    """Tag for each error variant, stable across releases for machine handling."""

    REQUIRED_DATA_UNAVAILABLE = "required_data_unavailable"
    MISSING_KEYS = "missing_keys"
    UNEXPECTED_KEYS = "unexpected_keys"
    UNEXPECTED_BLANK_VALUE = "unexpected_blank_value"
    UNEXPECTED_POPULATED_VALUE = "unexpected_populated_value"
    UNEXPECTED_NON_NIL_VALUE = "unexpected_non_nil_value"
    UNEXPECTED_NIL_VALUE = "unexpected_nil_value"
    UNEXPECTED_MULTIPLE_KEYS = "unexpected_multiple_keys"
    UNEXPECTED_VALUE_TYPE = "unexpected_value_type"
    UNEXPECTED_VALUE_VARIANT = "unexpected_value_variant"
    EXPECTED_MULTIPLE_KEYS = "expected_multiple_keys"


def to_sentence(items: Iterable[object]) -> str:
    """Render items as an English list: ``a``, ``a and b``, ``a, b, and c``."""

    words = [str(item) for item in items]
    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    if len(words) == 2:
        return f"{words[0]} and {words[1]}"
    return f"{', '.join(words[:-1])}, and {words[-1]}"


class OptionoidsError(ValueError):
    """Base class for every check failure.

    Each subclass carries only the data needed to rebuild a message: the keys
    involved and, for type and variant checks, the expected set.
    """

    kind: ClassVar[ErrorKind]

    def payload(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        """Return ``{"kind": ..., **payload}`` for logs and reports."""

        return {"kind": self.kind.value, **self.payload()}


class _KeyedError(OptionoidsError):
    _template: ClassVar[str]

    def __init__(self, message: str | None = None, *, keys: Iterable[Hashable] = ()) -> None:
        self.keys: tuple[Hashable, ...] = tuple(keys)
        super().__init__(message or self._template.format(keys=to_sentence(self.keys)))

    def payload(self) -> dict[str, Any]:
        return {"keys": list(self.keys)}


class RequiredDataUnavailable(OptionoidsError):
    """A check needed filter keys or view entries, but none were available."""

    kind = ErrorKind.REQUIRED_DATA_UNAVAILABLE

    def __init__(self, message: str | None = None, *, check: str | None = None) -> None:
        self.check = check
        super().__init__(message or f"Required data is unavailable for the check '{check}'")

    def payload(self) -> dict[str, Any]:
        return {"check": self.check}


class MissingKeys(_KeyedError):
    """Filter keys are absent from the current option view."""

    kind = ErrorKind.MISSING_KEYS
    _template = "Missing required keys: {keys}"


class UnexpectedKeys(_KeyedError):
    """The current option view holds keys outside the allowed set."""

    kind = ErrorKind.UNEXPECTED_KEYS
    _template = "Unexpected keys found: {keys}"


class UnexpectedBlankValue(_KeyedError):
    kind = ErrorKind.UNEXPECTED_BLANK_VALUE
    _template = "Unexpected blank values for keys: {keys}"


class UnexpectedPopulatedValue(_KeyedError):
    kind = ErrorKind.UNEXPECTED_POPULATED_VALUE
    _template = "Unexpected populated values for keys: {keys}"


class UnexpectedNonNilValue(_KeyedError):
    kind = ErrorKind.UNEXPECTED_NON_NIL_VALUE
    _template = "Unexpected non-nil values for keys: {keys}"


class UnexpectedNilValue(_KeyedError):
    kind = ErrorKind.UNEXPECTED_NIL_VALUE
    _template = "Unexpected nil values for keys: {keys}"


class UnexpectedMultipleKeys(_KeyedError):
    """More than one key is in view where at most one was expected."""

    kind = ErrorKind.UNEXPECTED_MULTIPLE_KEYS
    _template = "Multiple keys present when only one is expected: {keys}"


class UnexpectedValueType(OptionoidsError):
    """Values matched none of the expected type descriptors."""

    kind = ErrorKind.UNEXPECTED_VALUE_TYPE

    def __init__(
        self,
        message: str | None = None,
        *,
        keys: Iterable[Hashable] = (),
        types: Iterable[str] = (),
    ) -> None:
        self.keys: tuple[Hashable, ...] = tuple(keys)
        self.types: tuple[str, ...] = tuple(types)
        super().__init__(
            message
            or f"Unexpected value types for keys: {to_sentence(self.keys)}. "
            f"Expected types: {to_sentence(self.types)}"
        )

    def payload(self) -> dict[str, Any]:
        return {"keys": list(self.keys), "types": list(self.types)}


class UnexpectedValueVariant(OptionoidsError):
    """Values equal none of the enumerated variants."""

    kind = ErrorKind.UNEXPECTED_VALUE_VARIANT

    def __init__(
        self,
        message: str | None = None,
        *,
        keys: Iterable[Hashable] = (),
        variants: Iterable[object] = (),
    ) -> None:
        self.keys: tuple[Hashable, ...] = tuple(keys)
        self.variants: tuple[object, ...] = tuple(variants)
        super().__init__(
            message
            or f"Unexpected value variants for keys: {to_sentence(self.keys)}. "
            f"Expected variants: {to_sentence(self.variants)}"
        )

    def payload(self) -> dict[str, Any]:
        return {"keys": list(self.keys), "variants": list(self.variants)}


class ExpectedMultipleKeys(OptionoidsError):
    kind = ErrorKind.EXPECTED_MULTIPLE_KEYS

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Expected multiple keys but none were provided")


__all__ = [
    "ErrorKind",
    "ExpectedMultipleKeys",
    "MissingKeys",
    "OptionoidsError",
    "RequiredDataUnavailable",
    "UnexpectedBlankValue",
    "UnexpectedKeys",
    "UnexpectedMultipleKeys",
    "UnexpectedNilValue",
    "UnexpectedNonNilValue",
    "UnexpectedPopulatedValue",
    "UnexpectedValueType",
    "UnexpectedValueVariant",
    "to_sentence",
]
