"""
optionoids: fluent checker for option mappings.

File: src/optionoids/checker.py
Last updated: 2026-10-19

Purpose
- Wrap an options mapping (typically ``**kwargs``) and run chainable checks on
  the keys and values currently in view.

What is included in this file
- The filtering model: the filter key set and the derived filtered view.
- Presence, cardinality, value, type and variant checks plus composites.
- The hard/soft failure policy: raise immediately or collect and continue.

Functional requirements
- Every filter and check method returns the same checker for chaining.
- Checks inspect only the filtered view, never the full option set.
- Hard mode never collects; soft mode never raises check failures.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

import structlog

from optionoids.config.schema import OptionoidsSettings, get_active_settings
from optionoids.constants import CHECK_FAILED_EVENT, CHECK_ONE_REQUIRED, CHECK_PRESENT
from optionoids.errors import (
    ExpectedMultipleKeys,
    MissingKeys,
    OptionoidsError,
    RequiredDataUnavailable,
    UnexpectedBlankValue,
    UnexpectedKeys,
    UnexpectedMultipleKeys,
    UnexpectedNilValue,
    UnexpectedNonNilValue,
    UnexpectedPopulatedValue,
    UnexpectedValueType,
    UnexpectedValueVariant,
    to_sentence,
)
from optionoids.values import (
    TypeDescriptor,
    descriptor_name,
    is_blank,
    matches_descriptor,
    normalize_keys,
    validate_descriptors,
)

_SCALAR_ITERABLES: tuple[type, ...] = (str, bytes, bytearray)


class Checker:
    """Check the keys and values of an options mapping.

    A checker holds the original options, optional extra params merged on top,
    and a filter key set. When the filter is empty every key is in view;
    otherwise only the filter keys are, whether or not they exist.

    In hard mode (the default) a failing check raises an
    :class:`~optionoids.errors.OptionoidsError` subclass and the chain stops.
    In soft mode failures are collected in :attr:`errors` and the chain
    continues.

    Parameters
    ----------
    options:
        Mapping (or iterable of key/value pairs) to check. ``None`` is empty.
    keys:
        Initial filter keys. Nested lists/tuples/sets are flattened and ``None``
        entries dropped.
    hard:
        Failure policy, fixed for the life of the checker.
    settings:
        Explicit settings; defaults to the process-wide active settings.
    logger:
        Structured logger; defaults to ``structlog.get_logger(__name__)``.
    """

    def __init__(
        self,
        options: Mapping[Hashable, Any] | Iterable[tuple[Hashable, Any]] | None = None,
        keys: Iterable[Hashable] | Hashable | None = None,
        hard: bool = True,
        *,
        settings: OptionoidsSettings | None = None,
        logger: Any | None = None,
    ) -> None:
        self._options = _coerce_mapping(options, field_name="options")
        self._params: dict[Hashable, Any] = {}
        self._keys = normalize_keys(keys)
        self._hard = bool(hard)
        self._settings = settings if settings is not None else get_active_settings()
        self._logger = logger if logger is not None else structlog.get_logger(__name__)
        self._errors: list[OptionoidsError] = []
        self._clipped: dict[Hashable, Any] = {}
        self._clip_options()

    @property
    def hard(self) -> bool:
        return self._hard

    @property
    def keys(self) -> tuple[Hashable, ...]:
        """Current filter keys; empty means every key is in view."""
        return self._keys

    @property
    def settings(self) -> OptionoidsSettings:
        return self._settings

    def with_params(
        self, params: Mapping[Hashable, Any] | Iterable[tuple[Hashable, Any]] | None
    ) -> Checker:
        """Merge additional values over the options.

        Useful for checking required positional parameters alongside the
        options. Not cumulative: each call replaces the previous params.
        """
        self._params = _coerce_mapping(params, field_name="params")
        self._clip_options()
        return self

    def current_options(self) -> dict[Hashable, Any]:
        """Return a snapshot of the filtered view."""
        return dict(self._clipped)

    def global_options(self) -> dict[Hashable, Any]:
        """Return a snapshot of options merged with params, ignoring the filter."""
        return {**self._options, **self._params}

    # Filtering

    def and_(self) -> Checker:
        """Remove the key filter so every key is in view."""
        self._keys = ()
        self._clip_options()
        return self

    all = and_

    def that(self, *keys: Hashable | Iterable[Hashable]) -> Checker:
        """Replace the key filter.

        The keys do not have to exist in the options; only those that do are
        in view. Filters are not cumulative.
        """
        self._keys = normalize_keys(keys)
        self._clip_options()
        return self

    def minus(self, *keys: Hashable | Iterable[Hashable]) -> Checker:
        removed = set(normalize_keys(keys))
        self._keys = tuple(key for key in self._keys if key not in removed)
        self._clip_options()
        return self

    def plus(self, *keys: Hashable | Iterable[Hashable]) -> Checker:
        self._keys = normalize_keys((self._keys, keys))
        self._clip_options()
        return self

    # Key presence

    def only_these(self, *keys: Hashable | Iterable[Hashable]) -> Checker:
        """Fail with ``UnexpectedKeys`` for keys in view that are not allowed.

        Allowed keys absent from the view are fine. The check applies to the
        filtered view, so an active filter narrows what can be unexpected.
        """
        allowed = set(normalize_keys(keys))
        unexpected = [key for key in self._clipped if key not in allowed]
        if unexpected:
            self._error_or_log(UnexpectedKeys(keys=unexpected), check="only_these")
        return self

    def exist(self) -> Checker:
        """Fail unless every filter key is present.

        With an empty filter there is nothing to look for, which is reported
        as ``RequiredDataUnavailable`` rather than as missing keys.
        """
        if not self._keys:
            return self._error_or_log(RequiredDataUnavailable(check=CHECK_PRESENT), check="exist")

        missing = [key for key in self._keys if key not in self._clipped]
        if missing:
            self._error_or_log(MissingKeys(keys=missing), check="exist")
        return self

    # Value population

    def populated(self) -> Checker:
        """Fail with ``UnexpectedBlankValue`` for keys whose value is blank."""
        blank_keys = self._keys_where(self._is_blank)
        if blank_keys:
            self._error_or_log(UnexpectedBlankValue(keys=blank_keys), check="populated")
        return self

    all_populated = populated

    def blank(self) -> Checker:
        """Fail with ``UnexpectedPopulatedValue`` for keys whose value is not blank."""
        present_keys = self._keys_where(lambda value: not self._is_blank(value))
        if present_keys:
            self._error_or_log(UnexpectedPopulatedValue(keys=present_keys), check="blank")
        return self

    all_blank = blank

    def not_nil_values(self) -> Checker:
        nil_keys = self._keys_where(lambda value: value is None)
        if nil_keys:
            self._error_or_log(UnexpectedNilValue(keys=nil_keys), check="not_nil_values")
        return self

    def nil_values(self) -> Checker:
        non_nil_keys = self._keys_where(lambda value: value is not None)
        if non_nil_keys:
            self._error_or_log(UnexpectedNonNilValue(keys=non_nil_keys), check="nil_values")
        return self

    # Key count

    def one_or_none(self) -> Checker:
        """Fail with ``UnexpectedMultipleKeys`` when more than one key is in view."""
        if len(self._clipped) > 1:
            view_keys = list(self._clipped)
            message = f"Expected a maximum of one key, but found: {to_sentence(view_keys)}"
            self._error_or_log(UnexpectedMultipleKeys(message, keys=view_keys), check="one_or_none")
        return self

    def just_one(self) -> Checker:
        """Fail unless exactly one key is in view.

        An empty view is ``RequiredDataUnavailable``; more than one key is
        ``UnexpectedMultipleKeys``. Only one of the two is ever reported.
        """
        if not self._clipped:
            return self._error_or_log(
                RequiredDataUnavailable(check=CHECK_ONE_REQUIRED), check="just_one"
            )
        if len(self._clipped) == 1:
            return self

        view_keys = list(self._clipped)
        message = f"Expected exactly one key, but found: {to_sentence(view_keys)}"
        return self._error_or_log(UnexpectedMultipleKeys(message, keys=view_keys), check="just_one")

    def one_or_more(self) -> Checker:
        if self._clipped:
            return self
        return self._error_or_log(ExpectedMultipleKeys(), check="one_or_more")

    # Types

    def of_types(self, *types: TypeDescriptor) -> Checker:
        """Fail with ``UnexpectedValueType`` for values matching none of ``types``.

        A descriptor is a class (matched with ``isinstance``) or a predicate
        taking the value. ``None`` values are skipped. All offending keys are
        reported in a single error.
        """
        descriptors = validate_descriptors(types)
        failed_keys = self._keys_where(
            lambda value: value is not None
            and not any(matches_descriptor(value, descriptor) for descriptor in descriptors)
        )
        if failed_keys:
            error = UnexpectedValueType(
                keys=failed_keys,
                types=[descriptor_name(descriptor) for descriptor in descriptors],
            )
            self._error_or_log(error, check="of_types")
        return self

    of_type = of_types
    types = of_types
    type = of_types

    # Values

    def possible_values(self, *variants: Any) -> Checker:
        """Fail with ``UnexpectedValueVariant`` for values equal to none of ``variants``.

        Accepts the variants either positionally or as one collection (any
        non-text iterable, such as a range, dict keys or an enum class).
        ``None`` values are skipped.
        """
        if (
            len(variants) == 1
            and isinstance(variants[0], Iterable)
            and not isinstance(variants[0], _SCALAR_ITERABLES)
        ):
            variants = tuple(variants[0])
        failed_keys = self._keys_where(
            lambda value: value is not None and not any(value == variant for variant in variants)
        )
        if failed_keys:
            error = UnexpectedValueVariant(keys=failed_keys, variants=variants)
            self._error_or_log(error, check="possible_values")
        return self

    # Composites

    def identifier(self) -> Checker:
        """Check that values are usable as identifiers: non-blank strings or enum members."""
        return self.of_type(str, Enum).populated()

    def flag(self) -> Checker:
        """Check that values are booleans and not ``None``."""
        # False is never blank-checked; presence is the nil check.
        return self.of_type(bool).not_nil_values()

    def required(self) -> Checker:
        """Check that the filter keys exist and their values are populated."""
        return self.exist().populated()

    # Soft error handling

    @property
    def errors(self) -> tuple[OptionoidsError, ...]:
        """Failures collected in soft mode, in invocation order."""
        return tuple(self._errors)

    @property
    def failed(self) -> bool:
        return bool(self._errors)

    def _error_or_log(self, error: OptionoidsError, *, check: str) -> Checker:
        if self._settings.log_failures:
            emit = self._logger.debug if self._hard else self._logger.info
            emit(
                CHECK_FAILED_EVENT,
                mode="hard" if self._hard else "soft",
                operation=check,
                **error.to_dict(),
            )
        if self._hard:
            raise error
        self._errors.append(error)
        return self

    def _is_blank(self, value: object) -> bool:
        return is_blank(value, whitespace_is_blank=self._settings.whitespace_is_blank)

    def _keys_where(self, predicate: Any) -> list[Hashable]:
        return [key for key, value in self._clipped.items() if predicate(value)]

    def _clip_options(self) -> None:
        merged = {**self._options, **self._params}
        if not self._keys:
            self._clipped = merged
            return
        self._clipped = {key: merged[key] for key in self._keys if key in merged}


def _coerce_mapping(value: object, *, field_name: str) -> dict[Hashable, Any]:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return dict(value)
    if is_dataclass(value) and not isinstance(value, type):
        return {field.name: getattr(value, field.name) for field in fields(value)}
    as_dict = getattr(value, "_asdict", None)
    if callable(as_dict):
        return dict(as_dict())
    try:
        return dict(value)  # type: ignore[call-overload]
    except (TypeError, ValueError) as exc:
        raise TypeError(
            f"{field_name} must be a mapping or an iterable of key/value pairs, "
            f"got {type(value).__name__}"
        ) from exc


__all__ = ["Checker"]
