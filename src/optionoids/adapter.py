"""Entry points that build checkers from plain mappings."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from typing import Any

from optionoids.checker import Checker


def expecting(
    options: Mapping[Hashable, Any] | None,
    keys: Iterable[Hashable] | Hashable | None = None,
    **kwargs: Any,
) -> Checker:
    """Hard checking: the first failing check raises."""

    return Checker(options, keys=keys, hard=True, **kwargs)


def checking(
    options: Mapping[Hashable, Any] | None,
    keys: Iterable[Hashable] | Hashable | None = None,
    **kwargs: Any,
) -> Checker:
    """Soft checking: failures are collected on ``errors`` and ``failed``."""

    return Checker(options, keys=keys, hard=False, **kwargs)


class OptionsDict(dict[Hashable, Any]):
    """``dict`` that can check itself.

    Handy as the type of a ``**kwargs`` copy::

        def connect(**kwargs):
            OptionsDict(kwargs).expecting(["host", "port"]).required()
    """

    def expecting(self, keys: Iterable[Hashable] | Hashable | None = None) -> Checker:
        return expecting(self, keys)

    def checking(self, keys: Iterable[Hashable] | Hashable | None = None) -> Checker:
        return checking(self, keys)


__all__ = ["OptionsDict", "checking", "expecting"]
