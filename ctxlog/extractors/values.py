"""Extractor emitting request-scoped values stored on the context."""

from __future__ import annotations

from typing import Any

from ctxlog._context import ContextLike
from ctxlog._types import Field


class ValueExtractor:
    """Looks up a fixed list of keys; each present value becomes a field.

    The field name is ``str(key)``.  Absent keys are skipped.  Keys whose
    string forms collide are all emitted, in list order.
    """

    __slots__ = ("_keys",)

    def __init__(self, keys: tuple[Any, ...]) -> None:
        self._keys = keys

    @property
    def keys(self) -> tuple[Any, ...]:
        return self._keys

    def __call__(self, ctx: ContextLike) -> list[Field]:
        if not self._keys:
            return []

        fields: list[Field] = []
        for key in self._keys:
            val = ctx.value(key)
            if val is not None:
                fields.append((str(key), val))
        return fields


def value_extractor(*keys: Any) -> ValueExtractor:
    """Return an extractor emitting the values of *keys*, in order."""
    return ValueExtractor(keys)
