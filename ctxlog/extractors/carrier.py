"""Extractor carrying the context itself on the log entry."""

from __future__ import annotations

from ctxlog._context import ContextLike
from ctxlog._types import Carried, Field

DEFAULT_CARRIER_FIELD = "ctxlog_context"


class ContextCarrier:
    """Attaches the context, wrapped in :class:`~ctxlog.Carried`.

    Renderers are expected to skip carried values (see
    :func:`ctxlog.contrib.structlog.drop_carried_fields`); custom processors
    can still recover the original context from the event.
    """

    __slots__ = ("_field_name",)

    def __init__(self, field_name: str) -> None:
        self._field_name = field_name

    def __call__(self, ctx: ContextLike) -> list[Field]:
        if not self._field_name:
            return []
        return [(self._field_name, Carried(ctx))]


def context_carrier(field_name: str = DEFAULT_CARRIER_FIELD) -> ContextCarrier:
    """Return an extractor putting the context under *field_name*."""
    return ContextCarrier(field_name)
