"""structlog processors for carried fields and ambient extraction.

Usage::

    import structlog
    from ctxlog.contrib.structlog import ContextProcessor, drop_carried_fields
    from ctxlog.extractors import deadline_extractor

    structlog.configure(
        processors=[
            ContextProcessor(deadline_extractor()),
            drop_carried_fields,
            structlog.processors.JSONRenderer(),
        ]
    )

``drop_carried_fields`` must run before the renderer so values attached by
:func:`~ctxlog.extractors.context_carrier` never reach the output.
"""

from __future__ import annotations

from typing import Any

from ctxlog._context import current_context
from ctxlog._types import Carried, Extractor


def drop_carried_fields(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor removing every :class:`~ctxlog.Carried` value."""
    for key in [k for k, v in event_dict.items() if isinstance(v, Carried)]:
        del event_dict[key]
    return event_dict


def carried_fields(event_dict: dict[str, Any]) -> dict[str, Any]:
    """Return the carried values of *event_dict*, unwrapped."""
    return {k: v.value for k, v in event_dict.items() if isinstance(v, Carried)}


class ContextProcessor:
    """structlog processor running extractors against the current context.

    Lets loggers from ``structlog.get_logger()`` pick up context fields
    without going through :meth:`~ctxlog.ContextLogger.ctx`.  Keys already
    present on the event (bound or passed at the call site) are kept.
    """

    def __init__(self, *extractors: Extractor) -> None:
        self._extractors = extractors

    def __call__(
        self, _logger: Any, _method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        ctx = current_context()
        for extract in self._extractors:
            for key, value in extract(ctx):
                event_dict.setdefault(key, value)
        return event_dict
