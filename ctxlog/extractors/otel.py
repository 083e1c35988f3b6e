"""OpenTelemetry correlation extractor.

Requires ``opentelemetry-api`` to be installed.
"""

from __future__ import annotations

from typing import Any

from ctxlog._context import ContextKey, ContextLike
from ctxlog._types import Field

try:
    from opentelemetry import trace  # type: ignore[import-not-found]

    _HAS_OTEL = True
except ImportError:  # pragma: no cover
    _HAS_OTEL = False

SPAN_KEY = ContextKey("otel_span")


def context_with_span(ctx: Any, span: Any) -> Any:
    """Return a child of *ctx* carrying an OpenTelemetry *span*."""
    return ctx.with_value(SPAN_KEY, span)


class OTelExtractor:
    """Emits ``trace_id`` and ``span_id`` of the active OpenTelemetry span.

    The span stored with :func:`context_with_span` is used first.  Otherwise,
    when *use_current* is true, the span OpenTelemetry considers current in
    the calling thread / task.  Spans are only read, never started or ended.

    Raises :class:`RuntimeError` at construction time if
    ``opentelemetry-api`` is missing.
    """

    __slots__ = ("_use_current",)

    def __init__(self, use_current: bool = True) -> None:
        if not _HAS_OTEL:
            raise RuntimeError(
                "opentelemetry-api is required for OTelExtractor. "
                "Install it with: pip install 'ctxlog[otel]'"
            )
        self._use_current = use_current

    def __call__(self, ctx: ContextLike) -> list[Field]:
        span = ctx.value(SPAN_KEY)
        if span is None:
            if not self._use_current:
                return []
            span = trace.get_current_span()

        span_context = span.get_span_context()
        if not span_context.is_valid:
            return []

        return [
            ("trace_id", format(span_context.trace_id, "032x")),
            ("span_id", format(span_context.span_id, "016x")),
        ]


def otel_extractor(*, use_current: bool = True) -> OTelExtractor:
    """Return an extractor for OpenTelemetry trace correlation."""
    return OTelExtractor(use_current=use_current)
