"""Sentry performance-monitoring correlation extractor.

Requires ``sentry-sdk`` to be installed.
"""

from __future__ import annotations

from typing import Any

from ctxlog._context import ContextKey, ContextLike
from ctxlog._types import Field

try:
    import sentry_sdk  # type: ignore[import-not-found]

    _HAS_SENTRY = True
except ImportError:  # pragma: no cover
    _HAS_SENTRY = False

SPAN_KEY = ContextKey("sentry_span")


def context_with_span(ctx: Any, span: Any) -> Any:
    """Return a child of *ctx* carrying a Sentry *span* (or transaction)."""
    return ctx.with_value(SPAN_KEY, span)


class SentryExtractor:
    """Emits ``trace_id``, ``span_id``, ``span_status`` and ``span_op``.

    Looks for a span stored with :func:`context_with_span`, then (when
    *use_current* is true) for the span on the current Sentry scope.
    Unset status and op are emitted as empty strings.
    """

    __slots__ = ("_use_current",)

    def __init__(self, use_current: bool = True) -> None:
        if not _HAS_SENTRY:
            raise RuntimeError(
                "sentry-sdk is required for SentryExtractor. "
                "Install it with: pip install 'ctxlog[sentry]'"
            )
        self._use_current = use_current

    def __call__(self, ctx: ContextLike) -> list[Field]:
        span = ctx.value(SPAN_KEY)
        if span is None and self._use_current:
            span = sentry_sdk.get_current_span()
        if span is None:
            return []

        return [
            ("trace_id", str(span.trace_id)),
            ("span_id", str(span.span_id)),
            ("span_status", span.status or ""),
            ("span_op", span.op or ""),
        ]


def sentry_extractor(*, use_current: bool = True) -> SentryExtractor:
    """Return an extractor for Sentry trace correlation."""
    return SentryExtractor(use_current=use_current)
