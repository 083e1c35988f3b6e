"""Extractor reporting the context deadline and the time left before it."""

from __future__ import annotations

from datetime import datetime, timezone

from ctxlog._context import ContextLike
from ctxlog._types import Field

DEADLINE_AT_FIELD = "context_deadline_at"
TIME_LEFT_FIELD = "context_time_left"


class DeadlineExtractor:
    """Emits ``context_deadline_at`` and ``context_time_left``.

    The time left is measured at extraction time, so repeated calls against
    the same context report a shrinking value (negative once the deadline
    has passed).  Contexts without a ``deadline`` attribute, or with a
    ``None`` deadline, produce no fields.
    """

    __slots__ = ()

    def __call__(self, ctx: ContextLike) -> list[Field]:
        deadline: datetime | None = getattr(ctx, "deadline", None)
        if deadline is None:
            return []

        # Naive deadlines from third-party contexts are taken as local time.
        now = datetime.now(timezone.utc) if deadline.tzinfo else datetime.now()
        return [
            (DEADLINE_AT_FIELD, deadline),
            (TIME_LEFT_FIELD, deadline - now),
        ]


def deadline_extractor() -> DeadlineExtractor:
    """Return an extractor for the context deadline."""
    return DeadlineExtractor()
