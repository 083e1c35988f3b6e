"""Core type definitions: fields, extractors and carried values."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

Field = tuple[str, Any]


@runtime_checkable
class Extractor(Protocol):
    """Derives log fields from an execution context.

    Any callable taking a context and returning a sequence of
    ``(key, value)`` pairs satisfies this protocol.  Extractors must be
    total over their input: when their data is missing they return an
    empty sequence instead of raising.  They are shared across threads and
    tasks, so they must not mutate state.
    """

    def __call__(self, ctx: Any) -> Sequence[Field]: ...


@dataclass(frozen=True, slots=True)
class Carried:
    """A field value meant for log processors, not for rendered output."""

    value: Any

    def __repr__(self) -> str:
        return f"<carried {type(self.value).__name__}>"
