"""Execution context carrier and its propagation via contextvars."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

_MISSING = object()


class ContextLike(Protocol):
    """What extractors may rely on.

    Only :meth:`value` is required.  A ``deadline`` attribute is optional and
    looked up with ``getattr``.
    """

    def value(self, key: Any) -> Any: ...


class ContextKey:
    """A context key compared by identity.

    ``str()`` gives the name, which the value extractor uses as the field
    name.  Two keys created with the same name are distinct lookups.
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"ContextKey({self.name!r})"


class Context:
    """Immutable, hierarchical key/value carrier with an optional deadline.

    Every ``with_*`` method returns a child context; the receiver is never
    modified, so contexts can be shared freely between threads and tasks.
    """

    __slots__ = ("_deadline", "_key", "_parent", "_value")

    def __init__(
        self,
        parent: Context | None = None,
        key: Any = _MISSING,
        value: Any = None,
        deadline: datetime | None = None,
    ) -> None:
        self._parent = parent
        self._key = key
        self._value = value
        inherited = parent.deadline if parent is not None else None
        if inherited is not None and (deadline is None or inherited < deadline):
            deadline = inherited
        self._deadline = deadline

    # -- lookup -----------------------------------------------------------------

    def value(self, key: Any) -> Any:
        """Return the value stored under *key*, or ``None`` if absent."""
        node: Context | None = self
        while node is not None:
            if node._key is not _MISSING and node._key == key:
                return node._value
            node = node._parent
        return None

    @property
    def deadline(self) -> datetime | None:
        """The effective deadline (aware, UTC), or ``None``."""
        return self._deadline

    @property
    def expired(self) -> bool:
        return self._deadline is not None and self._deadline <= _now()

    # -- derivation -------------------------------------------------------------

    def with_value(self, key: Any, value: Any) -> Context:
        """Return a child context carrying *value* under *key*."""
        if key is None:
            raise TypeError("Context keys must not be None")
        return Context(self, key, value)

    def with_deadline(self, when: datetime) -> Context:
        """Return a child context that expires at *when*.

        An earlier deadline inherited from this context is kept.
        """
        if when.tzinfo is None:
            raise ValueError("Deadline must be a timezone-aware datetime")
        return Context(self, deadline=when.astimezone(timezone.utc))

    def with_timeout(self, timeout: float | timedelta) -> Context:
        """Return a child context expiring *timeout* from now."""
        if not isinstance(timeout, timedelta):
            timeout = timedelta(seconds=timeout)
        return self.with_deadline(_now() + timeout)

    def __repr__(self) -> str:
        depth = 0
        node = self._parent
        while node is not None:
            depth += 1
            node = node._parent
        return f"<Context depth={depth} deadline={self._deadline}>"


def _now() -> datetime:
    return datetime.now(timezone.utc)


_background = Context()


def background() -> Context:
    """Return the empty root context: no values, no deadline."""
    return _background


# ---------------------------------------------------------------------------
# ContextVar holding the context bound to the running thread / task
# ---------------------------------------------------------------------------

_context_var: ContextVar[Context | None] = ContextVar("ctxlog_context", default=None)


def current_context() -> Context:
    """Return the bound context, or :func:`background` when none is bound."""
    ctx = _context_var.get()
    return ctx if ctx is not None else _background


@contextmanager
def use_context(ctx: Context) -> Iterator[Context]:
    """Bind *ctx* as the current context for the duration of the block."""
    token = _context_var.set(ctx)
    try:
        yield ctx
    finally:
        _context_var.reset(token)


def bind_context_value(key: Any, value: Any) -> Context:
    """Replace the current binding with a child carrying *key*.

    Returns the new current context.  The change is visible until the
    enclosing :func:`use_context` block (if any) exits.
    """
    ctx = current_context().with_value(key, value)
    _context_var.set(ctx)
    return ctx


def _reset_context() -> None:
    """Unbind the current context. Intended for testing."""
    _context_var.set(None)
