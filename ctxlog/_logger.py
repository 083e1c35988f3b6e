"""The context logger: binds extractor output onto a base logger."""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any

import structlog

from ctxlog._context import ContextLike, background, current_context
from ctxlog._types import Extractor, Field

RESERVED_PREFIX = "ctx_"

# Keys Logger.makeRecord refuses to take from ``extra``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


class FieldsAdapter(logging.LoggerAdapter):  # type: ignore[type-arg]
    """Stdlib adapter that adds bound fields to every record's ``extra``.

    Bound fields named like a :class:`logging.LogRecord` attribute (``name``,
    ``module``, ``process``, ...) are renamed with the ``ctx_`` prefix, so
    ``name`` lands on the record as ``ctx_name``.  Fields passed as
    ``extra=`` at the call site take precedence over bound ones and are
    passed through as given.  Like structlog loggers it offers :meth:`bind`,
    which returns a new adapter and leaves this one untouched.
    """

    def __init__(self, logger: logging.Logger, fields: Mapping[str, Any]) -> None:
        super().__init__(logger, dict(fields))

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        bound = {
            RESERVED_PREFIX + k if k in _RECORD_ATTRS else k: v
            for k, v in (self.extra or {}).items()
        }
        kwargs["extra"] = {**bound, **(kwargs.get("extra") or {})}
        return msg, kwargs

    def bind(self, /, **fields: Any) -> FieldsAdapter:
        return FieldsAdapter(self.logger, {**(self.extra or {}), **fields})


class ContextLogger:
    """A base logger paired with an ordered, fixed list of extractors.

    Instances are read-only after construction and safe to share between
    threads and tasks.  Use :meth:`ctx` at each log site to get a logger with
    the fields derived from the given context bound.

    Extractors run in registration order.  When two of them emit the same
    key, the later value wins (and likewise over fields already bound on the
    base logger).  Exceptions raised by an extractor are not caught.
    """

    __slots__ = ("_base", "_extractors")

    def __init__(self, base: Any, extractors: tuple[Extractor, ...] = ()) -> None:
        self._base = base
        self._extractors = tuple(extractors)

    @property
    def base(self) -> Any:
        return self._base

    @property
    def extractors(self) -> tuple[Extractor, ...]:
        return self._extractors

    def ctx(self, context: ContextLike | None = None) -> Any:
        """Return the base logger with fields extracted from *context* bound.

        ``None`` is treated as :func:`~ctxlog.background`.  When no extractor
        produces a field the base logger itself is returned.
        """
        if context is None:
            context = background()

        fields: list[Field] = []
        for extract in self._extractors:
            fields.extend(extract(context))

        if not fields:
            return self._base
        return _bind(self._base, fields)

    def current(self) -> Any:
        """Shorthand for ``ctx(current_context())``."""
        return self.ctx(current_context())

    def extend(self, *extractors: Extractor) -> ContextLogger:
        """Return a new context logger with *extractors* appended."""
        return ContextLogger(self._base, self._extractors + extractors)

    def __repr__(self) -> str:
        return f"<ContextLogger base={self._base!r} extractors={len(self._extractors)}>"


def with_context(base: Any, *extractors: Extractor) -> ContextLogger:
    """Compose *base* with *extractors*, preserving their order.

    *base* is a structlog bound logger (or anything with a structlog-style
    ``bind(**fields)``), or a stdlib :class:`logging.Logger` /
    :class:`logging.LoggerAdapter`.  Stdlib bases get a :class:`FieldsAdapter`,
    which renames fields clashing with ``LogRecord`` attributes.
    """
    return ContextLogger(base, extractors)


def _bind(base: Any, fields: list[Field]) -> Any:
    # dict() keeps the first position of a key and the last value.
    merged = dict(fields)
    bind = getattr(base, "bind", None)
    if bind is not None:
        bound = bind()
        if isinstance(bound, structlog.BoundLoggerBase):
            # Field keys may shadow bind()'s own parameters ("self"), so they
            # are merged into the context of a private copy instead.  A lazy
            # proxy caching on first use returns a shared logger; copy again.
            bound = bound.bind()
            structlog.get_context(bound).update(merged)
            return bound
        return bind(**merged)
    if isinstance(base, logging.LoggerAdapter):
        inherited = dict(base.extra or {})
        return FieldsAdapter(_underlying(base), {**inherited, **merged})
    if isinstance(base, logging.Logger):
        return FieldsAdapter(base, merged)
    raise TypeError(
        f"Cannot bind fields on {type(base).__name__!r}: expected a structlog "
        "logger or a logging.Logger / logging.LoggerAdapter"
    )


def _underlying(adapter: Any) -> logging.Logger:
    logger: Any = adapter
    while isinstance(logger, logging.LoggerAdapter):
        logger = logger.logger
    return logger  # type: ignore[no-any-return]
