"""Process-wide default context logger (thread-safe)."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Any

import structlog

from ctxlog._logger import ContextLogger
from ctxlog._types import Extractor
from ctxlog.extractors import context_carrier, deadline_extractor

logger = logging.getLogger("ctxlog")

# Reentrant: get_logger() configures while holding it.
_lock = threading.RLock()
_default: ContextLogger | None = None


def configure(
    base: Any = None,
    extractors: Sequence[Extractor | str] | str = "auto",
) -> ContextLogger:
    """Set the default context logger returned by :func:`get_logger`.

    *base* defaults to ``structlog.get_logger("ctxlog")``.

    *extractors* can be:
    - ``"auto"``: deadline, plus OpenTelemetry and Sentry when installed
    - a sequence mixing :class:`Extractor` callables and names:
      ``"deadline"``, ``"otel"``, ``"sentry"``, ``"carrier"``
    """
    global _default
    if base is None:
        base = structlog.get_logger("ctxlog")
    if isinstance(extractors, str):
        if extractors != "auto":
            raise ValueError(f"Unknown extractor preset: {extractors!r}")
        resolved = _auto_detect()
    else:
        resolved = tuple(_resolve(e) for e in extractors)

    instance = ContextLogger(base, resolved)
    with _lock:
        _default = instance
    logger.debug("default context logger configured", extra={"extractors": resolved})
    return instance


def get_logger() -> ContextLogger:
    """Return the default context logger; the first call runs ``configure()``."""
    instance = _default
    if instance is None:
        with _lock:
            instance = _default or configure()
    return instance


def reset() -> None:
    """Drop the default context logger. Intended for testing."""
    global _default
    with _lock:
        _default = None


def _resolve(item: Extractor | str) -> Extractor:
    if not isinstance(item, str):
        return item
    if item == "deadline":
        return deadline_extractor()
    if item == "carrier":
        return context_carrier()
    if item == "otel":
        from ctxlog.extractors.otel import otel_extractor

        return otel_extractor()
    if item == "sentry":
        from ctxlog.extractors.sentry import sentry_extractor

        return sentry_extractor()
    raise ValueError(f"Unknown extractor: {item!r}")


def _auto_detect() -> tuple[Extractor, ...]:
    """Deadline extractor plus every correlation extractor that can load."""
    found: list[Extractor] = [deadline_extractor()]
    for name in ("otel", "sentry"):
        try:
            found.append(_resolve(name))
        except RuntimeError:
            logger.debug("%s extractor unavailable, skipping", name)
    return tuple(found)
