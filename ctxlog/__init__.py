"""Enrich structured log entries with fields derived from an execution context."""

from ctxlog._config import configure, get_logger, reset
from ctxlog._context import (
    Context,
    ContextKey,
    ContextLike,
    background,
    bind_context_value,
    current_context,
    use_context,
)
from ctxlog._logger import ContextLogger, FieldsAdapter, with_context
from ctxlog._types import Carried, Extractor, Field
from ctxlog.extractors import context_carrier, deadline_extractor, value_extractor

__all__ = [
    "Carried",
    "Context",
    "ContextKey",
    "ContextLike",
    "ContextLogger",
    "Extractor",
    "Field",
    "FieldsAdapter",
    "background",
    "bind_context_value",
    "configure",
    "context_carrier",
    "current_context",
    "deadline_extractor",
    "get_logger",
    "reset",
    "use_context",
    "value_extractor",
    "with_context",
]
