"""Built-in extractors.

The OpenTelemetry and Sentry extractors live in :mod:`ctxlog.extractors.otel`
and :mod:`ctxlog.extractors.sentry` and need their optional dependencies.
"""

from ctxlog.extractors.carrier import (
    DEFAULT_CARRIER_FIELD,
    ContextCarrier,
    context_carrier,
)
from ctxlog.extractors.deadline import DeadlineExtractor, deadline_extractor
from ctxlog.extractors.values import ValueExtractor, value_extractor

__all__ = [
    "DEFAULT_CARRIER_FIELD",
    "ContextCarrier",
    "DeadlineExtractor",
    "ValueExtractor",
    "context_carrier",
    "deadline_extractor",
    "value_extractor",
]
