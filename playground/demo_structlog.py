"""Demo: context-derived fields on structlog output.

Run this to see a request id and deadline bound onto every log line
emitted through the context logger.
"""

from __future__ import annotations

import uuid

import structlog

from ctxlog import (
    ContextKey,
    background,
    deadline_extractor,
    use_context,
    value_extractor,
    with_context,
)
from ctxlog.contrib.structlog import drop_carried_fields

REQUEST_ID = ContextKey("request_id")

structlog.configure(
    processors=[
        drop_carried_fields,
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.BoundLogger,
    logger_factory=structlog.PrintLoggerFactory(),
)

log = with_context(
    structlog.get_logger(),
    value_extractor(REQUEST_ID),
    deadline_extractor(),
)


def handle(path: str) -> None:
    ctx = background().with_value(REQUEST_ID, uuid.uuid4().hex).with_timeout(2.0)
    with use_context(ctx):
        log.current().info("request received", path=path)
        process()


def process() -> None:
    log.current().info("processing")


if __name__ == "__main__":
    # No context: nothing is added.
    log.ctx(None).info("starting up")

    handle("/")
    handle("/orders")
