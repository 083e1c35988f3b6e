from __future__ import annotations

import io
import json
from collections.abc import Iterator
from typing import Any

import pytest
import structlog
from structlog.testing import LogCapture

from ctxlog._config import reset
from ctxlog._context import _reset_context
from ctxlog.contrib.structlog import drop_carried_fields


@pytest.fixture(autouse=True)
def _clean_state() -> Iterator[None]:
    reset()
    _reset_context()
    yield
    reset()
    _reset_context()


class JSONSink:
    """A structlog logger rendering JSON lines into a buffer."""

    def __init__(self) -> None:
        self.buffer = io.StringIO()
        self.logger = structlog.wrap_logger(
            structlog.PrintLogger(file=self.buffer),
            processors=[
                drop_carried_fields,
                structlog.processors.JSONRenderer(sort_keys=True),
            ],
            wrapper_class=structlog.BoundLogger,
        )

    @property
    def text(self) -> str:
        return self.buffer.getvalue()

    @property
    def lines(self) -> list[str]:
        return self.text.splitlines()

    def entries(self) -> list[dict[str, Any]]:
        return [json.loads(line) for line in self.lines]


@pytest.fixture
def sink() -> JSONSink:
    return JSONSink()


@pytest.fixture
def capture() -> LogCapture:
    return LogCapture()


@pytest.fixture
def captured_logger(capture: LogCapture) -> Any:
    """A structlog logger whose events land in ``capture.entries``."""
    return structlog.wrap_logger(
        structlog.ReturnLogger(),
        processors=[capture],
        wrapper_class=structlog.BoundLogger,
    )
