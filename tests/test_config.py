"""Tests for ctxlog._config."""

from __future__ import annotations

import logging
import threading

import pytest

from ctxlog._config import configure, get_logger, reset
from ctxlog._logger import ContextLogger
from ctxlog.extractors import ContextCarrier, DeadlineExtractor
from ctxlog.extractors.otel import OTelExtractor
from ctxlog.extractors.sentry import SentryExtractor


class TestConfigure:
    def test_configure_with_names(self) -> None:
        cl = configure(extractors=["deadline", "carrier"])
        assert [type(e) for e in cl.extractors] == [DeadlineExtractor, ContextCarrier]
        assert get_logger() is cl

    def test_configure_with_instances(self) -> None:
        def custom(_ctx: object) -> list[tuple[str, object]]:
            return []

        cl = configure(extractors=[custom, "otel"])
        assert cl.extractors[0] is custom
        assert isinstance(cl.extractors[1], OTelExtractor)

    def test_configure_with_base(self) -> None:
        base = logging.getLogger("ctxlog.test")
        cl = configure(base, extractors=[])
        assert cl.base is base
        assert cl.extractors == ()

    def test_configure_unknown_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown extractor"):
            configure(extractors=["bogus"])

    def test_configure_unknown_preset_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown extractor preset"):
            configure(extractors="everything")

    def test_configure_auto(self) -> None:
        cl = configure()
        kinds = [type(e) for e in cl.extractors]
        # Both optional packages are installed with the test extra.
        assert kinds == [DeadlineExtractor, OTelExtractor, SentryExtractor]

    def test_configure_auto_skips_missing_package(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setattr("ctxlog.extractors.otel._HAS_OTEL", False)

        with caplog.at_level(logging.DEBUG, logger="ctxlog"):
            cl = configure()

        assert [type(e) for e in cl.extractors] == [DeadlineExtractor, SentryExtractor]
        messages = [r.message for r in caplog.records]
        assert "otel extractor unavailable, skipping" in messages

    def test_configure_otel_without_package_raises(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("ctxlog.extractors.otel._HAS_OTEL", False)
        with pytest.raises(RuntimeError, match="opentelemetry-api is required"):
            configure(extractors=["otel"])

    def test_configure_logs_choice(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="ctxlog"):
            configure(extractors=["deadline"])
        messages = [r.message for r in caplog.records]
        assert "default context logger configured" in messages


class TestGetLogger:
    def test_auto_configuration_on_first_call(self) -> None:
        cl = get_logger()
        assert isinstance(cl, ContextLogger)
        assert isinstance(cl.extractors[0], DeadlineExtractor)

    def test_returns_same_instance(self) -> None:
        assert get_logger() is get_logger()

    def test_concurrent_first_calls_share_instance(self) -> None:
        seen: list[ContextLogger] = []
        threads = [
            threading.Thread(target=lambda: seen.append(get_logger()))
            for _ in range(10)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len({id(cl) for cl in seen}) == 1


class TestReset:
    def test_reset_clears_default(self) -> None:
        configure(extractors=["deadline"])
        first = get_logger()
        reset()
        second = get_logger()
        assert first is not second
