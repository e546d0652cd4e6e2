from __future__ import annotations

import logging
import sys
import threading

import pytest

from lsproxy import observability
from lsproxy.observability import LogFilter, configure_logging, install_crash_observer, parse_log_filter


def test_parse_single_level() -> None:
    assert parse_log_filter("debug") == LogFilter(default_level=logging.DEBUG)
    assert parse_log_filter("WARN") == LogFilter(default_level=logging.WARNING)


def test_parse_per_logger_directives() -> None:
    parsed = parse_log_filter("error, lsproxy.workspace=debug,uvicorn=warning")
    assert parsed == LogFilter(
        default_level=logging.ERROR,
        overrides={"lsproxy.workspace": logging.DEBUG, "uvicorn": logging.WARNING},
    )


def test_parse_overrides_only_defaults_to_info() -> None:
    parsed = parse_log_filter("lsproxy=trace")
    assert parsed is not None
    assert parsed.default_level == logging.INFO
    assert parsed.overrides == {"lsproxy": logging.DEBUG}


@pytest.mark.parametrize("expression", ["", " , ", "verbose", "lsproxy=loud", "=debug", "info,nope"])
def test_parse_rejects_malformed_expressions(expression: str) -> None:
    assert parse_log_filter(expression) is None


def test_configure_logging_applies_filter() -> None:
    handle = configure_logging({"LSPROXY_LOG": "warning,lsproxy.test_observability=debug"})
    try:
        assert handle.source == "warning,lsproxy.test_observability=debug"
        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("lsproxy.test_observability").level == logging.DEBUG
    finally:
        logging.getLogger("lsproxy.test_observability").setLevel(logging.NOTSET)


def test_configure_logging_falls_back_to_info_on_malformed_filter(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="lsproxy"):
        handle = configure_logging({"LSPROXY_LOG": "chatty"})

    assert handle.log_filter == LogFilter()
    assert handle.source is None
    assert logging.getLogger().level == logging.INFO
    assert "Ignoring malformed LSPROXY_LOG" in caplog.text


def test_configure_logging_runs_once() -> None:
    first = configure_logging({})
    second = configure_logging({"LSPROXY_LOG": "error"})
    assert second is first
    assert observability._logging_handle is first
    assert logging.getLogger().level == logging.INFO


def test_crash_observer_logs_uncaught_exceptions(caplog: pytest.LogCaptureFixture) -> None:
    install_crash_observer()

    try:
        raise RuntimeError("boom")
    except RuntimeError:
        exc_info = sys.exc_info()

    with caplog.at_level(logging.CRITICAL, logger="lsproxy"):
        sys.excepthook(*exc_info)

    [record] = [r for r in caplog.records if r.levelno == logging.CRITICAL]
    assert record.getMessage() == "Server panicked"
    assert record.exc_info is not None and record.exc_info[1] is exc_info[1]


def test_crash_observer_covers_threads(caplog: pytest.LogCaptureFixture) -> None:
    install_crash_observer()

    def fail() -> None:
        raise ValueError("thread boom")

    with caplog.at_level(logging.CRITICAL, logger="lsproxy"):
        worker = threading.Thread(target=fail, name="worker-1")
        worker.start()
        worker.join()

    assert "Server panicked in thread worker-1" in caplog.text


def test_crash_observer_installs_once() -> None:
    install_crash_observer()
    hook = sys.excepthook
    install_crash_observer()
    assert sys.excepthook is hook
