"""Process-wide logging and crash reporting.

Both are configured once at the very start of the process. Repeated calls
return the handle created by the first call.
"""

import logging
import sys
import threading
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

LOG_FILTER_ENV = "LSPROXY_LOG"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LEVELS: Dict[str, int] = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "off": logging.CRITICAL + 10,
}

logger = logging.getLogger("lsproxy")

_crash_observer_lock = threading.Lock()
_crash_observer_installed = False
_logging_handle: Optional["LoggingHandle"] = None


@dataclass(frozen=True)
class LogFilter:
    """Severity filter: a default level plus per-logger overrides."""

    default_level: int = logging.INFO
    overrides: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class LoggingHandle:
    log_filter: LogFilter
    source: Optional[str]


def parse_log_filter(expression: str) -> Optional[LogFilter]:
    """Parse a filter expression such as ``"info,lsproxy.api=debug"``.

    Each comma-separated directive is either a level name or
    ``logger.name=level``. Level names are case-insensitive.

    Args:
        expression: The filter expression.

    Returns:
        The parsed filter, or None if any directive is malformed.
    """
    default_level = logging.INFO
    overrides: Dict[str, int] = {}

    directives = [d.strip() for d in expression.split(",")]
    if not any(directives):
        return None

    for directive in directives:
        if not directive:
            continue
        name, sep, level_name = directive.partition("=")
        if sep:
            name = name.strip()
            level = _LEVELS.get(level_name.strip().lower())
            if not name or level is None:
                return None
            overrides[name] = level
        else:
            level = _LEVELS.get(name.lower())
            if level is None:
                return None
            default_level = level

    return LogFilter(default_level=default_level, overrides=overrides)


def install_crash_observer() -> None:
    """Log uncaught exceptions, in any thread, before the process dies."""
    global _crash_observer_installed

    with _crash_observer_lock:
        if _crash_observer_installed:
            return

        def _excepthook(exc_type, exc_value, exc_traceback):
            if issubclass(exc_type, KeyboardInterrupt):
                sys.__excepthook__(exc_type, exc_value, exc_traceback)
                return
            logger.critical("Server panicked", exc_info=(exc_type, exc_value, exc_traceback))

        def _thread_excepthook(args):
            if args.exc_type is SystemExit:
                return
            thread_name = args.thread.name if args.thread is not None else "<unknown>"
            logger.critical(
                f"Server panicked in thread {thread_name}",
                exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
            )

        sys.excepthook = _excepthook
        threading.excepthook = _thread_excepthook
        _crash_observer_installed = True


def configure_logging(environ: Mapping[str, str]) -> LoggingHandle:
    """Configure root logging from the LSPROXY_LOG filter, defaulting to info.

    Args:
        environ: Process environment.

    Returns:
        The handle describing the active configuration.
    """
    global _logging_handle

    if _logging_handle is not None:
        return _logging_handle

    raw = environ.get(LOG_FILTER_ENV)
    log_filter = parse_log_filter(raw) if raw is not None else None
    malformed = raw is not None and log_filter is None
    if log_filter is None:
        log_filter = LogFilter()

    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(log_filter.default_level)
    for name, level in log_filter.overrides.items():
        logging.getLogger(name).setLevel(level)

    if malformed:
        logger.warning(f"Ignoring malformed {LOG_FILTER_ENV}={raw!r}, using info")

    _logging_handle = LoggingHandle(log_filter=log_filter, source=None if malformed else raw)
    return _logging_handle
