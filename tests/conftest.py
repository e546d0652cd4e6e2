from __future__ import annotations

import logging
import sys
import threading
from typing import Iterator

import pytest

from lsproxy import observability


@pytest.fixture(autouse=True)
def isolated_process_hooks(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Let each test install hooks and logging as a fresh process would."""
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setattr(threading, "excepthook", threading.excepthook)
    monkeypatch.setattr(observability, "_crash_observer_installed", False)
    monkeypatch.setattr(observability, "_logging_handle", None)

    root = logging.getLogger()
    root_level = root.level
    yield
    root.setLevel(root_level)
