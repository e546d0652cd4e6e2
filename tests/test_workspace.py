from __future__ import annotations

from pathlib import Path

import pytest

from lsproxy.languages import SupportedLanguage
from lsproxy.utils.workspace import WorkspaceManager


def _touch(root: Path, *paths: str) -> None:
    for rel in paths:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("", encoding="utf-8")


def test_rejects_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="not a directory"):
        WorkspaceManager(str(tmp_path / "missing"))


def test_list_files_skips_hidden_and_vendored_dirs(tmp_path: Path) -> None:
    _touch(
        tmp_path,
        "src/app.py",
        "README.md",
        ".git/config",
        "node_modules/left-pad/index.js",
        "target/debug/main.rs",
    )

    ws = WorkspaceManager(str(tmp_path))
    assert ws.list_files() == ["README.md", "src/app.py"]


def test_detect_languages_in_registry_order(tmp_path: Path) -> None:
    _touch(tmp_path, "cmd/main.go", "lib/util.py", "web/App.TSX", "native/core.hpp")

    ws = WorkspaceManager(str(tmp_path))
    assert ws.detect_languages() == [
        SupportedLanguage.PYTHON,
        SupportedLanguage.TYPESCRIPT_JAVASCRIPT,
        SupportedLanguage.CPP,
        SupportedLanguage.GOLANG,
    ]


def test_sorbet_config_selects_ruby_sorbet(tmp_path: Path) -> None:
    _touch(tmp_path, "app/models/user.rb")
    assert WorkspaceManager(str(tmp_path)).detect_languages() == [SupportedLanguage.RUBY]

    _touch(tmp_path, "sorbet/config")
    assert WorkspaceManager(str(tmp_path)).detect_languages() == [SupportedLanguage.RUBY_SORBET]


def test_empty_workspace_detects_nothing(tmp_path: Path) -> None:
    assert WorkspaceManager(str(tmp_path)).detect_languages() == []
