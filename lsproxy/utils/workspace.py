"""Workspace scanning for the mounted source tree."""

import logging
import os
from typing import Dict, List, Set

from lsproxy import languages
from lsproxy.languages import SupportedLanguage

DEFAULT_MOUNT_DIR = "/mnt/workspace"

IGNORED_DIRS = frozenset({"node_modules", "target", "build", "dist", "venv", "__pycache__"})
SORBET_CONFIG = os.path.join("sorbet", "config")


class WorkspaceManager:
    """Tracks the files of a mounted workspace."""

    def __init__(self, mount_dir: str):
        """Initialize the workspace manager.

        Args:
            mount_dir: Path to the workspace directory.

        Raises:
            ValueError: If the path is not a directory.
        """
        self.workspace_path = os.path.abspath(mount_dir)
        self.logger = logging.getLogger("lsproxy.workspace")

        if not os.path.isdir(self.workspace_path):
            raise ValueError(f"Workspace path is not a directory: {self.workspace_path}")

        self.files: Set[str] = set()
        self.extension_to_languages: Dict[str, List[SupportedLanguage]] = {}
        for language in SupportedLanguage:
            for ext in languages.extensions_for(language):
                self.extension_to_languages.setdefault(ext, []).append(language)

        self._scan_workspace()
        self.logger.info(f"Initialized workspace {self.workspace_path} with {len(self.files)} files")

    def _scan_workspace(self) -> None:
        """Walk the workspace, skipping hidden and vendored directories."""
        for root, dirs, files in os.walk(self.workspace_path):
            dirs[:] = [d for d in dirs if not d.startswith(".") and d not in IGNORED_DIRS]
            for file in files:
                rel_path = os.path.relpath(os.path.join(root, file), self.workspace_path)
                self.files.add(rel_path.replace(os.sep, "/"))

    def list_files(self) -> List[str]:
        """Return workspace-relative paths of every tracked file, sorted."""
        return sorted(self.files)

    def detect_languages(self) -> List[SupportedLanguage]:
        """Detect which languages the workspace contains.

        Returns:
            Detected languages in registry order. Ruby is reported as
            ruby_sorbet when the workspace has a sorbet/config file.
        """
        found: Set[SupportedLanguage] = set()
        for rel_path in self.files:
            _, ext = os.path.splitext(rel_path)
            found.update(self.extension_to_languages.get(ext.lower(), ()))

        if SupportedLanguage.RUBY in found and os.path.isfile(os.path.join(self.workspace_path, SORBET_CONFIG)):
            found.discard(SupportedLanguage.RUBY)
            found.add(SupportedLanguage.RUBY_SORBET)

        return [language for language in SupportedLanguage if language in found]
