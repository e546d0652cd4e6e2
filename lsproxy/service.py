"""Application state for a running lsproxy server."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from lsproxy import languages
from lsproxy.languages import SupportedLanguage
from lsproxy.selection import Explicit, LanguageSelection, Unspecified
from lsproxy.utils.workspace import DEFAULT_MOUNT_DIR, WorkspaceManager

logger = logging.getLogger("lsproxy.service")


@dataclass(frozen=True)
class AppState:
    """The workspace being served and the language backends activated for it."""

    workspace: WorkspaceManager
    languages: Tuple[SupportedLanguage, ...]

    def language_status(self) -> Dict[str, bool]:
        """Map every supported language name to whether it is active."""
        return {
            languages.canonical_form(language): language in self.languages
            for language in SupportedLanguage
        }


def _dedupe(selected: Iterable[SupportedLanguage]) -> Tuple[SupportedLanguage, ...]:
    return tuple(dict.fromkeys(selected))


def init_state(mount_dir: Optional[str], selection: LanguageSelection) -> AppState:
    """Build the application state for a workspace.

    Args:
        mount_dir: Workspace root override, or None for the default mount point.
        selection: Languages to activate. Unspecified triggers auto-detection.

    Returns:
        The initialized state.

    Raises:
        ValueError: If the workspace is not a directory or the selection is invalid.
    """
    workspace = WorkspaceManager(mount_dir if mount_dir is not None else DEFAULT_MOUNT_DIR)

    if isinstance(selection, Unspecified):
        active = _dedupe(workspace.detect_languages())
        logger.info(f"Auto-detected languages: {', '.join(map(str, active)) or 'none'}")
    elif isinstance(selection, Explicit):
        active = _dedupe(selection.languages)
        logger.info(f"Using requested languages: {', '.join(map(str, active))}")
    else:
        raise ValueError(f"Cannot initialize state from an invalid language selection: {selection!r}")

    return AppState(workspace=workspace, languages=active)
