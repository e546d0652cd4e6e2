"""Startup configuration resolution.

Turns parsed command-line flags plus the process environment into a single
immutable StartupConfig before any stateful subsystem is started.
"""

import enum
import logging
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from lsproxy import languages
from lsproxy.errors import InvalidLanguageList
from lsproxy.selection import Invalid, LanguageSelection, Unspecified, resolve_selection

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 4444
LANGUAGES_ENV = "LANGUAGES"

logger = logging.getLogger("lsproxy.config")


class RunMode(str, enum.Enum):
    EXPORT_SPEC = "export-spec"
    RUN_SERVER = "run-server"


class CliArgs(BaseModel):
    """Flags as given on the command line, before any resolution."""

    model_config = ConfigDict(frozen=True)

    write_openapi: bool = False
    host: str = DEFAULT_HOST
    mount_dir: Optional[str] = None
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    languages: Optional[str] = None


class StartupConfig(BaseModel):
    """Resolved runtime configuration for one process run."""

    model_config = ConfigDict(frozen=True)

    mode: RunMode
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    mount_dir: Optional[str] = None
    languages: LanguageSelection = Field(default_factory=Unspecified)


def select_language_source(cli_value: Optional[str], environ: Mapping[str, str]) -> Optional[str]:
    """Pick the raw language list to parse.

    The command-line value wins whenever it was given, even if blank. Only
    when it is absent is the LANGUAGES environment variable consulted.

    Args:
        cli_value: Value of ``--languages``, or None if the flag was not given.
        environ: Process environment.

    Returns:
        The raw text to parse, or None if neither source is set.
    """
    if cli_value is not None:
        return cli_value
    return environ.get(LANGUAGES_ENV)


def resolve_startup_config(cli_args: CliArgs, environ: Mapping[str, str]) -> StartupConfig:
    """Resolve the startup configuration.

    Args:
        cli_args: Parsed command-line flags.
        environ: Process environment used for fallbacks.

    Returns:
        The resolved configuration. In export mode only the mode is set.

    Raises:
        InvalidLanguageList: If the language list contains unknown names.
    """
    if cli_args.write_openapi:
        return StartupConfig(mode=RunMode.EXPORT_SPEC)

    raw = select_language_source(cli_args.languages, environ)
    selection = resolve_selection(raw)
    if isinstance(selection, Invalid):
        raise InvalidLanguageList(selection.tokens, languages.valid_forms())

    logger.debug(f"Resolved language selection {selection!r} from {raw!r}")

    return StartupConfig(
        mode=RunMode.RUN_SERVER,
        host=cli_args.host,
        port=cli_args.port,
        mount_dir=cli_args.mount_dir,
        languages=selection,
    )
