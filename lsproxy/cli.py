#!/usr/bin/env python3
"""Command-line entry point for lsproxy."""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

import click

from lsproxy import __version__, api, service
from lsproxy.config import DEFAULT_HOST, DEFAULT_PORT, CliArgs, RunMode, resolve_startup_config
from lsproxy.errors import ExportFailure, InvalidLanguageList, ServerFailure, StateInitFailure
from lsproxy.observability import configure_logging, install_crash_observer
from lsproxy.selection import LanguageSelection

OPENAPI_OUTPUT_PATH = Path("openapi.json")

logger = logging.getLogger("lsproxy.cli")


@dataclass(frozen=True)
class Collaborators:
    """Subsystems the bootstrap hands control to."""

    export_spec: Callable[[Path], None] = api.export_spec
    init_state: Callable[[Optional[str], LanguageSelection], Any] = service.init_state
    run_server: Callable[[Any, int, str], Optional[int]] = api.run_server


def run(
    cli_args: CliArgs,
    environ: Mapping[str, str],
    collaborators: Optional[Collaborators] = None,
) -> int:
    """Validate the startup configuration and run exactly one mode.

    Args:
        cli_args: Parsed command-line flags.
        environ: Process environment.
        collaborators: Subsystems to invoke. Defaults to the real ones.

    Returns:
        Process exit status (0 for success, non-zero for error).
    """
    collaborators = collaborators or Collaborators()

    install_crash_observer()
    configure_logging(environ)

    try:
        config = resolve_startup_config(cli_args, environ)
    except InvalidLanguageList as e:
        for line in e.describe():
            logger.error(line)
        return 1

    if config.mode is RunMode.EXPORT_SPEC:
        try:
            collaborators.export_spec(OPENAPI_OUTPUT_PATH)
        except Exception as e:
            failure = ExportFailure(e)
            logger.error(
                f"Failed to write the {OPENAPI_OUTPUT_PATH} to a file. {failure}",
                exc_info=e,
            )
            return 1
        return 0

    try:
        state = collaborators.init_state(config.mount_dir, config.languages)
    except Exception as e:
        logger.critical(f"Fatal startup error: {StateInitFailure(e)}", exc_info=e)
        return 1

    try:
        status = collaborators.run_server(state, config.port, config.host)
    except Exception as e:
        logger.error(str(ServerFailure(e)), exc_info=e)
        return 1

    return status if isinstance(status, int) else 0


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="lsproxy")
@click.option("--write-openapi", "-w", is_flag=True, help="Write OpenAPI specification to openapi.json file")
@click.option("--host", default=DEFAULT_HOST, show_default=True, help="Host address to bind the server to")
@click.option(
    "--mount-dir",
    default=None,
    help="Override the default mount directory path where your workspace files are located",
)
@click.option(
    "--port",
    type=click.IntRange(0, 65535),
    default=DEFAULT_PORT,
    show_default=True,
    help="Port number to bind the server to",
)
@click.option(
    "--languages",
    default=None,
    help=(
        "Comma-separated list of languages to start (e.g. python,golang). "
        "Falls back to the LANGUAGES environment variable; if neither is set, "
        "languages are auto-detected from workspace files."
    ),
)
def main(write_openapi: bool, host: str, mount_dir: Optional[str], port: int, languages: Optional[str]) -> None:
    """Run the lsproxy server, or export its OpenAPI specification."""
    cli_args = CliArgs(
        write_openapi=write_openapi,
        host=host,
        mount_dir=mount_dir,
        port=port,
        languages=languages,
    )
    sys.exit(run(cli_args, os.environ))


if __name__ == "__main__":
    main()  # pylint: disable=no-value-for-parameter
