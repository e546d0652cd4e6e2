"""HTTP API served by lsproxy, plus its OpenAPI export and server runner."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel

from lsproxy import __version__
from lsproxy.service import AppState

logger = logging.getLogger("lsproxy.api")

router = APIRouter(prefix="/v1")


class HealthResponse(BaseModel):
    """Body of the health endpoint."""

    status: str
    version: str
    languages: Dict[str, bool]


def get_state(request: Request) -> AppState:
    """Return the state attached to the app, or answer 503 if there is none."""
    state = getattr(request.app.state, "lsproxy", None)
    if state is None:
        raise HTTPException(status_code=503, detail="Workspace state is not initialized")
    return state


@router.get("/system/health", response_model=HealthResponse, tags=["system"])
def health(state: AppState = Depends(get_state)) -> HealthResponse:
    """Report server status and which language backends are active."""
    return HealthResponse(status="ok", version=__version__, languages=state.language_status())


@router.get("/workspace/list-files", response_model=List[str], tags=["workspace"])
def list_files(state: AppState = Depends(get_state)) -> List[str]:
    """List workspace files, relative to the mount directory."""
    return state.workspace.list_files()


def build_app(state: Optional[AppState] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        state: State to serve. Without it the app can still describe itself,
            which is all the OpenAPI export needs.

    Returns:
        The configured application.
    """
    app = FastAPI(
        title="lsproxy",
        version=__version__,
        description="Code-intelligence proxy over multiple language backends",
    )
    app.state.lsproxy = state
    app.include_router(router)
    return app


def export_spec(output_path: Path) -> None:
    """Write the OpenAPI document to ``output_path`` as indented JSON."""
    document = build_app().openapi()
    output_path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
    logger.info(f"Wrote OpenAPI specification to {output_path}")


def run_server(state: AppState, port: int, host: str) -> None:
    """Serve the API until shutdown.

    Args:
        state: Initialized application state.
        port: Port to bind.
        host: Address to bind.

    Raises:
        RuntimeError: If the server could not start, e.g. the port is taken.
    """
    config = uvicorn.Config(build_app(state), host=host, port=port, log_config=None)
    server = uvicorn.Server(config)

    logger.info(f"Starting on port {port}")
    try:
        server.run()
    except SystemExit as e:
        # uvicorn exits the process when it cannot bind.
        raise RuntimeError(f"Server failed to start on {host}:{port}") from e

    if not server.started:
        raise RuntimeError(f"Server failed to start on {host}:{port}")
