"""
FastAPI backend for organizing directories from a browser.

Exposes the ``list``, ``organize``, ``undo`` and ``history`` actions of the
command line as JSON endpoints, plus a small single-page UI at ``/``.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from ..core.errors import LogIOError, NotFoundError, TidyError
from ..core.types import OrganizeResult, PreviewResult, SessionSummary, UndoResult
from ..organization import FileOrganizer, OrganizerConfig, UndoManager
from ..version import __version__

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8765

app = FastAPI(title="Tidy Tools", version=__version__)

# Local UI only
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        f"http://localhost:{DEFAULT_PORT}",
        f"http://127.0.0.1:{DEFAULT_PORT}",
    ],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

static_dir = Path(__file__).parent / "static"

# Configuration shared by every request
_config: OrganizerConfig = OrganizerConfig()


class DirectoryRequest(BaseModel):
    """Request naming the directory to act on."""

    directory: str = Field(description="Directory to list, organize or inspect")


class UndoRequest(DirectoryRequest):
    """Request to undo organize sessions."""

    session_id: Optional[str] = Field(
        default=None, description="Session to undo (default: all sessions)"
    )
    latest_only: Optional[bool] = Field(
        default=None, description="Undo only the latest session when no id is given"
    )


def init_config(config: Optional[OrganizerConfig] = None) -> None:
    """Set the configuration used by the endpoints."""
    global _config
    _config = config or OrganizerConfig()
    logger.info(
        f"Web API using log file {_config.log_filename} and "
        f"{len(_config.strategy.category_names)} categories"
    )


def get_config() -> OrganizerConfig:
    return _config


def _http_error(error: TidyError) -> HTTPException:
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))

    detail: Dict[str, Any] = {"message": str(error)}
    result = getattr(error, "result", None)
    if result is not None:
        # Files already moved or restored by the failed run
        detail["result"] = result.model_dump(mode="json")
    return HTTPException(status_code=500, detail=detail)


@app.get("/", response_model=None)
async def root() -> Union[HTMLResponse, Dict[str, Any]]:
    """Serve the frontend UI."""
    index_file = static_dir / "index.html"

    if index_file.exists():
        with open(index_file, "r", encoding="utf-8") as f:
            return HTMLResponse(content=f.read())

    return {"message": "Tidy Tools API", "version": __version__}


@app.get("/api")
async def api_root() -> Dict[str, Any]:
    """API root endpoint."""
    return {
        "message": "Tidy Tools API",
        "version": __version__,
        "categories": get_config().strategy.category_names,
    }


@app.post("/api/preview", response_model=PreviewResult)
async def preview_directory(request: DirectoryRequest) -> PreviewResult:
    """
    Show which category each file of a directory would go to.

    Example:
        ```bash
        curl -X POST http://localhost:8765/api/preview \\
          -H "Content-Type: application/json" \\
          -d '{"directory": "/home/me/Downloads"}'
        ```
    """
    organizer = FileOrganizer(config=get_config())
    try:
        return organizer.preview(request.directory)
    except TidyError as e:
        raise _http_error(e)


@app.post("/api/organize", response_model=OrganizeResult)
async def organize_directory(request: DirectoryRequest) -> OrganizeResult:
    """
    Move the files of a directory into category folders.

    A 500 response whose detail holds a ``result`` means files were moved
    but could not be logged, so they cannot be undone.
    """
    organizer = FileOrganizer(config=get_config())
    try:
        result = organizer.organize(request.directory)
    except LogIOError as e:
        logger.error(f"Organize of {request.directory} was not logged: {e}")
        raise _http_error(e)
    except TidyError as e:
        raise _http_error(e)

    logger.info(f"Organized {request.directory} via web (session {result.session_id})")
    return result


@app.post("/api/undo", response_model=UndoResult)
async def undo_directory(request: UndoRequest) -> UndoResult:
    """Move organized files back to where they were."""
    manager = UndoManager(config=get_config())
    try:
        return manager.undo(
            request.directory,
            session_id=request.session_id,
            latest_only=request.latest_only,
        )
    except TidyError as e:
        raise _http_error(e)


@app.post("/api/history", response_model=List[SessionSummary])
async def directory_history(request: DirectoryRequest) -> List[SessionSummary]:
    """List the organize sessions logged for a directory, oldest first."""
    manager = UndoManager(config=get_config())
    try:
        return manager.history(request.directory)
    except TidyError as e:
        raise _http_error(e)
