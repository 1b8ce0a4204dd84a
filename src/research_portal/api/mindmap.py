"""Mind map API - interactive tree exploration sessions and the explorer page."""

import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from research_portal.api.mindmap_template import MINDMAP_HTML
from research_portal.tree import (
    MindMapSession,
    NoPendingExpansionError,
    SessionStore,
    UnknownNodeError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mindmap", tags=["mindmap"])


# ============================================================================
# Models
# ============================================================================


class SessionCreateRequest(BaseModel):
    """Canvas size of the page opening the session."""

    width: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)


class ViewportUpdateRequest(BaseModel):
    """Canvas resize, pan or explicit zoom from the page."""

    width: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    pan_x: float | None = None
    pan_y: float | None = None
    dx: float = 0.0
    dy: float = 0.0
    zoom: float | None = Field(default=None, gt=0)


# ============================================================================
# Helper Functions
# ============================================================================


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_session(request: Request, session_id: str) -> MindMapSession:
    session = get_sessions(request).get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return session


# ============================================================================
# Page
# ============================================================================


@router.get("", response_class=HTMLResponse)
async def mindmap_view() -> str:
    """Serve the interactive mind map page."""
    return MINDMAP_HTML


# ============================================================================
# Sessions
# ============================================================================


@router.post("/sessions")
async def create_session(request: Request, body: SessionCreateRequest | None = None) -> dict:
    body = body or SessionCreateRequest()
    session = get_sessions(request).create(width=body.width, height=body.height)
    logger.info(f"Created mind map session {session.id}")
    return session.to_dict()


@router.get("/sessions/{session_id}")
async def get_session_state(request: Request, session_id: str) -> dict:
    return get_session(request, session_id).to_dict()


@router.delete("/sessions/{session_id}")
async def delete_session(request: Request, session_id: str) -> dict:
    if not get_sessions(request).delete(session_id):
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return {"deleted": True}


# ============================================================================
# Tree actions
# ============================================================================


@router.post("/sessions/{session_id}/nodes/{node_id}/click")
async def click_node(request: Request, session_id: str, node_id: str) -> dict:
    """
    Click a node.

    Thesis nodes return their detail record. Clicking an expanded node
    waits out the collapse debounce; `collapsed` is false when a later
    click superseded this one.
    """
    session = get_session(request, session_id)

    try:
        result = await session.explorer.click(node_id)
        collapsed = None
        if result.collapse is not None:
            collapsed = await result.collapse
    except UnknownNodeError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception(f"Click on node {node_id} failed")
        raise HTTPException(status_code=500, detail=f"Click failed: {str(e)}")

    return {
        **session.to_dict(),
        "action": result.action,
        "collapsed": collapsed,
        "detail": result.detail.to_dict() if result.detail else None,
    }


@router.post("/sessions/{session_id}/collapse-all")
async def collapse_all(request: Request, session_id: str) -> dict:
    session = get_session(request, session_id)
    session.explorer.collapse_all()
    return session.to_dict()


@router.post("/sessions/{session_id}/next-batch")
async def next_batch(request: Request, session_id: str) -> dict:
    """Show the next batch of hidden children."""
    session = get_session(request, session_id)
    try:
        added = session.explorer.load_next_batch()
    except NoPendingExpansionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {**session.to_dict(), "added": [node.id for node in added]}


@router.post("/sessions/{session_id}/show-all")
async def show_all(request: Request, session_id: str) -> dict:
    """Show every hidden child."""
    session = get_session(request, session_id)
    try:
        added = session.explorer.load_all_remaining()
    except NoPendingExpansionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {**session.to_dict(), "added": [node.id for node in added]}


# ============================================================================
# Viewport
# ============================================================================


@router.get("/sessions/{session_id}/viewport")
async def get_viewport(request: Request, session_id: str) -> dict:
    return get_session(request, session_id).viewport.to_dict()


@router.put("/sessions/{session_id}/viewport")
async def update_viewport(request: Request, session_id: str, body: ViewportUpdateRequest) -> dict:
    viewport = get_session(request, session_id).viewport

    if body.width is not None and body.height is not None:
        viewport.resize(body.width, body.height)
    if body.pan_x is not None:
        viewport.pan_x = body.pan_x
    if body.pan_y is not None:
        viewport.pan_y = body.pan_y
    viewport.pan_by(body.dx, body.dy)
    if body.zoom is not None:
        viewport.set_zoom(body.zoom)

    return viewport.to_dict()


@router.post("/sessions/{session_id}/viewport/{command}")
async def viewport_command(
    request: Request,
    session_id: str,
    command: Literal["zoom-in", "zoom-out", "fit"],
) -> dict:
    session = get_session(request, session_id)
    if command == "zoom-in":
        session.viewport.zoom_in()
    elif command == "zoom-out":
        session.viewport.zoom_out()
    else:
        session.fit_view()
    return session.viewport.to_dict()
