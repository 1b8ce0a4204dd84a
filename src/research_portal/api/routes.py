"""API routes for the research portal.

Provides:
- /health
- /api/magazines, /api/directory, /api/search gateways to the backends
"""

import logging
from typing import Any, Literal

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from research_portal import __version__
from research_portal.clients import BackendError, ContentClient, DirectoryClient, SearchClient

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Models
# ============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    search_service: str = "unknown"
    sessions: int = 0
    version: str = __version__


class CommentRequest(BaseModel):
    """New comment on a magazine."""

    body: str = Field(min_length=1, max_length=5000)


class SearchRequest(BaseModel):
    """Hybrid search request, forwarded as-is to the search service."""

    query: str = Field(min_length=1)
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=20, ge=1, le=100)
    sort: str | None = None
    filters: dict[str, Any] = Field(default_factory=dict)


# ============================================================================
# Helper Functions
# ============================================================================


def get_content(request: Request) -> ContentClient:
    return request.app.state.content


def get_directory(request: Request) -> DirectoryClient:
    return request.app.state.directory


def get_search(request: Request) -> SearchClient:
    return request.app.state.search


def backend_failure(e: BackendError) -> HTTPException:
    """Map a backend error to the response the portal returns."""
    if e.status_code == 404:
        return HTTPException(status_code=404, detail=e.message)
    logger.warning(f"Backend call failed: {e}")
    return HTTPException(status_code=502, detail=f"{e.service} service error: {e.message}")


# ============================================================================
# Admin Endpoints
# ============================================================================


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint."""
    try:
        search_health = await get_search(request).health()
        search_status = search_health.get("status", "unknown")
    except BackendError:
        search_status = "unreachable"

    return HealthResponse(
        status="healthy",
        search_service=search_status,
        sessions=len(request.app.state.sessions),
    )


# ============================================================================
# Magazines
# ============================================================================


@router.get("/api/magazines")
async def list_magazines(
    request: Request,
    page: int = 1,
    limit: int = 9,
    status: Literal["pending", "online", "archived"] | None = "online",
) -> dict:
    """One page of magazines, published only by default."""
    try:
        result = await get_content(request).paginated_magazines(page=page, limit=limit, status=status)
    except BackendError as e:
        raise backend_failure(e)

    return {
        "magazines": [m.to_dict() for m in result.magazines],
        "pagination": result.pagination.to_dict(),
    }


@router.get("/api/magazines/{magazine_id}")
async def get_magazine(request: Request, magazine_id: str) -> dict:
    try:
        magazine = await get_content(request).magazine(magazine_id)
    except BackendError as e:
        raise backend_failure(e)
    return magazine.to_dict()


@router.post("/api/magazines/{magazine_id}/like")
async def like_magazine(request: Request, magazine_id: str, undo: bool = False) -> dict:
    """Like (or with undo=true, unlike) a magazine."""
    client = get_content(request)
    try:
        analytics = await (client.dislike(magazine_id) if undo else client.like(magazine_id))
    except BackendError as e:
        raise backend_failure(e)
    return {"content_id": analytics.content_id, "likes": analytics.likes}


@router.post("/api/magazines/{magazine_id}/comments")
async def comment_on_magazine(request: Request, magazine_id: str, body: CommentRequest) -> dict:
    try:
        comment = await get_content(request).add_comment(magazine_id, body.body)
    except BackendError as e:
        raise backend_failure(e)
    return comment.to_dict()


@router.delete("/api/magazines/{magazine_id}/comments/{comment_id}")
async def delete_magazine_comment(request: Request, magazine_id: str, comment_id: str) -> dict:
    try:
        await get_content(request).delete_comment(magazine_id, comment_id)
    except BackendError as e:
        raise backend_failure(e)
    return {"deleted": True}


# ============================================================================
# Directory
# ============================================================================


@router.get("/api/directory")
async def list_faculty(
    request: Request,
    page: int = 1,
    limit: int = 9,
    sort_by: str = "hIndex",
    order: Literal["asc", "desc"] = "desc",
) -> dict:
    try:
        faculties, pagination = await get_directory(request).faculties(
            page=page, limit=limit, sort_by=sort_by, order=order
        )
    except BackendError as e:
        raise backend_failure(e)

    return {
        "faculty": [f.to_dict() for f in faculties],
        "pagination": pagination.to_dict(),
    }


@router.get("/api/directory/{faculty_id}")
async def get_faculty(request: Request, faculty_id: str, coworking: bool = False) -> dict:
    """Faculty profile, optionally with co-authors and supervised students."""
    client = get_directory(request)
    try:
        faculty = await client.faculty(faculty_id)
        result = faculty.to_dict()
        if coworking:
            result["coworking"] = await client.coworking(faculty_id)
    except BackendError as e:
        raise backend_failure(e)
    return result


# ============================================================================
# Search
# ============================================================================


@router.post("/api/search")
async def search_research(request: Request, body: SearchRequest) -> dict:
    try:
        return await get_search(request).search(body.model_dump(exclude_none=True))
    except BackendError as e:
        raise backend_failure(e)


@router.get("/api/search/documents/{document_id}")
async def get_search_document(request: Request, document_id: str) -> dict:
    try:
        document = await get_search(request).document(document_id)
    except BackendError as e:
        raise backend_failure(e)

    if document is None:
        raise HTTPException(status_code=404, detail=f"Document {document_id} not found")
    return document


@router.get("/api/search/authors/{author_id}/documents")
async def get_author_documents(
    request: Request,
    author_id: str,
    page: int = 1,
    per_page: int = 20,
) -> dict:
    """Documents indexed for one faculty member."""
    try:
        return await get_search(request).documents_by_author(author_id, page=page, per_page=per_page)
    except BackendError as e:
        raise backend_failure(e)
