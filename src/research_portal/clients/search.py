"""Client for the hybrid research search service.

Unlike the other backends this one answers with bare JSON bodies,
not the success/data envelope. Ranking happens entirely server-side.
"""

from typing import Any

from research_portal.clients.http import BackendClient, path_segment
from research_portal.config import settings


class SearchClient(BackendClient):
    service_name = "search"

    def __init__(self, base_url: str | None = None, **kwargs) -> None:
        super().__init__(base_url or settings.search_api_url, **kwargs)

    async def search(self, request: dict[str, Any]) -> dict[str, Any]:
        return await self.post("/search", request) or {}

    async def document(self, document_id: str) -> dict[str, Any] | None:
        body = await self.get(f"/document/{path_segment(document_id)}") or {}
        return body.get("document")

    async def documents_by_author(
        self,
        author_id: str,
        page: int = 1,
        per_page: int = 20,
    ) -> dict[str, Any]:
        return await self.get(
            f"/documents/by-author/{path_segment(author_id)}",
            params={"page": page, "per_page": per_page},
        ) or {}

    async def health(self) -> dict[str, Any]:
        return await self.get("/search/health") or {}
