"""Client for the faculty directory service."""

from typing import Any

from research_portal.clients.http import BackendClient, path_segment
from research_portal.config import settings
from research_portal.models import Faculty, Pagination


class DirectoryClient(BackendClient):
    """Faculty listing, profiles and co-working graphs."""

    service_name = "directory"

    def __init__(self, base_url: str | None = None, **kwargs) -> None:
        super().__init__(base_url or settings.directory_api_url, **kwargs)

    async def faculties(
        self,
        page: int = 1,
        limit: int = 9,
        sort_by: str = "hIndex",
        order: str = "desc",
    ) -> tuple[list[Faculty], Pagination]:
        data = await self.get_data(
            "",
            params={"page": page, "limit": limit, "sortBy": sort_by, "order": order},
        ) or {}
        faculties = [Faculty.from_dict(item) for item in data.get("data") or []]
        return faculties, Pagination.from_dict(data.get("pagination") or {})

    async def faculty(self, faculty_id: str) -> Faculty:
        return Faculty.from_dict(await self.get_data(f"/{path_segment(faculty_id)}"))

    async def coworking(self, faculty_id: str) -> dict[str, Any]:
        """Co-authors and supervised students; passed through unmodeled."""
        return await self.get_data(f"/coworkers/{path_segment(faculty_id)}") or {}
