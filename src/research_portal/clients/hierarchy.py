"""Client for the mind map hierarchy service."""

import logging

from research_portal.clients.http import BackendClient, path_segment
from research_portal.config import settings
from research_portal.models import DepartmentCollection, ThesisRecord

logger = logging.getLogger(__name__)


class HierarchyClient(BackendClient):
    """Categories, collections, professors, students and theses."""

    service_name = "mindmap"

    def __init__(self, base_url: str | None = None, **kwargs) -> None:
        super().__init__(base_url or settings.mindmap_api_url, **kwargs)

    async def fetch_categories(self) -> list[str]:
        return list(await self.get_data("/categories") or [])

    async def fetch_departments(self) -> list[DepartmentCollection]:
        return await self._collections("/departments")

    async def fetch_schools(self) -> list[DepartmentCollection]:
        return await self._collections("/schools")

    async def fetch_centres(self) -> list[DepartmentCollection]:
        return await self._collections("/centres")

    async def fetch_professors(self, handle: str) -> list[str]:
        return list(await self.get_data(f"/professors/{path_segment(handle)}") or [])

    async def fetch_students(self, professor_name: str) -> list[str]:
        data = await self.get_data(f"/students/professor/{path_segment(professor_name)}")
        return list(data or [])

    async def fetch_theses(self, student_name: str) -> list[ThesisRecord]:
        data = await self.get_data(f"/theses/student/{path_segment(student_name)}")
        return [ThesisRecord.from_dict(item) for item in data or []]

    async def fetch_thesis_by_id(self, thesis_id: int | str) -> ThesisRecord:
        data = await self.get_data(f"/theses/{path_segment(thesis_id)}")
        return ThesisRecord.from_dict(data)

    async def _collections(self, path: str) -> list[DepartmentCollection]:
        data = await self.get_data(path)
        return [DepartmentCollection.from_dict(item) for item in data or []]


# Global client instance
_hierarchy_client: HierarchyClient | None = None


def get_hierarchy_client() -> HierarchyClient:
    """Get or create the global hierarchy client."""
    global _hierarchy_client
    if _hierarchy_client is None:
        _hierarchy_client = HierarchyClient()
    return _hierarchy_client


async def close_hierarchy_client() -> None:
    """Close the global hierarchy client."""
    global _hierarchy_client
    if _hierarchy_client is not None:
        await _hierarchy_client.close()
        _hierarchy_client = None
