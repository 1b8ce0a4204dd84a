"""Hierarchy data source: which fetch answers a node's expansion.

root -> categories -> collections -> professors -> students -> theses
"""

import logging
from collections.abc import Awaitable, Callable

from research_portal.clients.hierarchy import HierarchyClient
from research_portal.models import ChildDescriptor, DepartmentCollection, ThesisRecord, TreeNode

logger = logging.getLogger(__name__)


class HierarchyDataSource:
    """Fetch children of a tree node from the hierarchy service."""

    def __init__(self, client: HierarchyClient) -> None:
        self.client = client
        self._collection_fetchers: dict[str, Callable[[], Awaitable[list[DepartmentCollection]]]] = {
            "departments": client.fetch_departments,
            "schools": client.fetch_schools,
            "centres": client.fetch_centres,
            "centers": client.fetch_centres,
        }

    async def fetch_children(self, node: TreeNode) -> list[ChildDescriptor]:
        """
        Children of node in server order.

        Unknown node types (and thesis, which is terminal) have no
        children. Fetch errors propagate to the caller.
        """
        if node.node_type == "root":
            return await self._categories()
        if node.node_type == "category":
            return await self._collections(node.category_name or node.label)
        if node.node_type == "collection" and node.handle:
            return await self._professors(node.handle)
        if node.node_type == "professor":
            return await self._students(node.professor_name or node.label)
        if node.node_type == "student":
            return await self._theses(node.student_name or node.label)

        logger.debug(f"No children for node {node.id} of type {node.node_type}")
        return []

    async def fetch_thesis_detail(self, node: TreeNode) -> ThesisRecord | None:
        """Full thesis record; falls back to the partial one on the node."""
        if node.thesis is None:
            return None
        try:
            return await self.client.fetch_thesis_by_id(node.thesis.id)
        except Exception as e:
            logger.error(f"Failed to fetch thesis {node.thesis.id} details, showing partial record: {e}")
            return node.thesis

    async def _categories(self) -> list[ChildDescriptor]:
        categories = await self.client.fetch_categories()
        return [
            ChildDescriptor(label=name, node_type="category", category_name=name)
            for name in categories
        ]

    async def _collections(self, category_name: str) -> list[ChildDescriptor]:
        fetcher = self._collection_fetchers.get(category_name.strip().lower())
        if fetcher is None:
            logger.warning(f"Unknown category '{category_name}', no collections")
            return []
        collections = await fetcher()
        return [
            ChildDescriptor(label=c.name, node_type="collection", handle=c.handle)
            for c in collections
        ]

    async def _professors(self, handle: str) -> list[ChildDescriptor]:
        professors = await self.client.fetch_professors(handle)
        return [
            ChildDescriptor(label=name, node_type="professor", professor_name=name)
            for name in professors
        ]

    async def _students(self, professor_name: str) -> list[ChildDescriptor]:
        students = await self.client.fetch_students(professor_name)
        return [
            ChildDescriptor(label=name, node_type="student", student_name=name)
            for name in students
        ]

    async def _theses(self, student_name: str) -> list[ChildDescriptor]:
        theses = await self.client.fetch_theses(student_name)
        return [
            ChildDescriptor(label=t.title, node_type="thesis", thesis=t)
            for t in theses
        ]
