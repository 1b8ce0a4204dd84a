"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from research_portal.clients import HierarchyClient
from research_portal.config import Settings, TreeConfig
from research_portal.models import ChildDescriptor, DepartmentCollection, ThesisRecord, TreeNode
from research_portal.tree import HierarchyDataSource, TreeExplorer


def make_children(node: TreeNode, count: int) -> list[ChildDescriptor]:
    """Deterministic children for node, one level down the hierarchy."""
    if node.node_type == "root":
        names = ["Departments", "Schools", "Centres"][:count]
        return [ChildDescriptor(label=n, node_type="category", category_name=n) for n in names]
    if node.node_type == "category":
        return [
            ChildDescriptor(label=f"Department {i}", node_type="collection", handle=f"123456789/{i}")
            for i in range(1, count + 1)
        ]
    if node.node_type == "collection":
        return [
            ChildDescriptor(label=f"Prof {i}", node_type="professor", professor_name=f"Prof {i}")
            for i in range(1, count + 1)
        ]
    if node.node_type == "professor":
        return [
            ChildDescriptor(label=f"Student {i}", node_type="student", student_name=f"Student {i}")
            for i in range(1, count + 1)
        ]
    if node.node_type == "student":
        return [
            ChildDescriptor(
                label=f"Thesis {i}",
                node_type="thesis",
                thesis=ThesisRecord(id=i, dc_title=f"Thesis {i}"),
            )
            for i in range(1, count + 1)
        ]
    return []


# Children returned per node type by the mock source
CHILD_COUNTS = {
    "root": 3,
    "category": 12,
    "collection": 2,
    "professor": 7,
    "student": 2,
}


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with defaults."""
    return Settings(
        mindmap_api_url="http://mindmap.test/api",
        content_api_url="http://content.test/api",
        directory_api_url="http://directory.test/api/directory",
        search_api_url="http://search.test/api/v1",
        http_max_retries=0,
    )


@pytest.fixture
def tree_config() -> TreeConfig:
    """Default tree constants with a short collapse debounce."""
    return TreeConfig(debounce_delay=0.01)


@pytest.fixture
def mock_source() -> HierarchyDataSource:
    """Mock data source serving a fixed hierarchy without a backend."""
    source = MagicMock(spec=HierarchyDataSource)

    async def fake_fetch_children(node: TreeNode) -> list[ChildDescriptor]:
        return make_children(node, CHILD_COUNTS.get(node.node_type, 0))

    async def fake_fetch_thesis_detail(node: TreeNode) -> ThesisRecord | None:
        if node.thesis is None:
            return None
        return ThesisRecord(
            id=node.thesis.id,
            dc_title=node.thesis.dc_title,
            dc_description_abstract="Full abstract",
        )

    source.fetch_children = AsyncMock(side_effect=fake_fetch_children)
    source.fetch_thesis_detail = AsyncMock(side_effect=fake_fetch_thesis_detail)
    return source


@pytest.fixture
def explorer(mock_source: HierarchyDataSource, tree_config: TreeConfig) -> TreeExplorer:
    """Explorer over the mock hierarchy, showing only the root."""
    return TreeExplorer(mock_source, tree_config)


@pytest.fixture
def mock_hierarchy_client() -> HierarchyClient:
    """Mock hierarchy client returning one record set per endpoint."""
    client = MagicMock(spec=HierarchyClient)
    client.fetch_categories = AsyncMock(return_value=["Departments", "Schools", "Centres"])
    client.fetch_departments = AsyncMock(return_value=[
        DepartmentCollection(id="d1", name="Computer Science", handle="123456789/10"),
        DepartmentCollection(id="d2", name="Physics", handle="123456789/11"),
    ])
    client.fetch_schools = AsyncMock(return_value=[
        DepartmentCollection(id="s1", name="School of Design", handle="123456789/20"),
    ])
    client.fetch_centres = AsyncMock(return_value=[
        DepartmentCollection(id="c1", name="Centre for AI", handle="123456789/30"),
    ])
    client.fetch_professors = AsyncMock(return_value=["Dr. Rao", "Dr. Iyer"])
    client.fetch_students = AsyncMock(return_value=["Asha", "Vikram", "Meera"])
    client.fetch_theses = AsyncMock(return_value=[
        ThesisRecord(id=42, dc_title="Graph Neural Networks", dc_contributor_author="Asha"),
        ThesisRecord(id=43, dc_title=None),
    ])
    client.fetch_thesis_by_id = AsyncMock(return_value=ThesisRecord(
        id=42,
        dc_title="Graph Neural Networks",
        dc_contributor_author="Asha",
        dc_description_abstract="We study message passing.",
    ))
    client.close = AsyncMock()
    return client


@pytest.fixture
def sample_thesis() -> ThesisRecord:
    """Sample thesis record for testing."""
    return ThesisRecord(
        id=42,
        dc_title="Graph Neural Networks for Citation Analysis",
        dc_contributor_author="Asha Kumar",
        dc_contributor_advisor="Dr. Rao",
        dc_date_issued="2023-05-01",
        dc_subject="Machine Learning||Graphs|| Citation Analysis",
        dc_type="Thesis",
    )
