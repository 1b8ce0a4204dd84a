"""Research portal data models."""

from research_portal.models.content import Analytics, Comment, Magazine, MagazinePage, MagazineStatus, Pagination
from research_portal.models.directory import Faculty
from research_portal.models.thesis import DepartmentCollection, ThesisRecord
from research_portal.models.tree import (
    NODE_TYPES,
    ROOT_ID,
    ChildDescriptor,
    NodeType,
    PendingExpansion,
    Position,
    TreeEdge,
    TreeNode,
)

__all__ = [
    "Analytics",
    "Comment",
    "Magazine",
    "MagazinePage",
    "MagazineStatus",
    "Pagination",
    "Faculty",
    "DepartmentCollection",
    "ThesisRecord",
    "NODE_TYPES",
    "ROOT_ID",
    "ChildDescriptor",
    "NodeType",
    "PendingExpansion",
    "Position",
    "TreeEdge",
    "TreeNode",
]
