"""Mind map tree models - visible nodes, connectors and paging bookkeeping."""

from dataclasses import dataclass, field
from typing import Any, Literal, get_args

from research_portal.models.thesis import ThesisRecord

NodeType = Literal["root", "category", "collection", "professor", "student", "thesis"]

NODE_TYPES: tuple[str, ...] = get_args(NodeType)

ROOT_ID = "1"


@dataclass
class Position:
    """Layout output: x is the column, y is the node's vertical center."""

    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass
class ChildDescriptor:
    """
    One child returned by the hierarchy service, before it becomes a node.

    Exactly one payload field is set, matching node_type:
    category -> category_name, collection -> handle,
    professor -> professor_name, student -> student_name, thesis -> thesis.
    """

    label: str
    node_type: NodeType
    category_name: str | None = None
    handle: str | None = None
    professor_name: str | None = None
    student_name: str | None = None
    thesis: ThesisRecord | None = None

    def payload(self) -> dict[str, Any]:
        """Non-empty payload fields, keyed by attribute name."""
        fields = {
            "category_name": self.category_name,
            "handle": self.handle,
            "professor_name": self.professor_name,
            "student_name": self.student_name,
            "thesis": self.thesis,
        }
        return {k: v for k, v in fields.items() if v is not None}


@dataclass
class TreeNode:
    """A visible vertex in the explored hierarchy."""

    id: str  # Path encoded: "1", "1-3", "1-3-2"
    level: int  # Root = 1
    label: str
    node_type: NodeType
    expanded: bool = False
    selected: bool = False
    is_max_depth: bool = False

    # Opaque payload handed to the next fetch
    category_name: str | None = None
    handle: str | None = None
    professor_name: str | None = None
    student_name: str | None = None
    thesis: ThesisRecord | None = None

    position: Position = field(default_factory=Position)

    @property
    def parent_id(self) -> str | None:
        if "-" not in self.id:
            return None
        return self.id.rsplit("-", 1)[0]

    def to_dict(self) -> dict:
        """Convert to dictionary for the mind map page."""
        return {
            "id": self.id,
            "level": self.level,
            "label": self.label,
            "nodeType": self.node_type,
            "expanded": self.expanded,
            "selected": self.selected,
            "isMaxDepth": self.is_max_depth,
            "categoryName": self.category_name,
            "handle": self.handle,
            "professorName": self.professor_name,
            "studentName": self.student_name,
            "thesis": self.thesis.to_dict() if self.thesis else None,
            "position": self.position.to_dict(),
        }


@dataclass
class TreeEdge:
    """Directed connector from a parent node to a materialized child."""

    source: str
    target: str

    @property
    def id(self) -> str:
        return f"e-{self.source}-{self.target}"

    def to_dict(self) -> dict:
        return {"id": self.id, "source": self.source, "target": self.target}


@dataclass
class PendingExpansion:
    """Children fetched for a parent but not shown yet."""

    parent_id: str
    remaining_children: list[ChildDescriptor]
    next_start_index: int  # Number of children already shown under parent_id

    @property
    def remaining_count(self) -> int:
        return len(self.remaining_children)

    def to_dict(self) -> dict:
        return {
            "parentId": self.parent_id,
            "remaining": self.remaining_count,
            "nextStartIndex": self.next_start_index,
        }
