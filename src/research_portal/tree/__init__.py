"""Interactive mind map tree engine."""

from research_portal.tree.debounce import Debouncer
from research_portal.tree.explorer import (
    ClickResult,
    NoPendingExpansionError,
    TreeError,
    TreeExplorer,
    UnknownNodeError,
)
from research_portal.tree.geometry import build_children_map, compute_subtree_heights
from research_portal.tree.layout import Bounds, compute_tree_layout, layout_bounds
from research_portal.tree.materializer import materialize_children
from research_portal.tree.session import MindMapSession, SessionStore
from research_portal.tree.source import HierarchyDataSource
from research_portal.tree.viewport import Viewport

__all__ = [
    "Bounds",
    "ClickResult",
    "Debouncer",
    "HierarchyDataSource",
    "MindMapSession",
    "NoPendingExpansionError",
    "SessionStore",
    "TreeError",
    "TreeExplorer",
    "UnknownNodeError",
    "Viewport",
    "build_children_map",
    "compute_subtree_heights",
    "compute_tree_layout",
    "layout_bounds",
    "materialize_children",
]
