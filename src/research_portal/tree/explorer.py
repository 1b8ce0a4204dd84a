"""Interactive tree exploration: expand, collapse and page through children.

Per node state:
    collapsed --click--> expanding --fetch ok--> expanded --click--> collapsed
Thesis nodes are terminal; clicking them shows the thesis instead.

The explorer owns the visible nodes and edges, the expanded set, the
single pending-expansion record and the collapse debounce slot. All
mutation happens on the event loop between awaits, and layout always
runs over a fully materialized tree.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from research_portal.config import TreeConfig
from research_portal.models import (
    ROOT_ID,
    ChildDescriptor,
    PendingExpansion,
    ThesisRecord,
    TreeEdge,
    TreeNode,
)
from research_portal.tree.debounce import Debouncer
from research_portal.tree.layout import compute_tree_layout
from research_portal.tree.materializer import materialize_children
from research_portal.tree.paths import is_descendant, is_same_or_descendant
from research_portal.tree.source import HierarchyDataSource

logger = logging.getLogger(__name__)

ExpandOutcome = Literal["expanded", "empty", "failed", "stale", "ignored"]
ClickAction = Literal["expanded", "empty", "failed", "stale", "ignored", "collapse_scheduled", "detail"]


class TreeError(ValueError):
    """Invalid request against the current tree."""


class UnknownNodeError(TreeError):
    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node {node_id} is not in the tree")
        self.node_id = node_id


class NoPendingExpansionError(TreeError):
    def __init__(self) -> None:
        super().__init__("No hidden children to load")


@dataclass
class ClickResult:
    """What a node click did."""

    node_id: str
    action: ClickAction
    collapse: asyncio.Future | None = None  # Resolves True once the debounced collapse ran
    detail: ThesisRecord | None = None


class TreeExplorer:
    """
    Expansion state machine over a lazily fetched hierarchy.

    Expands of different nodes may overlap; only collapses are
    debounced. A fetch result is applied only if its node is still in
    the tree, still collapsed, and no collapse-all happened meanwhile.
    """

    def __init__(
        self,
        source: HierarchyDataSource,
        config: TreeConfig | None = None,
        root_label: str = "Research",
    ) -> None:
        self.source = source
        self.config = config or TreeConfig.from_settings()
        self.root_label = root_label

        self._nodes: dict[str, TreeNode] = {}
        self._edges: dict[str, TreeEdge] = {}  # keyed by target id
        self.expanded_ids: set[str] = set()
        self.pending: PendingExpansion | None = None

        self._expanding: set[str] = set()
        self._generation = 0
        self._collapse_debouncer = Debouncer(self.config.debounce_delay)
        self.layout_listeners: list[Callable[[], None]] = []

        root = TreeNode(id=ROOT_ID, level=1, label=root_label, node_type="root")
        self._nodes[root.id] = root
        self._relayout()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> list[TreeNode]:
        return list(self._nodes.values())

    @property
    def edges(self) -> list[TreeEdge]:
        return list(self._edges.values())

    @property
    def root(self) -> TreeNode:
        return self._nodes[ROOT_ID]

    @property
    def loading(self) -> bool:
        """True while any fetch is in flight."""
        return bool(self._expanding)

    @property
    def collapse_pending(self) -> bool:
        return self._collapse_debouncer.pending

    @property
    def selected_id(self) -> str | None:
        for node in self._nodes.values():
            if node.selected:
                return node.id
        return None

    def get_node(self, node_id: str) -> TreeNode:
        node = self._nodes.get(node_id)
        if node is None:
            raise UnknownNodeError(node_id)
        return node

    def is_expanding(self, node_id: str) -> bool:
        return node_id in self._expanding

    def is_terminal(self, node: TreeNode) -> bool:
        return node.is_max_depth or node.level >= self.config.max_depth

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    async def click(self, node_id: str) -> ClickResult:
        """
        Handle a click: detail for theses, collapse if expanded, else expand.

        An expand that comes back empty or fails leaves the tree and the
        selection untouched, so clicking a fresh root can end with no node
        selected.
        """
        node = self.get_node(node_id)

        if self.is_terminal(node):
            self._select(node_id)
            detail = await self.source.fetch_thesis_detail(node)
            return ClickResult(node_id=node_id, action="detail", detail=detail)

        if node_id in self.expanded_ids:
            future = self._collapse_debouncer.trigger(self.collapse, node_id)
            return ClickResult(node_id=node_id, action="collapse_scheduled", collapse=future)

        outcome = await self.expand(node_id)
        return ClickResult(node_id=node_id, action=outcome)

    async def expand(self, node_id: str) -> ExpandOutcome:
        """Fetch a node's children and show the first batch."""
        node = self.get_node(node_id)

        if node_id in self.expanded_ids or self.is_terminal(node):
            return "ignored"
        if node_id in self._expanding:
            logger.debug(f"Node {node_id} is already expanding, ignoring click")
            return "ignored"

        generation = self._generation
        self._expanding.add(node_id)
        try:
            children = await self.source.fetch_children(node)
        except Exception as e:
            logger.error(f"Failed to expand node {node_id} ({node.node_type}): {e}")
            return "failed"
        finally:
            self._expanding.discard(node_id)

        if self._is_stale(node, generation):
            logger.debug(f"Discarding stale children for node {node_id}")
            return "stale"

        if not children:
            logger.info(f"Node {node_id} has no children")
            return "empty"

        self._apply_expansion(node, children)
        return "expanded"

    def collapse(self, node_id: str) -> bool:
        """Remove a node's whole visible subtree. Returns False if nothing to do."""
        node = self._nodes.get(node_id)
        if node is None or node_id not in self.expanded_ids:
            logger.debug(f"Collapse of {node_id} skipped, node gone or not expanded")
            return False

        removed = [nid for nid in self._nodes if is_descendant(nid, node_id)]
        for nid in removed:
            del self._nodes[nid]
            self._edges.pop(nid, None)
            self.expanded_ids.discard(nid)

        if self.pending and is_same_or_descendant(self.pending.parent_id, node_id):
            self.pending = None

        node.expanded = False
        self.expanded_ids.discard(node_id)
        self._select(node_id)
        self._relayout()

        logger.info(f"Collapsed node {node_id}, removed {len(removed)} descendants")
        return True

    def collapse_all(self) -> None:
        """Prune back to the lone root and drop all bookkeeping."""
        self._collapse_debouncer.cancel()
        self._generation += 1

        root = self.root
        root.expanded = False
        root.selected = False
        self._nodes = {root.id: root}
        self._edges.clear()
        self.expanded_ids.clear()
        self.pending = None
        self._relayout()

    def load_next_batch(self) -> list[TreeNode]:
        """Show the next batch_size hidden children of the pending parent."""
        return self._drain_pending(self.config.batch_size)

    def load_all_remaining(self) -> list[TreeNode]:
        """Show every hidden child of the pending parent."""
        return self._drain_pending(None)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _is_stale(self, node: TreeNode, generation: int) -> bool:
        return (
            generation != self._generation
            or self._nodes.get(node.id) is not node
            or node.id in self.expanded_ids
        )

    def _apply_expansion(self, node: TreeNode, children: list[ChildDescriptor]) -> None:
        batch_size = self.config.batch_size
        shown, hidden = children[:batch_size], children[batch_size:]

        self._add_children(node, shown, start_index=0)

        if hidden:
            if self.pending is not None:
                logger.info(
                    f"Node {node.id} replaces {self.pending.parent_id} as the paged parent"
                )
            self.pending = PendingExpansion(
                parent_id=node.id,
                remaining_children=hidden,
                next_start_index=len(shown),
            )

        node.expanded = True
        self.expanded_ids.add(node.id)
        self._select(node.id)
        self._relayout()

        logger.info(
            f"Expanded node {node.id}: showing {len(shown)} of {len(children)} children"
        )

    def _drain_pending(self, limit: int | None) -> list[TreeNode]:
        pending = self.pending
        if pending is None:
            raise NoPendingExpansionError()

        parent = self._nodes.get(pending.parent_id)
        if parent is None or not parent.expanded:
            self.pending = None
            raise NoPendingExpansionError()

        remaining = pending.remaining_children
        batch = remaining if limit is None else remaining[:limit]
        new_nodes = self._add_children(parent, batch, start_index=pending.next_start_index)

        rest = remaining[len(batch):]
        if rest:
            pending.remaining_children = rest
            pending.next_start_index += len(batch)
        else:
            self.pending = None

        self._relayout()
        return new_nodes

    def _add_children(
        self,
        parent: TreeNode,
        descriptors: list[ChildDescriptor],
        start_index: int,
    ) -> list[TreeNode]:
        new_nodes, new_edges = materialize_children(parent, descriptors, start_index)
        for child in new_nodes:
            self._nodes[child.id] = child
        for edge in new_edges:
            self._edges[edge.target] = edge
        return new_nodes

    def _select(self, node_id: str) -> None:
        for node in self._nodes.values():
            node.selected = node.id == node_id

    def _relayout(self) -> None:
        compute_tree_layout(self._nodes.values(), self.config)
        for listener in self.layout_listeners:
            listener()

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "nodes": [node.to_dict() for node in self._nodes.values()],
            "edges": [edge.to_dict() for edge in self._edges.values()],
            "expanded": sorted(self.expanded_ids),
            "expanding": sorted(self._expanding),
            "pending": self.pending.to_dict() if self.pending else None,
            "selected": self.selected_id,
            "loading": self.loading,
        }
