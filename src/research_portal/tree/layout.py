"""Tree layout engine: levels become columns, siblings stack vertically.

Runs server-side over the whole visible tree after every structural
change, so the page only draws what it receives.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from research_portal.config import TreeConfig
from research_portal.models import ROOT_ID, Position, TreeNode
from research_portal.tree.geometry import build_children_map, compute_subtree_heights

logger = logging.getLogger(__name__)


@dataclass
class Bounds:
    """Axis-aligned box around the drawn node rectangles."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        return (self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2


def compute_tree_layout(
    nodes: Iterable[TreeNode],
    config: TreeConfig,
    root_id: str = ROOT_ID,
) -> dict[str, Position]:
    """Assign every visible node a position and return id -> position.

    x = (level - 1) * level_horizontal_gap.
    The root is centered on y = 0. A parent's children take a span of
    their subtree heights plus gaps, centered on the parent, and are
    placed top to bottom in sibling-index order.
    """
    node_map = {node.id: node for node in nodes}
    if root_id not in node_map:
        return {}

    children_map = build_children_map(node_map.values())
    heights = compute_subtree_heights(node_map.values(), config, children_map)
    positions: dict[str, Position] = {}

    def place(node_id: str, center_y: float) -> None:
        node = node_map[node_id]
        position = Position(
            x=(node.level - 1) * config.level_horizontal_gap,
            y=center_y,
        )
        node.position = position
        positions[node_id] = position

        child_ids = children_map.get(node_id, [])
        if not child_ids:
            return

        span = sum(heights[cid] for cid in child_ids)
        span += (len(child_ids) - 1) * config.min_vertical_gap
        top = center_y - span / 2

        for cid in child_ids:
            child_height = heights[cid]
            place(cid, top + child_height / 2)
            top += child_height + config.min_vertical_gap

    place(root_id, 0.0)

    orphans = len(node_map) - len(positions)
    if orphans:
        logger.warning(f"Layout skipped {orphans} nodes not connected to root {root_id}")

    return positions


def layout_bounds(nodes: Iterable[TreeNode], config: TreeConfig) -> Bounds | None:
    """Bounding box of the node rectangles, None for an empty tree.

    Each node is drawn node_width wide starting at position.x and
    node_height tall centered on position.y.
    """
    node_list = list(nodes)
    if not node_list:
        return None

    half_height = config.node_height / 2
    return Bounds(
        min_x=min(n.position.x for n in node_list),
        min_y=min(n.position.y - half_height for n in node_list),
        max_x=max(n.position.x + config.node_width for n in node_list),
        max_y=max(n.position.y + half_height for n in node_list),
    )
