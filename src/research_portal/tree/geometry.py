"""Subtree geometry: vertical space each visible subtree needs."""

from collections import defaultdict
from collections.abc import Iterable

from research_portal.config import TreeConfig
from research_portal.models import TreeNode
from research_portal.tree.paths import parent_id, path_index


def build_children_map(nodes: Iterable[TreeNode]) -> dict[str, list[str]]:
    """Map parent id -> child ids, ordered by sibling index.

    Sorting by the numeric index (not arrival order) keeps repeated
    layouts identical whichever fetch finished first.
    """
    children: dict[str, list[str]] = defaultdict(list)
    for node in nodes:
        pid = parent_id(node.id)
        if pid is not None:
            children[pid].append(node.id)

    for child_ids in children.values():
        child_ids.sort(key=path_index)

    return dict(children)


def compute_subtree_heights(
    nodes: Iterable[TreeNode],
    config: TreeConfig,
    children_map: dict[str, list[str]] | None = None,
) -> dict[str, float]:
    """
    Compute the subtree height of every visible node.

    Leaf: node_height.
    Parent: sum of child heights + (n - 1) * min_vertical_gap,
    never less than node_height.

    Heights are memoized for this call only; the tree may change
    shape before the next one.
    """
    node_list = list(nodes)
    if children_map is None:
        children_map = build_children_map(node_list)

    heights: dict[str, float] = {}

    def height_of(node_id: str) -> float:
        cached = heights.get(node_id)
        if cached is not None:
            return cached

        child_ids = children_map.get(node_id, [])
        if not child_ids:
            value = config.node_height
        else:
            stacked = sum(height_of(cid) for cid in child_ids)
            stacked += (len(child_ids) - 1) * config.min_vertical_gap
            value = max(stacked, config.node_height)

        heights[node_id] = value
        return value

    for node in node_list:
        height_of(node.id)

    return heights
