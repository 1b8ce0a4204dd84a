"""Turn fetched child descriptors into tree nodes and edges."""

from research_portal.models import ChildDescriptor, TreeEdge, TreeNode
from research_portal.tree.paths import child_id


def materialize_children(
    parent: TreeNode,
    descriptors: list[ChildDescriptor],
    start_index: int,
) -> tuple[list[TreeNode], list[TreeEdge]]:
    """
    Build nodes and edges for a batch of children.

    Args:
        parent: Node the children hang under
        descriptors: Children in server order
        start_index: How many children of parent already exist; the
            batch continues at start_index + 1 so indices never repeat

    Returns:
        (new nodes, new edges), one edge per node
    """
    nodes: list[TreeNode] = []
    edges: list[TreeEdge] = []

    for i, descriptor in enumerate(descriptors):
        node = TreeNode(
            id=child_id(parent.id, start_index + i + 1),
            level=parent.level + 1,
            label=descriptor.label,
            node_type=descriptor.node_type,
            is_max_depth=descriptor.node_type == "thesis",
            **descriptor.payload(),
        )
        nodes.append(node)
        edges.append(TreeEdge(source=parent.id, target=node.id))

    return nodes, edges
