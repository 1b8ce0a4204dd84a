"""Path-encoded node ids.

A node id is its ancestry: "1" is the root, "1-3" its third child,
"1-3-2" the second child of "1-3". Parent, depth and descendant tests
are derived from the id alone.
"""

SEPARATOR = "-"


def segments(node_id: str) -> list[str]:
    return node_id.split(SEPARATOR)


def depth(node_id: str) -> int:
    """Number of segments; equals the node level."""
    return len(segments(node_id))


def parent_id(node_id: str) -> str | None:
    """Id with the last segment removed, None for the root."""
    parts = segments(node_id)
    if len(parts) == 1:
        return None
    return SEPARATOR.join(parts[:-1])


def path_index(node_id: str) -> int:
    """1-based sibling index (the last segment) as an integer."""
    return int(segments(node_id)[-1])


def child_id(parent: str, index: int) -> str:
    return f"{parent}{SEPARATOR}{index}"


def is_descendant(node_id: str, ancestor_id: str) -> bool:
    """True if node_id lies strictly below ancestor_id.

    Compares whole segments, so "1-20" is not below "1-2".
    """
    node_parts = segments(node_id)
    ancestor_parts = segments(ancestor_id)
    if len(node_parts) <= len(ancestor_parts):
        return False
    return node_parts[: len(ancestor_parts)] == ancestor_parts


def is_same_or_descendant(node_id: str, ancestor_id: str) -> bool:
    return node_id == ancestor_id or is_descendant(node_id, ancestor_id)
