#!/usr/bin/env python3
"""Walk the live research hierarchy with the mind map explorer.

Expands the tree breadth-first the same way the page does (first batch
per node, optionally every child) and prints it as an indented outline.
Useful to check the hierarchy service and the layout without a browser.

Usage:
    uv run python scripts/explore_tree.py

    # Deeper walk, every child, against another service
    uv run python scripts/explore_tree.py --depth 4 --show-all --url http://localhost:5123/api
"""

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

# Add src to path
sys.path.insert(0, str(project_root / "src"))

from research_portal.clients import HierarchyClient, close_hierarchy_client, get_hierarchy_client
from research_portal.config import TreeConfig
from research_portal.tree import HierarchyDataSource, TreeExplorer
from research_portal.tree.layout import layout_bounds

logger = logging.getLogger(__name__)


async def explore(url: str | None, depth: int, show_all: bool, thesis_id: str | None) -> None:
    client = HierarchyClient(base_url=url) if url else get_hierarchy_client()
    config = TreeConfig.from_settings()
    explorer = TreeExplorer(HierarchyDataSource(client), config)

    try:
        start = time.time()
        frontier = [explorer.root.id]

        for level in range(1, depth):
            next_frontier: list[str] = []
            for node_id in frontier:
                outcome = await explorer.expand(node_id)
                if outcome != "expanded":
                    logger.info(f"{node_id}: {outcome}")
                    continue
                if show_all and explorer.pending and explorer.pending.parent_id == node_id:
                    explorer.load_all_remaining()
                next_frontier.extend(
                    n.id for n in explorer.nodes
                    if n.parent_id == node_id and not explorer.is_terminal(n)
                )
            frontier = next_frontier
            print(f"Level {level + 1}: {len(frontier)} expandable nodes")

        elapsed = time.time() - start

        print()
        for node in sorted(explorer.nodes, key=lambda n: [int(s) for s in n.id.split("-")]):
            indent = "  " * (node.level - 1)
            marker = "-" if node.expanded else "+"
            print(f"{indent}{marker} [{node.node_type}] {node.label}  ({node.position.x:.0f}, {node.position.y:.0f})")

        bounds = layout_bounds(explorer.nodes, config)
        print()
        print(f"Nodes: {len(explorer.nodes)}  Edges: {len(explorer.edges)}  ({elapsed:.1f}s)")
        if bounds:
            print(f"Layout: {bounds.width:.0f} x {bounds.height:.0f}")
        if explorer.pending:
            print(f"Hidden children under {explorer.pending.parent_id}: {explorer.pending.remaining_count}")

        if thesis_id:
            thesis = await client.fetch_thesis_by_id(thesis_id)
            print()
            print(f"Thesis {thesis.id}: {thesis.title}")
            print(f"  Author:   {thesis.dc_contributor_author}")
            print(f"  Advisor:  {thesis.dc_contributor_advisor}")
            print(f"  Subjects: {', '.join(thesis.subjects)}")

    finally:
        await client.close()
        await close_hierarchy_client()


def main():
    parser = argparse.ArgumentParser(description="Walk the research hierarchy and print it as a tree")
    parser.add_argument(
        "-d", "--depth",
        type=int,
        default=3,
        help="Deepest level to materialize, root is 1 (default: 3)",
    )
    parser.add_argument(
        "-a", "--show-all",
        action="store_true",
        help="Materialize every child instead of the first batch",
    )
    parser.add_argument(
        "-u", "--url",
        type=str,
        help="Hierarchy service base URL (default: MINDMAP_API_URL)",
    )
    parser.add_argument(
        "-t", "--thesis",
        type=str,
        help="Also fetch and print the full record of this thesis id",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    asyncio.run(explore(
        url=args.url,
        depth=max(1, min(args.depth, 6)),
        show_all=args.show_all,
        thesis_id=args.thesis,
    ))


if __name__ == "__main__":
    main()
