"""Tests for the tree expansion state machine."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from research_portal.clients import BackendError
from research_portal.config import TreeConfig
from research_portal.models import ChildDescriptor, TreeNode
from research_portal.tree import (
    HierarchyDataSource,
    NoPendingExpansionError,
    TreeExplorer,
    UnknownNodeError,
)
from research_portal.tree.geometry import compute_subtree_heights


def ids(explorer: TreeExplorer) -> set[str]:
    return {n.id for n in explorer.nodes}


def children_of(explorer: TreeExplorer, parent: str) -> list[str]:
    return sorted(
        (n.id for n in explorer.nodes if n.parent_id == parent),
        key=lambda nid: int(nid.rsplit("-", 1)[1]),
    )


def gated_source(explorer: TreeExplorer, gate: asyncio.Event) -> None:
    """Make the explorer's source wait on gate before answering."""
    original = explorer.source.fetch_children.side_effect

    async def slow_fetch(node: TreeNode) -> list[ChildDescriptor]:
        await gate.wait()
        return await original(node)

    explorer.source.fetch_children.side_effect = slow_fetch


async def expand_path(explorer: TreeExplorer, *node_ids: str) -> None:
    for node_id in node_ids:
        assert await explorer.expand(node_id) == "expanded"


class TestInitialState:
    """Tests for a fresh explorer."""

    def test_root_only(self, explorer: TreeExplorer) -> None:
        assert ids(explorer) == {"1"}
        assert explorer.edges == []
        assert explorer.root.label == "Research"
        assert explorer.root.position.x == 0.0
        assert explorer.root.position.y == 0.0
        assert explorer.pending is None
        assert explorer.selected_id is None
        assert not explorer.loading

    def test_unknown_node(self, explorer: TreeExplorer) -> None:
        with pytest.raises(UnknownNodeError):
            explorer.get_node("1-9")

    @pytest.mark.asyncio
    async def test_click_unknown_node(self, explorer: TreeExplorer) -> None:
        with pytest.raises(UnknownNodeError):
            await explorer.click("1-9")


class TestExpand:
    """Tests for expanding nodes."""

    @pytest.mark.asyncio
    async def test_expand_root(self, explorer: TreeExplorer) -> None:
        """Root expands into the three categories."""
        outcome = await explorer.expand("1")

        assert outcome == "expanded"
        assert children_of(explorer, "1") == ["1-1", "1-2", "1-3"]
        assert all(explorer.get_node(i).level == 2 for i in ("1-1", "1-2", "1-3"))
        assert {e.source for e in explorer.edges} == {"1"}
        assert len(explorer.edges) == 3
        assert explorer.root.expanded
        assert explorer.root.selected
        assert explorer.expanded_ids == {"1"}
        assert explorer.pending is None

    @pytest.mark.asyncio
    async def test_first_batch_and_pending_record(self, explorer: TreeExplorer) -> None:
        """A category with twelve collections shows five and holds seven."""
        await expand_path(explorer, "1", "1-1")

        assert children_of(explorer, "1-1") == [f"1-1-{i}" for i in range(1, 6)]
        assert explorer.pending.parent_id == "1-1"
        assert explorer.pending.remaining_count == 7
        assert explorer.pending.next_start_index == 5

    @pytest.mark.asyncio
    async def test_next_batch_then_show_all(self, explorer: TreeExplorer) -> None:
        await expand_path(explorer, "1", "1-1")

        added = explorer.load_next_batch()
        assert [n.id for n in added] == [f"1-1-{i}" for i in range(6, 11)]
        assert explorer.pending.remaining_count == 2
        assert explorer.pending.next_start_index == 10

        added = explorer.load_all_remaining()
        assert [n.id for n in added] == ["1-1-11", "1-1-12"]
        assert explorer.pending is None
        assert len(children_of(explorer, "1-1")) == 12

        with pytest.raises(NoPendingExpansionError):
            explorer.load_next_batch()

    @pytest.mark.asyncio
    async def test_pagination_without_record(self, explorer: TreeExplorer) -> None:
        with pytest.raises(NoPendingExpansionError):
            explorer.load_all_remaining()

    @pytest.mark.asyncio
    async def test_new_overflowing_expansion_replaces_record(self, explorer: TreeExplorer) -> None:
        await expand_path(explorer, "1", "1-1", "1-2")

        assert explorer.pending.parent_id == "1-2"
        assert explorer.pending.remaining_count == 7
        # 1-1 keeps what it already showed
        assert len(children_of(explorer, "1-1")) == 5

    @pytest.mark.asyncio
    async def test_small_expansion_keeps_record(self, explorer: TreeExplorer) -> None:
        """A collection with two professors fits one batch."""
        await expand_path(explorer, "1", "1-1", "1-1-1")

        assert children_of(explorer, "1-1-1") == ["1-1-1-1", "1-1-1-2"]
        assert explorer.pending.parent_id == "1-1"

    @pytest.mark.asyncio
    async def test_expand_expanded_node_is_ignored(
        self, explorer: TreeExplorer, mock_source: HierarchyDataSource
    ) -> None:
        await explorer.expand("1")
        assert await explorer.expand("1") == "ignored"
        assert mock_source.fetch_children.await_count == 1

    @pytest.mark.asyncio
    async def test_empty_result(self, explorer: TreeExplorer, mock_source: HierarchyDataSource) -> None:
        mock_source.fetch_children.side_effect = None
        mock_source.fetch_children.return_value = []

        assert await explorer.expand("1") == "empty"
        assert ids(explorer) == {"1"}
        assert not explorer.root.expanded
        assert explorer.expanded_ids == set()

    @pytest.mark.asyncio
    async def test_empty_root_click_selects_nothing(
        self, explorer: TreeExplorer, mock_source: HierarchyDataSource
    ) -> None:
        mock_source.fetch_children.side_effect = None
        mock_source.fetch_children.return_value = []

        result = await explorer.click("1")

        assert result.action == "empty"
        assert explorer.selected_id is None

    @pytest.mark.asyncio
    async def test_fetch_failure_leaves_node_unchanged(
        self, explorer: TreeExplorer, mock_source: HierarchyDataSource
    ) -> None:
        await explorer.expand("1")
        mock_source.fetch_children.side_effect = BackendError("mindmap", "connection refused")

        assert await explorer.expand("1-2") == "failed"
        node = explorer.get_node("1-2")
        assert not node.expanded
        assert children_of(explorer, "1-2") == []
        assert not explorer.loading
        assert explorer.selected_id == "1"

    @pytest.mark.asyncio
    async def test_duplicate_click_while_expanding(
        self, explorer: TreeExplorer, mock_source: HierarchyDataSource
    ) -> None:
        """A second click on a loading node does not start a second fetch."""
        gate = asyncio.Event()
        gated_source(explorer, gate)

        first = asyncio.create_task(explorer.expand("1"))
        await asyncio.sleep(0)
        assert explorer.is_expanding("1")
        assert explorer.loading

        assert await explorer.expand("1") == "ignored"

        gate.set()
        assert await first == "expanded"
        assert mock_source.fetch_children.await_count == 1
        assert len(children_of(explorer, "1")) == 3

    @pytest.mark.asyncio
    async def test_overlapping_expands_of_different_nodes(self, explorer: TreeExplorer) -> None:
        await explorer.expand("1")
        gate = asyncio.Event()
        gated_source(explorer, gate)

        tasks = [asyncio.create_task(explorer.expand(i)) for i in ("1-3", "1-1")]
        await asyncio.sleep(0)
        gate.set()

        assert await asyncio.gather(*tasks) == ["expanded", "expanded"]
        assert explorer.expanded_ids == {"1", "1-1", "1-3"}
        # The later response owns the single pending record
        assert explorer.pending is not None


class TestStaleResponses:
    """Tests for fetches that finish after the tree moved on."""

    @pytest.mark.asyncio
    async def test_discarded_after_collapse_all(self, explorer: TreeExplorer) -> None:
        await explorer.expand("1")
        gate = asyncio.Event()
        gated_source(explorer, gate)

        task = asyncio.create_task(explorer.expand("1-1"))
        await asyncio.sleep(0)
        explorer.collapse_all()
        gate.set()

        assert await task == "stale"
        assert ids(explorer) == {"1"}
        assert explorer.pending is None

    @pytest.mark.asyncio
    async def test_discarded_after_parent_collapse(self, explorer: TreeExplorer) -> None:
        await explorer.expand("1")
        gate = asyncio.Event()
        gated_source(explorer, gate)

        task = asyncio.create_task(explorer.expand("1-1"))
        await asyncio.sleep(0)
        assert explorer.collapse("1")
        gate.set()

        assert await task == "stale"
        assert ids(explorer) == {"1"}
        assert explorer.expanded_ids == set()

    @pytest.mark.asyncio
    async def test_discarded_when_node_was_recreated(self, explorer: TreeExplorer) -> None:
        """Same id, different node object: the old fetch must not apply."""
        await explorer.expand("1")
        gate = asyncio.Event()
        gated_source(explorer, gate)

        task = asyncio.create_task(explorer.expand("1-2"))
        await asyncio.sleep(0)
        explorer.collapse("1")

        explorer.source.fetch_children.side_effect = None
        explorer.source.fetch_children.return_value = [
            ChildDescriptor(label=n, node_type="category", category_name=n)
            for n in ("Departments", "Schools", "Centres")
        ]
        assert await explorer.expand("1") == "expanded"

        gate.set()
        assert await task == "stale"
        assert not explorer.get_node("1-2").expanded
        assert children_of(explorer, "1-2") == []


class TestCollapse:
    """Tests for collapsing subtrees."""

    @pytest.mark.asyncio
    async def test_click_expanded_node_collapses_subtree(self, explorer: TreeExplorer) -> None:
        await expand_path(explorer, "1", "1-2", "1-2-1")
        assert children_of(explorer, "1-2-1") == ["1-2-1-1", "1-2-1-2"]

        result = await explorer.click("1-2")
        assert result.action == "collapse_scheduled"
        assert explorer.collapse_pending
        assert await result.collapse is True

        assert ids(explorer) == {"1", "1-1", "1-2", "1-3"}
        node = explorer.get_node("1-2")
        assert not node.expanded
        assert node.selected
        assert explorer.expanded_ids == {"1"}
        assert explorer.pending is None
        assert {e.target for e in explorer.edges} == {"1-1", "1-2", "1-3"}

    @pytest.mark.asyncio
    async def test_collapse_keeps_unrelated_pending_record(self, explorer: TreeExplorer) -> None:
        await expand_path(explorer, "1", "1-1", "1-1-1", "1-1-1-1")
        # Professor 1-1-1-1 has seven students and now owns the record
        assert explorer.pending.parent_id == "1-1-1-1"

        await explorer.expand("1-1-2")
        assert explorer.collapse("1-1-2")
        assert explorer.pending.parent_id == "1-1-1-1"

    @pytest.mark.asyncio
    async def test_ancestor_collapse_clears_pending_record(self, explorer: TreeExplorer) -> None:
        """Collapsing a grandparent of the paged node drops the record."""
        await expand_path(explorer, "1", "1-1", "1-1-1", "1-1-1-1")
        assert explorer.pending.parent_id == "1-1-1-1"

        assert explorer.collapse("1-1")

        assert explorer.pending is None
        assert "1-1-1-1" not in ids(explorer)
        assert explorer.expanded_ids == {"1"}

    @pytest.mark.asyncio
    async def test_sibling_with_shared_prefix_survives(self, tree_config: TreeConfig) -> None:
        """Collapsing 1-2 must not prune 1-20."""
        source = MagicMock(spec=HierarchyDataSource)

        async def fetch(node: TreeNode) -> list[ChildDescriptor]:
            if node.node_type == "root":
                return [
                    ChildDescriptor(label=f"Cat {i}", node_type="category", category_name=f"Cat {i}")
                    for i in range(1, 26)
                ]
            return [
                ChildDescriptor(label=f"Col {i}", node_type="collection", handle=f"h/{i}")
                for i in range(1, 4)
            ]

        source.fetch_children = AsyncMock(side_effect=fetch)
        explorer = TreeExplorer(source, tree_config)

        await explorer.expand("1")
        explorer.load_all_remaining()
        await expand_path(explorer, "1-2", "1-20")

        assert explorer.collapse("1-2")
        assert children_of(explorer, "1-2") == []
        assert children_of(explorer, "1-20") == ["1-20-1", "1-20-2", "1-20-3"]
        assert "1-20" in explorer.expanded_ids

    @pytest.mark.asyncio
    async def test_rapid_collapse_clicks_coalesce(self, explorer: TreeExplorer) -> None:
        await expand_path(explorer, "1", "1-1", "1-2")

        first = await explorer.click("1-1")
        second = await explorer.click("1-2")

        assert await first.collapse is False
        assert await second.collapse is True
        assert "1-1" in explorer.expanded_ids
        assert "1-2" not in explorer.expanded_ids

    def test_collapse_of_collapsed_node_is_noop(self, explorer: TreeExplorer) -> None:
        assert explorer.collapse("1") is False
        assert explorer.collapse("1-7") is False


class TestCollapseAll:
    """Tests for resetting to the root."""

    @pytest.mark.asyncio
    async def test_resets_deep_tree(self, explorer: TreeExplorer) -> None:
        await expand_path(explorer, "1", "1-1", "1-1-1")

        explorer.collapse_all()

        assert ids(explorer) == {"1"}
        assert explorer.edges == []
        assert explorer.pending is None
        assert explorer.expanded_ids == set()
        assert not explorer.root.expanded
        assert explorer.selected_id is None

    @pytest.mark.asyncio
    async def test_cancels_scheduled_collapse(self, explorer: TreeExplorer) -> None:
        await expand_path(explorer, "1", "1-1")
        result = await explorer.click("1-1")

        explorer.collapse_all()

        assert await result.collapse is False
        assert not explorer.collapse_pending

    @pytest.mark.asyncio
    async def test_tree_can_be_explored_again(self, explorer: TreeExplorer) -> None:
        await expand_path(explorer, "1", "1-1")
        explorer.collapse_all()

        assert await explorer.expand("1") == "expanded"
        assert children_of(explorer, "1") == ["1-1", "1-2", "1-3"]


class TestThesisClick:
    """Tests for terminal thesis nodes."""

    @pytest.mark.asyncio
    async def test_click_shows_detail_without_changing_tree(
        self, explorer: TreeExplorer, mock_source: HierarchyDataSource
    ) -> None:
        await expand_path(explorer, "1", "1-1", "1-1-1", "1-1-1-1", "1-1-1-1-1")
        thesis_id = "1-1-1-1-1-1"
        thesis = explorer.get_node(thesis_id)
        assert thesis.node_type == "thesis"
        assert thesis.is_max_depth

        before_ids = ids(explorer)
        before_expanded = set(explorer.expanded_ids)
        fetches = mock_source.fetch_children.await_count

        result = await explorer.click(thesis_id)

        assert result.action == "detail"
        assert result.detail.dc_description_abstract == "Full abstract"
        assert ids(explorer) == before_ids
        assert explorer.expanded_ids == before_expanded
        assert mock_source.fetch_children.await_count == fetches
        assert explorer.selected_id == thesis_id

    @pytest.mark.asyncio
    async def test_expand_terminal_is_ignored(self, explorer: TreeExplorer) -> None:
        await expand_path(explorer, "1", "1-1", "1-1-1", "1-1-1-1", "1-1-1-1-1")
        assert await explorer.expand("1-1-1-1-1-1") == "ignored"


class TestInvariants:
    """Tests for properties that hold after every operation."""

    @pytest.mark.asyncio
    async def test_single_selection(self, explorer: TreeExplorer) -> None:
        steps = [
            explorer.expand("1"),
            explorer.expand("1-1"),
            explorer.expand("1-2"),
            explorer.expand("1-1-1"),
        ]
        for step in steps:
            await step
            assert sum(n.selected for n in explorer.nodes) <= 1

        explorer.load_next_batch()
        assert sum(n.selected for n in explorer.nodes) <= 1
        explorer.collapse("1-1")
        assert sum(n.selected for n in explorer.nodes) == 1

    @pytest.mark.asyncio
    async def test_every_non_root_node_has_one_parent_edge(self, explorer: TreeExplorer) -> None:
        await expand_path(explorer, "1", "1-1", "1-1-2", "1-3")
        explorer.load_all_remaining()

        targets = [e.target for e in explorer.edges]
        assert len(targets) == len(set(targets))
        assert set(targets) == ids(explorer) - {"1"}
        for edge in explorer.edges:
            assert edge.source == explorer.get_node(edge.target).parent_id

    @pytest.mark.asyncio
    async def test_expanded_set_matches_flags(self, explorer: TreeExplorer) -> None:
        await expand_path(explorer, "1", "1-1", "1-1-1")
        explorer.collapse("1-1")

        flagged = {n.id for n in explorer.nodes if n.expanded}
        assert flagged == explorer.expanded_ids == {"1"}

    @pytest.mark.asyncio
    async def test_layout_is_deterministic(
        self, mock_source: HierarchyDataSource, tree_config: TreeConfig
    ) -> None:
        """Expanding siblings in either order gives the same positions."""
        a = TreeExplorer(mock_source, tree_config)
        await expand_path(a, "1", "1-1", "1-3")

        b = TreeExplorer(mock_source, tree_config)
        await expand_path(b, "1", "1-3", "1-1")

        assert {n.id: n.position for n in a.nodes} == {n.id: n.position for n in b.nodes}

    @pytest.mark.asyncio
    async def test_paging_grows_root_height(self, explorer: TreeExplorer) -> None:
        await expand_path(explorer, "1", "1-1")
        before = compute_subtree_heights(explorer.nodes, explorer.config)["1"]

        explorer.load_next_batch()
        after = compute_subtree_heights(explorer.nodes, explorer.config)["1"]

        assert after > before

    @pytest.mark.asyncio
    async def test_layout_listeners_fire_on_change(self, explorer: TreeExplorer) -> None:
        listener = MagicMock()
        explorer.layout_listeners.append(listener)

        await explorer.expand("1")
        explorer.collapse_all()

        assert listener.call_count == 2


class TestSerialization:
    """Tests for the state snapshot."""

    @pytest.mark.asyncio
    async def test_to_dict(self, explorer: TreeExplorer) -> None:
        await expand_path(explorer, "1", "1-1")
        data = explorer.to_dict()

        assert len(data["nodes"]) == 9
        assert len(data["edges"]) == 8
        assert data["expanded"] == ["1", "1-1"]
        assert data["expanding"] == []
        assert data["pending"] == {"parentId": "1-1", "remaining": 7, "nextStartIndex": 5}
        assert data["selected"] == "1-1"
        assert data["loading"] is False
        assert data["nodes"][0]["id"] == "1"
        assert data["nodes"][0]["position"] == {"x": 0.0, "y": 0.0}
