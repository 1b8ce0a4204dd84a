"""Tests for mind map sessions."""

import pytest

from research_portal.config import TreeConfig
from research_portal.tree import HierarchyDataSource, SessionStore


@pytest.fixture
def store(mock_source: HierarchyDataSource, tree_config: TreeConfig) -> SessionStore:
    return SessionStore(mock_source, tree_config, max_sessions=2, auto_fit=True)


class TestSessionStore:
    """Tests for SessionStore."""

    def test_create_fits_root(self, store: SessionStore) -> None:
        session = store.create(width=1280, height=720)

        assert len(store) == 1
        assert [n.id for n in session.explorer.nodes] == ["1"]
        assert session.viewport.zoom == 3.0
        assert store.get(session.id) is session

    def test_oldest_session_evicted(self, store: SessionStore) -> None:
        first = store.create()
        second = store.create()
        third = store.create()

        assert len(store) == 2
        assert store.get(first.id) is None
        assert store.get(second.id) is second
        assert store.get(third.id) is third

    def test_get_refreshes_recency(self, store: SessionStore) -> None:
        first = store.create()
        second = store.create()
        store.get(first.id)
        store.create()

        assert store.get(first.id) is first
        assert store.get(second.id) is None

    def test_delete(self, store: SessionStore) -> None:
        session = store.create()
        assert store.delete(session.id) is True
        assert store.delete(session.id) is False
        assert store.get(session.id) is None
        assert len(store) == 0

    def test_created_at_is_timezone_aware(self, store: SessionStore) -> None:
        session = store.create()
        assert session.created_at.tzinfo is not None


class TestAutoFit:
    """Tests for refitting after structural changes."""

    @pytest.mark.asyncio
    async def test_refits_after_expand(self, store: SessionStore) -> None:
        session = store.create(width=1280, height=720)
        await session.explorer.expand("1")
        await session.explorer.expand("1-1")

        assert session.viewport.zoom < 3.0

        session.explorer.collapse_all()
        assert session.viewport.zoom == 3.0

    @pytest.mark.asyncio
    async def test_manual_zoom_kept_without_auto_fit(
        self, mock_source: HierarchyDataSource, tree_config: TreeConfig
    ) -> None:
        store = SessionStore(mock_source, tree_config, max_sessions=2, auto_fit=False)
        session = store.create(width=1280, height=720)
        session.viewport.set_zoom(1.0)

        await session.explorer.expand("1")
        assert session.viewport.zoom == 1.0

        # Root plus three categories: 258px tall, the tighter side once padded
        assert session.fit_view() == pytest.approx(720 / (258 * 1.24))

    def test_to_dict(self, store: SessionStore) -> None:
        session = store.create()
        data = session.to_dict()

        assert data["id"] == session.id
        assert data["nodes"][0]["id"] == "1"
        assert data["viewport"]["zoomPercent"] == 300
