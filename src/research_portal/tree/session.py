"""Mind map sessions: one explorer and viewport per open page."""

import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timezone

from research_portal.config import TreeConfig, settings
from research_portal.tree.explorer import TreeExplorer
from research_portal.tree.layout import layout_bounds
from research_portal.tree.source import HierarchyDataSource
from research_portal.tree.viewport import Viewport

logger = logging.getLogger(__name__)


@dataclass
class MindMapSession:
    """An explorer plus its viewport, re-fitted after structural changes."""

    id: str
    explorer: TreeExplorer
    viewport: Viewport
    auto_fit: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        self.explorer.layout_listeners.append(self._on_layout)
        self.fit_view()

    def fit_view(self) -> float:
        return self.viewport.fit_view(layout_bounds(self.explorer.nodes, self.explorer.config))

    def _on_layout(self) -> None:
        if self.auto_fit:
            self.fit_view()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            **self.explorer.to_dict(),
            "viewport": self.viewport.to_dict(),
        }


class SessionStore:
    """In-memory sessions, oldest evicted beyond max_sessions."""

    def __init__(
        self,
        source: HierarchyDataSource,
        config: TreeConfig | None = None,
        max_sessions: int | None = None,
        auto_fit: bool | None = None,
    ) -> None:
        self.source = source
        self.config = config or TreeConfig.from_settings()
        self.max_sessions = max_sessions or settings.max_sessions
        self.auto_fit = settings.tree_auto_fit if auto_fit is None else auto_fit
        self._sessions: OrderedDict[str, MindMapSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, width: float | None = None, height: float | None = None) -> MindMapSession:
        session = MindMapSession(
            id=uuid.uuid4().hex,
            explorer=TreeExplorer(self.source, self.config),
            viewport=Viewport(
                config=self.config,
                width=width or settings.viewport_width,
                height=height or settings.viewport_height,
            ),
            auto_fit=self.auto_fit,
        )
        self._sessions[session.id] = session

        while len(self._sessions) > self.max_sessions:
            evicted_id, evicted = self._sessions.popitem(last=False)
            evicted.explorer.collapse_all()
            logger.info(f"Evicted mind map session {evicted_id}")

        return session

    def get(self, session_id: str) -> MindMapSession | None:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session

    def delete(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.explorer.collapse_all()
        return True
