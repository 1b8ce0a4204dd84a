"""Viewport controller: zoom, pan and fit-to-view over the laid-out tree."""

from dataclasses import dataclass

from research_portal.config import TreeConfig
from research_portal.tree.layout import Bounds


@dataclass
class Viewport:
    """
    Screen transform for the mind map canvas.

    A tree point (x, y) is drawn at (x * zoom + pan_x, y * zoom + pan_y).
    """

    config: TreeConfig
    width: float = 1280.0
    height: float = 720.0
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0

    def __post_init__(self) -> None:
        self.zoom = self.clamp(self.zoom)

    @property
    def zoom_percent(self) -> int:
        return round(self.zoom * 100)

    def clamp(self, zoom: float) -> float:
        return min(max(zoom, self.config.min_zoom), self.config.max_zoom)

    def set_zoom(self, zoom: float) -> float:
        """Zoom around the canvas center."""
        new_zoom = self.clamp(zoom)
        cx, cy = self.width / 2, self.height / 2
        ratio = new_zoom / self.zoom
        self.pan_x = cx - (cx - self.pan_x) * ratio
        self.pan_y = cy - (cy - self.pan_y) * ratio
        self.zoom = new_zoom
        return self.zoom

    def zoom_in(self) -> float:
        return self.set_zoom(self.zoom * self.config.zoom_step)

    def zoom_out(self) -> float:
        return self.set_zoom(self.zoom / self.config.zoom_step)

    def pan_by(self, dx: float, dy: float) -> None:
        self.pan_x += dx
        self.pan_y += dy

    def resize(self, width: float, height: float) -> None:
        if width > 0 and height > 0:
            self.width = width
            self.height = height

    def fit_view(self, bounds: Bounds | None) -> float:
        """Fit bounds (plus fit_view_padding on each side) into the canvas."""
        if bounds is None:
            return self.zoom

        padding = 1 + 2 * self.config.fit_view_padding
        content_w = max(bounds.width, 1.0) * padding
        content_h = max(bounds.height, 1.0) * padding
        self.zoom = self.clamp(min(self.width / content_w, self.height / content_h))

        center_x, center_y = bounds.center
        self.pan_x = self.width / 2 - center_x * self.zoom
        self.pan_y = self.height / 2 - center_y * self.zoom
        return self.zoom

    def to_dict(self) -> dict:
        return {
            "zoom": self.zoom,
            "zoomPercent": self.zoom_percent,
            "panX": self.pan_x,
            "panY": self.pan_y,
            "width": self.width,
            "height": self.height,
            "minZoom": self.config.min_zoom,
            "maxZoom": self.config.max_zoom,
            "pollIntervalMs": self.config.zoom_poll_interval_ms,
        }
