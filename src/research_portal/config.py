"""Configuration management using Pydantic Settings."""

from dataclasses import dataclass
from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment presets."""

    DEV = "dev"
    PROD = "prod"
    TEST = "test"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Backend services
    mindmap_api_url: str = Field(
        default="http://localhost:5123/api",
        description="Hierarchy service (categories, collections, professors, students, theses)"
    )
    content_api_url: str = Field(
        default="http://localhost:3000/api",
        description="Content/magazine service"
    )
    directory_api_url: str = Field(
        default="http://localhost:3002/api/directory",
        description="Faculty directory service"
    )
    search_api_url: str = Field(
        default="http://localhost:3000/api/v1",
        description="Hybrid search service"
    )
    auth_token: str | None = Field(
        default=None,
        description="Bearer token forwarded to the content service"
    )

    # HTTP client
    http_timeout: float = 30.0
    http_max_concurrent: int = 8
    http_max_retries: int = 2
    http_backoff_factor: float = 0.5

    # Mind map tree
    tree_max_depth: int = 6
    tree_node_width: float = 180.0
    tree_node_height: float = 70.0
    tree_min_vertical_gap: float = 24.0
    tree_level_horizontal_gap: float = 250.0
    tree_batch_size: int = Field(
        default=5,
        description="Children revealed per expansion and per 'Next' click"
    )
    tree_debounce_delay: float = Field(
        default=0.1,
        description="Seconds a collapse click waits before pruning the subtree"
    )
    tree_auto_fit: bool = Field(
        default=True,
        description="Re-fit the viewport after every structural change"
    )

    # Viewport
    viewport_min_zoom: float = 0.25
    viewport_max_zoom: float = 3.0
    viewport_fit_padding: float = 0.12
    viewport_zoom_step: float = 1.2
    viewport_zoom_poll_interval_ms: int = 100
    viewport_width: float = 1280.0
    viewport_height: float = 720.0

    # Sessions
    max_sessions: int = Field(
        default=500,
        description="Oldest mind map sessions are dropped beyond this count"
    )

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False


@dataclass(frozen=True)
class TreeConfig:
    """Layout and paging constants, fixed for the lifetime of a session."""

    max_depth: int = 6
    node_width: float = 180.0
    node_height: float = 70.0
    min_vertical_gap: float = 24.0
    level_horizontal_gap: float = 250.0
    batch_size: int = 5
    debounce_delay: float = 0.1
    min_zoom: float = 0.25
    max_zoom: float = 3.0
    fit_view_padding: float = 0.12
    zoom_step: float = 1.2
    zoom_poll_interval_ms: int = 100

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "TreeConfig":
        """Snapshot tree constants from settings."""
        s = source or settings
        return cls(
            max_depth=s.tree_max_depth,
            node_width=s.tree_node_width,
            node_height=s.tree_node_height,
            min_vertical_gap=s.tree_min_vertical_gap,
            level_horizontal_gap=s.tree_level_horizontal_gap,
            batch_size=s.tree_batch_size,
            debounce_delay=s.tree_debounce_delay,
            min_zoom=s.viewport_min_zoom,
            max_zoom=s.viewport_max_zoom,
            fit_view_padding=s.viewport_fit_padding,
            zoom_step=s.viewport_zoom_step,
            zoom_poll_interval_ms=s.viewport_zoom_poll_interval_ms,
        )


def get_dev_settings() -> Settings:
    """Get development environment settings."""
    return Settings(
        api_debug=True,
        http_max_retries=0,
    )


def get_prod_settings() -> Settings:
    """Get production environment settings."""
    return Settings(
        http_max_concurrent=32,
        http_max_retries=3,
        max_sessions=5000,
    )


def get_test_settings() -> Settings:
    """Get test environment settings."""
    return Settings(
        mindmap_api_url="http://mindmap.test/api",
        content_api_url="http://content.test/api",
        directory_api_url="http://directory.test/api/directory",
        search_api_url="http://search.test/api/v1",
        http_max_retries=0,
        tree_debounce_delay=0.01,
        tree_auto_fit=True,
    )


def get_settings(environment: Environment | str) -> Settings:
    """Get the settings preset for an environment."""
    presets = {
        Environment.DEV: get_dev_settings,
        Environment.PROD: get_prod_settings,
        Environment.TEST: get_test_settings,
    }
    return presets[Environment(environment)]()


# Global settings instance
settings = Settings()
