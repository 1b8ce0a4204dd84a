"""FastAPI application for the research portal.

Serves the mind map explorer and thin JSON gateways to the content,
directory and search services.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from research_portal.api.mindmap import router as mindmap_router
from research_portal.api.routes import router
from research_portal.clients import ContentClient, DirectoryClient, HierarchyClient, SearchClient
from research_portal.config import TreeConfig, settings
from research_portal.tree import HierarchyDataSource, SessionStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan - startup and shutdown."""
    # Startup
    logger.info("Starting research portal...")
    logger.info(f"Hierarchy service: {settings.mindmap_api_url}")

    hierarchy = HierarchyClient()
    app.state.hierarchy = hierarchy
    app.state.content = ContentClient()
    app.state.directory = DirectoryClient()
    app.state.search = SearchClient()
    app.state.sessions = SessionStore(
        source=HierarchyDataSource(hierarchy),
        config=TreeConfig.from_settings(),
    )

    yield

    # Shutdown
    logger.info("Shutting down research portal...")
    for client in (app.state.hierarchy, app.state.content, app.state.directory, app.state.search):
        await client.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Research Portal",
        description="Research portal with an interactive mind map of theses",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routes
    app.include_router(router)
    app.include_router(mindmap_router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "research_portal.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
