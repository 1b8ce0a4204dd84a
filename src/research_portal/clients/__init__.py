"""Backend service clients."""

from research_portal.clients.content import ContentClient
from research_portal.clients.directory import DirectoryClient
from research_portal.clients.hierarchy import HierarchyClient, close_hierarchy_client, get_hierarchy_client
from research_portal.clients.http import BackendClient, BackendError
from research_portal.clients.search import SearchClient

__all__ = [
    "BackendClient",
    "BackendError",
    "ContentClient",
    "DirectoryClient",
    "HierarchyClient",
    "SearchClient",
    "close_hierarchy_client",
    "get_hierarchy_client",
]
