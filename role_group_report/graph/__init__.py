from .client import GraphClient, GraphAPIError, QueryError
from .directory import DirectoryService, GraphDirectory

__all__ = [
    "GraphClient",
    "GraphAPIError",
    "QueryError",
    "DirectoryService",
    "GraphDirectory",
]
