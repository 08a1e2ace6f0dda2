"""Metropolitan Museum of Art connector."""

from .client import MetClient
from .config import BASE_URL
from .schemas import Department, MetObject, MetTag, ObjectIDsResponse, ObjectQuery

__all__ = [
    "MetClient",
    "BASE_URL",
    "Department",
    "MetObject",
    "MetTag",
    "ObjectIDsResponse",
    "ObjectQuery",
]
