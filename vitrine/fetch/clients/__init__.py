"""Collection client base classes."""

from .collection import CollectionClient

__all__ = ["CollectionClient"]
