"""Connector namespace for collection-specific implementations.

Architecture:
    Connectors are organized by collection: `connectors/<collection>/`
    Each connector holds its URLs (config), response schemas and a
    CollectionClient subclass.
"""

__all__: list[str] = []
