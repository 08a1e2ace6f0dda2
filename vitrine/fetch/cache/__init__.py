"""Cache layer: single-slot and keyed LRU caches."""

from .stores import CachePolicy, KeyedLRUCache, ValueCache

__all__ = ["CachePolicy", "ValueCache", "KeyedLRUCache"]
