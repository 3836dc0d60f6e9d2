"""
Hierarchical container store, ordered-list codec and lazy attribute model.
"""
from diary.store.container import Container, FieldType
from diary.store.lazy import CachedEntity, LazyField

__all__ = ["CachedEntity", "Container", "FieldType", "LazyField"]
