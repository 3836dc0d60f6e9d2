#!/usr/bin/env python3
"""
lazy.py
-------
Lazily-materialized, cached entity attributes.

An entity wraps a container handle. Each attribute is declared as a
``LazyField`` descriptor naming its storage key and how to decode and
encode it. An attribute is either *unloaded* (absent from the entity's
cache) or *cached*:

    Unloaded --first access--> Cached --clear_cache()--> Unloaded

``store()`` writes back only the attributes that are currently cached.
Attributes never touched are left alone on disk, so reading an entity
for display never forces a write.

Write-back is explicit. ``with entity:`` stores on every exit path and
then drops the cache; nothing relies on object finalization to do I/O.

Usage:
    class Note(CachedEntity):
        title = string_field()
        tags = string_list_field()

    note = Note(container)
    note.title          # read from disk once, then served from cache
    note.clear_cache()  # back to unloaded, nothing written

    with Note(container) as note:
        note.tags = ["a", "b"]
    # tags written, cache cleared
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

# --- Local imports ---
from diary.core.exceptions import StorageError
from diary.store import lists
from diary.store.container import Container, FieldType

T = TypeVar("T")
E = TypeVar("E", bound="CachedEntity")

Loader = Callable[[Container, str], T]
Dumper = Callable[[Container, str, T], None]


class LazyField(Generic[T]):
    """
    Descriptor for one lazily loaded, cached attribute.

    Attributes:
        load: Reads the value from ``(container, key)``
        dump: Writes the value to ``(container, key)``
        key: Storage key (defaults to the attribute name)
        name: Attribute name on the owning class
    """

    def __init__(self, load: Loader, dump: Dumper, key: Optional[str] = None) -> None:
        self.load = load
        self.dump = dump
        self.key = key
        self.name = key or ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        if self.key is None:
            self.key = name

    def __get__(self, obj: Optional["CachedEntity"], objtype: Optional[type] = None) -> Any:
        if obj is None:
            return self
        cache = obj._cache
        if self.name not in cache:
            try:
                cache[self.name] = self.load(obj.container, self.key)
            except StorageError as e:
                raise StorageError(
                    f"While loading '{self.name}' of {obj.describe()}: {e}"
                ) from e
        return cache[self.name]

    def __set__(self, obj: "CachedEntity", value: T) -> None:
        obj._cache[self.name] = value

    def store(self, obj: "CachedEntity") -> None:
        """Write the cached value of this attribute back, if cached."""
        if not obj.is_cached(self.name):
            return
        try:
            self.dump(obj.container, self.key, obj._cache[self.name])
        except StorageError as e:
            raise StorageError(f"While storing '{self.name}' of {obj.describe()}: {e}") from e


class CachedEntity:
    """
    Base class for entities with lazily loaded attributes.

    Attributes:
        container: Storage location of this entity
    """

    def __init__(self, container: Container) -> None:
        self.container = container
        self._cache: Dict[str, Any] = {}

    def describe(self) -> str:
        """Short human-readable identification used in error messages."""
        return f"'{self.container.path}'"

    @classmethod
    def lazy_fields(cls) -> Dict[str, LazyField]:
        """All LazyField descriptors of this class, base classes first."""
        fields: Dict[str, LazyField] = {}
        for klass in reversed(cls.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, LazyField):
                    fields[name] = value
        return fields

    def is_cached(self, name: str) -> bool:
        return name in self._cache

    def cached_fields(self) -> List[str]:
        return [name for name in self.lazy_fields() if name in self._cache]

    def store(self) -> None:
        """Write every currently cached attribute back to the container."""
        fields = self.lazy_fields()
        for name in self.cached_fields():
            fields[name].store(self)

    def clear_cache(self) -> None:
        """Discard all cached values without writing them back."""
        self._cache.clear()

    def forget(self, name: str) -> None:
        """Discard one cached value without writing it back."""
        self._cache.pop(name, None)

    def fill_cache(self) -> None:
        """Materialize every attribute, including those of owned sub-entities."""
        for name in self.lazy_fields():
            value = getattr(self, name)
            if isinstance(value, list):
                for item in value:
                    if isinstance(item, CachedEntity):
                        item.fill_cache()

    def __enter__(self: E) -> E:
        return self

    def __exit__(self, exc_type: Optional[type], exc_val: Optional[BaseException], exc_tb: Any) -> None:
        try:
            self.store()
        finally:
            self.clear_cache()


# ----- Field factories -----

def _read_string_list(container: Container, key: str) -> List[str]:
    return lists.read(container.child(key), lists.read_string)


def _write_string_list(container: Container, key: str, values: List[str]) -> None:
    lists.write(values, container.replace_child(key), lists.write_string)


def _read_u16_list(container: Container, key: str) -> List[int]:
    return lists.read(container.child(key), lists.read_u16)


def _write_u16_list(container: Container, key: str, values: List[int]) -> None:
    lists.write(values, container.replace_child(key), lists.write_u16)


def string_field(key: Optional[str] = None) -> LazyField[str]:
    """A single UTF-8 string attribute."""
    return LazyField(lists.read_string, lists.write_string, key)


def string_list_field(key: Optional[str] = None) -> LazyField[List[str]]:
    """An ordered list of strings, stored as a list container."""
    return LazyField(_read_string_list, _write_string_list, key)


def u16_list_field(key: Optional[str] = None) -> LazyField[List[int]]:
    """An ordered list of u16 values, stored as a list container."""
    return LazyField(_read_u16_list, _write_u16_list, key)


def entity_list_field(
    factory: Type[E], key: Optional[str] = None
) -> LazyField[List[E]]:
    """
    An ordered list of owned sub-entities (sections, collections).

    The list container holds ``length`` and one child container per
    index. Loading yields unloaded sub-entities; storing writes
    ``length`` and lets each sub-entity store its own cached attributes.
    """

    def load(container: Container, key: str) -> List[E]:
        parent = container.child(key)
        return [factory(parent.child(str(i))) for i in range(lists.length(parent))]

    def dump(container: Container, key: str, items: List[E]) -> None:
        parent = container.child_or_create(key)
        for item in items:
            item.store()
        parent.write_field(lists.LENGTH_KEY, FieldType.U16, len(items))

    return LazyField(load, dump, key)
