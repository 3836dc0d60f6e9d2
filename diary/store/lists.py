#!/usr/bin/env python3
"""
lists.py
--------
Ordered-list codec on top of the container store.

A list is a container holding a ``length`` field (u16) and, for every
index ``i`` in ``[0, length)``, a child value stored under the key
``str(i)``. Indices are always dense: removal shifts trailing elements
down rather than leaving a hole.

Writes put children before ``length``. A torn write therefore shows up
as a list whose stored length disagrees with its children, which
``read`` reports as a StorageError; recovery is by rollback.

None of these operations are safe for concurrent writers.

Usage:
    from diary.store import lists

    lists.write(["a", "b"], container)
    lists.push(container, "c")
    lists.read(container)           # ['a', 'b', 'c']
    lists.remove(container, 0)      # ['b', 'c']
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Callable, List, Optional, Sequence, TypeVar

# --- Local imports ---
from diary.core.exceptions import StorageError
from diary.store.container import Container, FieldType

T = TypeVar("T")

LENGTH_KEY = "length"
MAX_LENGTH = 0xFFFF

Encoder = Callable[[Container, str, T], None]
Decoder = Callable[[Container, str], T]


# ----- Element codecs -----

def write_string(container: Container, key: str, value: str) -> None:
    container.write_field(key, FieldType.STRING, value)


def read_string(container: Container, key: str) -> str:
    return container.read_field(key, FieldType.STRING)  # type: ignore[return-value]


def write_u16(container: Container, key: str, value: int) -> None:
    container.write_field(key, FieldType.U16, value)


def read_u16(container: Container, key: str) -> int:
    return container.read_field(key, FieldType.U16)  # type: ignore[return-value]


# ----- List operations -----

def length(container: Container) -> int:
    """
    Read the stored length of a list.

    Raises:
        StorageError: If the length field is missing or malformed
    """
    try:
        return container.read_field(LENGTH_KEY, FieldType.U16)  # type: ignore[return-value]
    except StorageError as e:
        raise StorageError(f"While reading list length of '{container.path}': {e}") from e


def init(container: Container) -> None:
    """Make ``container`` an empty list."""
    container.write_field(LENGTH_KEY, FieldType.U16, 0)


def write(
    values: Sequence[T],
    container: Container,
    encode: Encoder = write_string,
) -> None:
    """
    Write ``values`` as a list into ``container``.

    Each value goes to key ``str(i)``; ``length`` is written last.

    Raises:
        StorageError: If the list is too long or any write fails
    """
    if len(values) > MAX_LENGTH:
        raise StorageError(
            f"List of {len(values)} elements exceeds maximum length {MAX_LENGTH}"
        )
    for i, value in enumerate(values):
        try:
            encode(container, str(i), value)
        except StorageError as e:
            raise StorageError(f"While writing element {i} of list '{container.path}': {e}") from e
    container.write_field(LENGTH_KEY, FieldType.U16, len(values))


def push(container: Container, value: T, encode: Encoder = write_string) -> int:
    """
    Append ``value`` to the list in ``container``.

    Reads ``length``, writes the value at index ``length``, then writes
    ``length + 1``. Not safe for concurrent callers.

    Returns:
        Index the value was written at
    """
    current = length(container)
    if current >= MAX_LENGTH:
        raise StorageError(f"List '{container.path}' is full ({MAX_LENGTH} elements)")
    try:
        encode(container, str(current), value)
    except StorageError as e:
        raise StorageError(f"While pushing to list '{container.path}': {e}") from e
    container.write_field(LENGTH_KEY, FieldType.U16, current + 1)
    return current


def read(container: Container, decode: Decoder = read_string) -> List[T]:
    """
    Read every element of the list in ``container``, in index order.

    Raises:
        StorageError: If ``length`` or any element below it is missing
    """
    values: List[T] = []
    for i in range(length(container)):
        try:
            values.append(decode(container, str(i)))
        except StorageError as e:
            raise StorageError(f"While reading element {i} of list '{container.path}': {e}") from e
    return values


def index_of(
    container: Container, value: T, decode: Decoder = read_string
) -> Optional[int]:
    """Position of the first element equal to ``value``, or None."""
    for i, item in enumerate(read(container, decode)):
        if item == value:
            return i
    return None


def remove(container: Container, index: int) -> None:
    """
    Remove the element at ``index``, compacting the list.

    Every later element moves down one slot, then ``length`` shrinks by
    one, so indices stay dense.

    Raises:
        StorageError: If ``index`` is out of range or a move fails
    """
    current = length(container)
    if index < 0 or index >= current:
        raise StorageError(
            f"Index {index} out of range for list '{container.path}' of length {current}"
        )
    for i in range(index + 1, current):
        container.rename_field(str(i), str(i - 1))
    if index == current - 1:
        container.remove_field(str(index))
    container.write_field(LENGTH_KEY, FieldType.U16, current - 1)


def remove_value(
    container: Container, value: T, decode: Decoder = read_string
) -> bool:
    """
    Remove the first element equal to ``value``.

    Returns:
        True if an element was removed
    """
    index = index_of(container, value, decode)
    if index is None:
        return False
    remove(container, index)
    return True
