#!/usr/bin/env python3
"""
container.py
------------
Filesystem-backed hierarchical key-value store.

A container is a directory. Inside it, a *field* is a regular file
holding one typed value and a *child container* is a subdirectory.
Fields and children share the directory namespace, so a list container
can hold a ``length`` field next to per-index children.

Field file layout:
    byte 0      type tag (see FieldType)
    bytes 1..   payload; integers little-endian, strings UTF-8

Whole trees are serialized to a single gzip-compressed tarball for
backups and extracted back into a directory on restore.

Usage:
    from diary.store.container import Container, FieldType

    root = Container.open_or_create(Path("~/diary-cli/archive"))
    root.write_field("itver", FieldType.U16, 0)
    entries = root.child_or_create("entries")
    itver = root.read_field("itver", FieldType.U16)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import shutil
import struct
import tarfile
from enum import Enum
from pathlib import Path
from typing import List, Union

# --- Local imports ---
from diary.core.exceptions import NotFoundError, StorageError

FieldValue = Union[int, str]


class FieldType(Enum):
    """Typed leaf values supported by the store."""

    U16 = 1
    U64 = 2
    STRING = 3


_INT_FORMATS = {
    FieldType.U16: "<H",
    FieldType.U64: "<Q",
}

_INT_LIMITS = {
    FieldType.U16: 0xFFFF,
    FieldType.U64: 0xFFFFFFFFFFFFFFFF,
}


MAX_KEY_BYTES = 255


def _check_name(name: str) -> str:
    if (
        not name
        or name in (".", "..")
        or any(ch in name for ch in ("/", "\\", "\x00"))
        or len(name.encode("utf-8", "surrogatepass")) > MAX_KEY_BYTES
    ):
        raise StorageError(f"Invalid container key: {name!r}")
    return name


def encode_value(ftype: FieldType, value: FieldValue) -> bytes:
    """
    Encode a value as field-file bytes.

    Raises:
        StorageError: If the value does not fit the field type
    """
    if ftype is FieldType.STRING:
        if not isinstance(value, str):
            raise StorageError(f"Expected str for {ftype.name}, got {type(value).__name__}")
        return bytes([ftype.value]) + value.encode("utf-8")

    if not isinstance(value, int) or isinstance(value, bool):
        raise StorageError(f"Expected int for {ftype.name}, got {type(value).__name__}")
    if value < 0 or value > _INT_LIMITS[ftype]:
        raise StorageError(f"Value {value} out of range for {ftype.name}")
    return bytes([ftype.value]) + struct.pack(_INT_FORMATS[ftype], value)


def decode_value(ftype: FieldType, raw: bytes) -> FieldValue:
    """
    Decode field-file bytes, checking the stored type tag.

    Raises:
        StorageError: If the tag or payload does not match ``ftype``
    """
    if not raw:
        raise StorageError("Empty field file")

    try:
        stored = FieldType(raw[0])
    except ValueError as e:
        raise StorageError(f"Unknown field type tag {raw[0]}") from e
    if stored is not ftype:
        raise StorageError(f"Field holds {stored.name}, expected {ftype.name}")

    payload = raw[1:]
    if ftype is FieldType.STRING:
        try:
            return payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise StorageError(f"Field is not valid UTF-8: {e}") from e

    try:
        (value,) = struct.unpack(_INT_FORMATS[ftype], payload)
    except struct.error as e:
        raise StorageError(f"Malformed {ftype.name} payload: {e}") from e
    return value


class Container:
    """
    Handle on one directory of the store.

    Handles are cheap: they only remember a path. Every read and write
    goes to disk, so two handles on the same path always agree.

    Attributes:
        path: Directory backing this container
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"Container({str(self.path)!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Container) and other.path == self.path

    def __hash__(self) -> int:
        return hash(self.path)

    # ----- Opening -----

    @classmethod
    def open(cls, path: Path) -> "Container":
        """
        Open an existing container.

        Raises:
            NotFoundError: If no directory exists at ``path``
        """
        path = Path(path)
        if not path.is_dir():
            raise NotFoundError(f"Container '{path}' does not exist")
        return cls(path)

    @classmethod
    def open_or_create(cls, path: Path) -> "Container":
        """
        Open a container, creating it (and its parents) if needed.

        Raises:
            StorageError: If the directory cannot be created
        """
        path = Path(path)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"While creating container '{path}': {e}") from e
        return cls(path)

    def exists(self) -> bool:
        return self.path.is_dir()

    # ----- Children -----

    def has_child(self, name: str) -> bool:
        path = self.path / _check_name(name)
        try:
            return path.is_dir()
        except (OSError, ValueError) as e:
            raise StorageError(f"While looking up container '{name}' in '{self.path}': {e}") from e

    def child(self, name: str) -> "Container":
        """
        Get an existing child container.

        Raises:
            StorageError: If the child does not exist
        """
        path = self.path / _check_name(name)
        if not path.is_dir():
            raise StorageError(f"Container '{name}' not found in '{self.path}'")
        return Container(path)

    def create_child(self, name: str) -> "Container":
        """
        Create a new child container.

        Raises:
            StorageError: If the child already exists or cannot be created
        """
        path = self.path / _check_name(name)
        try:
            path.mkdir()
        except FileExistsError as e:
            raise StorageError(f"Container '{name}' already exists in '{self.path}'") from e
        except (OSError, ValueError) as e:
            raise StorageError(f"While creating container '{name}' in '{self.path}': {e}") from e
        return Container(path)

    def child_or_create(self, name: str) -> "Container":
        """Get a child container, creating it if it does not exist."""
        if self.has_child(name):
            return self.child(name)
        return self.create_child(name)

    def replace_child(self, name: str) -> "Container":
        """
        Create an empty child container, discarding any previous one.

        Used when rewriting a list so that no stale indices survive.
        """
        self.remove_child(name)
        return self.create_child(name)

    def remove_child(self, name: str) -> None:
        """Remove a child container and everything under it, if present."""
        path = self.path / _check_name(name)
        if not path.is_dir():
            return
        try:
            shutil.rmtree(path)
        except OSError as e:
            raise StorageError(f"While removing container '{name}' from '{self.path}': {e}") from e

    def children(self) -> List[str]:
        """Names of all child containers, sorted."""
        try:
            return sorted(p.name for p in self.path.iterdir() if p.is_dir())
        except OSError as e:
            raise StorageError(f"While listing container '{self.path}': {e}") from e

    # ----- Fields -----

    def has_field(self, name: str) -> bool:
        path = self.path / _check_name(name)
        try:
            return path.is_file()
        except (OSError, ValueError) as e:
            raise StorageError(f"While looking up field '{name}' in '{self.path}': {e}") from e

    def read_field(self, name: str, ftype: FieldType) -> FieldValue:
        """
        Read a typed field.

        Raises:
            StorageError: If the field is missing, unreadable or of another type
        """
        path = self.path / _check_name(name)
        try:
            raw = path.read_bytes()
        except FileNotFoundError as e:
            raise StorageError(f"Field '{name}' not found in '{self.path}'") from e
        except OSError as e:
            raise StorageError(f"While reading field '{name}' of '{self.path}': {e}") from e

        try:
            return decode_value(ftype, raw)
        except StorageError as e:
            raise StorageError(f"While reading field '{name}' of '{self.path}': {e}") from e

    def write_field(self, name: str, ftype: FieldType, value: FieldValue) -> None:
        """
        Write (create or overwrite) a typed field.

        Raises:
            StorageError: If the value does not fit or the write fails
        """
        path = self.path / _check_name(name)
        try:
            data = encode_value(ftype, value)
        except StorageError as e:
            raise StorageError(f"While writing field '{name}' of '{self.path}': {e}") from e
        try:
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"While writing field '{name}' of '{self.path}': {e}") from e

    def remove_field(self, name: str) -> None:
        """Remove a field if present."""
        path = self.path / _check_name(name)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"While removing field '{name}' of '{self.path}': {e}") from e

    def rename_field(self, old: str, new: str) -> None:
        """Move field ``old`` over field ``new``."""
        try:
            (self.path / _check_name(old)).replace(self.path / _check_name(new))
        except OSError as e:
            raise StorageError(
                f"While moving field '{old}' to '{new}' in '{self.path}': {e}"
            ) from e

    # ----- Whole-tree serialization -----

    def serialize_tree(self, destination: Path) -> Path:
        """
        Compile this container tree into a single gzip tarball.

        Args:
            destination: Output file path

        Returns:
            The destination path

        Raises:
            StorageError: If the tree cannot be archived
        """
        destination = Path(destination)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with tarfile.open(destination, "w:gz") as tar:
                tar.add(self.path, arcname=".")
        except (OSError, tarfile.TarError) as e:
            raise StorageError(f"While compiling '{self.path}' to '{destination}': {e}") from e
        return destination

    @classmethod
    def deserialize_tree(cls, source: Path, destination: Path) -> "Container":
        """
        Decompile a tarball produced by serialize_tree into ``destination``.

        Args:
            source: Compiled tree file
            destination: Directory to extract into (created if needed)

        Returns:
            Container at ``destination``

        Raises:
            StorageError: If the file is not a valid compiled tree
        """
        source = Path(source)
        destination = Path(destination)
        try:
            destination.mkdir(parents=True, exist_ok=True)
            with tarfile.open(source, "r:gz") as tar:
                tar.extractall(destination, filter="data")
        except (OSError, tarfile.TarError) as e:
            raise StorageError(f"While decompiling '{source}' to '{destination}': {e}") from e
        return cls(destination)
