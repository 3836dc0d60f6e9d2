#!/usr/bin/env python3
"""
validators.py
--------------------
Type-checked extraction of attributes from parsed config records.

Config files are parsed into plain mappings (strings, booleans, lists of
strings, lists of mappings). These helpers pull one attribute out of such
a mapping and raise ValidationError naming the record and the key when it
is missing or has the wrong type.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Mapping

from .exceptions import ValidationError

MAX_U16 = 0xFFFF

# Uids name directories in the store; most filesystems cap a name at 255 bytes.
MAX_UID_BYTES = 255


class DataValidator:
    """Centralized validation of config record attributes."""

    @staticmethod
    def _require(data: Mapping[str, Any], key: str, context: str) -> Any:
        if key not in data:
            raise ValidationError(f"{context} must have '{key}' attribute")
        return data[key]

    @staticmethod
    def require_str(data: Mapping[str, Any], key: str, context: str) -> str:
        """
        Get a required string attribute.

        Args:
            data: Parsed config record
            key: Attribute name
            context: Human-readable record description for error messages

        Raises:
            ValidationError: If missing or not a string
        """
        value = DataValidator._require(data, key, context)
        if not isinstance(value, str):
            raise ValidationError(f"{context}'s '{key}' attribute must be a string")
        return value

    @staticmethod
    def require_uid(data: Mapping[str, Any], key: str, context: str) -> str:
        """
        Get a required identifier usable as a single path component.

        Raises:
            ValidationError: If missing, not a string, empty, "." or "..",
                containing a separator or NUL, or longer than MAX_UID_BYTES
        """
        uid = DataValidator.require_str(data, key, context)
        if (
            not uid
            or uid in (".", "..")
            or any(ch in uid for ch in ("/", "\\", "\x00"))
            or len(uid.encode("utf-8", "surrogatepass")) > MAX_UID_BYTES
        ):
            raise ValidationError(f"{context.capitalize()} uid {uid!r} is not a valid identifier")
        return uid

    @staticmethod
    def require_str_list(data: Mapping[str, Any], key: str, context: str) -> List[str]:
        """
        Get a required array-of-strings attribute.

        Raises:
            ValidationError: If missing, not an array, or any item is not a string
        """
        value = DataValidator._require(data, key, context)
        if not isinstance(value, list):
            raise ValidationError(f"{context}'s '{key}' attribute must be an array")
        for item in value:
            if not isinstance(item, str):
                raise ValidationError(
                    f"All items in {context}'s '{key}' attribute must be strings"
                )
        return list(value)

    @staticmethod
    def require_table_list(
        data: Mapping[str, Any], key: str, context: str
    ) -> List[Dict[str, Any]]:
        """
        Get a required array-of-maps attribute (sections, collections).

        Raises:
            ValidationError: If missing, not an array, or any item is not a map
        """
        value = DataValidator._require(data, key, context)
        if not isinstance(value, list):
            raise ValidationError(f"{context}'s '{key}' attribute must be an array")
        for item in value:
            if not isinstance(item, dict):
                raise ValidationError(
                    f"All items in {context}'s '{key}' attribute must be tables"
                )
        return list(value)

    @staticmethod
    def require_date(data: Mapping[str, Any], key: str, context: str) -> List[int]:
        """
        Get a required ``[year, month, day]`` attribute.

        YAML configs may also give a native date (``2024-01-15``), which
        is accepted and split into its three parts.

        Raises:
            ValidationError: If missing, malformed, or not a real calendar date
        """
        value = DataValidator._require(data, key, context)
        if isinstance(value, date):
            parts = [value.year, value.month, value.day]
        elif (
            isinstance(value, list)
            and len(value) == 3
            and all(isinstance(x, int) and not isinstance(x, bool) for x in value)
        ):
            parts = list(value)
        else:
            raise ValidationError(
                f"{context}'s '{key}' attribute must be [year, month, day]"
            )

        if any(x < 0 or x > MAX_U16 for x in parts):
            raise ValidationError(f"{context}'s '{key}' parts must fit in 16 bits")
        try:
            date(*parts)
        except ValueError as e:
            raise ValidationError(f"{context}'s '{key}' is not a valid date: {e}") from e
        return parts

    @staticmethod
    def optional_bool(
        data: Mapping[str, Any], key: str, context: str, default: bool = False
    ) -> bool:
        """
        Get an optional boolean attribute.

        Raises:
            ValidationError: If present but not a boolean
        """
        if key not in data:
            return default
        value = data[key]
        if not isinstance(value, bool):
            raise ValidationError(f"{context}'s '{key}' attribute must be boolean")
        return value
