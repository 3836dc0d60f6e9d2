#!/usr/bin/env python3
"""
dates.py
--------
Date arithmetic for entry dating.

Entries are often numbered by how many days have passed since the
diary epoch (2023-01-01); ``days_since_epoch`` gives that number.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date
from typing import Optional, Sequence

# --- Local imports ---
from diary.core.exceptions import ValidationError

EPOCH = date(2023, 1, 1)


def parse_parts(parts: Sequence[int]) -> date:
    """
    Build a date from ``[year, month, day]``.

    Raises:
        ValidationError: If there are not three parts or the date is invalid
    """
    if len(parts) != 3:
        raise ValidationError(f"Expected [year, month, day], got {list(parts)}")
    try:
        return date(*parts)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid date {list(parts)}: {e}") from e


def days_since_epoch(day: Optional[date] = None) -> int:
    """
    Days elapsed from the epoch to ``day`` (today if None).

    Dates before the epoch give negative numbers.
    """
    day = day or date.today()
    return (day - EPOCH).days
