#!/usr/bin/env python3
"""
filters.py
----------
Custom Jinja2 filters for Markdown export.

Filters:
    - day_month_year: ``[2024, 1, 15]`` -> ``15-1-2024``
    - blockquote: prefix every line of a text with ``> ``
    - notes_inline: render a note list inline, e.g. ``["a", "b"]``
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from typing import Sequence


def day_month_year(parts: Sequence[int]) -> str:
    year, month, day = parts
    return f"{day}-{month}-{year}"


def blockquote(text: str) -> str:
    """
    Quote a block of text line by line.

    Trailing newlines are dropped first so the quote does not end in
    empty ``>`` lines; an empty text still yields a single ``> ``.
    """
    return "\n".join(f"> {line}" for line in text.rstrip("\n").split("\n"))


def notes_inline(notes: Sequence[str]) -> str:
    return json.dumps(list(notes), ensure_ascii=False)
