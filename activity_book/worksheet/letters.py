"""
Worksheet Letters

The per-page letter list of a handwriting worksheet, and how trace pages
split the alphabet.
"""

import math
import string
from dataclasses import dataclass, field
from typing import Iterable, List

ALPHABET = string.ascii_uppercase
TRACE_PREFIX = "Handwriting practice for letters: "


@dataclass
class WorksheetSpec:
    """Letters and font of one worksheet page."""
    characters: List[str] = field(default_factory=list)
    font_id: str = "helvetica"


def normalize_characters(characters: Iterable[str]) -> List[str]:
    """Keep single-character items only, stripped of surrounding spaces."""
    result = []
    for item in characters:
        item = str(item).strip()
        if len(item) == 1:
            result.append(item)
    return result


def display_pair(character: str) -> str:
    """Upper and lower case practice pair, e.g. "a" -> "Aa"."""
    return character.upper() + character.lower()


def describe_trace_letters(letters: Iterable[str]) -> str:
    """Page description for a trace page: "Handwriting practice for letters: A, B"."""
    return TRACE_PREFIX + ", ".join(letters)


def parse_trace_letters(description: str) -> List[str]:
    """
    Recover the letter list from a trace page description.

    Everything after the first ": " is split on commas; items that are not
    exactly one character are dropped.
    """
    parts = description.split(": ")
    if len(parts) < 2:
        return []
    return normalize_characters(parts[1].split(","))


def plan_trace_pages(page_count: int) -> List[List[str]]:
    """
    Split A-Z across trace pages.

    Each page gets ceil(26 / page_count) letters; planning stops early
    once the alphabet runs out, so fewer pages than requested may come back.

    Raises:
        ValueError: If page_count is below 1
    """
    if page_count < 1:
        raise ValueError("page_count must be at least 1")

    per_page = math.ceil(len(ALPHABET) / page_count)
    pages = []
    for i in range(page_count):
        start = i * per_page
        if start >= len(ALPHABET):
            break
        pages.append(list(ALPHABET[start:start + per_page]))
    return pages
