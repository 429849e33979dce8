"""
Keyword classification over free text.

Several parts of the game pick a category from player or narrator text
(fallback narration pools, contextual NPCs, voice badges). They all
describe their categories as an ordered table of (category, keywords)
pairs and use the helpers here to evaluate it.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from functools import lru_cache
from typing import TypeVar

T = TypeVar("T")

KeywordTable = Sequence[tuple[T, frozenset[str]]]


@lru_cache(maxsize=512)
def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(keyword.lower())}\b")


def contains_keyword(text: str, keywords: Iterable[str]) -> bool:
    """Whether any keyword appears in the text as a whole word (case-insensitive)."""
    lowered = text.lower()
    return any(_keyword_pattern(k).search(lowered) for k in keywords)


def classify(text: str, table: KeywordTable[T], default: T) -> T:
    """Return the first category in table order whose keywords match, else default."""
    for category, keywords in table:
        if contains_keyword(text, keywords):
            return category
    return default


def classify_all(text: str, table: KeywordTable[T]) -> list[T]:
    """Return every matching category, in table order."""
    return [category for category, keywords in table if contains_keyword(text, keywords)]
