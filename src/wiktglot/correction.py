"""
correction.py - Pick the page a misspelled query most likely meant.

Users type "azucar" for "azúcar" and "cafe" for "café". When a page is missing
or says nothing about the requested language, the search results for the query
are ranked by the rules below and the winner is tried once instead.
"""

import re
import unicodedata
from typing import Callable, List, Optional, Sequence, Tuple

COMBINING_MARKS = re.compile('[\u0300-\u036f]')


def strip_diacritics(text: str) -> str:
    """'azúcar' → 'azucar' (decomposed, combining marks removed)."""
    return COMBINING_MARKS.sub('', unicodedata.normalize('NFD', text))


def fold(text: str) -> str:
    """Diacritic- and case-insensitive comparison key."""
    return strip_diacritics(text).lower()


def has_diacritics(text: str) -> bool:
    return bool(COMBINING_MARKS.search(unicodedata.normalize('NFD', text)))


# (single-word titles, titles equal to the query after folding, query) -> choice
CorrectionRule = Callable[[List[str], List[str], str], Optional[str]]


def only_match(single_words: List[str], matches: List[str], original: str) -> Optional[str]:
    return matches[0] if len(matches) == 1 else None


def accented_match(single_words: List[str], matches: List[str], original: str) -> Optional[str]:
    """Several titles fold to the query: an unaccented query prefers an accented title."""
    if len(matches) < 2 or has_diacritics(original):
        return None
    return next((m for m in matches if has_diacritics(m)), None)


def first_match(single_words: List[str], matches: List[str], original: str) -> Optional[str]:
    return matches[0] if matches else None


def first_single_word(single_words: List[str], matches: List[str], original: str) -> Optional[str]:
    return single_words[0] if single_words else None


# Resolution order: first rule with a choice wins
CORRECTION_RULES: Tuple[CorrectionRule, ...] = (
    only_match,
    accented_match,
    first_match,
    first_single_word,
)


def select_correction(candidates: Sequence[str], original: str) -> Optional[str]:
    """
    Choose a replacement title from search results.

    Args:
        candidates: Search result titles in rank order
        original: The query as it was looked up

    Returns:
        The chosen title, or None if the search offered no single-word title.

    Examples:
        (["azúcar", "azucarar"], "azucar") → "azúcar"
        (["Cafe", "café", "cafe society"], "cafe") → "café"
        (["sugar cane"], "sugar") → None
    """
    single_words = [c for c in candidates if ' ' not in c.strip()]
    key = fold(original.replace('_', ' '))
    matches = [c for c in single_words if fold(c) == key]

    for rule in CORRECTION_RULES:
        choice = rule(single_words, matches, original)
        if choice:
            return choice
    return None
