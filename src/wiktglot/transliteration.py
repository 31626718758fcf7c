"""
transliteration.py - Romanization of a script-based headword.

Wiktionary prints the romanization next to the headword:

    <strong class="Arab headword" lang="ar">مَرْحَبًا</strong> • <span>(<i>marḥaban</i>)</span>

Three extractors are tried in order over the first TRANSLITERATION_WINDOW
characters of the language section; the first non-empty result wins.
"""

import logging
import re
from typing import Callable, Optional, Tuple

from wiktglot.languages import Language
from wiktglot.markup import clean_text, element_text, parse_fragment
from wiktglot.sections import language_section

logger = logging.getLogger(__name__)

# The headword line sits at the top of the section; tables further down can be huge
TRANSLITERATION_WINDOW = 2000

# "• (marḥaban)", styling inside the parentheses is unwrapped afterwards
BULLET_ROMANIZATION = re.compile(r'•(?:\s|&nbsp;)*(?:<[^>]+>)*\(((?:<[^>]+>|[^<)])+)\)')

# <span class="tr Latn mention-tr romanization">annyeong</span>
ROMANIZATION_CLASS = re.compile(r'romanization', re.IGNORECASE)

LATIN_TAGS = ['span', 'b', 'strong', 'i']


def _non_empty(text: str) -> Optional[str]:
    text = clean_text(text)
    return text or None


def from_bullet(window: str, language: Language) -> Optional[str]:
    """headword • (romanization)"""
    match = BULLET_ROMANIZATION.search(window)
    return _non_empty(match.group(1)) if match else None


def from_romanization_span(window: str, language: Language) -> Optional[str]:
    """<span class="... romanization ...">annyeong</span>"""
    span = parse_fragment(window).find('span', class_=ROMANIZATION_CLASS)
    if span is None:
        return None
    return element_text(span) or None


def from_latin_tag(window: str, language: Language) -> Optional[str]:
    """
    <b lang="ar-Latn">marḥaban</b>

    Japanese pages tag grammatical labels ("godan", "transitive") with ja-Latn,
    so languages marked latin_tag_is_romanization: false are skipped.
    """
    if not language.latin_tag_is_romanization:
        return None
    element = parse_fragment(window).find(LATIN_TAGS, lang=language.latin_tag)
    if element is None:
        return None
    return element_text(element) or None


TransliterationExtractor = Callable[[str, Language], Optional[str]]

# Resolution order: first non-empty result wins
TRANSLITERATION_EXTRACTORS: Tuple[Tuple[str, TransliterationExtractor], ...] = (
    ('bullet', from_bullet),
    ('romanization span', from_romanization_span),
    ('latin tag', from_latin_tag),
)


def extract_transliteration(body: str, language: Language) -> Optional[str]:
    """
    Find the headword romanization in a page.

    Args:
        body: Full page HTML
        language: Source language row (its section name locates the section)

    Returns:
        The romanization, or None if no extractor finds one.
    """
    section = language_section(body, language.section_name)
    if section is None:
        return None

    window = section.text[:TRANSLITERATION_WINDOW]
    for name, extractor in TRANSLITERATION_EXTRACTORS:
        value = extractor(window, language)
        if value:
            logger.debug(f"Transliteration for {language.tag} found by {name} extractor: {value}")
            return value
    return None
