"""
pages.py - How a foreign-language section is turned into groups.

Most languages lay out their entries the same way: part-of-speech headings,
each with an ordered list of English definitions. Japanese and Chinese also
have pages that deviate from that, so each source language maps to an ordered
chain of strategies; the first strategy that yields any group wins.
"""

import logging
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

from wiktglot.definitions import extract_definitions, extract_definitions_page
from wiktglot.inflection import extract_inflection
from wiktglot.languages import FOREIGN_PARTS_OF_SPEECH, Language, pos_key
from wiktglot.models import MorphologicalForm, WordTypeGroup
from wiktglot.morphology import detect_form
from wiktglot.redirects import parse_alternate_spelling_table
from wiktglot.sections import iter_sections, language_section

logger = logging.getLogger(__name__)

# A page-level form-of line applies to these groups when their own region has none
VERBAL_PARTS_OF_SPEECH = ('verb', 'participle')

# (language section HTML, source language, queried lexeme) -> groups
PageStrategy = Callable[[str, Language, Optional[str]], List[WordTypeGroup]]


def part_of_speech_regions(section: str, language: Language,
                           lexeme: Optional[str] = None) -> List[WordTypeGroup]:
    """
    One group per part-of-speech region, in heading order.

    Every occurrence of a heading (Noun, Noun_2, ...) is its own group. Each
    group carries the inflected-form line of its region, and the first entry
    carries the headword inflection when the language has a reader for it.
    """
    page_form: Optional[MorphologicalForm] = None
    page_form_checked = False

    groups = []
    for heading in FOREIGN_PARTS_OF_SPEECH:
        key = pos_key(heading)
        for region in iter_sections(section, heading):
            entries = extract_definitions(region.text)
            if not entries:
                continue

            form = detect_form(region.text, lexeme)
            if form is None and key in VERBAL_PARTS_OF_SPEECH:
                if not page_form_checked:
                    page_form = detect_form(section, lexeme)
                    page_form_checked = True
                form = page_form

            inflection = extract_inflection(region.text, language.tag, key)
            if inflection is not None:
                entries[0] = replace(entries[0], inflection=inflection)

            groups.append(WordTypeGroup(key, tuple(entries), form))
    return groups


def alternate_spelling(section: str, language: Language,
                       lexeme: Optional[str] = None) -> List[WordTypeGroup]:
    return parse_alternate_spelling_table(section)


def alternate_spelling_with_gloss(section: str, language: Language,
                                  lexeme: Optional[str] = None) -> List[WordTypeGroup]:
    return parse_alternate_spelling_table(section, inline_gloss=True)


def definitions_heading(section: str, language: Language,
                        lexeme: Optional[str] = None) -> List[WordTypeGroup]:
    """Script-only pages filed under a single "Definitions" heading."""
    entries = extract_definitions_page(section)
    if not entries:
        return []
    # Characters are most often nouns; the heading does not say
    return [WordTypeGroup('noun', tuple(entries))]


DEFAULT_STRATEGIES: Tuple[PageStrategy, ...] = (part_of_speech_regions,)

CHINESE_STRATEGIES: Tuple[PageStrategy, ...] = (
    alternate_spelling_with_gloss,
    definitions_heading,
    part_of_speech_regions,
)

# Only languages whose pages deviate from the default layout are listed
PAGE_STRATEGIES: Dict[str, Tuple[PageStrategy, ...]] = {
    'ja': (alternate_spelling, part_of_speech_regions),
    'zh': CHINESE_STRATEGIES,
    'yue': CHINESE_STRATEGIES,
}


def strategies_for(language_tag: str) -> Tuple[PageStrategy, ...]:
    return PAGE_STRATEGIES.get(language_tag, DEFAULT_STRATEGIES)


def extract_foreign_groups(body: str, language: Language,
                           lexeme: Optional[str] = None) -> List[WordTypeGroup]:
    """
    Groups for a foreign word from its page.

    Args:
        body: Full page HTML
        language: Source language
        lexeme: The page's own word (keeps form-of lines from pointing back at it)

    Returns:
        Groups from the first strategy that yields any; empty if the page has
        no section for the language.
    """
    section = language_section(body, language.section_name)
    if section is None:
        logger.debug(f"No {language.section_name} section on page")
        return []

    for strategy in strategies_for(language.tag):
        groups = strategy(section.text, language, lexeme)
        if groups:
            logger.debug(f"{language.tag}: {strategy.__name__} yielded {len(groups)} groups")
            return groups
    return []
