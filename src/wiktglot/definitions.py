"""
definitions.py - Turn a part-of-speech region of a foreign-language section
into translation entries.

On English Wiktionary a foreign word's senses are an ordered list whose items
open with links to the English renderings:

    <ol><li><a href="/wiki/hello">hello</a>; <a href="/wiki/goodbye">goodbye</a>
        <dl><dd>Synonym: <a href="/wiki/buongiorno">buongiorno</a></dd></dl></li>
        ...

Sub-lists, quotation blocks and the <dl> containers that hold synonyms and
usage notes are removed before an item is inspected, and items that open
with prose instead of a link (usage examples, quotations) are skipped.
"""

import logging
import re
from typing import List, Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag

from wiktglot.markup import (
    WIKI_HREF,
    element_text,
    iter_links,
    parse_fragment,
    without,
)
from wiktglot.models import TranslationEntry
from wiktglot.sections import locate_section

logger = logging.getLogger(__name__)

# Nested blocks that never hold the item's own renderings
NESTED_BLOCKS = ('ol', 'ul', 'dl', 'div', 'table', 'style')

# Sense qualifiers such as "(informal)" that precede the first link
QUALIFIER_CLASS = re.compile(r'usage-label|qualifier|ib-(?:brac|content)', re.IGNORECASE)

# An accepted item opens with a link, optionally after one short function
# word ("to love", "I love")
LEADING_WORD = re.compile(r'\w{1,5}')

# Items longer than this are prose, not a rendering
MAX_PLAIN_DEFINITION = 200

# Script-only pages (Chinese characters and compounds)
CJK = re.compile(r'[一-鿿]')
LATIN_BEFORE_CJK = re.compile(r'^([^(（一-鿿]+?)[(（一-鿿]')
MAX_PLAIN_CJK_GLOSS = 100


def definition_items(region: str) -> List[Tag]:
    """Top-level items of the region's first ordered list."""
    ol = parse_fragment(region).find('ol')
    if ol is None:
        return []
    return ol.find_all('li', recursive=False)


def _stripped(item: Union[str, Tag]) -> BeautifulSoup:
    return without(without(item, NESTED_BLOCKS), ('span',), class_=QUALIFIER_CLASS)


def strip_nested(item: Union[str, Tag]) -> str:
    """Remove sub-lists, block containers and sense qualifiers from one item."""
    return _stripped(item).decode_contents()


def first_definition(region: str) -> Optional[str]:
    """The region's first definition item with its nested blocks removed."""
    items = definition_items(region)
    return strip_nested(items[0]) if items else None


def _opens_with_link(definition: BeautifulSoup) -> bool:
    """True if nothing but one short word precedes the item's first wiki link."""
    link = definition.find('a', href=WIKI_HREF)
    if link is None:
        return False

    lead = []
    for node in definition.descendants:
        if node is link:
            break
        if isinstance(node, NavigableString):
            lead.append(str(node))
    text = ''.join(lead).replace('\xa0', ' ').strip()
    return not text or bool(LEADING_WORD.fullmatch(text))


def _entries_from_item(item: Tag) -> List[TranslationEntry]:
    definition = _stripped(item)

    if not _opens_with_link(definition):
        return []

    candidates = [
        link.text for link in iter_links(definition)
        if link.text and not link.is_meta()
    ]

    if candidates:
        # Every rendering shares the item's gloss so each is addressable alone
        gloss = ', '.join(candidates)
        return [TranslationEntry(surface_form=c, gloss=gloss) for c in candidates]

    # Only meta links: fall back to the item's plain text
    plain = element_text(definition)
    if not plain or len(plain) >= MAX_PLAIN_DEFINITION:
        return []
    surface = re.split(r'[,;]', plain)[0].strip()
    if not surface:
        return []
    return [TranslationEntry(surface_form=surface, gloss=plain)]


def extract_definitions(region: str) -> List[TranslationEntry]:
    """
    Extract translation entries from a part-of-speech region.

    Args:
        region: HTML of one part-of-speech section

    Returns:
        Entries in page order; empty if the region has no usable definitions.
    """
    entries: List[TranslationEntry] = []
    for item in definition_items(region):
        entries.extend(_entries_from_item(item))
    return entries


def _entry_from_definitions_item(item: Tag) -> Optional[TranslationEntry]:
    definition = _stripped(item)

    words = [
        link.text for link in iter_links(definition)
        if link.text and not link.is_meta() and not CJK.search(link.text)
    ]

    if not words:
        # "dog (Classifier: 隻) ..." - take the Latin text before the first
        # CJK character or parenthesis
        match = LATIN_BEFORE_CJK.match(element_text(definition, ' '))
        if match:
            text = match.group(1).strip()
            if 0 < len(text) < MAX_PLAIN_CJK_GLOSS:
                words.append(text)

    if not words:
        return None
    return TranslationEntry(surface_form=words[0], gloss=', '.join(words))


def extract_definitions_page(language_section: str) -> List[TranslationEntry]:
    """
    Read a "Definitions" heading used instead of part-of-speech headings.

    Many Chinese pages carry their senses under <h3 id="Definitions"> (or <h4>
    when nested under an etymology); each item yields one entry whose gloss
    lists every English candidate found in it.
    """
    section = locate_section(language_section, 'Definitions', ranks=(3, 4))
    if section is None:
        return []

    entries = []
    for item in definition_items(section.text):
        entry = _entry_from_definitions_item(item)
        if entry is not None:
            entries.append(entry)
    logger.debug(f"Definitions heading yielded {len(entries)} entries")
    return entries
