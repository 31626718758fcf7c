"""
redirects.py - Entries that live somewhere other than where they are expected.

Two shapes occur:

1. Translation subpages. Long translation lists are moved to "cat/translations"
   and the entry keeps only a pointer:

       <div class="pseudo NavFrame"><div class="NavHead">
         See <a href="/wiki/cat/translations#Noun">cat/translations § Noun</a>.
       </div></div>

2. Alternate-spelling pages (ja-see / zh-see). A kana spelling or a variant
   character points at the main entry and repeats its senses inline:

       <table class="wikitable ja-see"> ... <span>[interjection]</span> <a href="/wiki/hello">hello</a> ...
       <table class="wikitable zh-see"> ... see 謝謝 ("<a href="/wiki/thanks">thanks</a>") ...

The first needs one more fetch (done by the resolver); the second is read
in place.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from bs4 import Tag

from wiktglot.definitions import CJK
from wiktglot.languages import pos_key
from wiktglot.markup import (
    WHITESPACE,
    WIKI_HREF,
    Link,
    element_text,
    iter_links,
    link_from,
    parse_fragment,
)
from wiktglot.models import TranslationEntry, WordTypeGroup
from wiktglot.sections import iter_sections, locate_section
from wiktglot.translations import parse_translation_tables, translations_subsection

logger = logging.getLogger(__name__)

SUBPAGE_SUFFIX = '/translations'
SEE_POINTER = re.compile(r'^\s*See\b', re.IGNORECASE)

ALTERNATE_TABLE_CLASSES = ['ja-see', 'zh-see']

# "[interjection]" runs to the next marker or the end of its cell
BRACKETED_POS = re.compile(r'\[([A-Za-z][A-Za-z ]*)\]')
CELLS = ['td', 'dd', 'li']

# see 謝謝 ("thanks; thank you")
INLINE_GLOSS = re.compile(r'see\s+\S+\s+\(([^)]+)\)', re.IGNORECASE)

# Chinese script-name links that accompany every zh-see table
SCRIPT_NAME_LINKS = ('Simplified Chinese', 'Traditional Chinese')
MAX_INLINE_LINK_TEXT = 50

# zh-see tables are almost always for set phrases used on their own
INLINE_GLOSS_POS = 'interjection'


@dataclass(frozen=True)
class TranslationRedirect:
    """A translations subpage and the anchor of the relevant section."""
    page: str
    anchor: Optional[str] = None


# ─────────────────────────────────────────────────────────────────────────────
# Translation subpages
# ─────────────────────────────────────────────────────────────────────────────

def _pointer_in(subsection: str) -> Optional[TranslationRedirect]:
    for frame in parse_fragment(subsection).find_all('div', class_='NavFrame'):
        head = frame.find('div', class_='NavHead')
        if head is None or not SEE_POINTER.match(element_text(head)):
            continue
        for link in iter_links(head):
            if link.target.endswith(SUBPAGE_SUFFIX):
                return TranslationRedirect(page=link.target, anchor=link.anchor)
    return None


def detect_translation_redirect(pivot_section: str, pos_heading: str) -> Optional[TranslationRedirect]:
    """
    Find a "See X/translations" pointer under a part-of-speech heading.

    Args:
        pivot_section: HTML of the English section
        pos_heading: Part-of-speech heading ("Noun")

    Returns:
        The subpage to fetch, or None if the translations are inline (or absent).
    """
    for region in iter_sections(pivot_section, pos_heading):
        subsection = translations_subsection(region.text)
        if subsection is None:
            continue
        redirect = _pointer_in(subsection.text)
        if redirect is not None:
            logger.debug(f"{pos_heading} translations moved to {redirect.page}#{redirect.anchor}")
            return redirect
    return None


def parse_translation_subpage(body: str, target_name: str, pos_heading: str,
                              anchor: Optional[str] = None) -> List[TranslationEntry]:
    """Read the tables of one part-of-speech section of a translations subpage."""
    section = None
    if anchor:
        section = locate_section(body, anchor, ranks=(3, 4))
    if section is None:
        section = locate_section(body, pos_heading, ranks=(3, 4))
    if section is None:
        return []
    return parse_translation_tables(section.text, target_name)


# ─────────────────────────────────────────────────────────────────────────────
# Alternate-spelling tables
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class _Bracketed:
    """Links and text following one "[part of speech]" marker."""
    heading: str
    links: List[Link] = field(default_factory=list)
    text: List[str] = field(default_factory=list)

    def group(self) -> Optional[WordTypeGroup]:
        words = [link.text for link in self.links if link.text and not link.is_meta()]
        if not words:
            return None
        meaning = WHITESPACE.sub(' ', ''.join(self.text).replace('\xa0', ' '))
        gloss = meaning.strip().lstrip(':').strip() or ', '.join(words)
        entries = tuple(TranslationEntry(surface_form=w, gloss=gloss) for w in words)
        return WordTypeGroup(pos_key(self.heading.strip()), entries)


def _bracketed_groups(table: Tag) -> List[WordTypeGroup]:
    """
    Walk the table in document order, splitting its text at each marker.

    A marker's run ends at the next marker or where the next cell opens.
    """
    runs: List[_Bracketed] = []
    current: Optional[_Bracketed] = None

    for node in table.descendants:
        if isinstance(node, Tag):
            if node.name in CELLS:
                current = None
            elif current is not None and node.name == 'a' and WIKI_HREF.match(node.get('href', '')):
                current.links.append(link_from(node))
            continue

        # ['text', 'noun', 'text', 'verb', 'text', ...]
        pieces = BRACKETED_POS.split(str(node))
        if current is not None:
            current.text.append(pieces[0])
        for heading, text in zip(pieces[1::2], pieces[2::2]):
            current = _Bracketed(heading)
            current.text.append(text)
            runs.append(current)

    groups = []
    for run in runs:
        group = run.group()
        if group is not None:
            groups.append(group)
    return groups


def _inline_gloss_group(table: Tag) -> Optional[WordTypeGroup]:
    words = [
        link.text for link in iter_links(table)
        if link.text
        and not link.is_meta()
        and not CJK.search(link.text)
        and link.target not in SCRIPT_NAME_LINKS
        and len(link.text) < MAX_INLINE_LINK_TEXT
    ]
    if not words:
        return None

    match = INLINE_GLOSS.search(element_text(table))
    gloss = match.group(1).strip(' "“”') if match else ''
    gloss = gloss or ', '.join(words)
    entries = tuple(TranslationEntry(surface_form=w, gloss=gloss) for w in words)
    return WordTypeGroup(INLINE_GLOSS_POS, entries)


def parse_alternate_spelling_table(language_section: str,
                                   inline_gloss: bool = False) -> List[WordTypeGroup]:
    """
    Read the senses an alternate-spelling page repeats from its main entry.

    Args:
        language_section: HTML of the source language's section
        inline_gloss: Also accept the single 'see X ("gloss")' line of zh-see
            tables when no bracketed part of speech is present

    Returns:
        Groups in table order; empty if the section has no such table.
    """
    table = parse_fragment(language_section).find('table', class_=ALTERNATE_TABLE_CLASSES)
    if table is None:
        return []

    groups = _bracketed_groups(table)
    if not groups and inline_gloss:
        group = _inline_gloss_group(table)
        if group is not None:
            groups = [group]
    if groups:
        logger.debug(f"Alternate-spelling table yielded {len(groups)} groups")
    return groups
