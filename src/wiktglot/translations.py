"""
translations.py - Read the Translations tables of an English entry.

Each sense of an English word has its own collapsible table keyed by a gloss:

    <div class="NavFrame" id="Translations-...">
      <div class="NavHead">domestic species</div>
      <div class="NavContent"> ... <ul>
        <li>French: <span class="Latn" lang="fr"><a href="/wiki/chat">chat</a></span> ...</li>
        <li>Arabic: <span class="Arab" lang="ar">قِطّ</span> <span lang="ar-Latn" class="tr">qiṭṭ</span></li>
        <li>Chinese:<dl><dd>Cantonese: <span lang="yue">貓</span> ...</dd></dl></li>

Only the rows of the requested language are read. A table that merely points
at a "/translations" subpage has no NavContent and is ignored here.
"""

import logging
import re
from typing import List, Optional, Sequence, Tuple

from bs4 import Tag

from wiktglot.languages import pos_key
from wiktglot.markup import Node, element_text, parse_fragment, without
from wiktglot.models import TranslationEntry, WordTypeGroup
from wiktglot.sections import Section, iter_sections, locate_section

logger = logging.getLogger(__name__)

# Glosses of tables nobody has sorted yet
PLACEHOLDER_DASH = '—'
UNCHECKED_GLOSS = re.compile(r'^translations to be checked', re.IGNORECASE)

# Renderings carry a lang attribute; lang="xx-Latn" marks a transliteration
RENDERING_TAGS = ['span', 'bdi']
LATIN_SUFFIX = '-Latn'

# Transliterations without a lang attribute: <span class="tr Latn">qiṭṭ</span>
TRANSLITERATION_CLASS = 'tr'


def is_placeholder_gloss(gloss: str) -> bool:
    return PLACEHOLDER_DASH in gloss or bool(UNCHECKED_GLOSS.match(gloss))


def _label(item: Tag) -> str:
    """'French: <span ...>' → 'French'"""
    parts = []
    for child in item.children:
        if isinstance(child, Tag) and child.name in ('dl', 'ul', 'ol'):
            break
        text = child.get_text() if isinstance(child, Tag) else str(child)
        if ':' in text:
            parts.append(text.partition(':')[0])
            return ' '.join(''.join(parts).split())
        parts.append(text)
    return ''


def _rendering(element: Tag) -> Optional[Tuple[bool, str]]:
    """(is_transliteration, text) if the element is a rendering or transliteration."""
    if element.name not in RENDERING_TAGS:
        return None
    lang = element.get('lang')
    if lang:
        return lang.endswith(LATIN_SUFFIX), element_text(element)
    # class is a list of tokens, so "tr-alt" never matches "tr"
    if element.name == 'span' and TRANSLITERATION_CLASS in element.get('class', []):
        return True, element_text(element)
    return None


def _renderings(content: Node) -> List[Tuple[str, Optional[str]]]:
    """
    Pair each rendering with the transliteration that immediately follows it.

    Spans are read in document order; a transliteration with no rendering
    directly before it is dropped, as is any span nested in another rendering.
    """
    ordered = []
    seen = []
    for element in content.find_all(RENDERING_TAGS):
        if any(outer in element.parents for outer in seen):
            continue
        rendering = _rendering(element)
        if rendering is None:
            continue
        seen.append(element)
        if rendering[1]:
            ordered.append(rendering)

    pairs = []
    i = 0
    while i < len(ordered):
        is_translit, text = ordered[i]
        if is_translit:
            i += 1
            continue
        following = ordered[i + 1] if i + 1 < len(ordered) else None
        if following is not None and following[0]:
            pairs.append((text, following[1]))
            i += 2
        else:
            pairs.append((text, None))
            i += 1
    return pairs


def _entries(content: Node, gloss: str, dialect: Optional[str] = None) -> List[TranslationEntry]:
    return [
        TranslationEntry(surface_form=text, gloss=gloss, transliteration=translit, dialect=dialect)
        for text, translit in _renderings(content)
    ]


def _subdivisions(item: Tag) -> List[Tuple[str, Tag]]:
    """(label, row) of each <dd> directly inside the item's <dl> blocks."""
    result = []
    for dd in item.select('dl > dd'):
        label = _label(dd)
        if label:
            result.append((label, dd))
    return result


def _language_entries(item: Tag, target_name: str, gloss: str) -> List[TranslationEntry]:
    """Entries for the target language from one top-level <li>."""
    label = _label(item)
    target = target_name.casefold()

    if label.casefold() == target:
        # Nested lists hold subdivisions or other languages' rows
        entries = _entries(without(item, ('dl', 'ul')), gloss)
        for dialect, row in _subdivisions(item):
            entries.extend(_entries(row, gloss, dialect))
        return entries

    # "Chinese:" rows file Cantonese, Mandarin ... as subdivisions
    entries = []
    for sub_label, row in _subdivisions(item):
        if sub_label.casefold() == target:
            entries.extend(_entries(row, gloss))
    return entries


def _top_level_items(content: Tag) -> List[Tag]:
    return [li for li in content.find_all('li') if li.find_parent('li') is None]


def parse_translation_tables(fragment: str, target_name: str) -> List[TranslationEntry]:
    """
    Collect the target language's entries from every gloss-keyed table.

    Args:
        fragment: HTML holding one or more NavFrame tables
        target_name: Display name of the language, as used in the table rows ("French")

    Returns:
        Entries in table order, each carrying its table's gloss.
    """
    entries: List[TranslationEntry] = []
    for frame in parse_fragment(fragment).find_all('div', class_='NavFrame'):
        head = frame.find('div', class_='NavHead')
        content = frame.find('div', class_='NavContent')
        if head is None or content is None:
            continue

        gloss = element_text(head, ' ')
        if not gloss or is_placeholder_gloss(gloss):
            continue

        for item in _top_level_items(content):
            entries.extend(_language_entries(item, target_name, gloss))
    return entries


def translations_subsection(region: str) -> Optional[Section]:
    """The Translations heading below a part-of-speech heading (rank 4 or 5)."""
    return locate_section(region, 'Translations', ranks=(4, 5))


def extract_translation_groups(pivot_section: str, target_name: str,
                               parts_of_speech: Sequence[str]) -> List[WordTypeGroup]:
    """
    One group per part of speech that has translations into the target language.

    Repeated headings (one per etymology) are merged into a single group.

    Args:
        pivot_section: HTML of the English section of the page
        target_name: Display name of the target language
        parts_of_speech: Headings to read, in output order

    Returns:
        Non-empty groups in the order of parts_of_speech.
    """
    groups = []
    for heading in parts_of_speech:
        entries: List[TranslationEntry] = []
        for region in iter_sections(pivot_section, heading):
            subsection = translations_subsection(region.text)
            if subsection is not None:
                entries.extend(parse_translation_tables(subsection.text, target_name))
        if entries:
            logger.debug(f"{heading}: {len(entries)} {target_name} translations")
            groups.append(WordTypeGroup(pos_key(heading), tuple(entries)))
    return groups
