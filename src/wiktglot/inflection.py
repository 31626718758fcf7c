"""
inflection.py - Read inflection annotations from a headword line.

A Latin headword line carries the word's principal forms inline:

    verb:       amō (present infinitive amāre, perfect active amāvī, supine amātum)
    noun:       aqua f (genitive aquae)
    adjective:  bonus (feminine bona, neuter bonum)

Readers are registered per source language and part of speech; languages
without a registered reader get no inflection data.
"""

import re
from typing import Callable, Dict, Optional, Pattern

from bs4 import Tag

from wiktglot.markup import WHITESPACE, element_text, parse_fragment
from wiktglot.models import (
    AdjectiveForms,
    HeadwordInflection,
    NounForms,
    VerbPrincipalParts,
)

GENDER_VALUE = re.compile(r'^[mfn](?:\s+or\s+[mfn])?(?:\s+(?:pl|sg))?$')

# Labels are matched against the line's text nodes; the value is the next
# text node holding a word character
INFINITIVE = re.compile(r'\b(?:present\s+)?infinitive\b', re.IGNORECASE)
PERFECT = re.compile(r'\bperfect(?:\s+active)?\b', re.IGNORECASE)
SUPINE = re.compile(r'\bsupine\b', re.IGNORECASE)
GENITIVE = re.compile(r'\bgenitive\b', re.IGNORECASE)
FEMININE = re.compile(r'\bfeminine\b', re.IGNORECASE)
NEUTER = re.compile(r'\bneuter\b', re.IGNORECASE)
FORM_VALUE = re.compile(r'\w')


def headword_line(region: str) -> Optional[str]:
    """The headword-line element of a region, or its first paragraph as a fallback."""
    soup = parse_fragment(region)
    element = soup.find('span', class_='headword-line') or soup.find('p')
    return element.decode_contents() if element is not None else None


def _headword(line: str, language_tag: str) -> Optional[Tag]:
    """<strong class="Latn headword" lang="la">amō</strong>, attributes in any order."""
    strong = parse_fragment(line).find('strong', class_='headword', lang=language_tag)
    if strong is None or not element_text(strong):
        return None
    return strong


def _form(start: Tag, label: Pattern[str]) -> Optional[str]:
    """The first text after a label: '<i>supine</i> <b><a>amātum</a></b>' → amātum."""
    marker = start.find_next(string=label)
    if marker is None:
        return None
    value = marker.find_next(string=FORM_VALUE)
    if value is None:
        return None
    return WHITESPACE.sub(' ', value.replace('\xa0', ' ')).strip() or None


def read_verb_parts(line: str, language_tag: str) -> Optional[VerbPrincipalParts]:
    """Principal parts; None unless at least one form beyond the headword is present."""
    headword = _headword(line, language_tag)
    if headword is None:
        return None

    infinitive = _form(headword, INFINITIVE)
    perfect = _form(headword, PERFECT)
    supine = _form(headword, SUPINE)

    if not (infinitive or perfect or supine):
        return None
    return VerbPrincipalParts(
        first_person_present=element_text(headword),
        infinitive=infinitive,
        perfect_active=perfect,
        supine=supine,
    )


def read_noun_forms(line: str, language_tag: str) -> Optional[NounForms]:
    """Nominative + gender (required) + genitive (optional)."""
    headword = _headword(line, language_tag)
    if headword is None:
        return None

    gender_span = headword.find_next('span', class_='gender')
    if gender_span is None:
        return None
    gender = element_text(gender_span, ' ')
    if not GENDER_VALUE.match(gender):
        return None

    genitive = _form(gender_span, GENITIVE)
    return NounForms(nominative=element_text(headword), gender=gender, genitive=genitive)


def read_adjective_forms(line: str, language_tag: str) -> Optional[AdjectiveForms]:
    """Masculine headword + feminine + neuter; partial sets are not emitted."""
    headword = _headword(line, language_tag)
    if headword is None:
        return None

    feminine = _form(headword, FEMININE)
    neuter = _form(headword, NEUTER)
    if not (feminine and neuter):
        return None
    return AdjectiveForms(masculine=element_text(headword), feminine=feminine, neuter=neuter)


InflectionReader = Callable[[str, str], Optional[HeadwordInflection]]

# source language tag -> part of speech -> reader
INFLECTION_READERS: Dict[str, Dict[str, InflectionReader]] = {
    'la': {
        'verb': read_verb_parts,
        'noun': read_noun_forms,
        'adjective': read_adjective_forms,
    },
}


def extract_inflection(region: str, language_tag: str,
                       part_of_speech: str) -> Optional[HeadwordInflection]:
    """
    Read the inflection annotation of a part-of-speech region.

    Args:
        region: HTML of the part-of-speech section
        language_tag: Source language ("la")
        part_of_speech: Group key ("verb", "noun", "adjective")

    Returns:
        The matching variant, or None if no reader applies or the line is bare.
    """
    reader = INFLECTION_READERS.get(language_tag, {}).get(part_of_speech)
    if reader is None:
        return None
    line = headword_line(region)
    if line is None:
        return None
    return reader(line, language_tag)
