"""
morphology.py - Recognize "form of base-lexeme" definitions.

Inflected forms on Wiktionary are defined by a form-of line rather than by
translations: "present participle and gerund of eat", "inflection of comer",
"first-person singular preterite indicative of hablar". Only the first
definition item of a region is inspected, and the first catalogue pattern
that matches wins.
"""

import logging
import re
from typing import List, Match, Optional, Pattern, Tuple

from wiktglot.definitions import first_definition
from wiktglot.markup import clean_text
from wiktglot.models import MorphologicalForm

logger = logging.getLogger(__name__)

# Words may be separated by whitespace or any inline markup
SEP = r'(?:<[^>]+>|\s)+'
OPT_SEP = r'(?:<[^>]+>|\s)*'

# ASCII letters, Latin-1 letters and Latin Extended-A/B (macrons, breves, ...)
LEXEME = r'([A-Za-zÀ-ÖØ-öø-ɏ]+)'

TENSES = r'(?:present|past|future|imperfect|preterite|perfect|pluperfect|conditional|subjunctive|imperative)'

# Priority-ordered catalogue: (name, pattern); the base lexeme is group 1
FORM_TEMPLATES: List[Tuple[str, Pattern[str]]] = [
    # "inflection of comer:" / "inflection of amō:"
    ('inflection', re.compile(
        rf'inflection{SEP}of{SEP}{LEXEME}', re.IGNORECASE)),

    # "simple past of eat" / "simple past tense and past participle of run"
    ('simple past', re.compile(
        rf'simple{SEP}past(?:{SEP}tense)?{SEP}'
        rf'(?:and{SEP}past{SEP}participle{SEP})?of{SEP}{LEXEME}', re.IGNORECASE)),

    # "present participle and gerund of run" / "past participle of comer"
    ('participle', re.compile(
        rf'(?:present|past){SEP}participle(?:{SEP}and{SEP}gerund)?{SEP}of{SEP}{LEXEME}',
        re.IGNORECASE)),

    # "gerund of correr"
    ('gerund', re.compile(
        rf'gerund{SEP}of{SEP}{LEXEME}', re.IGNORECASE)),

    # "first-person singular preterite indicative of hablar"; the person and
    # number are often split across several links and separator spans
    ('person-number', re.compile(
        rf'(?:first|second|third)[\s\S]{{0,150}}?person[\s\S]{{1,200}}?(?:singular|plural)'
        rf'[\s\S]{{1,150}}?{TENSES}[\s\S]{{1,150}}?\bof\b[\s\S]{{1,50}}?(?:<[^>]+>)*{LEXEME}',
        re.IGNORECASE)),

    # "past tense of go" / "past participle of see"
    ('past', re.compile(
        rf'past{SEP}(?:tense|participle){SEP}of{SEP}{LEXEME}', re.IGNORECASE)),

    # "present tense of goes"
    ('present', re.compile(
        rf'present{SEP}(?:tense)?{OPT_SEP}of{SEP}{LEXEME}', re.IGNORECASE)),
]

OF = re.compile(r'\s+of\s+', re.IGNORECASE)


def _description(definition: str, match: Match[str]) -> str:
    """'present participle and gerund of eat' → 'present participle and gerund'."""
    start = match.start()
    # A match that begins inside a tag (href="...#first_person") starts after it
    if definition.rfind('<', 0, start) > definition.rfind('>', 0, start):
        start = definition.find('>', start) + 1
    text = clean_text(definition[start:match.end()])
    of = OF.search(text)
    return text[:of.start()].strip() if of else text


def match_form(definition: str) -> Optional[MorphologicalForm]:
    """
    Match one definition's HTML against the catalogue.

    Examples:
        "simple past of <a href=\"/wiki/eat\">eat</a>" → (eat, "simple past")
        "a kind of fruit" → None
    """
    for name, pattern in FORM_TEMPLATES:
        match = pattern.search(definition)
        if match:
            base = match.group(1).strip()
            logger.debug(f"Form template '{name}' matched base lexeme '{base}'")
            return MorphologicalForm(base_lexeme=base, description=_description(definition, match))
    return None


def detect_form(region: str, lexeme: Optional[str] = None) -> Optional[MorphologicalForm]:
    """
    Decide whether a region defines an inflected form of another lexeme.

    Args:
        region: HTML of a part-of-speech (or language) section
        lexeme: The page's own word; a form pointing back at it is ignored

    Returns:
        MorphologicalForm, or None if the first definition is not a form-of line.
    """
    definition = first_definition(region)
    if not definition:
        return None

    form = match_form(definition)
    if form is None:
        return None
    if lexeme is not None and form.base_lexeme.casefold() == lexeme.replace('_', ' ').casefold():
        return None
    return form
