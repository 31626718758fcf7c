"""Pronunciation (IPA) of the looked-up word."""

from typing import Optional

from wiktglot.markup import element_text, parse_fragment

PRONUNCIATION_HEADING = 'id="Pronunciation'

# How far past the heading to look
PRONUNCIATION_WINDOW = 5000


def extract_pronunciation(section: str) -> Optional[str]:
    """
    First IPA transcription after the Pronunciation heading.

    The first IPA span is normally the general / US pronunciation.

    Examples:
        '<h3 id="Pronunciation">...<span class="IPA">/bɔ̃.ʒuʁ/</span>' → '/bɔ̃.ʒuʁ/'
    """
    start = section.find(PRONUNCIATION_HEADING)
    if start == -1:
        return None

    window = parse_fragment(section[start:start + PRONUNCIATION_WINDOW])
    span = window.find('span', class_='IPA')
    if span is None:
        return None
    return element_text(span) or None
