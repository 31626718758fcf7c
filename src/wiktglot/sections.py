"""
sections.py - Locate heading-delimited regions of a rendered page.

A section runs from its heading to the next heading of equal or higher rank
(<h3> ends at the next <h2> or <h3>). Part-of-speech headings drift between
<h3> and <h4> depending on whether an Etymology heading sits above them,
repeated labels get numeric id suffixes (Noun_2), and some skins put the id
on an element wrapped inside or around the heading. Each of those is one
strategy below; strategies are tried in order and the first hit wins.
"""

import re
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Pattern, Sequence, Tuple

from wiktglot.languages import heading_id

HEADING_OPEN = re.compile(r'<h([1-6])\b', re.IGNORECASE)

# (heading start, heading end, rank)
HeadingHit = Tuple[int, int, int]


@dataclass
class Section:
    """A located region: text == body[start:end]."""
    label: str
    rank: int
    start: int
    end: int
    text: str


def _rank_class(ranks: Sequence[int]) -> str:
    return '[' + ''.join(str(r) for r in ranks) + ']'


def _heading_pattern(label: str, ranks: Sequence[int], suffix: str) -> Pattern[str]:
    return re.compile(
        rf'<h({_rank_class(ranks)})\b[^>]*\bid="{re.escape(heading_id(label))}{suffix}"[^>]*>',
        re.IGNORECASE,
    )


def _exact_rank(body: str, label: str, ranks: Sequence[int]) -> List[HeadingHit]:
    """<h3 id="Noun">"""
    pattern = _heading_pattern(label, ranks, '')
    return [(m.start(), m.end(), int(m.group(1))) for m in pattern.finditer(body)]


def _suffix_tolerant(body: str, label: str, ranks: Sequence[int]) -> List[HeadingHit]:
    """<h4 id="Noun_2">"""
    pattern = _heading_pattern(label, ranks, r'_\d+')
    return [(m.start(), m.end(), int(m.group(1))) for m in pattern.finditer(body)]


def _container_wrapped(body: str, label: str, ranks: Sequence[int]) -> List[HeadingHit]:
    """<h3><span class="mw-headline" id="Noun">Noun</span></h3> and similar."""
    pattern = re.compile(
        rf'\bid="{re.escape(heading_id(label))}(?:_\d+)?"[^>]*>'
        rf'(?:\s*<[^>]+>)*\s*{re.escape(label)}\s*(?:<[^>]+>\s*)*?</h({_rank_class(ranks)})>',
        re.IGNORECASE,
    )
    hits = []
    for m in pattern.finditer(body):
        # The section starts at the tag that carries the id
        start = body.rfind('<', 0, m.start())
        hits.append((max(start, 0), m.end(), int(m.group(1))))
    return hits


HeadingStrategy = Callable[[str, str, Sequence[int]], List[HeadingHit]]

# Resolution order: first strategy with a hit wins
HEADING_STRATEGIES: Tuple[HeadingStrategy, ...] = (
    _exact_rank,
    _suffix_tolerant,
    _container_wrapped,
)


def _section_end(body: str, heading_end: int, rank: int) -> int:
    """Position of the next heading of equal or higher rank, or end of body."""
    for match in HEADING_OPEN.finditer(body, heading_end):
        if int(match.group(1)) <= rank:
            return match.start()
    return len(body)


def _bound(body: str, label: str, hit: HeadingHit) -> Section:
    start, heading_end, rank = hit
    end = _section_end(body, heading_end, rank)
    return Section(label=label, rank=rank, start=start, end=end, text=body[start:end])


def locate_section(body: str, label: str, ranks: Sequence[int] = (3, 4)) -> Optional[Section]:
    """
    Find the first section headed ``label`` at one of the given ranks.

    Args:
        body: Page (or region) HTML
        label: Heading text, e.g. "Noun", "Proper noun", "Translations"
        ranks: Allowed heading levels

    Returns:
        The bounded Section, or None if no strategy finds the heading.
    """
    for strategy in HEADING_STRATEGIES:
        hits = strategy(body, label, ranks)
        if hits:
            return _bound(body, label, hits[0])
    return None


def iter_sections(body: str, label: str, ranks: Sequence[int] = (3, 4)) -> Iterator[Section]:
    """
    Yield every section headed ``label``, in page order.

    Plain and numbered ids (Noun, Noun_2, ...) are collected together; the
    wrapped-heading strategy is only consulted when neither finds anything.
    """
    hits = _exact_rank(body, label, ranks) + _suffix_tolerant(body, label, ranks)
    if not hits:
        hits = _container_wrapped(body, label, ranks)
    for hit in sorted(set(hits)):
        yield _bound(body, label, hit)


def language_section(body: str, language_name: str) -> Optional[Section]:
    """The level-2 section for one language (e.g. "French")."""
    return locate_section(body, language_name, ranks=(2,))
