"""
markup.py - Helpers for reading rendered Wiktionary HTML.

Regions are handed around as HTML strings (sections are cut out of the page by
heading position) and parsed with BeautifulSoup where their element structure
matters: list items, table frames, definition-list rows, headword lines.
"""

import html
import re
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Union
from urllib.parse import unquote

from bs4 import BeautifulSoup, Tag

# Parsed page content: a whole fragment or one element of it
Node = Union[BeautifulSoup, Tag]


# ─────────────────────────────────────────────────────────────────────────────
# Text cleanup
# ─────────────────────────────────────────────────────────────────────────────

TAG = re.compile(r'<[^>]+>')
WHITESPACE = re.compile(r'\s+')


def decode_entities(text: str) -> str:
    """Decode HTML entities; non-breaking spaces become plain spaces."""
    return html.unescape(text).replace('\xa0', ' ')


def strip_tags(text: str, replacement: str = '') -> str:
    return TAG.sub(replacement, text)


def clean_text(fragment: str, tag_replacement: str = '') -> str:
    """
    Reduce an HTML fragment to plain, single-spaced text.

    Examples:
        "<a href=\"/wiki/dog\">dog</a>&nbsp;(canine)" → "dog (canine)"
        "  <i>to</i>   love " → "to love"
    """
    text = decode_entities(strip_tags(fragment, tag_replacement))
    return WHITESPACE.sub(' ', text).strip()


# ─────────────────────────────────────────────────────────────────────────────
# Parsed fragments
# ─────────────────────────────────────────────────────────────────────────────

def parse_fragment(fragment: str) -> BeautifulSoup:
    return BeautifulSoup(fragment, "html.parser")


def element_text(node: Node, separator: str = '') -> str:
    """Visible text of a parsed node, single-spaced."""
    text = node.get_text(separator).replace('\xa0', ' ')
    return WHITESPACE.sub(' ', text).strip()


def without(node: Node, names: Sequence[str], class_=None) -> BeautifulSoup:
    """
    A parsed copy of a node's content with some elements removed.

    The node itself is left untouched. ``class_`` restricts the removal to
    elements carrying a matching class, as in ``find_all``.
    """
    content = node.decode_contents() if isinstance(node, Tag) else str(node)
    clone = parse_fragment(content)
    kwargs = {} if class_ is None else {'class_': class_}
    # Elements nested in one already removed are detached along with it
    for element in clone.find_all(list(names), **kwargs):
        element.extract()
    return clone


# ─────────────────────────────────────────────────────────────────────────────
# Links
# ─────────────────────────────────────────────────────────────────────────────

WIKI_PREFIX = '/wiki/'
WIKI_HREF = re.compile(r'^/wiki/')

# Namespaces that never hold a translation
META_PREFIXES = (
    'Appendix:', 'File:', 'Image:', 'Category:', 'Wiktionary:', 'Special:',
    'Help:', 'Citations:', 'Thesaurus:', 'Classifier:', 'Reconstruction:',
    'Wikipedia:', 'w:',
)


@dataclass
class Link:
    """An internal wiki link: target page, optional anchor, display text."""
    target: str
    anchor: Optional[str]
    text: str

    def is_meta(self) -> bool:
        return self.target.startswith(META_PREFIXES) or self.text.startswith(META_PREFIXES)


def link_from(a: Tag) -> Link:
    """The Link for one <a href="/wiki/..."> element."""
    target, _, anchor = a['href'][len(WIKI_PREFIX):].partition('#')
    return Link(
        target=unquote(target).replace('_', ' '),
        anchor=unquote(anchor) or None,
        text=element_text(a),
    )


def iter_links(node: Node) -> Iterator[Link]:
    """
    Internal links of a parsed node, in document order.

    Examples:
        <a href="/wiki/cat/translations#Noun">cat/translations</a>
            → Link("cat/translations", "Noun", "cat/translations")
    """
    for a in node.find_all('a', href=WIKI_HREF):
        yield link_from(a)


def normalize_title(word: str) -> str:
    """'thank you' → 'thank_you' (the form MediaWiki page titles take in URLs)."""
    return WHITESPACE.sub('_', word.strip())
