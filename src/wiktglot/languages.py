"""
Static language table loaded from data/languages.yaml.

The table is data only: which tags are supported, what each language's
section is called on English Wiktionary, and which scripts it is written in.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Pattern, Tuple

import yaml

LANGUAGES_FILE = Path(__file__).parent / "data" / "languages.yaml"


@dataclass(frozen=True)
class Language:
    """One row of the language table."""
    tag: str
    name: str
    script_based: bool = False
    latin_tag_is_romanization: bool = True
    script: Optional[Pattern[str]] = None
    section: Optional[str] = None

    @property
    def section_name(self) -> str:
        """Level-2 heading of this language's entries (usually its name)."""
        return self.section or self.name

    @property
    def latin_tag(self) -> str:
        """The lang attribute Wiktionary puts on this language's Latin renderings."""
        return f"{self.tag}-Latn"


def _load_table(path: Path = LANGUAGES_FILE) -> dict:
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def _build_languages(table: dict) -> Dict[str, Language]:
    languages = {}
    for row in table["languages"]:
        script = row.get("script")
        languages[row["tag"]] = Language(
            tag=row["tag"],
            name=row["name"],
            script_based=bool(row.get("script_based", False)),
            latin_tag_is_romanization=bool(row.get("latin_tag_is_romanization", True)),
            script=re.compile(script) if script else None,
            section=row.get("section"),
        )
    return languages


# Load configuration at module import time
_TABLE = _load_table()

PIVOT_TAG: str = _TABLE["pivot"]
LANGUAGES: Dict[str, Language] = _build_languages(_TABLE)
PIVOT_PARTS_OF_SPEECH: Tuple[str, ...] = tuple(_TABLE["parts_of_speech"]["pivot"])
FOREIGN_PARTS_OF_SPEECH: Tuple[str, ...] = tuple(_TABLE["parts_of_speech"]["foreign"])


def get_language(tag: str) -> Optional[Language]:
    return LANGUAGES.get(tag)


def supported_tags() -> List[str]:
    return list(LANGUAGES)


def pos_key(heading: str) -> str:
    """'Proper noun' -> 'proper noun' (the part_of_speech stored on groups)."""
    return heading.lower()


def heading_id(heading: str) -> str:
    """'Proper noun' -> 'Proper_noun' (the id MediaWiki gives the heading)."""
    return heading.replace(" ", "_")
