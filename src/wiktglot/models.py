"""
Records produced by a single lookup.

Every record is frozen: extraction builds them once and nothing downstream
mutates them. ``to_dict()`` gives the JSON shape printed by the CLI, omitting
optional fields that are absent.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Tuple, Union


def _drop_none(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


@dataclass(frozen=True)
class VerbPrincipalParts:
    """Latin-style principal parts: amō, amāre, amāvī, amātum."""
    kind: ClassVar[str] = "verb"

    first_person_present: str
    infinitive: Optional[str] = None
    perfect_active: Optional[str] = None
    supine: Optional[str] = None

    def to_dict(self) -> dict:
        return _drop_none({
            "kind": self.kind,
            "first_person_present": self.first_person_present,
            "infinitive": self.infinitive,
            "perfect_active": self.perfect_active,
            "supine": self.supine,
        })


@dataclass(frozen=True)
class NounForms:
    """Nominative, gender marker and (optionally) genitive."""
    kind: ClassVar[str] = "noun"

    nominative: str
    gender: str
    genitive: Optional[str] = None

    def to_dict(self) -> dict:
        return _drop_none({
            "kind": self.kind,
            "nominative": self.nominative,
            "gender": self.gender,
            "genitive": self.genitive,
        })


@dataclass(frozen=True)
class AdjectiveForms:
    """Masculine headword with its feminine and neuter forms."""
    kind: ClassVar[str] = "adjective"

    masculine: str
    feminine: str
    neuter: str

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "masculine": self.masculine,
            "feminine": self.feminine,
            "neuter": self.neuter,
        }


HeadwordInflection = Union[VerbPrincipalParts, NounForms, AdjectiveForms]


@dataclass(frozen=True)
class TranslationEntry:
    """One rendering of the looked-up word in the other language."""
    surface_form: str
    gloss: str
    transliteration: Optional[str] = None
    dialect: Optional[str] = None
    inflection: Optional[HeadwordInflection] = None

    def to_dict(self) -> dict:
        return _drop_none({
            "surface_form": self.surface_form,
            "transliteration": self.transliteration,
            "gloss": self.gloss,
            "dialect": self.dialect,
            "inflection": self.inflection.to_dict() if self.inflection else None,
        })


@dataclass(frozen=True)
class MorphologicalForm:
    """The queried word is an inflected form ("past participle") of base_lexeme."""
    base_lexeme: str
    description: str

    def to_dict(self) -> dict:
        return {"base_lexeme": self.base_lexeme, "description": self.description}


@dataclass(frozen=True)
class WordTypeGroup:
    """Entries that share a part of speech."""
    part_of_speech: str
    entries: Tuple[TranslationEntry, ...]
    morphological_form: Optional[MorphologicalForm] = None

    def tagged(self, form: MorphologicalForm) -> "WordTypeGroup":
        """Copy of this group attributed to an inflected form of the query."""
        return WordTypeGroup(self.part_of_speech, self.entries, form)

    def to_dict(self) -> dict:
        return _drop_none({
            "part_of_speech": self.part_of_speech,
            "entries": [e.to_dict() for e in self.entries],
            "morphological_form": (
                self.morphological_form.to_dict() if self.morphological_form else None
            ),
        })


@dataclass(frozen=True)
class CorrectionRecord:
    """The query was answered by a different page found through search."""
    queried: str
    resolved: str

    def __post_init__(self):
        if self.queried == self.resolved:
            raise ValueError("a correction must resolve to a different title")

    def to_dict(self) -> dict:
        return {"searched_for": self.queried, "found_as": self.resolved}


@dataclass(frozen=True)
class LookupResult:
    """Everything one resolve() call produced."""
    word: str
    source_language: str
    target_language: str
    groups: Tuple[WordTypeGroup, ...] = field(default_factory=tuple)
    pronunciation: Optional[str] = None
    headword_transliteration: Optional[str] = None
    correction: Optional[CorrectionRecord] = None

    def to_dict(self) -> dict:
        d = _drop_none({
            "word": self.word,
            "source_language": self.source_language,
            "target_language": self.target_language,
            "groups": [g.to_dict() for g in self.groups],
            "pronunciation": self.pronunciation,
            "headword_transliteration": self.headword_transliteration,
        })
        if self.correction:
            d.update(self.correction.to_dict())
        return d
