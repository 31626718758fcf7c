"""
wiktglot - Bilingual dictionary lookups read from English Wiktionary.

    from wiktglot import resolve
    result = await resolve("bonjour", "fr", "en")
"""

from wiktglot.config import LookupConfig
from wiktglot.errors import (
    ConfigurationError,
    LookupTimeoutError,
    NotFoundError,
    TransportError,
    WiktglotError,
)
from wiktglot.models import (
    AdjectiveForms,
    CorrectionRecord,
    LookupResult,
    MorphologicalForm,
    NounForms,
    TranslationEntry,
    VerbPrincipalParts,
    WordTypeGroup,
)
from wiktglot.resolver import Resolver, resolve, search_by_romanization

__version__ = "0.3.0"

__all__ = [
    "AdjectiveForms",
    "ConfigurationError",
    "CorrectionRecord",
    "LookupConfig",
    "LookupResult",
    "LookupTimeoutError",
    "MorphologicalForm",
    "NotFoundError",
    "NounForms",
    "Resolver",
    "TransportError",
    "TranslationEntry",
    "VerbPrincipalParts",
    "WiktglotError",
    "WordTypeGroup",
    "resolve",
    "search_by_romanization",
]
