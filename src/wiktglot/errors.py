"""
Exception hierarchy for Wiktionary lookups.

Only failures of a whole lookup are exceptions. Extraction misses (a section
that is absent, a pattern that does not match) are ordinary empty results.
"""

from typing import Optional


class WiktglotError(Exception):
    """Base class for every lookup failure."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code


class ConfigurationError(WiktglotError):
    """Unsupported or inconsistent language pair. Raised before any request."""


class NotFoundError(WiktglotError):
    """The requested page does not exist and no correction resolved it."""

    def __init__(self, word: str, error_code: Optional[str] = "missingtitle"):
        super().__init__(f'Word "{word}" not found', status_code=404, error_code=error_code)
        self.word = word


class LookupTimeoutError(WiktglotError):
    """A single request exceeded its deadline."""


class TransportError(WiktglotError):
    """Any other non-success outcome from the API."""
