"""
resolver.py - Drive one lookup from query to LookupResult.

English Wiktionary is written from the English side, so one language of every
pair must be English (the pivot):

    en → X   read the English entry's Translations tables for language X
    X → en   read language X's section of the page and its English definitions

A lookup moves through these stages (logged at DEBUG):

    RECEIVED → FETCHING → EXTRACTING → MORPHOLOGY_CHECK → [BASE_FORM_FETCH]
             → FINALIZING → SUCCESS | CORRECTION_RETRY → SUCCESS | EMPTY

Base-form lookups and correction retries are nested lookups. A nested lookup
never starts another one, so recursion is at most one level deep.
"""

import logging
from dataclasses import replace
from enum import Enum
from typing import List, Optional, Tuple

from wiktglot.client import Page, WiktionaryClient
from wiktglot.config import LookupConfig
from wiktglot.correction import select_correction
from wiktglot.errors import ConfigurationError, NotFoundError, WiktglotError
from wiktglot.languages import (
    PIVOT_PARTS_OF_SPEECH,
    PIVOT_TAG,
    Language,
    get_language,
    pos_key,
    supported_tags,
)
from wiktglot.markup import normalize_title
from wiktglot.models import CorrectionRecord, LookupResult, MorphologicalForm, WordTypeGroup
from wiktglot.morphology import detect_form
from wiktglot.pacing import RequestPacer
from wiktglot.pages import extract_foreign_groups
from wiktglot.pronunciation import extract_pronunciation
from wiktglot.redirects import detect_translation_redirect, parse_translation_subpage
from wiktglot.sections import language_section, locate_section
from wiktglot.translations import extract_translation_groups
from wiktglot.transliteration import extract_transliteration

logger = logging.getLogger(__name__)


class Stage(Enum):
    RECEIVED = "received"
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    MORPHOLOGY_CHECK = "morphology-check"
    BASE_FORM_FETCH = "base-form-fetch"
    FINALIZING = "finalizing"
    CORRECTION_RETRY = "correction-retry"
    SUCCESS = "success"
    EMPTY = "empty"


def validate_pair(source_tag: str, target_tag: str) -> Tuple[Language, Language]:
    """
    Check a language pair before anything is fetched.

    Raises:
        ConfigurationError: Unknown tag, identical tags, or neither side is English
    """
    unknown = [tag for tag in (source_tag, target_tag) if get_language(tag) is None]
    if unknown:
        raise ConfigurationError(
            f"Unsupported language(s): {', '.join(unknown)}. "
            f"Supported: {', '.join(supported_tags())}"
        )
    if source_tag == target_tag:
        raise ConfigurationError("Source and target languages must be different")
    if PIVOT_TAG not in (source_tag, target_tag):
        raise ConfigurationError(
            f"One of the languages must be '{PIVOT_TAG}' when reading English Wiktionary"
        )
    return get_language(source_tag), get_language(target_tag)


class Resolver:
    """
    Resolves words against English Wiktionary.

    The resolver owns the request pacer and, unless one is passed in, the
    transport. Use it as an async context manager so the transport is closed.

    Example:
        async with Resolver() as resolver:
            result = await resolver.resolve("bonjour", "fr", "en")
    """

    def __init__(self, config: Optional[LookupConfig] = None, client=None):
        self.config = config or LookupConfig()
        self.pacer = RequestPacer.from_config(self.config)
        self._owns_client = client is None
        self.client = client or WiktionaryClient(self.config, self.pacer)

    async def __aenter__(self) -> "Resolver":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    def _stage(self, stage: Stage, detail: str) -> None:
        logger.debug(f"[{stage.value}] {detail}")

    # ─────────────────────────────────────────────────────────────────────────
    # Public operations
    # ─────────────────────────────────────────────────────────────────────────

    async def resolve(self, word: str, source_language: str, target_language: str) -> LookupResult:
        """
        Look up a word and return its translations grouped by part of speech.

        Args:
            word: The word as typed ("azucar", "thank you")
            source_language: Tag of the word's language
            target_language: Tag of the language to translate into

        Returns:
            LookupResult; its groups are empty when the page has nothing for
            the pair and no correction helped.

        Raises:
            ConfigurationError: Invalid pair (raised before any request)
            NotFoundError: No page for the word, and no correction found one
            LookupTimeoutError: The page request timed out
            TransportError: The page request failed otherwise
        """
        self._stage(Stage.RECEIVED, f"{word!r} {source_language}→{target_language}")
        source, target = validate_pair(source_language, target_language)
        return await self._lookup(word, source, target, nested=False)

    async def search_by_romanization(self, text: str, language: Optional[str] = None) -> List[str]:
        """
        Titles matching a romanization, optionally restricted to one language's script.

        Examples:
            ("annyeonghaseyo", "ko") → ["안녕하세요", ...]
        """
        script = None
        if language is not None:
            row = get_language(language)
            if row is None:
                raise ConfigurationError(f"Unsupported language: {language}")
            script = row.script

        titles = await self.client.search(text, self.config.search_limit)
        if script is not None:
            titles = [title for title in titles if script.search(title)]
        return titles

    # ─────────────────────────────────────────────────────────────────────────
    # Lookup
    # ─────────────────────────────────────────────────────────────────────────

    async def _lookup(self, word: str, source: Language, target: Language,
                      nested: bool) -> LookupResult:
        """
        One fetch + extract cycle.

        ``nested`` is the one-shot suppression flag: a nested lookup neither
        follows form-of lines nor attempts a correction.
        """
        title = normalize_title(word)
        correction = None

        self._stage(Stage.FETCHING, title)
        try:
            page = await self.client.fetch_page(title)
        except NotFoundError:
            if nested:
                raise
            page = await self._fetch_correction(word, title)
            if normalize_title(page.title) != title:
                correction = CorrectionRecord(queried=title, resolved=page.title)

        self._stage(Stage.EXTRACTING, f"{page.title} ({source.tag}→{target.tag})")
        if source.tag == PIVOT_TAG:
            groups = await self._pivot_groups(page, source, target, nested)
        else:
            groups = await self._foreign_groups(page, source, target, nested)

        self._stage(Stage.FINALIZING, f"{page.title}: {len(groups)} groups")
        result = LookupResult(
            word=word,
            source_language=source.tag,
            target_language=target.tag,
            groups=tuple(groups),
            pronunciation=self._pronunciation(page, source),
            headword_transliteration=(
                extract_transliteration(page.body, source) if source.script_based else None
            ),
            correction=correction,
        )

        if not groups and not nested and correction is None:
            retried = await self._correction_retry(word, title, source, target)
            if retried is not None:
                result = retried

        self._stage(Stage.SUCCESS if result.groups else Stage.EMPTY, title)
        return result

    def _pronunciation(self, page: Page, source: Language) -> Optional[str]:
        section = language_section(page.body, source.section_name)
        return extract_pronunciation(section.text if section else page.body)

    # ─────────────────────────────────────────────────────────────────────────
    # en → X
    # ─────────────────────────────────────────────────────────────────────────

    async def _pivot_groups(self, page: Page, source: Language, target: Language,
                            nested: bool) -> List[WordTypeGroup]:
        section = language_section(page.body, source.section_name)
        english = section.text if section else page.body

        groups = extract_translation_groups(english, target.name, PIVOT_PARTS_OF_SPEECH)
        groups = await self._merge_subpage_groups(english, target, groups)

        if not nested:
            self._stage(Stage.MORPHOLOGY_CHECK, page.title)
            verb = locate_section(english, 'Verb')
            form = detect_form(verb.text, page.title) if verb else None
            if form is not None:
                groups.extend(await self._base_form_groups(form, source, target))
        return groups

    async def _merge_subpage_groups(self, english: str, target: Language,
                                    groups: List[WordTypeGroup]) -> List[WordTypeGroup]:
        """Add entries from "/translations" subpages to the group of their part of speech."""
        by_pos = {group.part_of_speech: i for i, group in enumerate(groups)}

        for heading in PIVOT_PARTS_OF_SPEECH:
            redirect = detect_translation_redirect(english, heading)
            if redirect is None:
                continue
            try:
                subpage = await self.client.fetch_page(redirect.page)
            except WiktglotError as e:
                logger.warning(f"Skipping translations subpage {redirect.page}: {e}")
                continue

            entries = parse_translation_subpage(subpage.body, target.name, heading, redirect.anchor)
            if not entries:
                continue

            key = pos_key(heading)
            if key in by_pos:
                existing = groups[by_pos[key]]
                groups[by_pos[key]] = replace(existing, entries=existing.entries + tuple(entries))
            else:
                by_pos[key] = len(groups)
                groups.append(WordTypeGroup(key, tuple(entries)))
        return groups

    # ─────────────────────────────────────────────────────────────────────────
    # X → en
    # ─────────────────────────────────────────────────────────────────────────

    async def _foreign_groups(self, page: Page, source: Language, target: Language,
                              nested: bool) -> List[WordTypeGroup]:
        groups = extract_foreign_groups(page.body, source, lexeme=page.title)
        if nested:
            return groups

        self._stage(Stage.MORPHOLOGY_CHECK, page.title)
        followed = set()
        for group in list(groups):
            form = group.morphological_form
            if form is None or form.base_lexeme in followed:
                continue
            followed.add(form.base_lexeme)
            groups.extend(await self._base_form_groups(form, source, target))
        return groups

    # ─────────────────────────────────────────────────────────────────────────
    # Nested lookups
    # ─────────────────────────────────────────────────────────────────────────

    async def _base_form_groups(self, form: MorphologicalForm, source: Language,
                                target: Language) -> List[WordTypeGroup]:
        """Groups of the base lexeme, each tagged with the form that led there."""
        self._stage(Stage.BASE_FORM_FETCH, f"{form.base_lexeme} ({form.description})")
        try:
            base = await self._lookup(form.base_lexeme, source, target, nested=True)
        except WiktglotError as e:
            logger.warning(f"Base form {form.base_lexeme!r} unavailable: {e}")
            return []
        return [group.tagged(form) for group in base.groups]

    async def _correction_candidate(self, title: str) -> Optional[str]:
        try:
            candidates = await self.client.search(title.replace('_', ' '), self.config.search_limit)
        except WiktglotError as e:
            logger.warning(f"Search for {title!r} failed: {e}")
            return None

        candidate = select_correction(candidates, title)
        if candidate is None or normalize_title(candidate) == title:
            return None
        logger.info(f"Trying {candidate!r} for {title!r}")
        return candidate

    async def _fetch_correction(self, word: str, title: str) -> Page:
        """The page a missing title most likely meant; NotFoundError if none."""
        self._stage(Stage.CORRECTION_RETRY, f"{title} does not exist")
        candidate = await self._correction_candidate(title)
        if candidate is None:
            raise NotFoundError(word)
        try:
            return await self.client.fetch_page(candidate)
        except NotFoundError as e:
            raise NotFoundError(word) from e

    async def _correction_retry(self, word: str, title: str, source: Language,
                                target: Language) -> Optional[LookupResult]:
        """One nested lookup of the best search candidate; kept only if it has groups."""
        self._stage(Stage.CORRECTION_RETRY, f"{title} has no {target.tag} entries")
        candidate = await self._correction_candidate(title)
        if candidate is None:
            return None

        try:
            retried = await self._lookup(candidate, source, target, nested=True)
        except WiktglotError as e:
            logger.warning(f"Correction {candidate!r} unavailable: {e}")
            return None

        if not retried.groups:
            return None
        return replace(
            retried,
            word=word,
            correction=CorrectionRecord(queried=title, resolved=candidate),
        )


# ─────────────────────────────────────────────────────────────────────────────
# One-shot helpers
# ─────────────────────────────────────────────────────────────────────────────

async def resolve(word: str, source_language: str, target_language: str,
                  config: Optional[LookupConfig] = None) -> LookupResult:
    """Resolve one word with a resolver opened (and closed) for this call."""
    async with Resolver(config) as resolver:
        return await resolver.resolve(word, source_language, target_language)


async def search_by_romanization(text: str, language: Optional[str] = None,
                                 config: Optional[LookupConfig] = None) -> List[str]:
    async with Resolver(config) as resolver:
        return await resolver.search_by_romanization(text, language)
