"""
client.py - Async access to the MediaWiki API of English Wiktionary.

Two operations are used:

    action=parse&page=TITLE&prop=text     rendered HTML of one page
    action=query&list=search&srsearch=Q   ranked titles for a free-text query

Every request goes through the shared RequestPacer when one is configured.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import httpx

from wiktglot.config import LookupConfig
from wiktglot.errors import LookupTimeoutError, NotFoundError, TransportError
from wiktglot.markup import normalize_title
from wiktglot.pacing import RequestPacer

logger = logging.getLogger(__name__)

# API error code for a page that does not exist
MISSING_TITLE = "missingtitle"


@dataclass(frozen=True)
class Page:
    """Rendered page HTML and the canonical title the wiki answered with."""
    body: str
    title: str


class WiktionaryClient:
    """
    Thin transport over httpx.AsyncClient.

    Use as an async context manager, or call aclose() when done. An existing
    httpx.AsyncClient may be passed in (tests pass one backed by MockTransport);
    it is then left open on close.
    """

    def __init__(
        self,
        config: Optional[LookupConfig] = None,
        pacer: Optional[RequestPacer] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or LookupConfig()
        self.pacer = pacer
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=httpx.Timeout(self.config.timeout))

    async def __aenter__(self) -> "WiktionaryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _get(self, params: dict, what: str) -> httpx.Response:
        if self.pacer is not None:
            await self.pacer.acquire()

        try:
            return await self._http.get(
                self.config.api_url,
                params={**params, "format": "json"},
                headers={"User-Agent": self.config.user_agent},
                timeout=self.config.timeout,
            )
        except httpx.TimeoutException as e:
            raise LookupTimeoutError(
                f"Request for {what} timed out after {self.config.timeout}s"
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request for {what} failed: {e}") from e

    def _json(self, response: httpx.Response, what: str) -> dict:
        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON in response for {what}", status_code=response.status_code
            ) from e
        if not isinstance(data, dict):
            raise TransportError(f"Unexpected response for {what}", status_code=response.status_code)
        return data

    async def fetch_page(self, title: str) -> Page:
        """
        Fetch the rendered HTML of one page.

        Raises:
            NotFoundError: The page does not exist
            LookupTimeoutError: The request exceeded the configured timeout
            TransportError: Any other failure
        """
        title = normalize_title(title)
        logger.debug(f"Fetching page {title}")
        response = await self._get({"action": "parse", "page": title, "prop": "text"}, title)

        if response.status_code == 404:
            raise NotFoundError(title)
        if response.status_code != 200:
            raise TransportError(
                f"HTTP {response.status_code} fetching {title}", status_code=response.status_code
            )

        data = self._json(response, title)
        error = data.get("error")
        if error:
            code = error.get("code")
            if code == MISSING_TITLE:
                raise NotFoundError(title)
            raise TransportError(error.get("info") or f"API error {code}", error_code=code)

        parsed = data.get("parse") or {}
        text = parsed.get("text") or {}
        body = text.get("*", "") if isinstance(text, dict) else str(text)
        return Page(body=body, title=parsed.get("title") or title)

    async def search(self, text: str, limit: Optional[int] = None) -> List[str]:
        """
        Ranked page titles for a free-text query (main namespace only).

        Raises:
            LookupTimeoutError, TransportError
        """
        params = {
            "action": "query",
            "list": "search",
            "srsearch": text,
            "srnamespace": 0,
            "srlimit": limit or self.config.search_limit,
        }
        logger.debug(f"Searching for {text!r}")
        response = await self._get(params, f"search '{text}'")
        if response.status_code != 200:
            raise TransportError(
                f"HTTP {response.status_code} searching for {text}", status_code=response.status_code
            )

        data = self._json(response, f"search '{text}'")
        error = data.get("error")
        if error:
            raise TransportError(error.get("info") or "search failed", error_code=error.get("code"))

        hits = (data.get("query") or {}).get("search") or []
        return [hit["title"] for hit in hits if hit.get("title")]
