"""SVT content API provider (``api.svt.se/nss-api/page``).

Serves the two read-only endpoints the crawler uses:

- listing: ``GET <base>/<topic>/?q=auto&limit=50&page=<n>``
- article: ``GET <base><short-url>?q=articles``

Requests are issued one at a time through an injected or owned
``httpx.AsyncClient`` with a fixed timeout.  Network errors, non-2xx
statuses and undecodable payloads are all raised internally as
:class:`ContentFetchError` and surfaced to callers as failed outcome
values; nothing is retried here.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from src.interfaces.content_api_provider import IContentAPIProvider
from src.models.article import ArticleResponse, ListingResult
from src.models.listing import ListingPage
from src.utils.errors import ContentFetchError
from src.utils.url_utils import (
    DEFAULT_API_BASE,
    article_url,
    listing_url,
)

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_TIMEOUT = 6.0
_PAGE_SIZE = 50
_DEFAULT_HEADERS = {
    "User-Agent": "svt-crawler/0.1 (+https://github.com/spraakbanken)",
    "Accept": "application/json",
}


class SVTContentProvider(IContentAPIProvider):
    """Listing and article client for the SVT news API.

    Parameters
    ----------
    http_client:
        Optional injected ``httpx.AsyncClient``; one is created (and
        closed by :meth:`aclose`) when omitted.
    api_base:
        API base URL without trailing slash.
    page_size:
        Listing page size (the ``limit`` parameter).
    timeout:
        Per-request timeout in seconds.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        api_base: str = DEFAULT_API_BASE,
        page_size: int = _PAGE_SIZE,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers=_DEFAULT_HEADERS,
            follow_redirects=True,
        )
        self._api_base = api_base.rstrip("/")
        self._page_size = page_size

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> SVTContentProvider:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @property
    def api_base(self) -> str:
        return self._api_base

    @property
    def page_size(self) -> int:
        return self._page_size

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _get_json(self, url: str) -> Any:
        """GET *url* and decode the JSON body.

        Raises
        ------
        ContentFetchError
            On timeout, transport error, non-2xx status, or invalid JSON.
        """
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise ContentFetchError(
                message=f"Timeout fetching {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise ContentFetchError(
                message=f"HTTP {exc.response.status_code} for {url}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise ContentFetchError(
                message=f"HTTP error fetching {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ContentFetchError(
                message=f"Invalid JSON from {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    async def _listing(self, url: str) -> ListingPage:
        payload = await self._get_json(url)
        try:
            return ListingPage.from_api(payload)
        except (ValidationError, ValueError, AttributeError) as exc:
            raise ContentFetchError(
                message=f"Unexpected listing shape from {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    async def _article_content(self, url: str) -> list[dict[str, Any]]:
        payload = await self._get_json(url)
        if not isinstance(payload, dict):
            raise ContentFetchError(
                message=f"Article payload from {url} is not an object",
                provider_name=self.get_provider_name(),
            )
        content = (payload.get("articles") or {}).get("content") or []
        if not isinstance(content, list) or not all(isinstance(c, dict) for c in content):
            raise ContentFetchError(
                message=f"Unexpected article shape from {url}",
                provider_name=self.get_provider_name(),
            )
        return content

    # ------------------------------------------------------------------
    # IContentAPIProvider implementation
    # ------------------------------------------------------------------

    def listing_url(self, topic: str, page: int) -> str:
        return listing_url(topic, page, self._page_size, self._api_base)

    async def fetch_listing_page(self, topic: str, page: int) -> ListingResult:
        return await self.fetch_listing_url(self.listing_url(topic, page))

    async def fetch_listing_url(self, url: str) -> ListingResult:
        try:
            page = await self._listing(url)
        except ContentFetchError as exc:
            logger.info("listing_fetch_failed", url=url, error=str(exc))
            return ListingResult(url=url, error=str(exc))

        logger.debug(
            "listing_fetched",
            url=url,
            total_items=page.total_available_items,
            entries=len(page.content),
        )
        return ListingResult(url=url, page=page)

    async def fetch_article(self, short_url: str) -> ArticleResponse:
        url = article_url(short_url, self._api_base)
        try:
            content = await self._article_content(url)
        except ContentFetchError as exc:
            logger.info("article_fetch_failed", url=url, error=str(exc))
            return ArticleResponse(url=url, error=str(exc))
        return ArticleResponse(url=url, content=content)

    def get_provider_name(self) -> str:
        return "svt_api"
