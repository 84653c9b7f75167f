"""Abstract base class for the paginated content API.

Covers the two stateless request/response clients the crawler needs:
the *listing client* (one page of a topic listing) and the *article
client* (one article by short URL).  Implementations report failures as
outcome values instead of raising, so the walker and the retry pass can
treat a timeout, an HTTP error and a malformed payload identically.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.article import ArticleResponse, ListingResult


class IContentAPIProvider(ABC):
    """Contract for services that serve topic listings and article JSON."""

    @abstractmethod
    def listing_url(self, topic: str, page: int) -> str:
        """Return the absolute URL of listing *page* (1-indexed) for *topic*.

        This is the identity under which a failed page is queued.
        """

    @abstractmethod
    async def fetch_listing_page(self, topic: str, page: int) -> ListingResult:
        """Fetch one listing page for *topic*.

        Returns
        -------
        ListingResult
            ``ok`` is ``False`` on any network, status or decoding error;
            ``url`` is always the value of :meth:`listing_url`.
        """

    @abstractmethod
    async def fetch_listing_url(self, url: str) -> ListingResult:
        """Fetch a listing page by its absolute URL (used by retries)."""

    @abstractmethod
    async def fetch_article(self, short_url: str) -> ArticleResponse:
        """Fetch the ``articles.content`` array for *short_url*.

        Returns
        -------
        ArticleResponse
            ``content`` is the raw list of article objects (possibly
            empty) on success, ``None`` on failure.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"svt_api"``."""
