"""Shared pytest fixtures for the SVT crawler test suite."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pytest
import structlog

from src.interfaces.content_api_provider import IContentAPIProvider
from src.models.article import ArticleResponse, ListingResult
from src.models.listing import ListingPage
from src.services.crawl_state import CrawlState
from src.utils.url_utils import DEFAULT_API_BASE, article_url, listing_url


# ======================================================================
# Payload builders
# ======================================================================


def make_article(
    article_id: str,
    url: str,
    published: str = "2021-05-01T08:00:00+02:00",
    **extra: Any,
) -> dict[str, Any]:
    """Build one article object as found in ``articles.content``."""
    article = {
        "id": article_id,
        "url": url,
        "published": published,
        "title": f"Artikel {article_id}",
    }
    article.update(extra)
    return article


def listing_payload(urls: list[str], total: int) -> dict[str, Any]:
    """Build a raw ``?q=auto`` listing response."""
    return {
        "auto": {
            "pagination": {"totalAvailableItems": total},
            "content": [
                {"url": url, "published": "2021-05-01T08:00:00+02:00"} for url in urls
            ],
        }
    }


# ======================================================================
# Fake content API
# ======================================================================


class FakeContentProvider(IContentAPIProvider):
    """In-memory content API keyed by listing URL and short URL.

    Anything not registered answers as a failed request.  ``raise_on``
    maps a URL to an exception raised instead of answering, to simulate
    an interruption mid-crawl.
    """

    def __init__(self, page_size: int = 50, api_base: str = DEFAULT_API_BASE, **_: Any) -> None:
        self.page_size = page_size
        self.api_base = api_base
        self.listings: dict[str, dict[str, Any]] = {}
        self.articles: dict[str, list[dict[str, Any]]] = {}
        self.raise_on: dict[str, Exception] = {}
        self.listing_calls: list[str] = []
        self.article_calls: list[str] = []

    # -- registration helpers --

    def add_listing(self, topic: str, page: int, urls: list[str], total: int) -> str:
        url = self.listing_url(topic, page)
        self.listings[url] = listing_payload(urls, total)
        return url

    def add_article(self, short_url: str, article: dict[str, Any] | None = None, **kwargs: Any) -> None:
        if article is None:
            article_id = kwargs.pop("article_id", short_url.rsplit("/", 1)[-1])
            article = make_article(article_id, short_url, **kwargs)
        self.articles[short_url] = [article]

    # -- IContentAPIProvider --

    def listing_url(self, topic: str, page: int) -> str:
        return listing_url(topic, page, self.page_size, self.api_base)

    async def fetch_listing_page(self, topic: str, page: int) -> ListingResult:
        return await self.fetch_listing_url(self.listing_url(topic, page))

    async def fetch_listing_url(self, url: str) -> ListingResult:
        self.listing_calls.append(url)
        if url in self.raise_on:
            raise self.raise_on[url]
        if url not in self.listings:
            return ListingResult(url=url, error="HTTP 503")
        return ListingResult(url=url, page=ListingPage.from_api(self.listings[url]))

    async def fetch_article(self, short_url: str) -> ArticleResponse:
        self.article_calls.append(short_url)
        url = article_url(short_url, self.api_base)
        if short_url not in self.articles:
            return ArticleResponse(url=url, error="HTTP 404")
        return ArticleResponse(url=url, content=self.articles[short_url])

    def get_provider_name(self) -> str:
        return "fake_svt"

    async def __aenter__(self) -> FakeContentProvider:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None


# ======================================================================
# Fixtures
# ======================================================================


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo structlog / root logger changes made by the CLI."""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def ledger_path(data_dir: Path) -> Path:
    return data_dir / "crawled_pages.json"


@pytest.fixture
def failed_path(data_dir: Path) -> Path:
    return data_dir / "failed_urls.json"


@pytest.fixture
def crawl_state(ledger_path: Path, failed_path: Path) -> CrawlState:
    return CrawlState.load(ledger_path, failed_path)


@pytest.fixture
def fake_provider() -> FakeContentProvider:
    return FakeContentProvider()
