"""Pydantic v2 models for downloaded articles and fetch outcomes.

``ArticleRecord`` is the ledger's unit of truth: a short URL appears in
the ledger if and only if the matching
``data/svt-<year>/<topic>/<article_id>.json`` file has been written.

The outcome models replace exceptions at the client/fetcher seam.  The
content provider never raises for a failed request; it returns a result
whose ``ok`` flag the caller branches on.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.models.listing import ListingPage

NODATE = "nodate"


def publication_year(
    article: dict[str, Any],
    earliest_year: int = 2004,
    latest_year: int | None = None,
) -> int | None:
    """Return the article's year, or ``None`` if it has no usable date.

    The year is the first four characters of ``published``, or of
    ``modified`` when ``published`` is empty.  Years outside
    ``[earliest_year, latest_year]`` count as undated.
    """
    if latest_year is None:
        latest_year = date.today().year

    stamp = article.get("published") or article.get("modified")
    if not stamp:
        return None
    try:
        year = int(str(stamp)[:4])
    except ValueError:
        return None
    if year < earliest_year or year > latest_year:
        return None
    return year


def year_bucket(
    article: dict[str, Any],
    earliest_year: int = 2004,
    latest_year: int | None = None,
) -> str:
    """Storage partition key for *article*: ``"2021"`` or ``"nodate"``."""
    year = publication_year(article, earliest_year, latest_year)
    return NODATE if year is None else str(year)


class ArticleRecord(BaseModel):
    """Ledger entry for one successfully stored article."""

    model_config = ConfigDict(frozen=True)

    article_id: str = Field(description="Upstream article ID (also the file stem).")
    year: str = Field(description="Year bucket, e.g. '2021' or 'nodate'.")
    topic: str = Field(description="Topic storage name, e.g. 'sport' or 'stockholm'.")

    def to_ledger_value(self) -> list[str]:
        """Serialise as ``[article_id, year, topic]`` for crawled_pages.json."""
        return [self.article_id, self.year, self.topic]

    @classmethod
    def from_ledger_value(cls, value: list[str]) -> ArticleRecord:
        article_id, year, topic = value
        return cls(article_id=str(article_id), year=str(year), topic=str(topic))

    def relative_path(self) -> str:
        """Path of the article file relative to the data directory."""
        return f"svt-{self.year}/{self.topic}/{self.article_id}.json"


class FetchStatus(str, Enum):  # noqa: UP042 (StrEnum requires Python 3.11+)
    """Classification of one article fetch."""

    SAVED = "saved"                   # Downloaded and written this call
    ALREADY_SAVED = "already_saved"   # Ledger hit, no network call made
    EMPTY = "empty"                   # API answered with zero content entries
    FAILED = "failed"                 # Network error or malformed response


class ListingResult(BaseModel):
    """Outcome of fetching one listing page."""

    model_config = ConfigDict(frozen=True)

    url: str
    page: ListingPage | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.page is not None


class ArticleResponse(BaseModel):
    """Outcome of calling the article endpoint for one short URL."""

    model_config = ConfigDict(frozen=True)

    url: str
    content: list[dict[str, Any]] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.content is not None


class ArticleResult(BaseModel):
    """Outcome of :meth:`ArticleFetcher.fetch_article`."""

    model_config = ConfigDict(frozen=True)

    short_url: str
    status: FetchStatus
    record: ArticleRecord | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status in (FetchStatus.SAVED, FetchStatus.ALREADY_SAVED)
