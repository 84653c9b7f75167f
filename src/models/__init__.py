"""SVT crawler domain models - re-exports all public model classes.

The models are organised across three submodules by concern:
    - listing.py - topic listing pages as returned by the API
    - article.py - ledger records, year bucketing, fetch outcomes
    - crawl.py   - run reports for crawl, retry and summary

Import from ``src.models`` rather than the submodules.
"""

from __future__ import annotations

from src.models.article import (
    NODATE,
    ArticleRecord,
    ArticleResponse,
    ArticleResult,
    FetchStatus,
    ListingResult,
    publication_year,
    year_bucket,
)
from src.models.crawl import (
    ConversionReport,
    CorpusSummary,
    CrawlReport,
    RetryReport,
    TopicReport,
)
from src.models.listing import ListingEntry, ListingPage

__all__ = [
    "NODATE",
    "ArticleRecord",
    "ArticleResponse",
    "ArticleResult",
    "ConversionReport",
    "CorpusSummary",
    "CrawlReport",
    "FetchStatus",
    "ListingEntry",
    "ListingPage",
    "ListingResult",
    "RetryReport",
    "TopicReport",
    "publication_year",
    "year_bucket",
]
