"""Idempotent download of a single article into the storage layout.

Given a short URL, the fetcher either confirms it is already in the
ledger (no network call) or downloads the article JSON, writes it to
``<data_dir>/svt-<year>/<topic>/<article_id>.json`` and records it in
the ledger.  Fetch problems come back as :class:`ArticleResult` values;
queueing the URL for retry is the caller's job.

A failed file write raises :class:`StorageError` instead of returning a
failure, because a ledger entry without its file (or the reverse) would
leave the ledger and the files on disk out of step for every later run.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import structlog

from src.interfaces.content_api_provider import IContentAPIProvider
from src.models.article import ArticleRecord, ArticleResult, FetchStatus, year_bucket
from src.services.crawl_state import CrawlState
from src.utils.json_io import write_json
from src.utils.url_utils import DEFAULT_SITE_PREFIX, strip_site_prefix

logger = structlog.get_logger(logger_name=__name__)

_EARLIEST_YEAR = 2004


def _is_safe_file_stem(article_id: str) -> bool:
    """True if *article_id* names a file inside its topic directory."""
    return not (
        "/" in article_id
        or "\\" in article_id
        or ".." in article_id
        or article_id.startswith(".")
    )


class ArticleFetcher:
    """Downloads articles and keeps the ledger in step with the files.

    Parameters
    ----------
    provider:
        Content API client.
    state:
        Shared ledger + failure queue.
    data_dir:
        Root of the storage layout.
    site_prefix:
        Host prefix stripped from absolute article URLs.
    earliest_year:
        Articles dated before this year are bucketed as ``nodate``.
    current_year:
        Upper bound for valid years; defaults to today's year.
    """

    def __init__(
        self,
        provider: IContentAPIProvider,
        state: CrawlState,
        data_dir: Path,
        site_prefix: str = DEFAULT_SITE_PREFIX,
        earliest_year: int = _EARLIEST_YEAR,
        current_year: int | None = None,
    ) -> None:
        self._provider = provider
        self._state = state
        self._data_dir = Path(data_dir)
        self._site_prefix = site_prefix
        self._earliest_year = earliest_year
        self._current_year = current_year

    def article_path(self, record: ArticleRecord) -> Path:
        return self._data_dir / f"svt-{record.year}" / record.topic / f"{record.article_id}.json"

    async def fetch_article(
        self,
        short_url: str,
        topic_name: str,
        force: bool = False,
    ) -> ArticleResult:
        """Make sure the article at *short_url* is stored under *topic_name*.

        Returns
        -------
        ArticleResult
            ``ALREADY_SAVED`` for a ledger hit (unless *force*), ``SAVED``
            after a successful download, ``EMPTY`` or ``FAILED`` otherwise.

        Raises
        ------
        StorageError
            If the article file cannot be written.
        """
        short_url = strip_site_prefix(short_url, self._site_prefix)

        if not force and self._state.is_saved(short_url):
            return ArticleResult(
                short_url=short_url,
                status=FetchStatus.ALREADY_SAVED,
                record=self._state.get_record(short_url),
            )

        response = await self._provider.fetch_article(short_url)
        logger.debug("new_article", url=response.url)

        if not response.ok:
            return ArticleResult(
                short_url=short_url,
                status=FetchStatus.FAILED,
                message=response.error or "",
            )

        content = response.content or []
        if not content:
            logger.info("article_empty", url=response.url)
            return ArticleResult(
                short_url=short_url,
                status=FetchStatus.EMPTY,
                message=f"No data found in article '{response.url}'",
            )

        if len(content) > 1:
            logger.warning(
                "article_multiple_entries",
                short_url=short_url,
                entries=len(content),
            )

        article = content[0]
        article_id = article.get("id")
        if article_id in (None, ""):
            logger.info("article_missing_id", url=response.url)
            return ArticleResult(
                short_url=short_url,
                status=FetchStatus.FAILED,
                message=f"Article '{response.url}' has no id",
            )
        if not _is_safe_file_stem(str(article_id)):
            logger.info("article_unsafe_id", url=response.url, article_id=str(article_id))
            return ArticleResult(
                short_url=short_url,
                status=FetchStatus.FAILED,
                message=f"Article '{response.url}' has an id unusable as a file name",
            )

        latest_year = self._current_year or date.today().year
        record = ArticleRecord(
            article_id=str(article_id),
            year=year_bucket(article, self._earliest_year, latest_year),
            topic=topic_name,
        )

        write_json(content, self.article_path(record))
        self._state.record_article(short_url, record)

        return ArticleResult(short_url=short_url, status=FetchStatus.SAVED, record=record)
