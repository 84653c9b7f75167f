"""Orchestrates a full crawl of the SVT topic catalogue.

Topics, their pages and the articles on each page are processed in
listing order, one request at a time.  The early-stop heuristic relies
on that order, so nothing here runs concurrently.

Usage via CLI::

    svt-crawler crawl            # incremental crawl of every topic
    svt-crawler crawl --force    # re-download everything
    svt-crawler crawl --retry    # replay the failure queue
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import structlog

from src.config.settings import Settings
from src.config.topics import TOPICS, topic_storage_name
from src.interfaces.content_api_provider import IContentAPIProvider
from src.models.crawl import CrawlReport, RetryReport, TopicReport
from src.services.article_fetcher import ArticleFetcher
from src.services.crawl_state import CrawlState
from src.services.pagination_walker import PaginationWalker, page_count
from src.services.retry_coordinator import RetryCoordinator
from src.utils.url_utils import DEFAULT_API_BASE, DEFAULT_SITE_PREFIX

logger = structlog.get_logger(logger_name=__name__)

_PAGE_SIZE = 50
_EARLIEST_YEAR = 2004


class CrawlService:
    """Wires the content provider, crawl state and the three crawl phases.

    Parameters
    ----------
    provider:
        Content API client.
    state:
        Loaded ledger + failure queue.
    data_dir:
        Root of the storage layout.
    page_size:
        Listing page size.
    api_base:
        API base URL (identifies listing URLs during retries).
    site_prefix:
        Host prefix stripped from article URLs.
    earliest_year:
        Lower bound of the valid year range.
    current_year:
        Upper bound of the valid year range; defaults to today's year.
    """

    def __init__(
        self,
        provider: IContentAPIProvider,
        state: CrawlState,
        data_dir: Path,
        page_size: int = _PAGE_SIZE,
        api_base: str = DEFAULT_API_BASE,
        site_prefix: str = DEFAULT_SITE_PREFIX,
        earliest_year: int = _EARLIEST_YEAR,
        current_year: int | None = None,
    ) -> None:
        self._provider = provider
        self._state = state
        self._page_size = page_size
        self._fetcher = ArticleFetcher(
            provider=provider,
            state=state,
            data_dir=data_dir,
            site_prefix=site_prefix,
            earliest_year=earliest_year,
            current_year=current_year,
        )
        self._walker = PaginationWalker(
            provider=provider,
            fetcher=self._fetcher,
            state=state,
            page_size=page_size,
            site_prefix=site_prefix,
        )
        self._retry = RetryCoordinator(
            provider=provider,
            fetcher=self._fetcher,
            state=state,
            api_base=api_base,
            site_prefix=site_prefix,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        provider: IContentAPIProvider,
        state: CrawlState | None = None,
    ) -> CrawlService:
        """Build a service with state loaded from the configured data dir."""
        if state is None:
            state = CrawlState.load(settings.ledger_path, settings.failed_path)
        return cls(
            provider=provider,
            state=state,
            data_dir=settings.data_path,
            page_size=settings.page_size,
            api_base=settings.api_base_url,
            site_prefix=settings.site_prefix,
            earliest_year=settings.earliest_year,
        )

    @property
    def state(self) -> CrawlState:
        return self._state

    @property
    def fetcher(self) -> ArticleFetcher:
        return self._fetcher

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def crawl(
        self,
        force: bool = False,
        topics: tuple[str, ...] | list[str] | None = None,
        on_topic_start: Callable[[str, int, int], None] | None = None,
        on_topic_done: Callable[[TopicReport], None] | None = None,
    ) -> CrawlReport:
        """Walk every topic in order.

        Parameters
        ----------
        force:
            Re-download saved articles and disable the early stop.
        topics:
            Topic paths to walk (default: the full catalogue).
        on_topic_start:
            Callback ``(topic, total_items, pages)`` once page 1 is in.
        on_topic_done:
            Callback receiving each :class:`TopicReport`.

        Raises
        ------
        StorageError
            If an article file or the crawl state cannot be written.
        """
        if topics is None:
            topics = TOPICS

        reports: list[TopicReport] = []
        for topic in topics:
            logger.debug("topic_start", topic=topic, force=force)
            first_page = await self._walker.fetch_first_page(topic)

            if first_page.ok and first_page.page is not None:
                total = first_page.page.total_available_items
                if on_topic_start:
                    on_topic_start(topic, total, page_count(total, self._page_size))
                report = await self._walker.walk(topic, force=force, first_page=first_page)
            else:
                logger.info("topic_first_page_failed", topic=topic, url=first_page.url)
                report = TopicReport(
                    topic=topic,
                    storage_name=topic_storage_name(topic),
                    failed_pages=1,
                )

            reports.append(report)
            if on_topic_done:
                on_topic_done(report)

        # Final checkpoint; every page has already been flushed.
        self._state.flush()
        return CrawlReport(topics=reports)

    async def retry_failed(self) -> RetryReport:
        """Replay the failure queue once.  See :class:`RetryCoordinator`."""
        return await self._retry.retry_failed()
