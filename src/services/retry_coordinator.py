"""Replays the failure queue outside of pagination.

Every queued URL is retried once, in queue order:

- a **listing URL** is re-fetched as a whole page and each article on it
  goes through the fetcher;
- an **article URL** (a short URL) goes straight to the fetcher.

The topic an article is stored under is recovered from the queued URL
with :func:`~src.utils.url_utils.topic_from_url`.

Bookkeeping is keyed by the queued URL.  A listing URL succeeds only if
its page was fetched and *every* article on it was satisfied; otherwise
the listing URL alone stays queued.  Articles that fail inside it are
not queued separately; the next pass retries them through the listing.
The queue and the ledger are written once, after the whole pass.
"""

from __future__ import annotations

import structlog

from src.interfaces.content_api_provider import IContentAPIProvider
from src.models.crawl import RetryReport
from src.services.article_fetcher import ArticleFetcher
from src.services.crawl_state import CrawlState
from src.utils.url_utils import (
    DEFAULT_API_BASE,
    DEFAULT_SITE_PREFIX,
    is_listing_url,
    strip_site_prefix,
    topic_from_url,
)

logger = structlog.get_logger(logger_name=__name__)


class RetryCoordinator:
    """One retry pass over the failure queue.

    Parameters
    ----------
    provider:
        Content API client (used for listing URLs).
    fetcher:
        Article fetcher sharing *state*.
    state:
        Ledger + failure queue, flushed once at the end of the pass.
    api_base:
        API base URL; queued URLs starting with it are listing pages.
    site_prefix:
        Host prefix stripped from listing entry URLs.
    """

    def __init__(
        self,
        provider: IContentAPIProvider,
        fetcher: ArticleFetcher,
        state: CrawlState,
        api_base: str = DEFAULT_API_BASE,
        site_prefix: str = DEFAULT_SITE_PREFIX,
    ) -> None:
        self._provider = provider
        self._fetcher = fetcher
        self._state = state
        self._api_base = api_base.rstrip("/")
        self._site_prefix = site_prefix

    async def retry_failed(self) -> RetryReport:
        """Retry every queued URL and reconcile the queue.

        Returns an empty report (``attempted == 0``) when the queue is
        empty; nothing is written in that case.

        Raises
        ------
        StorageError
            If an article file or the crawl state cannot be written.
        """
        queued = self._state.failed_urls
        if not queued:
            return RetryReport()

        # dicts as ordered sets, so the rewritten queue order is stable
        succeeded: dict[str, None] = {}
        newly_failed: dict[str, None] = {}

        for url in queued:
            try:
                topic_name = topic_from_url(url, self._api_base)
            except ValueError:
                logger.info("retry_topic_unresolved", url=url)
                newly_failed[url] = None
                continue

            if is_listing_url(url, self._api_base):
                ok = await self._retry_listing(url, topic_name)
            else:
                outcome = await self._fetcher.fetch_article(url, topic_name)
                ok = outcome.ok

            if ok:
                succeeded[url] = None
            else:
                newly_failed[url] = None

        for url in succeeded:
            self._state.remove_failed(url)
        for url in newly_failed:
            self._state.add_failed(url)
        self._state.flush(force_ledger=True)

        still_failing = [url for url in newly_failed if self._state.is_failed(url)]
        logger.info(
            "retry_pass_complete",
            attempted=len(queued),
            succeeded=len(succeeded),
            failed=len(still_failing),
        )
        return RetryReport(
            attempted=len(queued),
            succeeded=list(succeeded),
            failed=still_failing,
        )

    async def _retry_listing(self, url: str, topic_name: str) -> bool:
        """Re-fetch listing *url*; True only if every article on it is stored."""
        result = await self._provider.fetch_listing_url(url)
        if not result.ok or result.page is None:
            return False

        all_ok = True
        for entry in result.page.content:
            short_url = strip_site_prefix(entry.url or "", self._site_prefix)
            if not short_url:
                continue
            outcome = await self._fetcher.fetch_article(short_url, topic_name)
            if not outcome.ok:
                all_ok = False
        return all_ok
