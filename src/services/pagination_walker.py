"""Page-by-page walk over one topic listing.

Listings are sorted newest first, so the walk is incremental: the first
entry already in the ledger ends the walk for the whole topic (unless
``force`` is set).  State is flushed after every page, which bounds the
work lost on interruption to the page in flight.

The page count is ``totalAvailableItems // page_size``.  The trailing
partial page is never requested, and a topic with fewer items than one
page is not walked at all.  Downstream corpora were built with this
behaviour, so it is kept as is.
"""

from __future__ import annotations

import structlog

from src.config.topics import topic_storage_name
from src.interfaces.content_api_provider import IContentAPIProvider
from src.models.article import ListingResult
from src.models.crawl import TopicReport
from src.services.article_fetcher import ArticleFetcher
from src.services.crawl_state import CrawlState
from src.utils.url_utils import DEFAULT_SITE_PREFIX, strip_site_prefix

logger = structlog.get_logger(logger_name=__name__)

_PAGE_SIZE = 50


def page_count(total_available_items: int, page_size: int = _PAGE_SIZE) -> int:
    """Number of listing pages the walker requests (floor division)."""
    return total_available_items // page_size


class PaginationWalker:
    """Drives the listing client for one topic and feeds the fetcher.

    Parameters
    ----------
    provider:
        Content API client (listing pages).
    fetcher:
        Article fetcher sharing *state*.
    state:
        Ledger + failure queue, flushed after each page.
    page_size:
        Listing page size; must match the provider's ``limit``.
    site_prefix:
        Host prefix stripped from listing entry URLs.
    """

    def __init__(
        self,
        provider: IContentAPIProvider,
        fetcher: ArticleFetcher,
        state: CrawlState,
        page_size: int = _PAGE_SIZE,
        site_prefix: str = DEFAULT_SITE_PREFIX,
    ) -> None:
        self._provider = provider
        self._fetcher = fetcher
        self._state = state
        self._page_size = page_size
        self._site_prefix = site_prefix

    async def fetch_first_page(self, topic: str) -> ListingResult:
        """Fetch page 1 of *topic*, updating the failure queue for its URL."""
        result = await self._provider.fetch_listing_page(topic, 1)
        if result.ok:
            self._state.remove_failed(result.url)
        else:
            self._state.add_failed(result.url)
            self._state.flush()
        return result

    async def walk(
        self,
        topic: str,
        force: bool = False,
        first_page: ListingResult | None = None,
    ) -> TopicReport:
        """Walk every listing page of *topic* until done or caught up.

        Parameters
        ----------
        topic:
            Topic path, e.g. ``"sport"`` or ``"nyheter/lokalt/ost"``.
        force:
            Re-download already saved articles and never stop early.
        first_page:
            Page 1 if the caller already fetched it (it is reused, not
            requested again).

        Raises
        ------
        StorageError
            If an article file or the crawl state cannot be written.
        """
        storage_name = topic_storage_name(topic)
        if first_page is None:
            first_page = await self.fetch_first_page(topic)
        if not first_page.ok or first_page.page is None:
            return TopicReport(topic=topic, storage_name=storage_name, failed_pages=1)

        total_items = first_page.page.total_available_items
        pages = page_count(total_items, self._page_size)

        saved = failed = failed_pages = 0
        done = False

        if pages == 0:
            # Nothing to walk, but page 1 may have just left the failure queue.
            self._state.flush()

        for page_number in range(1, pages + 1):
            if page_number == 1:
                result = first_page
            else:
                result = await self._provider.fetch_listing_page(topic, page_number)

            if not result.ok or result.page is None:
                logger.info("listing_page_failed", topic=topic, page=page_number, url=result.url)
                self._state.add_failed(result.url)
                self._state.flush()
                failed_pages += 1
                continue
            self._state.remove_failed(result.url)

            for entry in result.page.content:
                short_url = strip_site_prefix(entry.url or "", self._site_prefix)
                if not short_url:
                    continue

                if not force and self._state.is_saved(short_url):
                    logger.debug(
                        "article_already_saved_stopping",
                        topic=topic,
                        page=page_number,
                        published=entry.published,
                    )
                    done = True
                    break

                outcome = await self._fetcher.fetch_article(short_url, storage_name, force)
                if outcome.ok:
                    self._state.remove_failed(short_url)
                    saved += 1
                else:
                    self._state.add_failed(short_url)
                    failed += 1

            self._state.flush()

            if done:
                break

        return TopicReport(
            topic=topic,
            storage_name=storage_name,
            total_items=total_items,
            pages=pages,
            saved=saved,
            failed=failed,
            failed_pages=failed_pages,
            stopped_early=done,
        )
