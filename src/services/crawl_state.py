"""Ledger and failure queue shared by every crawl phase.

``CrawlState`` is the single owner of the two persistent structures:

- the **ledger** (``crawled_pages.json``): ``{short_url: [article_id, year, topic]}``
  for every article whose file is on disk;
- the **failure queue** (``failed_urls.json``): an ordered, duplicate-free
  list of listing-page and article URLs whose last attempt failed.

Both are loaded once, mutated in memory, and written back only through
:meth:`flush` (or its two halves), which the walker calls after every
listing page and the retry coordinator after every pass.  A missing file
loads as empty; an unreadable one raises :class:`StorageError`.

The state is not safe for concurrent use.  One process owns it for its
lifetime.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from src.models.article import ArticleRecord
from src.utils.errors import StorageError
from src.utils.json_io import read_json, write_json

logger = structlog.get_logger(logger_name=__name__)


class CrawlState:
    """In-memory ledger + failure queue with explicit persistence.

    Parameters
    ----------
    ledger_path:
        Path of ``crawled_pages.json``.
    failed_path:
        Path of ``failed_urls.json``.
    """

    def __init__(self, ledger_path: Path, failed_path: Path) -> None:
        self._ledger_path = Path(ledger_path)
        self._failed_path = Path(failed_path)
        self._ledger: dict[str, list[str]] = {}
        # dict keys keep insertion order and give O(1) membership.
        self._failed: dict[str, None] = {}
        self._ledger_dirty = False

    @classmethod
    def load(cls, ledger_path: Path, failed_path: Path) -> CrawlState:
        """Create a state object and read both files from disk."""
        state = cls(ledger_path, failed_path)
        state.reload()
        return state

    def reload(self) -> None:
        raw_ledger = read_json(self._ledger_path, default={})
        if not isinstance(raw_ledger, dict):
            raise StorageError(
                message=f"{self._ledger_path} does not contain a JSON object",
                provider_name="filesystem",
            )
        raw_failed = read_json(self._failed_path, default=[])
        if not isinstance(raw_failed, list):
            raise StorageError(
                message=f"{self._failed_path} does not contain a JSON list",
                provider_name="filesystem",
            )

        for url, value in raw_ledger.items():
            if not isinstance(value, list) or len(value) != 3:
                raise StorageError(
                    message=f"{self._ledger_path} has a malformed entry for {url!r}: {value!r}",
                    provider_name="filesystem",
                )

        self._ledger = {str(k): [str(v) for v in value] for k, value in raw_ledger.items()}
        self._failed = dict.fromkeys(str(url) for url in raw_failed)
        self._ledger_dirty = False
        removed = self.discard_saved_failures()

        logger.debug(
            "crawl_state_loaded",
            ledger=len(self._ledger),
            failed=len(self._failed),
            reconciled=removed,
        )

    # ------------------------------------------------------------------
    # Ledger
    # ------------------------------------------------------------------

    def is_saved(self, short_url: str) -> bool:
        return short_url in self._ledger

    def get_record(self, short_url: str) -> ArticleRecord | None:
        value = self._ledger.get(short_url)
        return ArticleRecord.from_ledger_value(value) if value else None

    def record_article(self, short_url: str, record: ArticleRecord) -> None:
        """Add *short_url* to the ledger and drop it from the failure queue.

        Call only after the article file has been written.
        """
        self._ledger[short_url] = record.to_ledger_value()
        self._failed.pop(short_url, None)
        self._ledger_dirty = True

    def records(self) -> dict[str, ArticleRecord]:
        return {url: ArticleRecord.from_ledger_value(v) for url, v in self._ledger.items()}

    @property
    def saved_count(self) -> int:
        return len(self._ledger)

    @property
    def ledger_dirty(self) -> bool:
        return self._ledger_dirty

    # ------------------------------------------------------------------
    # Failure queue
    # ------------------------------------------------------------------

    def add_failed(self, url: str) -> None:
        """Queue *url* for retry; a URL already queued keeps its position."""
        if url not in self._failed:
            self._failed[url] = None

    def remove_failed(self, url: str) -> None:
        self._failed.pop(url, None)

    def is_failed(self, url: str) -> bool:
        return url in self._failed

    @property
    def failed_urls(self) -> list[str]:
        """Snapshot of the failure queue in insertion order."""
        return list(self._failed)

    def discard_saved_failures(self) -> int:
        """Remove queued URLs that are already in the ledger.

        Returns the number of entries removed.
        """
        stale = [url for url in self._failed if url in self._ledger]
        for url in stale:
            del self._failed[url]
        return len(stale)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def flush_failed(self) -> None:
        """Overwrite ``failed_urls.json`` with the current queue."""
        self.discard_saved_failures()
        write_json(list(self._failed), self._failed_path)

    def flush_ledger(self) -> None:
        """Overwrite ``crawled_pages.json`` with the current ledger."""
        write_json(self._ledger, self._ledger_path)
        self._ledger_dirty = False

    def flush(self, force_ledger: bool = False) -> None:
        """Write the failure queue, and the ledger if it changed.

        Raises
        ------
        StorageError
            If either file cannot be written.
        """
        self.flush_failed()
        if self._ledger_dirty or force_ledger:
            self.flush_ledger()
        logger.debug(
            "crawl_state_flushed",
            ledger=len(self._ledger),
            failed=len(self._failed),
        )
