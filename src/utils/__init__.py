"""Utility modules for the SVT crawler.

Available utility modules (all re-exported here for convenience):

- **errors** -- Exception hierarchy rooted at CrawlerError; fetch errors are
  transient and queued for retry, storage errors abort the run.
- **json_io** -- Atomic JSON/text writers (temp file + ``os.replace``) and a
  tolerant-of-absence JSON reader.
- **logging** -- structlog setup with console output in development and
  JSON in production, written to stderr.
- **url_utils** -- Short-URL stripping, API URL builders, and the
  positional topic-from-URL rule used when retrying failures.
"""

from src.utils.errors import (
    ContentFetchError,
    CrawlerError,
    StorageError,
)
from src.utils.json_io import read_json, write_data, write_json
from src.utils.logging import configure_logging
from src.utils.url_utils import (
    article_url,
    is_listing_url,
    listing_url,
    strip_site_prefix,
    topic_from_url,
)

__all__ = [
    "ContentFetchError",
    "CrawlerError",
    "StorageError",
    "article_url",
    "configure_logging",
    "is_listing_url",
    "listing_url",
    "read_json",
    "strip_site_prefix",
    "topic_from_url",
    "write_data",
    "write_json",
]
