"""Custom exception hierarchy for the SVT crawler.

All application exceptions inherit from :class:`CrawlerError`, which
carries an optional ``provider_name`` so handlers can tell which external
collaborator (e.g. "svt_api", "filesystem") caused the failure.

    CrawlerError  (base -- catch-all for any crawler error)
    +-- ContentFetchError   (network, timeout, HTTP status, malformed JSON)
    +-- StorageError        (article file, ledger or failure queue I/O)

Fetch errors are transient: the content provider converts them into
outcome values and the URL is queued for a later retry.  Storage errors
are the only ones allowed to abort a run, since continuing would let the
ledger and the files on disk drift apart.
"""


class CrawlerError(Exception):
    """Base exception for all crawler errors.

    ``__str__`` prefixes the provider name in brackets for log output,
    e.g. ``[svt_api] Timeout fetching /sport/foo``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Fetch errors (transient, recorded in the failure queue)
# ---------------------------------------------------------------------------

class ContentFetchError(CrawlerError):
    """Raised when a listing or article request fails or cannot be decoded."""

    def __init__(
        self,
        message: str = "Content fetch failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Fatal errors
# ---------------------------------------------------------------------------

class StorageError(CrawlerError):
    """Raised when writing or reading durable crawl state fails.

    The CLI aborts the run on this error rather than report success.
    """

    def __init__(
        self,
        message: str = "Storage operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
