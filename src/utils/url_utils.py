"""URL helpers for short-URL identity and retry dispatch.

A *short URL* is the site-relative article path (``/sport/some-slug``)
used as the identity key in both the ledger and the failure queue.
Listing-page URLs are absolute API URLs with a query string.
"""

from __future__ import annotations

from urllib.parse import urlencode

DEFAULT_SITE_PREFIX = "https://www.svt.se"
DEFAULT_API_BASE = "https://api.svt.se/nss-api/page"


def strip_site_prefix(url: str, site_prefix: str = DEFAULT_SITE_PREFIX) -> str:
    """Turn an absolute site URL into a short URL; other URLs pass through."""
    if url.startswith(site_prefix):
        return url[len(site_prefix):]
    return url


def listing_url(topic: str, page: int, page_size: int, api_base: str = DEFAULT_API_BASE) -> str:
    """Build the absolute URL of one listing page for *topic*.

    This string is what gets recorded in the failure queue, so it must be
    reproducible: parameter order is fixed (``q``, ``limit``, ``page``).
    """
    query = urlencode({"q": "auto", "limit": page_size, "page": page})
    return f"{api_base}/{topic}/?{query}"


def article_url(short_url: str, api_base: str = DEFAULT_API_BASE) -> str:
    """Build the absolute article API URL for *short_url*."""
    return f"{api_base}{short_url}?q=articles"


def is_listing_url(url: str, api_base: str = DEFAULT_API_BASE) -> bool:
    return url.startswith(api_base)


def topic_from_url(url: str, api_base: str = DEFAULT_API_BASE) -> str:
    """Recover the topic storage name from a failure-queue URL.

    The rule is positional and depends on how deep each section nests:

    - ``/nyheter/lokalt/<area>/...`` -> ``<area>`` (segment 3)
    - ``/nyheter/<section>/...``     -> ``<section>`` (segment 2)
    - ``/<section>/...``             -> ``<section>`` (segment 1)

    Listing URLs are reduced to their path below *api_base* first.

    Raises
    ------
    ValueError
        If the URL is too shallow to contain a topic segment.
    """
    path = url[len(api_base):] if is_listing_url(url, api_base) else url
    segments = path.split("/")

    if path.startswith("/nyheter/lokalt"):
        index = 3
    elif path.startswith("/nyheter"):
        index = 2
    else:
        index = 1

    if len(segments) <= index or not segments[index] or segments[index].startswith("?"):
        raise ValueError(f"Cannot derive topic from URL: {url!r}")
    return segments[index]
