"""Public interface definitions for external service providers.

The crawler reaches the upstream content API only through the abstract
base class defined here.  Concrete adapters live in ``src/providers/``
and are injected into the services, so tests can hand the crawl engine
a mock provider instead of a live HTTP client.

PROVIDER MAP:
    Interface              →  Concrete implementation (in src/providers/)
    ─────────────────────────────────────────────────────────────────────
    IContentAPIProvider    →  SVTContentProvider
"""

from src.interfaces.content_api_provider import IContentAPIProvider

__all__ = ["IContentAPIProvider"]
