"""Content API providers.

One implementation of IContentAPIProvider:
    SVTContentProvider - listing and article client for the SVT news API,
    backed by httpx.
"""

from src.providers.content.svt_api_provider import SVTContentProvider

__all__ = ["SVTContentProvider"]
