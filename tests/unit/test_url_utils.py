"""Unit tests for short-URL handling and topic recovery."""

from __future__ import annotations

import pytest

from src.config.topics import display_name, is_local_area, topic_storage_name
from src.utils.url_utils import (
    article_url,
    is_listing_url,
    listing_url,
    strip_site_prefix,
    topic_from_url,
)


class TestStripSitePrefix:
    def test_absolute_url_becomes_short_url(self) -> None:
        assert strip_site_prefix("https://www.svt.se/sport/fotboll/mal") == "/sport/fotboll/mal"

    def test_short_url_passes_through(self) -> None:
        assert strip_site_prefix("/nyheter/inrikes/x") == "/nyheter/inrikes/x"

    def test_foreign_host_passes_through(self) -> None:
        assert strip_site_prefix("https://example.com/a") == "https://example.com/a"


class TestApiUrls:
    def test_listing_url_is_reproducible(self) -> None:
        assert listing_url("sport", 3, 50) == (
            "https://api.svt.se/nss-api/page/sport/?q=auto&limit=50&page=3"
        )

    def test_listing_url_for_local_area(self) -> None:
        url = listing_url("nyheter/lokalt/ost", 1, 50)
        assert url == "https://api.svt.se/nss-api/page/nyheter/lokalt/ost/?q=auto&limit=50&page=1"
        assert is_listing_url(url)

    def test_article_url(self) -> None:
        assert article_url("/sport/a") == "https://api.svt.se/nss-api/page/sport/a?q=articles"

    def test_short_url_is_not_listing_url(self) -> None:
        assert not is_listing_url("/sport/a")


class TestTopicFromUrl:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("/sport/fotboll/some-article", "sport"),
            ("/kultur/some-article", "kultur"),
            ("/nyheter/inrikes/some-article", "inrikes"),
            ("/nyheter/lokalt/stockholm/some-article", "stockholm"),
            ("https://api.svt.se/nss-api/page/sport/?q=auto&limit=50&page=2", "sport"),
            ("https://api.svt.se/nss-api/page/nyheter/utrikes/?q=auto&limit=50&page=7", "utrikes"),
            (
                "https://api.svt.se/nss-api/page/nyheter/lokalt/ost/?q=auto&limit=50&page=3",
                "ost",
            ),
        ],
    )
    def test_positional_rule(self, url: str, expected: str) -> None:
        assert topic_from_url(url) == expected

    @pytest.mark.parametrize(
        "url",
        [
            "/",
            "nothing",
            "/nyheter",
            "/nyheter/lokalt/",
            "https://api.svt.se/nss-api/page/nyheter/?q=auto&limit=50&page=1",
        ],
    )
    def test_too_shallow_raises(self, url: str) -> None:
        with pytest.raises(ValueError, match="Cannot derive topic"):
            topic_from_url(url)


class TestTopicCatalogue:
    def test_storage_name_is_last_segment(self) -> None:
        assert topic_storage_name("nyheter/lokalt/stockholm") == "stockholm"
        assert topic_storage_name("nyheter/inrikes") == "inrikes"
        assert topic_storage_name("sport") == "sport"

    def test_local_areas(self) -> None:
        assert is_local_area("stockholm")
        assert not is_local_area("sport")

    def test_display_names(self) -> None:
        assert display_name("orebro") == "Örebro"
        assert display_name("sport") == "sport"
