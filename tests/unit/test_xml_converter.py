"""Unit tests for the JSON-to-XML corpus conversion."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

import pytest
import yaml

from src.services.corpus_config import corpus_config, write_corpus_config
from src.services.xml_converter import XMLConversionService, process_article
from src.utils.json_io import write_json
from tests.conftest import make_article


def _rich_article() -> dict[str, Any]:
    return {
        "id": "123",
        "published": "2021-05-01T08:00:00+02:00",
        "sectionDisplayName": "Sport",
        "title": "Rubrik",
        "subtitle": "",
        "url": "/sport/rubrik",
        "authors": [{"name": "Anna A"}, {"name": "Bo B"}],
        "tags": [{"name": "fotboll"}],
        "structuredLead": [
            {"type": "p", "children": [{"type": "text", "content": "Ingress\xa0text"}]}
        ],
        "structuredBody": [
            {"type": "h2", "children": [{"type": "text", "content": "Mellanrubrik"}]},
            {
                "type": "p",
                "children": [
                    {"type": "text", "content": "Första"},
                    {"type": "a", "children": [{"type": "text", "content": "länk"}]},
                ],
            },
            {"type": "svt-image", "content": "bildtext", "children": []},
            {"type": "p", "children": []},
        ],
    }


# ======================================================================
# Single article
# ======================================================================


class TestProcessArticle:
    def test_attributes(self) -> None:
        text = ET.fromstring(process_article(_rich_article()))

        assert text.tag == "text"
        assert text.get("date") == "2021-05-01T08:00:00+02:00"
        assert text.get("id") == "123"
        assert text.get("section") == "Sport"
        assert text.get("title") == "Rubrik"
        assert text.get("subtitle") is None
        assert text.get("url") == "https://www.svt.se/sport/rubrik"
        assert text.get("authors") == "|Anna A|Bo B|"
        assert text.get("tags") == "|fotboll|"

    def test_paragraphs(self) -> None:
        text = ET.fromstring(process_article(_rich_article()))
        paragraphs = [(p.get("type"), p.text) for p in text]

        assert paragraphs == [
            ("title", "Rubrik"),
            ("lead", "Ingress text"),
            (None, "Mellanrubrik"),
            (None, "Första länk"),
        ]

    def test_media_text_is_skipped(self) -> None:
        assert "bildtext" not in process_article(_rich_article())

    def test_no_nbsp_in_output(self) -> None:
        assert "\xa0" not in process_article(_rich_article())

    def test_undated_article_has_no_date(self) -> None:
        text = ET.fromstring(process_article(make_article("1", "/a", published="1990-01-01")))
        assert text.get("date") is None

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("www.svt.se/nyheter/a", "https://www.svt.se/nyheter/a"),
            ("https://www.svt.se/nyheter/a", "https://www.svt.se/nyheter/a"),
            ("/nyheter/a", "https://www.svt.se/nyheter/a"),
        ],
    )
    def test_url_forms(self, url: str, expected: str) -> None:
        text = ET.fromstring(process_article(make_article("1", url)))
        assert text.get("url") == expected

    @pytest.mark.parametrize("node_type", ["p", "h2", "h10", "preamble"])
    def test_paragraph_types_match_by_prefix(self, node_type: str) -> None:
        article = make_article(
            "1",
            "/a",
            structuredBody=[
                {"type": "text", "content": "fri"},
                {"type": node_type, "children": [{"type": "text", "content": "stycke"}]},
            ],
        )
        text = ET.fromstring(process_article(article))
        assert text.text == "fri"
        assert [p.text for p in text] == ["Artikel 1", "stycke"]

    def test_other_types_do_not_open_a_paragraph(self) -> None:
        article = make_article(
            "1",
            "/a",
            structuredBody=[
                {"type": "list", "children": [{"type": "text", "content": "punkt"}]},
            ],
        )
        text = ET.fromstring(process_article(article))
        assert [p.text for p in text] == ["Artikel 1"]
        assert text.text == "punkt"

    def test_nested_paragraphs_are_flattened(self) -> None:
        article = make_article(
            "1",
            "/a",
            structuredBody=[
                {
                    "type": "p",
                    "children": [
                        {"type": "p", "children": [{"type": "text", "content": "inre"}]},
                    ],
                }
            ],
        )
        text = ET.fromstring(process_article(article))
        assert [p.text for p in text] == ["Artikel 1", "inre"]
        assert all(len(p) == 0 for p in text)


# ======================================================================
# Corpus configs
# ======================================================================


class TestCorpusConfig:
    def test_dated(self) -> None:
        config = corpus_config("svt-2021")
        assert config["parent"] == "../config.yaml"
        assert config["metadata"]["id"] == "svt-2021"
        assert config["metadata"]["name"] == {"eng": "SVT news 2021", "swe": "SVT nyheter 2021"}

    def test_undated(self) -> None:
        names = corpus_config("svt-nodate")["metadata"]["name"]
        assert names == {"eng": "SVT news unknown date", "swe": "SVT nyheter okänt datum"}

    def test_write(self, tmp_path: Path) -> None:
        path = write_corpus_config("svt-nodate", tmp_path / "svt-nodate")
        assert path == tmp_path / "svt-nodate" / "config.yaml"
        assert yaml.safe_load(path.read_text(encoding="utf-8")) == corpus_config("svt-nodate")


# ======================================================================
# Whole corpus
# ======================================================================


@pytest.fixture
def stored_articles(data_dir: Path) -> Path:
    for article_id in ("1", "2"):
        write_json(
            [make_article(article_id, f"/sport/{article_id}")],
            data_dir / "svt-2021" / "sport" / f"{article_id}.json",
        )
    write_json(
        [make_article("9", "/nyheter/lokalt/ost/9", published="")],
        data_dir / "svt-nodate" / "ost" / "9.json",
    )
    return data_dir


def _service(data_dir: Path, out_dir: Path, **kwargs: Any) -> XMLConversionService:
    return XMLConversionService(
        data_dir=data_dir,
        output_dir=out_dir,
        processed_path=data_dir / "processed_json.json",
        **kwargs,
    )


class TestXMLConversionService:
    def test_convert(self, stored_articles: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "out"

        report = _service(stored_articles, out_dir).convert()

        assert report.converted == 3
        assert (out_dir / "svt-2021" / "config.yaml").is_file()
        assert (out_dir / "svt-nodate" / "config.yaml").is_file()
        root = ET.parse(out_dir / "svt-2021" / "source" / "sport" / "1.xml").getroot()
        assert root.tag == "articles"
        assert [t.get("id") for t in root] == ["1", "2"]
        processed = json.loads((stored_articles / "processed_json.json").read_text())
        assert processed[str(stored_articles / "svt-nodate" / "ost" / "9.json")] == str(
            out_dir / "svt-nodate" / "source" / "ost" / "1.xml"
        )

    def test_rerun_only_converts_new_files(self, stored_articles: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "out"
        _service(stored_articles, out_dir).convert()
        write_json(
            [make_article("3", "/sport/3")],
            stored_articles / "svt-2021" / "sport" / "3.json",
        )

        report = _service(stored_articles, out_dir).convert()

        assert report.converted == 1
        assert report.skipped == 3
        root = ET.parse(out_dir / "svt-2021" / "source" / "sport" / "2.xml").getroot()
        assert [t.get("id") for t in root] == ["3"]

    def test_override_reconverts_everything(self, stored_articles: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "out"
        _service(stored_articles, out_dir).convert()

        report = _service(stored_articles, out_dir).convert(override=True)

        assert report.converted == 3
        assert report.skipped == 0
        assert not (out_dir / "svt-2021" / "source" / "sport" / "2.xml").exists()

    def test_chunking(self, stored_articles: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "out"

        report = _service(stored_articles, out_dir, chunk_bytes=1).convert()

        sport = out_dir / "svt-2021" / "source" / "sport"
        assert sorted(p.name for p in sport.iterdir()) == ["1.xml", "2.xml"]
        assert len(report.files_written) == 3
