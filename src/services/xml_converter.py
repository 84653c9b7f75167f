"""Converts downloaded article JSON into the XML corpus format.

# ─── OUTPUT FORMAT ─────────────────────────────────────────────────────
#
#   <articles>
#   <text date="2021-05-01T08:00:00+02:00" id="123" section="Sport"
#         title="..." url="https://www.svt.se/sport/..." authors="|A|B|">
#     <p type="title">...</p>
#     <p type="lead">...</p>
#     <p>...</p>
#   </text>
#   ...
#   </articles>
#
# Output lives in ``<svt-year>/source/<topic>/<n>.xml`` (next to a
# ``<svt-year>/config.yaml``), one numbered file per ~5 MB of XML.
# ``processed_json.json`` remembers which XML file each article went
# into, so re-runs only convert new downloads.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from datetime import date
from pathlib import Path
from typing import Any

import structlog

from src.models.article import publication_year
from src.models.crawl import ConversionReport
from src.services.corpus_config import write_corpus_config
from src.utils.json_io import read_json, write_data, write_json
from src.utils.url_utils import DEFAULT_SITE_PREFIX

logger = structlog.get_logger(logger_name=__name__)

_SKIPPED_TYPES = frozenset({"svt-image", "svt-video", "svt-scribblefeed"})
_PARAGRAPH_TYPE = re.compile(r"p|h\d")
_CHUNK_BYTES = 5_000_000
_OPEN = "<articles>\n"
_CLOSE = "</articles>"


# ---------------------------------------------------------------------------
# Single article
# ---------------------------------------------------------------------------


def _append_text(target: ET.Element, content: str) -> None:
    if not content.strip():
        return
    if target.text:
        target.text = f"{target.text} {content}"
    else:
        target.text = content


def _parse_element(elem: dict[str, Any], parent: ET.Element) -> ET.Element:
    """Render one structured-body node into *parent*.

    Returns the element the node's text ended up in: a new ``<p>`` for
    paragraph and heading nodes, otherwise *parent*.  Headings become
    plain paragraphs, and paragraphs are never nested.
    """
    node_type = str(elem.get("type") or "")
    if node_type not in _SKIPPED_TYPES:
        _append_text(parent, str(elem.get("content") or ""))

    children = elem.get("children")
    if not children:
        return parent

    target = parent
    if _PARAGRAPH_TYPE.match(node_type) and parent.tag != "p":
        target = ET.SubElement(parent, "p")
    for child in children:
        if isinstance(child, dict):
            _parse_element(child, target)
    return target


def _set_attribute(xml_elem: ET.Element, article: dict[str, Any], json_name: str, xml_name: str) -> None:
    value = article.get(json_name)
    attr = "" if value is None else str(value).strip()
    if attr:
        xml_elem.set(xml_name, attr)


def _remove_empty(root: ET.Element) -> None:
    """Drop descendants with neither text nor children, innermost first."""
    while True:
        empty = [
            (parent, child)
            for parent in root.iter()
            for child in parent
            if len(child) == 0 and not (child.text and child.text.strip())
        ]
        if not empty:
            return
        for parent, child in empty:
            parent.remove(child)


def process_article(
    article: dict[str, Any],
    site_prefix: str = DEFAULT_SITE_PREFIX,
    earliest_year: int = 2004,
    current_year: int | None = None,
) -> str:
    """Transform one article object into a ``<text>`` element string."""
    text = ET.Element("text")

    stamp = article.get("published") or article.get("modified")
    if stamp and publication_year(article, earliest_year, current_year or date.today().year):
        text.set("date", str(stamp))

    _set_attribute(text, article, "id", "id")
    _set_attribute(text, article, "sectionDisplayName", "section")
    _set_attribute(text, article, "title", "title")
    _set_attribute(text, article, "subtitle", "subtitle")

    url = str(article.get("url") or "").strip()
    if url.startswith("www"):
        text.set("url", f"https://{url}")
    elif url and not url.startswith("http"):
        text.set("url", site_prefix + url)
    elif url:
        text.set("url", url)

    authors = "|".join(
        str(a.get("name") or "").strip() for a in article.get("authors") or [] if isinstance(a, dict)
    )
    if authors.strip("|"):
        text.set("authors", f"|{authors}|")
    tags = "|".join(
        str(t.get("name") or "") for t in article.get("tags") or [] if isinstance(t, dict)
    )
    if tags.strip("|"):
        text.set("tags", f"|{tags}|")

    title = ET.SubElement(text, "p")
    title.text = str(article.get("title") or "").strip()
    title.set("type", "title")

    for node in article.get("structuredLead") or []:
        paragraph = _parse_element(node, text)
        if paragraph is not text:
            paragraph.set("type", "lead")

    for node in article.get("structuredBody") or []:
        _parse_element(node, text)

    _remove_empty(text)
    return ET.tostring(text, encoding="unicode").replace("\xa0", " ")


# ---------------------------------------------------------------------------
# Whole corpus
# ---------------------------------------------------------------------------


class XMLConversionService:
    """Converts every stored article into chunked XML files.

    Parameters
    ----------
    data_dir:
        Root of the storage layout (contains ``svt-<year>/<topic>/``).
    output_dir:
        Where ``svt-<year>/`` corpus directories are created.
    processed_path:
        Path of ``processed_json.json``.
    chunk_bytes:
        An XML file is closed once its content exceeds this size.
    """

    def __init__(
        self,
        data_dir: Path,
        output_dir: Path,
        processed_path: Path,
        chunk_bytes: int = _CHUNK_BYTES,
        site_prefix: str = DEFAULT_SITE_PREFIX,
        earliest_year: int = 2004,
    ) -> None:
        self._data_dir = Path(data_dir)
        self._output_dir = Path(output_dir)
        self._processed_path = Path(processed_path)
        self._chunk_bytes = chunk_bytes
        self._site_prefix = site_prefix
        self._earliest_year = earliest_year

    @staticmethod
    def _next_file_number(contents_dir: Path) -> int:
        numbers = [int(p.stem) for p in contents_dir.glob("*.xml") if p.stem.isdigit()]
        return max(numbers) + 1 if numbers else 1

    def convert(self, override: bool = False) -> ConversionReport:
        """Convert all article JSON files below the data directory.

        Parameters
        ----------
        override:
            Reconvert everything and number output files from 1,
            overwriting existing XML files.

        Raises
        ------
        StorageError
            If an XML file, a corpus config or the processed ledger
            cannot be written, or the processed ledger cannot be read.
        """
        processed: dict[str, str] = read_json(self._processed_path, default={})
        converted = skipped = 0
        files_written: list[str] = []
        configs_written: list[str] = []
        configured: set[str] = set()

        for topic_path in sorted(p for p in self._data_dir.glob("svt-*/*") if p.is_dir()):
            year_dir = topic_path.parent.name
            if year_dir not in configured:
                config = write_corpus_config(year_dir, self._output_dir / year_dir)
                configs_written.append(str(config))
                configured.add(year_dir)

            contents_dir = self._output_dir / year_dir / "source" / topic_path.name
            file_number = 1 if override else self._next_file_number(contents_dir)
            contents = _OPEN

            for json_path in sorted(topic_path.rglob("*.json")):
                if not json_path.is_file():
                    continue
                key = str(json_path)
                if not override and key in processed:
                    logger.debug("xml_already_processed", path=key, xml=processed[key])
                    skipped += 1
                    continue

                article_json = read_json(json_path, default=[])
                if not article_json or not isinstance(article_json[0], dict):
                    logger.warning("xml_article_without_content", path=key)
                    continue

                logger.debug("xml_processing", path=key)
                contents += process_article(
                    article_json[0],
                    site_prefix=self._site_prefix,
                    earliest_year=self._earliest_year,
                ) + "\n"
                processed[key] = str(contents_dir / f"{file_number}.xml")
                converted += 1

                if len(contents.encode("utf-8")) > self._chunk_bytes:
                    files_written.append(self._write_contents(contents, contents_dir, file_number))
                    contents = _OPEN
                    file_number += 1

            if len(contents) > len(_OPEN):
                files_written.append(self._write_contents(contents, contents_dir, file_number))

            write_json(processed, self._processed_path)

        return ConversionReport(
            converted=converted,
            skipped=skipped,
            files_written=files_written,
            configs_written=configs_written,
        )

    @staticmethod
    def _write_contents(contents: str, contents_dir: Path, file_number: int) -> str:
        filepath = contents_dir / f"{file_number}.xml"
        write_data(contents + _CLOSE, filepath)
        logger.info("xml_file_written", path=str(filepath))
        return str(filepath)
