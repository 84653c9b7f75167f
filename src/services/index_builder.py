"""Rebuilds a ledger by scanning the storage layout.

Useful when ``crawled_pages.json`` is lost or suspected to be out of
step with the files: every ``svt-<year>/<topic>/<article_id>.json`` is
read and indexed under the URL recorded inside the article.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from src.models.article import ArticleRecord
from src.utils.errors import StorageError
from src.utils.json_io import read_json, write_json

logger = structlog.get_logger(logger_name=__name__)


class IndexBuilder:
    """Scans ``<data_dir>/svt-*/*/*.json`` into a ledger-shaped index."""

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)

    def scan(self) -> dict[str, ArticleRecord]:
        """Return ``{url: ArticleRecord}`` for every readable article file."""
        index: dict[str, ArticleRecord] = {}
        for json_path in sorted(self._data_dir.glob("svt-*/*/*.json")):
            year = json_path.parent.parent.name[len("svt-"):]
            topic = json_path.parent.name
            try:
                content = read_json(json_path, default=[])
            except StorageError:
                logger.warning("index_file_unreadable", path=str(json_path))
                continue
            if not content or not isinstance(content[0], dict) or not content[0].get("url"):
                logger.warning("index_file_without_url", path=str(json_path))
                continue

            index[str(content[0]["url"])] = ArticleRecord(
                article_id=json_path.stem,
                year=year,
                topic=topic,
            )
        return index

    def build(self, out_path: Path) -> int:
        """Write the scanned index to *out_path*; return the entry count."""
        index = self.scan()
        write_json({url: r.to_ledger_value() for url, r in index.items()}, Path(out_path))
        logger.info("index_written", path=str(out_path), entries=len(index))
        return len(index)
