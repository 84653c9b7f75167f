"""Sub-corpus config files for the annotation pipeline.

Each year directory (``svt-2021``, ``svt-nodate``) becomes its own
sub-corpus whose ``config.yaml`` inherits everything from the parent
corpus config and only sets the corpus ID and its display names.
"""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml

from src.models.article import NODATE
from src.utils.json_io import write_data

logger = structlog.get_logger(logger_name=__name__)


def corpus_config(corpus_id: str) -> dict:
    """Return the config mapping for sub-corpus *corpus_id* (e.g. ``svt-2021``)."""
    year = corpus_id.split("-")[-1]
    undated = year == NODATE
    return {
        "parent": "../config.yaml",
        "metadata": {
            "id": corpus_id,
            "name": {
                "eng": f"SVT news {'unknown date' if undated else year}",
                "swe": f"SVT nyheter {'okänt datum' if undated else year}",
            },
        },
    }


def write_corpus_config(corpus_id: str, path: Path) -> Path:
    """Write ``<path>/config.yaml`` for *corpus_id* and return its path."""
    config_file = Path(path) / "config.yaml"
    content = yaml.safe_dump(
        corpus_config(corpus_id),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    write_data(content, config_file)
    logger.info("corpus_config_written", path=str(config_file))
    return config_file
