"""Crawler settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# Values are read from TWO sources (in priority order):
#
#   1. **Environment variables** - e.g., DATA_DIR=/srv/svt/data
#   2. **.env file** - key=value lines in the project root .env file
#
# Field ``data_dir`` maps to env var ``DATA_DIR`` (pydantic-settings
# uppercases and matches).  Defaults below mirror the public SVT API and
# the storage layout the corpus tooling expects.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SVT crawler settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Storage ===
    data_dir: str = "data"

    # === Upstream API ===
    api_base_url: str = "https://api.svt.se/nss-api/page"
    site_prefix: str = "https://www.svt.se"
    page_size: int = 50
    request_timeout: float = 6.0

    # === Corpus ===
    earliest_year: int = 2004
    xml_chunk_bytes: int = 5_000_000

    # === App Config ===
    app_env: str = "development"
    log_level: str = "WARNING"

    @field_validator("api_base_url", "site_prefix")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)

    @property
    def ledger_path(self) -> Path:
        """Ledger of downloaded articles (``crawled_pages.json``)."""
        return self.data_path / "crawled_pages.json"

    @property
    def failed_path(self) -> Path:
        """Failure queue of URLs awaiting retry (``failed_urls.json``)."""
        return self.data_path / "failed_urls.json"

    @property
    def processed_json_path(self) -> Path:
        """Map of converted article JSON files to their XML output file."""
        return self.data_path / "processed_json.json"
