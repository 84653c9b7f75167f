"""Run reports returned by the crawl, retry and summary services.

Reports are plain values for the CLI to print; services never print.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TopicReport(BaseModel):
    """What one pagination walk over a topic did."""

    model_config = ConfigDict(frozen=True)

    topic: str = Field(description="Topic path, e.g. 'nyheter/lokalt/stockholm'.")
    storage_name: str = Field(description="Topic storage name, e.g. 'stockholm'.")
    total_items: int = 0
    pages: int = 0
    saved: int = Field(default=0, description="Articles downloaded during this walk.")
    failed: int = Field(default=0, description="Articles queued for retry.")
    failed_pages: int = Field(default=0, description="Listing pages queued for retry.")
    stopped_early: bool = Field(
        default=False, description="True when an already-saved article ended the walk."
    )


class CrawlReport(BaseModel):
    """Aggregate of every topic walked in one crawl run."""

    model_config = ConfigDict(frozen=True)

    topics: list[TopicReport] = Field(default_factory=list)

    @property
    def saved(self) -> int:
        return sum(t.saved for t in self.topics)

    @property
    def failed(self) -> int:
        return sum(t.failed for t in self.topics)

    @property
    def failed_pages(self) -> int:
        return sum(t.failed_pages for t in self.topics)


class RetryReport(BaseModel):
    """Outcome of one pass over the failure queue."""

    model_config = ConfigDict(frozen=True)

    attempted: int = 0
    succeeded: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)


class CorpusSummary(BaseModel):
    """Article counts computed from the ledger."""

    model_config = ConfigDict(frozen=True)

    national: list[tuple[str, int]] = Field(
        default_factory=list, description="(display name, count), most articles first."
    )
    local: list[tuple[str, int]] = Field(
        default_factory=list, description="(area display name, count), most articles first."
    )
    per_year: list[tuple[str, int]] = Field(
        default_factory=list, description="(year bucket, count), sorted by year."
    )

    @property
    def national_total(self) -> int:
        return sum(n for _, n in self.national)

    @property
    def local_total(self) -> int:
        return sum(n for _, n in self.local)

    @property
    def total(self) -> int:
        return self.national_total + self.local_total

    @property
    def is_empty(self) -> bool:
        return self.total == 0


class ConversionReport(BaseModel):
    """Outcome of one JSON-to-XML conversion run."""

    model_config = ConfigDict(frozen=True)

    converted: int = Field(default=0, description="Article files converted.")
    skipped: int = Field(default=0, description="Files skipped as already processed.")
    files_written: list[str] = Field(default_factory=list, description="XML files written.")
    configs_written: list[str] = Field(default_factory=list, description="Corpus configs written.")
