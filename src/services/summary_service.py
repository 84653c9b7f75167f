"""Article counts per topic, per regional newsroom and per year.

Reads the ledger only; no files under the storage layout are touched.
"""

from __future__ import annotations

from collections import defaultdict

from src.config.topics import display_name, is_local_area
from src.models.article import ArticleRecord
from src.models.crawl import CorpusSummary


class SummaryService:
    """Builds a :class:`CorpusSummary` from ledger records."""

    def summarize(self, records: dict[str, ArticleRecord]) -> CorpusSummary:
        national: dict[str, int] = defaultdict(int)
        local: dict[str, int] = defaultdict(int)
        per_year: dict[str, int] = defaultdict(int)

        for record in records.values():
            bucket = local if is_local_area(record.topic) else national
            bucket[display_name(record.topic)] += 1
            per_year[record.year] += 1

        return CorpusSummary(
            national=sorted(national.items(), key=lambda x: x[1], reverse=True),
            local=sorted(local.items(), key=lambda x: x[1], reverse=True),
            per_year=sorted(per_year.items()),
        )

    @staticmethod
    def render(summary: CorpusSummary) -> str:
        """Format *summary* as tab-separated text blocks."""
        if summary.is_empty:
            return "No crawled data available!"

        lines = ["SVT nyheter"]
        lines += [f"{topic}\t{amount}" for topic, amount in summary.national]
        lines += [f"SVT nyheter totalt\t{summary.national_total}", ""]

        lines.append("SVT lokalnyheter")
        lines += [f"{area}\t{amount}" for area, amount in summary.local]
        lines += [f"Lokalnyheter totalt\t{summary.local_total}", ""]

        lines.append("SVT artiklar per år")
        lines += [f"{year}\t{n}" for year, n in summary.per_year]
        lines.append("")

        lines.append(f"Alla nyhetsartiklar\t{summary.total}")
        return "\n".join(lines)
