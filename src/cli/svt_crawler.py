"""CLI for crawling svt.se news articles and converting them to XML.

Usage::

    # Incremental crawl of every topic (stops at already saved articles)
    python -m src.cli crawl

    # Re-download everything / print fetch errors while crawling
    python -m src.cli crawl --force --debug

    # Retry URLs that failed during earlier runs
    python -m src.cli crawl --retry

    # Article counts per topic and year
    python -m src.cli summary

    # Convert downloaded JSON to XML corpus files
    python -m src.cli xml [--override]

    # Rebuild a ledger from the files on disk
    python -m src.cli build-index [--out NAME]

Progress goes to stdout; structured logs go to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

import structlog

from src.config.settings import Settings
from src.models.crawl import TopicReport
from src.utils.errors import StorageError
from src.utils.logging import configure_logging

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_INDEX_NAME = "crawled_pages_from_files.json"


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


async def _handle_crawl(args: argparse.Namespace, settings: Settings) -> int:
    """Crawl every topic, or replay the failure queue with --retry."""
    from src.providers.content.svt_api_provider import SVTContentProvider
    from src.services.crawl_service import CrawlService

    async with SVTContentProvider(
        api_base=settings.api_base_url,
        page_size=settings.page_size,
        timeout=settings.request_timeout,
    ) as provider:
        service = CrawlService.from_settings(settings, provider)

        if args.retry:
            print("\nTrying to crawl pages that failed last time ...")
            if args.force:
                print("Argument '--force' is ignored when recrawling failed pages.")

            report = await service.retry_failed()
            if report.attempted == 0:
                print("Can't find any URLs that failed previously")
                return 0
            print(
                f"Retried {report.attempted} URL(s): "
                f"{len(report.succeeded)} succeeded, {len(report.failed)} still failing"
            )
            return 0

        print("\nStarting to crawl svt.se ...")

        def on_topic_start(topic: str, total: int, pages: int) -> None:
            print(f"\nCrawling {topic}: {total} items, {pages} pages")

        def on_topic_done(report: TopicReport) -> None:
            if report.total_items == 0 and report.failed_pages:
                print(f"\nCrawling {report.topic}: first page could not be fetched")
                return
            line = f"  {report.saved} new articles, {report.failed} failed"
            if report.failed_pages:
                line += f", {report.failed_pages} listing pages failed"
            if report.stopped_early:
                line += " (caught up with earlier crawl)"
            print(line)

        crawl_report = await service.crawl(
            force=args.force,
            on_topic_start=on_topic_start,
            on_topic_done=on_topic_done,
        )

    print(
        f"\nDone: {crawl_report.saved} new articles, "
        f"{crawl_report.failed + crawl_report.failed_pages} URL(s) queued for retry"
    )
    return 0


def _handle_summary(settings: Settings) -> int:
    """Print the number of saved articles per topic and year."""
    from src.services.crawl_state import CrawlState
    from src.services.summary_service import SummaryService

    print("\nCalculating summary of collected articles ...")
    state = CrawlState.load(settings.ledger_path, settings.failed_path)
    service = SummaryService()
    print(service.render(service.summarize(state.records())))
    return 0


def _handle_xml(args: argparse.Namespace, settings: Settings) -> int:
    """Convert article JSON files to XML."""
    from src.services.xml_converter import XMLConversionService

    print("\nPreparing to convert articles to XML ...")
    service = XMLConversionService(
        data_dir=settings.data_path,
        output_dir=Path("."),
        processed_path=settings.processed_json_path,
        chunk_bytes=settings.xml_chunk_bytes,
        site_prefix=settings.site_prefix,
        earliest_year=settings.earliest_year,
    )
    report = service.convert(override=args.override)

    for path in report.configs_written:
        print(f"{path} written")
    for path in report.files_written:
        print(f"writing file {path}")
    print(f"\nConverted {report.converted} articles, skipped {report.skipped} already processed")
    return 0


def _handle_build_index(args: argparse.Namespace, settings: Settings) -> int:
    """Write an index of the downloaded files."""
    from src.services.index_builder import IndexBuilder

    print("\nBuilding an index of crawled files based on the downloaded JSON files ...")
    out_path = settings.data_path / args.out
    count = IndexBuilder(settings.data_path).build(out_path)
    print(f"Done writing index of crawled data ({count} articles) to '{out_path}'\n")
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser(data_dir: str = "data") -> argparse.ArgumentParser:
    """Build the argparse parser for the crawler CLI."""
    parser = argparse.ArgumentParser(
        prog="svt-crawler",
        description=(
            "Programme for crawling svt.se for news articles and converting the data to XML."
        ),
    )
    subparsers = parser.add_subparsers(dest="command", help="Crawler commands")

    # -- crawl --
    crawl_parser = subparsers.add_parser(
        "crawl", help="Crawl svt.se and download news articles"
    )
    crawl_parser.add_argument(
        "-r", "--retry",
        action="store_true",
        help="try to crawl pages that have failed previously",
    )
    crawl_parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="crawl all pages even if they have been crawled before",
    )
    crawl_parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="print some debug info while crawling",
    )

    # -- summary --
    subparsers.add_parser("summary", help="Print summary of collected data")

    # -- xml --
    xml_parser = subparsers.add_parser("xml", help="Convert articles from JSON to XML")
    xml_parser.add_argument(
        "-o", "--override",
        action="store_true",
        help="override existing xml files",
    )

    # -- build-index --
    index_parser = subparsers.add_parser(
        "build-index",
        help="Compile an index of the crawled data based on the downloaded files",
    )
    index_parser.add_argument(
        "--out",
        default=_DEFAULT_INDEX_NAME,
        metavar="OUT",
        help=f"name of the output file (will be stored in '{data_dir}')",
    )

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def run(argv: list[str] | None = None, settings: Settings | None = None) -> int:
    """Parse *argv*, dispatch to a handler and return the exit code."""
    if settings is None:
        settings = Settings()
    parser = _build_parser(settings.data_dir)
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    # Retries always report fetch errors, as if --debug were given.
    debug = args.command == "crawl" and (args.debug or args.retry)
    configure_logging(
        log_level="DEBUG" if debug else settings.log_level,
        json_output=settings.app_env == "production",
    )

    try:
        if args.command == "crawl":
            return asyncio.run(_handle_crawl(args, settings))
        if args.command == "summary":
            return _handle_summary(settings)
        if args.command == "xml":
            return _handle_xml(args, settings)
        if args.command == "build-index":
            return _handle_build_index(args, settings)
    except StorageError as exc:
        logger.error("storage_error", command=args.command, error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


def main() -> None:
    """CLI entry point for the crawler."""
    sys.exit(run())


if __name__ == "__main__":
    main()
