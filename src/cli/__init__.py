# =============================================================================
# src/cli/__init__.py - CLI Module Overview
# =============================================================================
#
# Command-line surface of the SVT crawler. One tool, four subcommands:
#
#   1. CRAWL (crawl [--retry] [--force] [--debug])
#      Walks every topic listing and downloads new articles, or replays
#      the failure queue with --retry.
#
#   2. SUMMARY (summary)
#      Article counts per topic, regional newsroom and year, read from
#      the ledger.
#
#   3. XML (xml [--override])
#      Converts downloaded article JSON into chunked XML corpus files
#      with a config.yaml per year.
#
#   4. BUILD INDEX (build-index [--out NAME])
#      Rebuilds a ledger-shaped index by scanning the storage layout.
#
# Architecture Notes:
#   - argparse for argument parsing, as in the rest of the tooling.
#   - Service imports are deferred inside handlers so `summary` does not
#     pay for httpx start-up.
#   - Storage errors are the only ones that make a command exit non-zero;
#     failed downloads are queued for --retry instead.
# =============================================================================

"""CLI tools for the SVT crawler.

- ``python -m src.cli crawl`` - download new articles (``--retry`` for failures)
- ``python -m src.cli summary`` - print article counts
- ``python -m src.cli xml`` - convert article JSON to XML
- ``python -m src.cli build-index`` - rebuild the ledger from downloaded files
"""
