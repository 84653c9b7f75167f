# =============================================================================
# src/cli/__main__.py - Package Entry Point
# =============================================================================
#
# Enables running the CLI package itself as a module:
#     python -m src.cli crawl --debug
#
# Delegates to the crawler CLI (svt_crawler.py), which is also installed
# as the ``svt-crawler`` console script.
# =============================================================================

"""Allow ``python -m src.cli`` execution."""

from src.cli.svt_crawler import main

main()
