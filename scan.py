#!/usr/bin/env python3
"""DepRadar scan — thin shim.

Lets ``python scan.py`` run the scanner from a source checkout and
re-exports the main entry points for ``from scan import …``.

The real implementation lives in ``depradar/``.
"""

from depradar.cli import main
from depradar.config import ScanConfig, load_config
from depradar.pipeline import UrlWorkerPool, scan_urls
from depradar.registry import classify_search_body

__all__ = ["ScanConfig", "UrlWorkerPool", "classify_search_body", "load_config", "main", "scan_urls"]

if __name__ == "__main__":
    raise SystemExit(main())
