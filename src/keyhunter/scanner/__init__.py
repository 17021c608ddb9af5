# SPDX-License-Identifier: MIT
"""Public scanning API for KeyHunter.

    from keyhunter.scanner import scan_directory, scan_url

Both calls are synchronous and return a fully assembled, immutable
:class:`~keyhunter.core.report.ScanReport`, or raise a
:class:`~keyhunter.core.exceptions.ScanError` subclass before any report is
built.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from keyhunter.core.report import ScanAggregator, ScanReport, ScanTarget, TargetKind
from keyhunter.detectors import get_catalog
from keyhunter.scanner.config import get_default_scanner_config
from keyhunter.scanner.direct import iter_directory, validate_directory
from keyhunter.scanner.extract import extract_findings
from keyhunter.scanner.remote import fetch_url, validate_url

logger = logging.getLogger(__name__)


def scan_directory(path: str, config: Optional[Dict[str, Any]] = None) -> ScanReport:
    """
    Scan every eligible file under *path*.

    Raises:
        InvalidDirectoryError: if *path* is missing or not a directory
    """
    config = config or get_default_scanner_config()
    root = validate_directory(path)
    catalog = get_catalog(config)

    aggregator = ScanAggregator(target=ScanTarget(TargetKind.DIRECTORY, str(root)))
    logger.debug("Scanning directory %s", root)
    units = iter_directory(
        root,
        skip_dirs=config.get("skip_dirs"),
        skip_extensions=config.get("skip_extensions"),
        on_error=aggregator.record_error,
    )
    for unit in units:
        aggregator.add(unit, extract_findings(unit, catalog))
    return aggregator.finish()


def scan_url(url: str, config: Optional[Dict[str, Any]] = None) -> ScanReport:
    """
    Fetch *url* and scan the page.

    Raises:
        InvalidUrlError: if *url* is empty or not http(s); no request is made
        FetchError: if the request fails or returns a non-success status
    """
    config = config or get_default_scanner_config()
    url = validate_url(url)
    catalog = get_catalog(config)

    aggregator = ScanAggregator(target=ScanTarget(TargetKind.URL, url))
    logger.debug("Scanning URL %s", url)
    unit = fetch_url(
        url,
        timeout=config.get("request_timeout", 30.0),
        user_agent=config.get("user_agent"),
    )
    aggregator.add(unit, extract_findings(unit, catalog))
    return aggregator.finish()


__all__ = ["scan_directory", "scan_url"]
