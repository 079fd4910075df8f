"""Programmatic entry points.

Example::

    import asyncio
    from a11y_checker import api

    result = asyncio.run(api.scan("https://example.com", wcag_level=["AA", "AAA"]))
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Union

from . import console, report
from .config import Settings, load_settings
from .scanner import AccessibilityScanner
from .schema import ScanResult, ToolOptions

logger = logging.getLogger(__name__)


def tool_options(url: str, settings: Settings, **options: Any) -> ToolOptions:
    """Build ToolOptions, taking timeout and WCAG levels from settings unless given."""
    options.setdefault("timeout", settings.timeout)
    options.setdefault("wcag_level", settings.wcag)
    return ToolOptions(url=url, **options)


async def scan(url: str, settings: Optional[Settings] = None, **options: Any) -> ScanResult:
    """Scan one URL with a throwaway scanner; the browser is always closed."""
    settings = settings or load_settings()
    async with AccessibilityScanner(settings) as scanner:
        return await scanner.scan(tool_options(url, settings, **options))


async def scan_and_report(url: str, settings: Optional[Settings] = None, **options: Any) -> ScanResult:
    """Scan, print the console report and save JSON when ``output_path`` is given."""
    result = await scan(url, settings, **options)
    console.print_report(result, result.tool_options.verbose)
    if result.tool_options.output_path:
        report.save_json_report(result, result.tool_options.output_path)
    return result


async def scan_many(
    urls: Iterable[str], settings: Optional[Settings] = None, **options: Any
) -> Dict[str, Union[ScanResult, Exception]]:
    """Scan URLs one after another on a single browser session.

    A failed URL maps to its exception and the batch moves on.
    """
    settings = settings or load_settings()
    results: Dict[str, Union[ScanResult, Exception]] = {}
    async with AccessibilityScanner(settings) as scanner:
        for url in urls:
            try:
                results[url] = await scanner.scan(tool_options(url, settings, **options))
            except Exception as exc:
                logger.error("Batch scan of %s failed: %s", url, exc)
                results[url] = exc
    return results
