"""a11y_checker

Audit a single web page for accessibility violations with axe-core and
produce severity-ranked console, JSON, CSV and HTML reports.

Primary entrypoints:
 - cli.py (Typer CLI, ``a11y-check``)
 - api.py (scan / scan_and_report / scan_many)
 - scanner.py (Playwright session + axe-core invocation)
 - report.py (JSON / CSV reports)
"""
from .errors import FileWriteError, NavigationError, ScanEngineError, ScanError
from .scanner import AccessibilityScanner
from .schema import ScanResult, ScanSummary, ToolOptions, Violation, ViolationImpact, ViolationNode, WCAGLevel

__all__ = [
    "AccessibilityScanner",
    "ToolOptions",
    "ScanResult",
    "ScanSummary",
    "Violation",
    "ViolationNode",
    "ViolationImpact",
    "WCAGLevel",
    "ScanError",
    "NavigationError",
    "ScanEngineError",
    "FileWriteError",
]
