"""Severity aggregation and exit-code mapping for scan results."""
from __future__ import annotations

from typing import Dict

from .schema import ScanResult, ScanSummary, ViolationImpact

EXIT_CLEAN = 0
EXIT_ISSUES = 1
EXIT_CRITICAL = 2
EXIT_ERROR = 3


def total_violations(result: ScanResult) -> int:
    """Number of affected elements across all violations (not violation types)."""
    return sum(len(v.nodes) for v in result.violations)


def severity_counts(result: ScanResult) -> Dict[str, int]:
    """Affected-element counts per known impact.

    A violation whose impact is not one of the four known values lands in no
    bucket, so the buckets can add up to less than ``total_violations``.
    """
    counts = {impact.value: 0 for impact in ViolationImpact}
    for violation in result.violations:
        if violation.impact in counts:
            counts[violation.impact] += len(violation.nodes)
    return counts


def summarize(result: ScanResult) -> ScanSummary:
    counts = severity_counts(result)
    return ScanSummary(
        total_violations=total_violations(result),
        critical=counts["critical"],
        serious=counts["serious"],
        moderate=counts["moderate"],
        minor=counts["minor"],
        url=result.url,
        timestamp=result.timestamp,
    )


def exit_code(result: ScanResult) -> int:
    """0 clean, 1 non-critical issues, 2 any critical violation present."""
    if any(v.impact == ViolationImpact.CRITICAL.value for v in result.violations):
        return EXIT_CRITICAL
    if total_violations(result) > 0:
        return EXIT_ISSUES
    return EXIT_CLEAN


__all__ = [
    "summarize",
    "total_violations",
    "severity_counts",
    "exit_code",
    "EXIT_CLEAN",
    "EXIT_ISSUES",
    "EXIT_CRITICAL",
    "EXIT_ERROR",
]
