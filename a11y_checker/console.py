"""Console rendering of scan results."""
from __future__ import annotations

from typing import List, Optional

import typer

from .metrics import summarize
from .schema import ScanResult, ScanSummary, Violation
from .utils import format_timestamp, truncate

WIDTH = 80
MAX_NODES_SHOWN = 3

_IMPACT_LABELS = {
    "critical": ("🔴 CRITICAL", typer.colors.RED, True),
    "serious": ("🟠 SERIOUS", typer.colors.RED, False),
    "moderate": ("🟡 MODERATE", typer.colors.YELLOW, False),
    "minor": ("🔵 MINOR", typer.colors.BLUE, False),
}


def impact_label(impact: Optional[str]) -> str:
    if impact in _IMPACT_LABELS:
        text, fg, bold = _IMPACT_LABELS[impact]
        return typer.style(text, fg=fg, bold=bold)
    return typer.style((impact or "unknown").upper(), fg=typer.colors.BRIGHT_BLACK)


def _bold(text: str) -> str:
    return typer.style(text, bold=True)


def _dim(text: str) -> str:
    return typer.style(text, fg=typer.colors.BRIGHT_BLACK)


def _header() -> List[str]:
    rule = typer.style("═" * WIDTH, fg=typer.colors.CYAN, bold=True)
    return ["", rule, typer.style("  WEB ACCESSIBILITY CHECKER - SCAN REPORT", fg=typer.colors.CYAN, bold=True), rule, ""]


def _summary(summary: ScanSummary) -> List[str]:
    total_fg = typer.colors.RED if summary.total_violations > 0 else typer.colors.GREEN
    lines = [
        _bold("📊 SUMMARY"),
        _dim("─" * WIDTH),
        f"{_bold('URL:')} {summary.url}",
        f"{_bold('Scanned at:')} {format_timestamp(summary.timestamp)}",
        f"{_bold('Total Issues:')} {typer.style(str(summary.total_violations), fg=total_fg)}",
        "",
    ]
    if summary.total_violations > 0:
        lines.append(_bold("Issues by Severity:"))
        for name, count, fg in (
            ("Critical", summary.critical, typer.colors.RED),
            ("Serious", summary.serious, typer.colors.RED),
            ("Moderate", summary.moderate, typer.colors.YELLOW),
            ("Minor", summary.minor, typer.colors.BLUE),
        ):
            if count > 0:
                lines.append(f"  {typer.style('●', fg=fg)} {(name + ':').ljust(9)} {typer.style(str(count), fg=fg)}")
    lines.append("")
    return lines


def _violation(index: int, violation: Violation) -> List[str]:
    lines = [
        f"{_bold(f'{index}.')} {impact_label(violation.impact)} {_bold(violation.id)}",
        f"   {_bold('Description:')} {violation.description}",
        f"   {_bold('Help:')} {violation.help}",
        f"   {_bold('Learn more:')} {typer.style(violation.help_url, fg=typer.colors.CYAN, underline=True)}",
        f"   {_bold('WCAG Tags:')} {', '.join(violation.wcag_tags)}",
        f"   {_bold('Affected elements:')} {typer.style(str(len(violation.nodes)), fg=typer.colors.RED)} instance(s)",
    ]
    for node_index, node in enumerate(violation.nodes[:MAX_NODES_SHOWN], start=1):
        lines.append(f"   {_dim(f'   [{node_index}]')} {_dim(' > '.join(node.target))}")
        lines.append(f"       {typer.style(truncate(node.html, 100), dim=True)}")
    remaining = len(violation.nodes) - MAX_NODES_SHOWN
    if remaining > 0:
        lines.append(_dim(f"   ... and {remaining} more instance(s)"))
    lines.append("")
    return lines


def _violations(violations) -> List[str]:
    if not violations:
        return [typer.style("✅ No accessibility violations found!", fg=typer.colors.GREEN, bold=True), ""]
    lines = [_bold("🔍 DETAILED VIOLATIONS"), _dim("─" * WIDTH), ""]
    for index, violation in enumerate(violations, start=1):
        lines.extend(_violation(index, violation))
    return lines


def _footer(result: ScanResult) -> List[str]:
    return [
        _dim("─" * WIDTH),
        f"{_bold('Tests passed:')} {typer.style(str(result.passes), fg=typer.colors.GREEN)} | "
        f"{_bold('Incomplete:')} {result.incomplete} | "
        f"{_bold('Not applicable:')} {result.inapplicable}",
        typer.style("═" * WIDTH, fg=typer.colors.CYAN),
        "",
    ]


def render_report(result: ScanResult, verbose: bool = False) -> str:
    summary = summarize(result)
    lines = _header() + _summary(summary)
    if verbose or summary.total_violations > 0:
        lines += _violations(result.violations)
    else:
        lines += [typer.style("✅ No accessibility violations found!", fg=typer.colors.GREEN, bold=True), ""]
    lines += _footer(result)
    if summary.total_violations > 0:
        lines.append(
            typer.style(
                f"⚠️  Found {summary.total_violations} accessibility issue(s). Review and fix before deployment.",
                fg=typer.colors.YELLOW,
            )
        )
    else:
        lines.append(typer.style("✨ Great job! No accessibility violations detected.", fg=typer.colors.GREEN, bold=True))
    lines.append("")
    return "\n".join(lines)


def print_report(result: ScanResult, verbose: bool = False) -> None:
    typer.echo(render_report(result, verbose))


def print_error(message: str, error: Optional[BaseException] = None) -> None:
    typer.echo(typer.style("\n❌ ERROR", fg=typer.colors.RED, bold=True), err=True)
    typer.echo(typer.style(message, fg=typer.colors.RED), err=True)
    if error is not None and str(error):
        typer.echo(_dim(str(error)), err=True)
    typer.echo("", err=True)
