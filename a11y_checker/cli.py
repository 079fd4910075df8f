"""Typer CLI for scanning a page and writing its reports."""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer

from . import console, metrics, report
from .config import load_settings
from .html_report import render_report
from .errors import FileWriteError
from .scanner import AccessibilityScanner, screenshot_path_for
from .schema import ToolOptions, parse_wcag_levels
from .utils import normalize_url

app = typer.Typer(add_completion=False, help="Web accessibility audits using axe-core.")


async def _run_scan(settings, options: ToolOptions, write_json: bool, write_csv: bool, write_html: bool) -> int:
    scanner = AccessibilityScanner(settings)
    try:
        result = await scanner.scan(options)
        if options.screenshot and options.output_path:
            typer.echo(f"📸 Screenshot saved to: {screenshot_path_for(options.output_path)}")
        console.print_report(result, options.verbose)
        if write_json:
            json_path = report.save_json_report(result, options.output_path, settings.reports_dir)
            typer.echo(f"📄 JSON report saved to: {json_path}")
            if write_csv:
                csv_path = report.save_csv_summary(result, options.output_path, settings.reports_dir)
                typer.echo(f"📊 CSV summary saved to: {csv_path}")
            if write_html:
                html_path = render_report(json_path, json_path.with_suffix(".html"))
                typer.echo(f"🌐 HTML report saved to: {html_path}")
        return metrics.exit_code(result)
    except Exception as exc:
        console.print_error("Failed to complete accessibility scan", exc)
        return metrics.EXIT_ERROR
    finally:
        await scanner.close()


@app.command()
def scan(
    url: str = typer.Argument(..., help="URL of the website to check"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Path to save the JSON report"),
    csv: bool = typer.Option(False, "--csv", "-c", help="Also generate a CSV summary report"),
    screenshot: bool = typer.Option(False, "--screenshot", "-s", help="Capture a full-page screenshot"),
    timeout: Optional[int] = typer.Option(None, "--timeout", "-t", min=1, help="Page load timeout in milliseconds [default: 30000]"),
    wcag: Optional[str] = typer.Option(None, "--wcag", "-w", help="WCAG levels to check (A, AA, AAA), comma-separated [default: AA]"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output even if no violations are found"),
    json_report: bool = typer.Option(True, "--json/--no-json", help="Write the JSON report (--no-json: console only)"),
    html: bool = typer.Option(False, "--html", help="Also render an HTML report next to the JSON report"),
    config: Optional[str] = typer.Option(None, help="YAML settings file"),
):
    """Scan a single page for accessibility violations.

    Exit codes: 0 clean, 1 non-critical issues, 2 critical issues, 3 scan error.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = load_settings(config)
    except (OSError, ValueError) as exc:
        console.print_error("Invalid configuration", exc)
        raise typer.Exit(metrics.EXIT_ERROR)
    url = normalize_url(url)
    levels = parse_wcag_levels(wcag if wcag is not None else settings.wcag)
    options = ToolOptions(
        url=url,
        timeout=timeout or settings.timeout,
        wcag_level=levels,
        output_path=output,
        verbose=verbose,
        screenshot=screenshot,
    )
    typer.echo(
        f"\n🚀 Starting accessibility scan for: {url}\n"
        f"   WCAG Levels: {', '.join(level.value for level in levels)}\n"
    )
    code = asyncio.run(_run_scan(settings, options, json_report, csv, html))
    raise typer.Exit(code)


@app.command("report")
def rerender_report(
    report_file: str = typer.Argument(..., help="JSON report written by 'scan'"),
    out: Optional[str] = typer.Option(None, help="HTML output path [default: report path with .html]"),
):
    """Regenerate an HTML report from an existing JSON report."""
    src = Path(report_file)
    dest = Path(out) if out else src.with_suffix(".html")
    try:
        render_report(src, dest)
    except (OSError, ValueError, FileWriteError) as exc:
        # ValueError covers orjson.JSONDecodeError and non-report JSON
        console.print_error(f"Could not render HTML report from {src}", exc)
        raise typer.Exit(metrics.EXIT_ERROR)
    typer.echo(f"HTML report written to {dest}")


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
