"""JSON and CSV reports for a scan result.

Both reports take their figures from ``metrics.summarize`` so the totals in
every output format agree. When no output path is given, one is derived from
the scanned URL and the result timestamp (see ``generate_output_path``).
"""
from __future__ import annotations

import csv
import io
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

import orjson

from .errors import FileWriteError
from .metrics import summarize
from .schema import ScanResult
from .utils import format_timestamp

DEFAULT_REPORTS_DIR = "reports"
CSV_HEADER = ["ID", "Impact", "Description", "Help", "Help URL", "Affected Elements"]

PathLike = Union[str, Path]


def sanitize_url(url: str) -> str:
    stripped = re.sub(r"^https?://", "", url, flags=re.IGNORECASE)
    return re.sub(r"[^A-Za-z0-9]", "_", stripped)[:50]


def sanitize_timestamp(timestamp: str) -> str:
    return re.sub(r"[:.]", "-", timestamp)[:19]


def generate_output_path(
    url: str,
    timestamp: str,
    reports_dir: PathLike = DEFAULT_REPORTS_DIR,
    base_dir: Optional[PathLike] = None,
) -> Path:
    """Default JSON report path, e.g. ``reports/accessibility_example_com_2024-05-01T10-00-00.json``."""
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    name = f"accessibility_{sanitize_url(url)}_{sanitize_timestamp(timestamp)}.json"
    return base / reports_dir / name


def csv_path_for(json_path: PathLike) -> Path:
    path = Path(json_path)
    if path.suffix.lower() == ".json":
        return path.with_suffix(".csv")
    return path.with_name(path.name + ".csv")


def build_report(result: ScanResult) -> Dict[str, Any]:
    summary = summarize(result)
    return {
        "metadata": {
            "url": result.url,
            "timestamp": result.timestamp,
            "scannedAt": format_timestamp(result.timestamp),
        },
        "summary": {
            "totalViolations": summary.total_violations,
            "violationTypes": len(result.violations),
            "critical": summary.critical,
            "serious": summary.serious,
            "moderate": summary.moderate,
            "minor": summary.minor,
            "passes": result.passes,
            "incomplete": result.incomplete,
            "inapplicable": result.inapplicable,
        },
        "violations": [
            {
                "id": v.id,
                "impact": v.impact,
                "description": v.description,
                "help": v.help,
                "helpUrl": v.help_url,
                "tags": list(v.tags),
                "affectedElements": len(v.nodes),
                "nodes": [
                    {
                        "target": list(n.target),
                        "html": n.html,
                        "failureSummary": n.failure_summary,
                    }
                    for n in v.nodes
                ],
            }
            for v in result.violations
        ],
        "testDetails": {
            "passes": result.passes,
            "incomplete": result.incomplete,
            "inapplicable": result.inapplicable,
        },
    }


def _write(path: Path, data: bytes) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as exc:
        raise FileWriteError(path, exc) from exc
    return path


def save_json_report(
    result: ScanResult,
    output_path: Optional[PathLike] = None,
    reports_dir: PathLike = DEFAULT_REPORTS_DIR,
) -> Path:
    path = Path(output_path) if output_path else generate_output_path(result.url, result.timestamp, reports_dir)
    return _write(path, orjson.dumps(build_report(result), option=orjson.OPT_INDENT_2))


def render_csv(result: ScanResult) -> str:
    buf = io.StringIO()
    buf.write(",".join(CSV_HEADER) + "\n")
    # Strings quoted with doubled inner quotes; the element count stays bare.
    writer = csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for v in result.violations:
        writer.writerow([v.id, v.impact or "", v.description, v.help, v.help_url, len(v.nodes)])
    return buf.getvalue()


def save_csv_summary(
    result: ScanResult,
    output_path: Optional[PathLike] = None,
    reports_dir: PathLike = DEFAULT_REPORTS_DIR,
) -> Path:
    json_path = Path(output_path) if output_path else generate_output_path(result.url, result.timestamp, reports_dir)
    return _write(csv_path_for(json_path), render_csv(result).encode("utf-8"))


def load_report(path: PathLike) -> Dict[str, Any]:
    """Read a JSON report written by ``save_json_report``."""
    return orjson.loads(Path(path).read_bytes())


__all__ = [
    "build_report",
    "save_json_report",
    "render_csv",
    "save_csv_summary",
    "load_report",
    "generate_output_path",
    "sanitize_url",
    "csv_path_for",
]
