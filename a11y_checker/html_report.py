"""HTML rendering of a saved JSON report."""
from pathlib import Path

import orjson
from jinja2 import Template

from .errors import FileWriteError
from .schema import ViolationImpact
from .utils import truncate

TEMPLATE = """<!DOCTYPE html>
<html lang=\"en\">
<head>
<meta charset=\"UTF-8\" />
<title>Accessibility Report: {{ metadata.url }}</title>
<style>
body { font-family: system-ui, sans-serif; line-height:1.4; }
table { border-collapse: collapse; width: 100%; }
th, td { border:1px solid #ccc; padding:4px 6px; vertical-align: top; }
th { background:#f2f2f2; }
.badge { color:#fff; padding:2px 6px; border-radius:4px; }
.badge-critical { background:#a00; }
.badge-serious { background:#c44f00; }
.badge-moderate { background:#7a5d00; }
.badge-minor { background:#1f4fa8; }
.badge-unknown { background:#555; }
code { font-size: 0.85rem; }
header, main, footer { max-width: 1200px; margin: 0 auto; }
header:focus-within a.skip-link { top: 0; }
a.skip-link { position:absolute; left:0; top:-40px; background:#000; color:#fff; padding:8px; }
details { border: 1px solid #ccc; border-radius: 4px; padding: 0.5rem; margin-bottom: 1rem; }
details summary { cursor: pointer; }
</style>
</head>
<body>
<a href=\"#main\" class=\"skip-link\">Skip to main content</a>
<header>
<h1>Web Accessibility Report</h1>
<p>URL: <a href=\"{{ metadata.url }}\">{{ metadata.url }}</a></p>
<p>Scanned at: {{ metadata.scannedAt }}</p>
</header>
<main id=\"main\">
<section aria-labelledby=\"summary-h2\">
<h2 id=\"summary-h2\">Summary</h2>
<table>
<caption>Affected elements by severity</caption>
<thead>
<tr><th scope=\"col\">Total issues</th><th scope=\"col\">Violation types</th><th scope=\"col\">Critical</th><th scope=\"col\">Serious</th><th scope=\"col\">Moderate</th><th scope=\"col\">Minor</th></tr>
</thead>
<tbody>
<tr>
<td>{{ summary.totalViolations }}</td>
<td>{{ summary.violationTypes }}</td>
<td>{{ summary.critical }}</td>
<td>{{ summary.serious }}</td>
<td>{{ summary.moderate }}</td>
<td>{{ summary.minor }}</td>
</tr>
</tbody>
</table>
<p>Checks passed: {{ summary.passes }} | Incomplete: {{ summary.incomplete }} | Not applicable: {{ summary.inapplicable }}</p>
</section>
<section aria-labelledby=\"violations-h2\">
<h2 id=\"violations-h2\">Violations</h2>
{% if not violations %}
<p>No accessibility violations found.</p>
{% endif %}
{% for v in violations %}
<details{% if v.impact == 'critical' %} open{% endif %}>
  <summary><h3>{{ v.id }}</h3> <span class=\"badge badge-{{ v.badge }}\">{{ (v.impact or 'unknown')|upper }}</span> {{ v.affectedElements }} element(s)</summary>
  <p>{{ v.description }}</p>
  <p>{{ v.help }} (<a href=\"{{ v.helpUrl }}\">learn more</a>)</p>
  <p>Tags: {{ v.tags|join(', ') }}</p>
  <ul>
  {% for n in v.nodes %}
    <li><code>{{ n.target|join(' > ') }}</code><br /><code>{{ n.snippet }}</code>{% if n.failureSummary %}<br />{{ n.failureSummary }}{% endif %}</li>
  {% endfor %}
  </ul>
</details>
{% endfor %}
</section>
</main>
<footer>
<p>Generated from {{ source }}.</p>
</footer>
</body>
</html>
"""

KNOWN_IMPACTS = {impact.value for impact in ViolationImpact}


def _severity_key(violation: dict):
    # Critical first, unknown impacts last; sorted() keeps ties in report order.
    try:
        return -ViolationImpact(violation.get("impact")).rank
    except ValueError:
        return 1


def rank_violations(violations):
    return sorted(violations, key=_severity_key)


def render_report(report_json_path: Path, out_html: Path):
    data = orjson.loads(Path(report_json_path).read_bytes())
    if not isinstance(data, dict):
        raise ValueError(f"{report_json_path} is not an accessibility JSON report")
    violations = []
    for v in rank_violations(data.get("violations", [])):
        impact = v.get("impact")
        violations.append({
            **v,
            "badge": impact if impact in KNOWN_IMPACTS else "unknown",
            "nodes": [{**n, "snippet": truncate(n.get("html") or "", 300)} for n in v.get("nodes", [])],
        })
    html = Template(TEMPLATE, autoescape=True).render(
        metadata=data.get("metadata", {}),
        summary=data.get("summary", {}),
        violations=violations,
        source=Path(report_json_path).name,
    )
    out_html = Path(out_html)
    try:
        out_html.parent.mkdir(parents=True, exist_ok=True)
        out_html.write_text(html, encoding="utf-8")
    except OSError as exc:
        raise FileWriteError(out_html, exc) from exc
    return out_html
