"""Layer 5 — HTML Report.

Renders the ranked hours as a single self-contained HTML table. Employees
below the low-hours threshold get class="low".
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment

from timesheet_report.config import DEFAULT_LOW_HOURS
from timesheet_report.models import AggregatedHours
from timesheet_report.reports.formatting import format_hours

_HTML_TEMPLATE = """<!doctype html>
<html>
<head>
<meta charset="utf-8">
<title>Time Worked</title>
<style>
body { font-family: Arial, Helvetica, sans-serif; padding: 20px; }
.table { border-collapse: collapse; width: 600px; }
.table th, .table td { border: 1px solid #ddd; padding: 8px; text-align: left; }
.table th { background-color: #f2f2f2; }
.low { background-color: #ffe6e6; }
</style>
</head>
<body>
<h2>Employees ordered by total time worked (hours)</h2>
<table class="table">
<thead><tr><th>Name</th><th>Total Hours</th></tr></thead>
<tbody>
{% for row in rows -%}
<tr{% if row.low %} class="low"{% endif %}><td>{{ row.name }}</td><td>{{ row.hours }}</td></tr>
{% endfor -%}
</tbody>
</table>
</body>
</html>
"""

_env = Environment(autoescape=True, keep_trailing_newline=True)
_template = _env.from_string(_HTML_TEMPLATE)


def render_html_table(
    hours: AggregatedHours,
    low_threshold: float = DEFAULT_LOW_HOURS,
) -> str:
    rows = [
        {
            "name": emp.name,
            "hours": format_hours(emp.total_hours),
            "low": float(emp.total_hours) < low_threshold,
        }
        for emp in hours
    ]
    return _template.render(rows=rows)


def write_html_report(
    hours: AggregatedHours,
    output_path: str | Path,
    low_threshold: float = DEFAULT_LOW_HOURS,
) -> Path:
    output_path = Path(output_path)
    output_path.write_text(render_html_table(hours, low_threshold), encoding="utf-8")
    return output_path
