"""Layer 5 — Pie Chart Report.

900x600 PNG: one slice per employee sized by share of the grand total,
drawn clockwise from 3 o'clock, with a name/hours/percentage legend.
"""

from __future__ import annotations

import io
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Patch

from timesheet_report.models import AggregatedHours, ChartError
from timesheet_report.reports.formatting import format_hours, share_percent

CHART_WIDTH_PX = 900
CHART_HEIGHT_PX = 600
CHART_DPI = 100

PALETTE = [
    "#4E79A7", "#C85A5A", "#7FB58C", "#F2C24B",
    "#A490CA", "#E787B1", "#6ECEE0", "#D0D0D0",
]

CHART_TITLE = "Time Worked Distribution"


def legend_labels(hours: AggregatedHours) -> list[str]:
    total = hours.grand_total
    return [
        f"{emp.name} - {format_hours(emp.total_hours)}h "
        f"({format_hours(share_percent(emp.total_hours, total))}%)"
        for emp in hours
    ]


def _draw(hours: AggregatedHours):
    if hours is None or hours.is_empty:
        raise ChartError("No data to draw chart.")

    colors = [PALETTE[i % len(PALETTE)] for i in range(len(hours))]

    fig = plt.figure(
        figsize=(CHART_WIDTH_PX / CHART_DPI, CHART_HEIGHT_PX / CHART_DPI),
        dpi=CHART_DPI,
        facecolor="white",
    )
    # pie occupies the left 420px square, legend to its right
    ax = fig.add_axes([30 / CHART_WIDTH_PX, 150 / CHART_HEIGHT_PX, 420 / CHART_WIDTH_PX, 420 / CHART_HEIGHT_PX])
    ax.set_aspect("equal")
    ax.axis("off")

    if hours.grand_total > 0:
        ax.pie(
            [float(emp.total_hours) for emp in hours],
            colors=colors,
            startangle=0,
            counterclock=False,
            wedgeprops={"linewidth": 0},
        )

    fig.legend(
        [Patch(facecolor=c) for c in colors],
        legend_labels(hours),
        loc="upper left",
        bbox_to_anchor=(480 / CHART_WIDTH_PX, 1 - 40 / CHART_HEIGHT_PX),
        frameon=False,
        fontsize=11,
        handlelength=1.5,
        handleheight=1.5,
    )
    fig.text(30 / CHART_WIDTH_PX, 1 - 500 / CHART_HEIGHT_PX, CHART_TITLE,
             fontsize=14, fontweight="bold")
    return fig


def render_pie_chart(hours: AggregatedHours, output_path: str | Path) -> Path:
    """Draw the pie chart and save it as PNG at output_path."""
    output_path = Path(output_path)
    fig = _draw(hours)
    try:
        fig.savefig(output_path, format="png", dpi=CHART_DPI, facecolor="white")
    finally:
        plt.close(fig)
    return output_path


def render_pie_chart_bytes(hours: AggregatedHours) -> bytes:
    """Draw the pie chart and return the PNG bytes."""
    fig = _draw(hours)
    buf = io.BytesIO()
    try:
        fig.savefig(buf, format="png", dpi=CHART_DPI, facecolor="white")
    finally:
        plt.close(fig)
    return buf.getvalue()
