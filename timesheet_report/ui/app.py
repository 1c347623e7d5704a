"""Streamlit UI for the time report.

Calls the same core engine as the CLI. No business logic here.

    streamlit run timesheet_report/ui/app.py
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

import streamlit as st

from timesheet_report.audit import generate_audit
from timesheet_report.config import ReportSettings
from timesheet_report.engine import aggregate_hours
from timesheet_report.fetcher import fetch_entries
from timesheet_report.models import ConfigError, NoDataError, ReportError
from timesheet_report.parsers import parse_entries
from timesheet_report.reports import (
    generate_excel_report,
    render_html_table,
    render_pie_chart_bytes,
)
from timesheet_report.reports.formatting import format_hours


def main() -> None:
    st.set_page_config(page_title="Time Worked Report", layout="wide")
    st.title("Time Worked Report")
    st.markdown("Total hours per employee, ranked, from a time entries feed.")

    try:
        settings = ReportSettings.from_env()
    except ConfigError as e:
        st.error(f"Configuration error: {e}")
        return

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Source")
        url = st.text_input("Time entries endpoint", value=settings.api_url)
        upload = st.file_uploader("...or upload a JSON export", type=["json"], key="entries")

    with col2:
        st.subheader("Options")
        low_hours = st.number_input(
            "Flag employees below (hours)",
            min_value=0.0,
            value=float(settings.low_hours_threshold),
            step=10.0,
        )

    if st.button("Build Report", type="primary", disabled=not (url or upload)):
        try:
            with st.spinner("Loading time entries..."):
                if upload is not None:
                    entries = parse_entries(json.loads(upload.getvalue().decode("utf-8")))
                    source = upload.name
                else:
                    entries = fetch_entries(url, timeout=settings.timeout)
                    source = url
                st.info(f"{len(entries)} entries received")

            if not entries:
                raise NoDataError("No entries received.")

            with st.spinner("Aggregating hours..."):
                hours = aggregate_hours(entries)

            if hours.total_skipped:
                st.warning(
                    f"{hours.total_skipped} entries skipped: "
                    + ", ".join(f"{r.value}={n}" for r, n in hours.skipped.items())
                )
            if hours.is_empty:
                raise NoDataError("No usable time entries (every entry was skipped).")

            html = render_html_table(hours, low_threshold=low_hours)
            chart_png = render_pie_chart_bytes(hours)

            with tempfile.TemporaryDirectory() as tmpdir:
                tmpdir = Path(tmpdir)
                xlsx_path = generate_excel_report(hours, tmpdir / "hours.xlsx", low_threshold=low_hours)
                audit_path = generate_audit(hours, source, tmpdir / "audit.json")
                xlsx_bytes = xlsx_path.read_bytes()
                audit_text = audit_path.read_text(encoding='utf-8')

            st.success(f"Grand Total: {format_hours(hours.grand_total)}h across {len(hours)} employees")

            left, right = st.columns(2)
            with left:
                st.subheader("Ranking")
                st.table([
                    {"Name": emp.name, "Total Hours": format_hours(emp.total_hours)}
                    for emp in hours
                ])
            with right:
                st.subheader("Distribution")
                st.image(chart_png)

            # Download buttons
            col_a, col_b, col_c, col_d = st.columns(4)
            with col_a:
                st.download_button("Download HTML", data=html, file_name="output.html", mime="text/html")
            with col_b:
                st.download_button("Download Chart", data=chart_png, file_name="chart.png", mime="image/png")
            with col_c:
                st.download_button(
                    "Download Excel",
                    data=xlsx_bytes,
                    file_name="hours.xlsx",
                    mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                )
            with col_d:
                st.download_button("Download Audit JSON", data=audit_text, file_name="audit.json", mime="application/json")

        except NoDataError as e:
            st.warning(str(e))

        except ReportError as e:
            st.error(f"Error: {e}")

        except Exception as e:
            st.error(f"Error: {e}")
            import traceback
            st.code(traceback.format_exc())


if __name__ == "__main__":
    main()
