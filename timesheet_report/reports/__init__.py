"""Report renderers: HTML table, pie chart, Excel workbook."""
from timesheet_report.reports.chart import render_pie_chart, render_pie_chart_bytes
from timesheet_report.reports.excel import generate_excel_report
from timesheet_report.reports.html import render_html_table, write_html_report

__all__ = [
    "render_html_table",
    "write_html_report",
    "render_pie_chart",
    "render_pie_chart_bytes",
    "generate_excel_report",
]
