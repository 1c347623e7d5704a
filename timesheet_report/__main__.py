"""CLI entry point.

Usage:
    python -m timesheet_report \
        --url "https://example.com/api/gettimeentries?code=..." \
        --html-out "output.html" \
        --chart-out "chart.png" \
        --xlsx-out "hours.xlsx" \
        --audit-out "audit.json"

Exit codes: 0 success, 1 no usable data, 2 any other error.
"""

from __future__ import annotations

import typer

from timesheet_report.models import NoDataError, ReportError

EXIT_OK = 0
EXIT_NO_DATA = 1
EXIT_ERROR = 2

app = typer.Typer(add_completion=False)


@app.command()
def generate(
    url: str = typer.Option(None, "--url", help="Time entries endpoint (default: TIMESHEET_API_URL)"),
    input_file: str = typer.Option(None, "--input-file", help="Read entries from a local JSON file instead of the endpoint"),
    html_out: str = typer.Option(None, "--html-out", help="Output HTML file path"),
    chart_out: str = typer.Option(None, "--chart-out", help="Output pie chart PNG path"),
    xlsx_out: str = typer.Option(None, "--xlsx-out", help="Optional Excel report path"),
    audit_out: str = typer.Option(None, "--audit-out", help="Optional audit JSON path"),
    low_hours: float = typer.Option(None, "--low-hours", help="Flag employees below this many hours"),
    timeout: float = typer.Option(None, "--timeout", help="HTTP timeout in seconds"),
    log_level: str = typer.Option(None, "--log-level", help="Logging level (default: TIMESHEET_LOG_LEVEL)"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON lines"),
) -> None:
    """Fetch time entries, aggregate hours per employee, and write the reports."""
    from timesheet_report.audit import generate_audit
    from timesheet_report.config import ReportSettings, check_timeout
    from timesheet_report.engine import aggregate_hours
    from timesheet_report.fetcher import fetch_entries, load_entries_file
    from timesheet_report.logging_config import setup_logging
    from timesheet_report.reports import generate_excel_report, render_pie_chart, write_html_report
    from timesheet_report.reports.formatting import format_hours

    try:
        settings = ReportSettings.from_env()
        fetch_timeout = settings.timeout if timeout is None else check_timeout(timeout)
    except ValueError as e:
        typer.echo(f"CONFIG ERROR: {e}", err=True)
        raise typer.Exit(EXIT_ERROR)

    setup_logging(log_level or settings.log_level, json_output=json_logs)

    source = input_file or url or settings.api_url
    html_path = html_out or settings.html_out
    chart_path = chart_out or settings.chart_out
    threshold = settings.low_hours_threshold if low_hours is None else low_hours

    try:
        # Step 1: Load entries
        if input_file:
            typer.echo(f"Reading time entries from {input_file}...")
            entries = load_entries_file(input_file)
        else:
            typer.echo("Fetching time entries from API...")
            entries = fetch_entries(source, timeout=fetch_timeout)

        if not entries:
            raise NoDataError("No entries received from API.")
        typer.echo(f"  {len(entries)} entries received")

        # Step 2: Aggregate
        hours = aggregate_hours(entries)
        if hours.total_skipped:
            typer.echo(f"  {hours.total_skipped} entries skipped:")
            for reason, count in hours.skipped.items():
                typer.echo(f"    {reason.value}: {count}")
        if hours.is_empty:
            raise NoDataError("No usable time entries (every entry was skipped).")

        for emp in hours:
            typer.echo(f"  {emp.name}: {format_hours(emp.total_hours)}h")

        # Step 3: Reports
        written = write_html_report(hours, html_path, low_threshold=threshold)
        typer.echo(f"\nWrote HTML output to {written.resolve()}")

        written = render_pie_chart(hours, chart_path)
        typer.echo(f"Wrote pie chart to {written.resolve()}")

        if xlsx_out:
            written = generate_excel_report(hours, xlsx_out, low_threshold=threshold)
            typer.echo(f"Wrote Excel report to {written.resolve()}")

        if audit_out:
            written = generate_audit(hours, source, audit_out)
            typer.echo(f"Wrote audit file to {written.resolve()}")

        typer.echo("Done.")

    except NoDataError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(EXIT_NO_DATA)

    except ReportError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(EXIT_ERROR)

    except Exception as e:
        typer.echo(f"FATAL ERROR: {e}", err=True)
        raise typer.Exit(EXIT_ERROR)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
