"""Layer 5 — Excel Report Generator.

Writes a fresh workbook with one row per employee in ranked order.
All values are pre-computed in Python; no Excel formulas are written.
"""

from __future__ import annotations

from pathlib import Path

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from timesheet_report.config import DEFAULT_LOW_HOURS
from timesheet_report.models import AggregatedHours

SHEET_TITLE = "Hours"
TITLE_ROW = 1
HEADER_ROW = 2
DATA_START_ROW = 3

NAME_COL = 1
HOURS_COL = 2

THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin'),
)

HEADER_FONT = Font(name='Calibri', size=11, bold=True)
DATA_FONT = Font(name='Calibri', size=11)
TITLE_FONT = Font(name='Calibri', size=12, bold=True)
CENTER_ALIGN = Alignment(horizontal='center', vertical='center')
HEADER_FILL = PatternFill(start_color='F2F2F2', end_color='F2F2F2', fill_type='solid')
LOW_FILL = PatternFill(start_color='FFE6E6', end_color='FFE6E6', fill_type='solid')
NUMBER_FORMAT = '#,##0.00'


def generate_excel_report(
    hours: AggregatedHours,
    output_path: str | Path,
    low_threshold: float = DEFAULT_LOW_HOURS,
) -> Path:
    """Write the ranked hours to an .xlsx workbook."""
    output_path = Path(output_path)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    ws.merge_cells(start_row=TITLE_ROW, start_column=NAME_COL, end_row=TITLE_ROW, end_column=HOURS_COL)
    title_cell = ws.cell(row=TITLE_ROW, column=NAME_COL)
    title_cell.value = 'Employees ordered by total time worked (hours)'
    title_cell.font = TITLE_FONT
    title_cell.alignment = CENTER_ALIGN

    for col, label in ((NAME_COL, 'Name'), (HOURS_COL, 'Total Hours')):
        c = ws.cell(row=HEADER_ROW, column=col)
        c.value = label
        c.font = HEADER_FONT
        c.fill = HEADER_FILL
        c.border = THIN_BORDER
        c.alignment = CENTER_ALIGN

    row_num = DATA_START_ROW
    for emp in hours:
        name_cell = ws.cell(row=row_num, column=NAME_COL)
        name_cell.value = emp.name
        hours_cell = ws.cell(row=row_num, column=HOURS_COL)
        hours_cell.value = float(emp.total_hours)
        hours_cell.number_format = NUMBER_FORMAT

        for c in (name_cell, hours_cell):
            c.font = DATA_FONT
            c.border = THIN_BORDER
            if float(emp.total_hours) < low_threshold:
                c.fill = LOW_FILL
        row_num += 1

    # --- Total row ---
    total_label = ws.cell(row=row_num, column=NAME_COL)
    total_label.value = 'Total'
    total_label.font = HEADER_FONT
    total_label.border = THIN_BORDER
    total_cell = ws.cell(row=row_num, column=HOURS_COL)
    total_cell.value = float(hours.grand_total)
    total_cell.font = HEADER_FONT
    total_cell.border = THIN_BORDER
    total_cell.number_format = NUMBER_FORMAT

    ws.column_dimensions['A'].width = max(
        [len('Name')] + [len(emp.name) for emp in hours]
    ) + 4
    ws.column_dimensions['B'].width = 14

    wb.save(str(output_path))
    return output_path
