"""
Export service: generate CSV and Excel files from roster data.

All export functions return a BytesIO buffer ready to be sent as
a Flask response with the appropriate content type.  Rows come straight
from the API; nothing is cached between exports.
"""

import csv
import io
import logging

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from roster.models.department import Department
from roster.models.employee import Employee
from roster.services.department_service import DepartmentDirectory
from roster.services.employee_service import department_label

logger = logging.getLogger(__name__)

# Excel header styling constants.
_HEADER_FONT = Font(bold=True, color="FFFFFF")
_HEADER_FILL = PatternFill(start_color="2B579A", end_color="2B579A", fill_type="solid")
_HEADER_ALIGN = Alignment(horizontal="center", wrap_text=True)
_CURRENCY_FORMAT = "#,##0.00"

DEPARTMENT_HEADERS = ["ID", "Name", "HOD"]
EMPLOYEE_HEADERS = [
    "ID",
    "Name",
    "Salary",
    "Department",
    "Manager",
    "Date of Joining",
    "Designation",
]

# Content types and file extensions per export format.
FORMATS = {
    "csv": "text/csv; charset=utf-8",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


# =========================================================================
# Row builders
# =========================================================================


def department_rows(departments: list[Department]) -> list[list]:
    """One row per department, in the column order of DEPARTMENT_HEADERS."""
    return [[dept.id, dept.name, dept.head_of_department] for dept in departments]


def employee_rows(
    employees: list[Employee],
    directory: DepartmentDirectory,
) -> list[list]:
    """One row per employee, with the department resolved to its name."""
    return [
        [
            emp.id,
            emp.name,
            emp.salary,
            department_label(emp, directory),
            emp.manager_id,
            emp.joined_on,
            emp.designation,
        ]
        for emp in employees
    ]


# =========================================================================
# Writers
# =========================================================================


def export_csv(headers: list[str], rows: list[list]) -> io.BytesIO:
    """
    Write a header row and data rows to CSV.

    Returns:
        BytesIO buffer containing UTF-8 CSV with a BOM so Excel picks
        the right encoding.
    """
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(headers)
    writer.writerows(rows)

    buffer = io.BytesIO()
    buffer.write(output.getvalue().encode("utf-8-sig"))
    buffer.seek(0)
    return buffer


def export_excel(
    title: str,
    headers: list[str],
    rows: list[list],
    currency_columns: tuple[int, ...] = (),
) -> io.BytesIO:
    """
    Write a header row and data rows to a single-sheet workbook.

    Args:
        title:            Worksheet title.
        headers:          Column headings.
        rows:             Data rows.
        currency_columns: 1-based column indexes to format as money when
                          the value is numeric.

    Returns:
        BytesIO buffer containing the .xlsx data.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = title

    _write_header_row(ws, headers)

    for row_idx, row in enumerate(rows, start=2):
        for col_idx, value in enumerate(row, start=1):
            cell = ws.cell(row=row_idx, column=col_idx, value=value)
            if col_idx in currency_columns and isinstance(value, (int, float)):
                cell.number_format = _CURRENCY_FORMAT

    _auto_fit_columns(ws)

    buffer = io.BytesIO()
    wb.save(buffer)
    buffer.seek(0)
    return buffer


def export_departments(departments: list[Department], fmt: str) -> io.BytesIO:
    """Departments as ``csv`` or ``xlsx``."""
    rows = department_rows(departments)
    logger.info("Exporting %d departments as %s", len(rows), fmt)
    if fmt == "xlsx":
        return export_excel("Departments", DEPARTMENT_HEADERS, rows)
    return export_csv(DEPARTMENT_HEADERS, rows)


def export_employees(
    employees: list[Employee],
    directory: DepartmentDirectory,
    fmt: str,
) -> io.BytesIO:
    """Employees as ``csv`` or ``xlsx``; salary is money-formatted in Excel."""
    rows = employee_rows(employees, directory)
    logger.info("Exporting %d employees as %s", len(rows), fmt)
    if fmt == "xlsx":
        return export_excel("Employees", EMPLOYEE_HEADERS, rows, currency_columns=(3,))
    return export_csv(EMPLOYEE_HEADERS, rows)


# =========================================================================
# Internal helpers
# =========================================================================


def _write_header_row(ws, headers: list[str]) -> None:
    """Write a styled header row to an Excel worksheet."""
    for col_idx, header in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = _HEADER_ALIGN


def _auto_fit_columns(ws) -> None:
    """Auto-fit column widths based on content (approximate)."""
    for col in ws.columns:
        max_length = 0
        col_letter = get_column_letter(col[0].column)
        for cell in col:
            if cell.value:
                max_length = max(max_length, len(str(cell.value)))
        ws.column_dimensions[col_letter].width = min(max_length + 4, 40)
