"""
Routes for the reports blueprint: roster exports.

Provides department and employee downloads as CSV or Excel.  Data is
fetched from the API at export time.
"""

from flask import abort, flash, make_response, redirect, url_for

from roster.blueprints.reports import bp
from roster.services import department_service, employee_service, export_service
from roster.services.api_client import ApiError
from roster.services.department_service import DepartmentDirectory


def _download(buffer, fmt: str, basename: str):
    """Wrap an export buffer in an attachment response."""
    response = make_response(buffer.read())
    response.headers["Content-Type"] = export_service.FORMATS[fmt]
    response.headers["Content-Disposition"] = (
        f"attachment; filename={basename}.{fmt}"
    )
    return response


@bp.route("/export/departments/<fmt>")
def export_departments(fmt):
    """
    Export all departments as CSV or Excel.

    Args:
        fmt: Export format: 'csv' or 'xlsx'.
    """
    if fmt not in export_service.FORMATS:
        abort(404)
    try:
        departments = department_service.get_departments()
    except ApiError as exc:
        flash(f"Export failed: {exc}", "danger")
        return redirect(url_for("departments.panel"))

    buffer = export_service.export_departments(departments, fmt)
    return _download(buffer, fmt, "departments")


@bp.route("/export/employees/<fmt>")
def export_employees(fmt):
    """
    Export all employees, with department names, as CSV or Excel.

    A failed department lookup does not stop the download; the affected
    names read "N/A" and a warning waits on the next page.
    """
    if fmt not in export_service.FORMATS:
        abort(404)
    try:
        employees = employee_service.get_employees()
    except ApiError as exc:
        flash(f"Export failed: {exc}", "danger")
        return redirect(url_for("employees.panel"))

    directory = DepartmentDirectory()
    directory.load()
    if directory.error:
        flash(
            f"Department names unavailable in the export: {directory.error}",
            "warning",
        )

    buffer = export_service.export_employees(employees, directory, fmt)
    return _download(buffer, fmt, "employees")
