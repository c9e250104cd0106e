"""
Routes for the employees blueprint.

Mirrors the department panel: list, editor, save and confirmed delete.
On every render the panel also loads the department directory, which
feeds the department select and resolves names that the API did not
embed.  A failed department fetch is surfaced like any other failure
but does not stop the employee table from rendering.
"""

import logging

from flask import flash, redirect, request, url_for

from roster.blueprints.employees import bp
from roster.blueprints.panel_views import find_record, flash_outcome, render_panel
from roster.decorators import single_submission
from roster.models.employee import Employee
from roster.services import employee_service, panel_state

logger = logging.getLogger(__name__)


def _render(manager):
    """Render the employee panel, loading the department directory first."""
    directory = manager.directory
    directory.load()
    if directory.error:
        flash(directory.error, "danger")
    return render_panel(
        "employees",
        manager,
        departments=directory.departments,
    )


@bp.route("/")
def panel():
    """List all employees with their department names."""
    manager = employee_service.employee_manager()
    manager.list()
    return _render(manager)


@bp.route("/new")
def new():
    manager = employee_service.employee_manager()
    manager.list()
    manager.open_editor()
    return _render(manager)


@bp.route("/<employee_id>/edit")
def edit(employee_id):
    """
    Employee list with the editor seeded from one record.

    The draft keeps ``department_id`` even when that department no
    longer exists; the select then shows its placeholder.
    """
    manager = employee_service.employee_manager()
    manager.list()
    record = find_record(manager.state.items, employee_id)
    if record is None:
        if manager.state.status != panel_state.ERROR:
            flash("Employee not found.", "warning")
        return _render(manager)
    manager.open_editor(record)
    return _render(manager)


@bp.route("/save", methods=["POST"])
@single_submission("employees.panel")
def save():
    """
    Create or update an employee from the editor form.

    A draft with an ``id`` is PUT in full, otherwise POSTed.  The date of
    joining is normalized to ``YYYY-MM-DD`` just before sending.
    """
    manager = employee_service.employee_manager()
    draft = Employee.from_form(request.form)

    if manager.submit(draft, refresh=False):
        flash_outcome(manager)
        return redirect(url_for("employees.panel"))

    flash_outcome(manager)
    manager.list()
    return _render(manager)


@bp.route("/<employee_id>/delete", methods=["POST"])
@single_submission("employees.panel")
def delete(employee_id):
    """Delete an employee after confirmation (same flow as departments)."""
    manager = employee_service.employee_manager()

    if request.form.get("confirmed") != "1":
        manager.list()
        manager.request_delete(employee_id)
        return _render(manager)

    manager.delete(employee_id, refresh=False)
    flash_outcome(manager)
    return redirect(url_for("employees.panel"))
