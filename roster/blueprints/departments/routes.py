"""
Routes for the departments blueprint.

Each request builds a fresh ``EntityManager``, lists the departments and
renders the panel.  Mutations follow post/redirect/get: the success
notification is flashed and the redirected request performs the refetch.
Deletes always go through a confirmation step.
"""

import logging

from flask import flash, redirect, request, url_for

from roster.blueprints.departments import bp
from roster.blueprints.panel_views import find_record, flash_outcome, render_panel
from roster.decorators import single_submission
from roster.models.department import Department
from roster.services import department_service, panel_state

logger = logging.getLogger(__name__)


@bp.route("/")
def panel():
    """List all departments."""
    manager = department_service.department_manager()
    manager.list()
    return render_panel("departments", manager)


@bp.route("/new")
def new():
    """Department list with an empty editor open."""
    manager = department_service.department_manager()
    manager.list()
    manager.open_editor()
    return render_panel("departments", manager)


@bp.route("/<department_id>/edit")
def edit(department_id):
    """Department list with the editor seeded from one record."""
    manager = department_service.department_manager()
    manager.list()
    record = find_record(manager.state.items, department_id)
    if record is None:
        if manager.state.status != panel_state.ERROR:
            flash("Department not found.", "warning")
        return render_panel("departments", manager)
    manager.open_editor(record)
    return render_panel("departments", manager)


@bp.route("/save", methods=["POST"])
@single_submission("departments.panel")
def save():
    """
    Create or update a department from the editor form.

    A draft with an ``id`` is PATCHed, otherwise POSTed.  Validation
    failures and API errors re-render the panel with the editor open.
    """
    manager = department_service.department_manager()
    draft = Department.from_form(request.form)

    if manager.submit(draft, refresh=False):
        flash_outcome(manager)
        return redirect(url_for("departments.panel"))

    flash_outcome(manager)
    manager.list()
    return render_panel("departments", manager)


@bp.route("/<department_id>/delete", methods=["POST"])
@single_submission("departments.panel")
def delete(department_id):
    """
    Delete a department after confirmation.

    The first POST (without ``confirmed=1``) renders the confirmation
    prompt; the prompt's own POST performs the delete.
    """
    manager = department_service.department_manager()

    if request.form.get("confirmed") != "1":
        manager.list()
        manager.request_delete(department_id)
        return render_panel("departments", manager)

    manager.delete(department_id, refresh=False)
    flash_outcome(manager)
    return redirect(url_for("departments.panel"))
