"""
Helpers shared by the department and employee panel routes.

A panel route renders either the full host page (normal navigation) or
just the panel body (HTMX tab switch, ``HX-Request: true``).
"""

from flask import flash, render_template, request


def is_htmx_request() -> bool:
    """True when the request was issued by HTMX."""
    return request.headers.get("HX-Request") == "true"


def find_record(items, entity_id):
    """Return the record in ``items`` whose id matches, comparing as text."""
    if entity_id is None:
        return None
    wanted = str(entity_id)
    for record in items:
        if str(record.id) == wanted:
            return record
    return None


def flash_outcome(manager) -> None:
    """Flash the manager's success notification or its error message."""
    state = manager.state
    if state.notification is not None:
        flash(state.notification.message, state.notification.category)
    elif state.error:
        flash(state.error, "danger")


def render_panel(tab: str, manager, **context):
    """
    Render the panel for ``tab`` from the manager's current state.

    Args:
        tab:     Blueprint / template folder name (``departments``,
                 ``employees``).
        manager: The request's ``EntityManager``.
        context: Extra template variables.
    """
    state = manager.state
    htmx = is_htmx_request()
    template = f"{tab}/_panel.html" if htmx else f"{tab}/panel.html"
    return render_template(
        template,
        active_tab=tab,
        htmx=htmx,
        panel=state,
        manager=manager,
        pending_record=find_record(state.items, state.pending_delete),
        **context,
    )
