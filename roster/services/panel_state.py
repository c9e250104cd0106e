"""
Panel state: the list/create/edit/delete interaction shared by the
department and employee panels.

Every operation is a pure function of ``(state, input)`` that returns the
next ``PanelState`` and, where the API must be called, an ``Effect``
describing the call.  Nothing here performs I/O; ``EntityManager`` in
``entity_manager.py`` executes effects and feeds the results back through
``list_loaded`` / ``list_failed`` / ``mutation_succeeded`` /
``mutation_failed``.

State transitions::

    start_list ──► list_loaded | list_failed
    open_editor ──► submit ──► (field errors, no effect)
                          └──► Effect(create|update) ──► mutation_succeeded ──► start_list
                                                    └──► mutation_failed
    request_delete ──► confirm_delete ──► Effect(delete) ──► (same as above)
                   └──► cancel_delete

A panel never has two mutations outstanding: ``submit`` and
``confirm_delete`` return no effect while ``in_flight`` is set.
"""

from dataclasses import dataclass, field, replace
from typing import Any

from roster.models.fields import FieldError, is_blank

# -- Loading status --------------------------------------------------------
LOADING = "loading"
LOADED = "loaded"
ERROR = "error"

# -- Effect actions --------------------------------------------------------
LIST = "list"
CREATE = "create"
UPDATE = "update"
DELETE = "delete"

# Past-tense verb used in the success notification for each mutation.
_VERBS = {CREATE: "added", UPDATE: "updated", DELETE: "deleted"}

# Default visible duration of the success notification.
NOTIFICATION_DURATION_MS = 3000


# =========================================================================
# Data classes
# =========================================================================


@dataclass(frozen=True)
class Effect:
    """An API call the runner must perform."""

    action: str
    entity_id: Any = None
    payload: dict[str, Any] | None = None


@dataclass(frozen=True)
class Notification:
    """A transient message that hides itself after ``duration_ms``."""

    message: str
    category: str = "success"
    duration_ms: int = NOTIFICATION_DURATION_MS


@dataclass(frozen=True)
class PanelState:
    """
    Everything one panel instance knows.

    Attributes:
        record_type:    ``Department`` or ``Employee``; supplies the label,
                        the empty draft and the required-field messages.
        items:          Records from the last successful fetch.
        status:         ``loading``, ``loaded`` or ``error``.
        error:          Message of the last failed fetch or mutation.
        draft:          Record in the editor; None when the editor is closed.
        field_errors:   Field name -> validation message for ``draft``.
        notification:   Success message to show, if any.
        pending_delete: Identifier waiting for delete confirmation.
        in_flight:      True while a create/update/delete is outstanding.
    """

    record_type: type
    items: tuple = ()
    status: str = LOADING
    error: str | None = None
    draft: Any = None
    field_errors: dict[str, str] = field(default_factory=dict)
    notification: Notification | None = None
    pending_delete: Any = None
    in_flight: bool = False

    @property
    def label(self) -> str:
        return self.record_type.LABEL

    @property
    def editor_open(self) -> bool:
        return self.draft is not None

    @property
    def is_editing(self) -> bool:
        """True when the open draft is an existing record."""
        return self.draft is not None and not is_blank(self.draft.id)


def initial_state(record_type: type) -> PanelState:
    """A freshly mounted panel: nothing fetched yet."""
    return PanelState(record_type=record_type)


# =========================================================================
# list()
# =========================================================================


def start_list(state: PanelState) -> tuple[PanelState, Effect]:
    """Enter the loading state and ask for the full collection."""
    return replace(state, status=LOADING), Effect(LIST)


def list_loaded(state: PanelState, items) -> PanelState:
    """Replace the collection wholesale with a successful fetch."""
    return replace(state, items=tuple(items), status=LOADED)


def list_failed(state: PanelState, message: str) -> PanelState:
    """Hold the fetch error; the previous items are kept but not trusted."""
    return replace(state, status=ERROR, error=message)


# =========================================================================
# validate() / openEditor()
# =========================================================================


def validate(draft) -> dict[str, str]:
    """
    Return a message for every required field of ``draft`` that is
    absent or blank after trimming.  An empty dict means valid.
    """
    return draft.missing_fields()


def open_editor(state: PanelState, record=None) -> PanelState:
    """
    Open the editor on a copy of ``record``, or on an empty draft.

    Field errors from a previous attempt are always cleared.
    """
    draft = record.editable_copy() if record is not None else state.record_type()
    return replace(state, draft=draft, field_errors={}, pending_delete=None)


def close_editor(state: PanelState) -> PanelState:
    return replace(state, draft=None, field_errors={})


# =========================================================================
# submit()
# =========================================================================


def submit(state: PanelState, draft) -> tuple[PanelState, Effect | None]:
    """
    Validate ``draft`` and describe the create or update call.

    Returns no effect (and leaves the editor open on ``draft``) when a
    required field is missing, when a value cannot be normalized, or
    when another mutation is still in flight.
    """
    if state.in_flight:
        return state, None

    errors = validate(draft)
    if errors:
        return replace(state, draft=draft, field_errors=errors), None

    try:
        payload = draft.to_api()
    except FieldError as exc:
        return replace(state, draft=draft, field_errors={exc.field: exc.message}), None

    if is_blank(draft.id):
        effect = Effect(CREATE, payload=payload)
    else:
        effect = Effect(UPDATE, entity_id=draft.id, payload=payload)

    return (
        replace(state, draft=draft, field_errors={}, error=None, in_flight=True),
        effect,
    )


# =========================================================================
# delete()
# =========================================================================


def request_delete(state: PanelState, entity_id) -> PanelState:
    """Ask for confirmation before deleting ``entity_id``."""
    return replace(state, pending_delete=entity_id)


def cancel_delete(state: PanelState) -> PanelState:
    return replace(state, pending_delete=None)


def confirm_delete(state: PanelState) -> tuple[PanelState, Effect | None]:
    """Describe the delete call for the pending identifier, if any."""
    if state.in_flight or state.pending_delete is None:
        return state, None
    return (
        replace(state, error=None, in_flight=True),
        Effect(DELETE, entity_id=state.pending_delete),
    )


# =========================================================================
# Mutation results
# =========================================================================


def mutation_succeeded(
    state: PanelState,
    effect: Effect,
    duration_ms: int = NOTIFICATION_DURATION_MS,
) -> tuple[PanelState, Effect]:
    """
    Close the editor, announce the change and refetch the collection.

    The in-memory list is never patched locally; the follow-up ``list``
    effect makes the server's post-mutation collection authoritative.
    """
    notification = Notification(
        f"{state.label} {_VERBS[effect.action]} successfully!",
        duration_ms=duration_ms,
    )
    state = replace(
        state,
        in_flight=False,
        draft=None,
        field_errors={},
        pending_delete=None,
        notification=notification,
    )
    return start_list(state)


def mutation_failed(state: PanelState, message: str) -> PanelState:
    """Surface the failure; an open editor keeps its draft for another try."""
    return replace(state, in_flight=False, pending_delete=None, error=message)


# =========================================================================
# Dismissals
# =========================================================================


def dismiss_notification(state: PanelState) -> PanelState:
    return replace(state, notification=None)


def dismiss_error(state: PanelState) -> PanelState:
    return replace(state, error=None)
