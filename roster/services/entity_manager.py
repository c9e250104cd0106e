"""
Entity manager: runs a panel's transitions against the roster API.

``panel_state`` decides *what* should happen; this module performs the
API calls those decisions describe and feeds each result back into the
state.  One ``EntityManager`` lives for one request, so a fetch can
never outlive the view that asked for it.

Usage::

    manager = EntityManager(Department, department_service.RESOURCE)
    manager.list()
    if manager.submit(draft):
        ...  # manager.state.notification holds the success message
"""

import logging
from typing import Any, Callable, NamedTuple

from roster.services import panel_state
from roster.services.api_client import ApiError
from roster.services.panel_state import Effect, PanelState

logger = logging.getLogger(__name__)


class Resource(NamedTuple):
    """The four API calls an entity manager needs, as plain callables."""

    list: Callable[[], list]
    create: Callable[[dict[str, Any]], Any]
    update: Callable[[Any, dict[str, Any]], Any]
    delete: Callable[[Any], Any]


class EntityManager:
    """
    Holds one panel's ``PanelState`` and executes its effects.

    Args:
        record_type:              ``Department`` or ``Employee``.
        resource:                 API calls for that record type.
        notification_duration_ms: Visible time of the success message.
    """

    def __init__(
        self,
        record_type: type,
        resource: Resource,
        notification_duration_ms: int = panel_state.NOTIFICATION_DURATION_MS,
    ) -> None:
        self.resource = resource
        self.notification_duration_ms = notification_duration_ms
        self.state: PanelState = panel_state.initial_state(record_type)

    # =================================================================
    # Panel operations
    # =================================================================

    def list(self) -> PanelState:
        """Fetch the whole collection and replace ``items``."""
        self.state, effect = panel_state.start_list(self.state)
        self._run_list(effect)
        return self.state

    def open_editor(self, record=None) -> PanelState:
        self.state = panel_state.open_editor(self.state, record)
        return self.state

    def close_editor(self) -> PanelState:
        self.state = panel_state.close_editor(self.state)
        return self.state

    def submit(self, draft, refresh: bool = True) -> bool:
        """
        Validate and send ``draft`` as a create or an update.

        Args:
            draft:   The record from the editor.
            refresh: Refetch the collection after success.  Routes that
                     redirect to the panel pass False because the
                     redirected request lists again anyway.

        Returns:
            True if the API accepted the change.
        """
        self.state, effect = panel_state.submit(self.state, draft)
        if effect is None:
            if self.state.field_errors:
                logger.debug(
                    "%s draft rejected: %s",
                    self.state.label,
                    ", ".join(sorted(self.state.field_errors)),
                )
            return False
        return self._run_mutation(effect, refresh)

    def request_delete(self, entity_id) -> PanelState:
        self.state = panel_state.request_delete(self.state, entity_id)
        return self.state

    def cancel_delete(self) -> PanelState:
        self.state = panel_state.cancel_delete(self.state)
        return self.state

    def confirm_delete(self, refresh: bool = True) -> bool:
        """Delete the record awaiting confirmation.  True on success."""
        self.state, effect = panel_state.confirm_delete(self.state)
        if effect is None:
            return False
        return self._run_mutation(effect, refresh)

    def delete(self, entity_id, refresh: bool = True) -> bool:
        """Request and confirm in one step, for already-confirmed callers."""
        self.request_delete(entity_id)
        return self.confirm_delete(refresh)

    # =================================================================
    # Effect execution
    # =================================================================

    def _run_list(self, effect: Effect) -> None:
        try:
            items = self.resource.list()
        except ApiError as exc:
            logger.error("Failed to fetch %s list: %s", self.state.label.lower(), exc)
            self.state = panel_state.list_failed(self.state, str(exc))
            return
        self.state = panel_state.list_loaded(self.state, items)
        logger.debug("Fetched %d %s record(s)", len(self.state.items), self.state.label.lower())

    def _run_mutation(self, effect: Effect, refresh: bool) -> bool:
        label = self.state.label.lower()
        try:
            if effect.action == panel_state.CREATE:
                self.resource.create(effect.payload)
            elif effect.action == panel_state.UPDATE:
                self.resource.update(effect.entity_id, effect.payload)
            elif effect.action == panel_state.DELETE:
                self.resource.delete(effect.entity_id)
            else:
                raise ValueError(f"Unknown mutation '{effect.action}'.")
        except ApiError as exc:
            logger.error(
                "Failed to %s %s %s: %s",
                effect.action,
                label,
                effect.entity_id if effect.entity_id is not None else "(new)",
                exc,
            )
            self.state = panel_state.mutation_failed(self.state, str(exc))
            return False

        logger.info(
            "%s %s %s",
            effect.action.capitalize(),
            label,
            effect.entity_id if effect.entity_id is not None else "(new)",
        )
        self.state, list_effect = panel_state.mutation_succeeded(
            self.state, effect, duration_ms=self.notification_duration_ms
        )
        if refresh:
            self._run_list(list_effect)
        return True
