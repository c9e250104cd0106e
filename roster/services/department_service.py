"""
Department service: department records through the roster API.

Module-level functions wrap the four department endpoints and convert
API records into ``Department`` dataclasses.  ``DepartmentDirectory`` is
the read-only view of the same data that the employee panel uses to fill
its department select and to label each employee's department.
"""

import logging
from typing import Any

from flask import current_app

from roster.extensions import api
from roster.models.department import Department
from roster.services.api_client import ApiError
from roster.services.entity_manager import EntityManager, Resource

logger = logging.getLogger(__name__)

# Label shown when an employee's department cannot be resolved.
MISSING_DEPARTMENT_LABEL = "N/A"


# -- API calls -------------------------------------------------------------


def get_departments() -> list[Department]:
    """
    Return every department known to the API, in server order.

    Raises:
        ApiError: If the request fails.
    """
    records = api.client.get("/departments") or []
    return [Department.from_api(record) for record in records]


def create_department(payload: dict[str, Any]) -> Department | None:
    """POST a new department; returns the created record when echoed back."""
    created = api.client.post("/departments", payload)
    return Department.from_api(created) if isinstance(created, dict) else None


def update_department(department_id, payload: dict[str, Any]) -> Department | None:
    """PATCH the given fields of an existing department."""
    updated = api.client.patch(f"/departments/{department_id}", payload)
    return Department.from_api(updated) if isinstance(updated, dict) else None


def delete_department(department_id) -> None:
    """
    DELETE a department.

    Employees that still reference it are not checked; what happens to
    their department link is up to the API server.
    """
    api.client.delete(f"/departments/{department_id}")


RESOURCE = Resource(
    list=get_departments,
    create=create_department,
    update=update_department,
    delete=delete_department,
)


def department_manager() -> EntityManager:
    """Entity manager for the department panel of the current request."""
    return EntityManager(
        Department,
        RESOURCE,
        notification_duration_ms=current_app.config["NOTIFICATION_DURATION_MS"],
    )


# -- Read-only directory ---------------------------------------------------


class DepartmentDirectory:
    """
    Read-only department lookup shared with the employee panel.

    The collection is fetched lazily, once per directory instance.  A
    failed fetch leaves the directory empty and keeps the message in
    ``error`` so the caller can surface it; lookups then fall back to
    ``MISSING_DEPARTMENT_LABEL``.

    Args:
        loader: Callable returning a list of ``Department``.  Defaults to
                ``get_departments``.
    """

    def __init__(self, loader=None) -> None:
        self._loader = loader or get_departments
        self._departments: list[Department] | None = None
        self.error: str | None = None

    def load(self) -> list[Department]:
        """Fetch the departments if that has not happened yet."""
        if self._departments is None:
            try:
                self._departments = list(self._loader())
            except ApiError as exc:
                logger.error("Failed to fetch departments for lookup: %s", exc)
                self.error = str(exc)
                self._departments = []
        return self._departments

    @property
    def departments(self) -> list[Department]:
        return self.load()

    def get(self, department_id) -> Department | None:
        """Return the department whose id matches, comparing as text."""
        if department_id is None or department_id == "":
            return None
        wanted = str(department_id)
        for department in self.load():
            if str(department.id) == wanted:
                return department
        return None

    def name_for(self, department_id) -> str:
        """Department name for ``department_id``, or ``N/A``."""
        department = self.get(department_id)
        return department.name if department and department.name else MISSING_DEPARTMENT_LABEL
