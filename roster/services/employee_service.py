"""
Employee service: employee records through the roster API.

Employees reference a department by ``department_id``.  The department
data needed for display comes from an injected ``DepartmentDirectory``;
this module never calls the department panel's code directly.
"""

import logging
from typing import Any

from flask import current_app

from roster.extensions import api
from roster.models.employee import Employee
from roster.services.department_service import DepartmentDirectory
from roster.services.entity_manager import EntityManager, Resource

logger = logging.getLogger(__name__)


# -- API calls -------------------------------------------------------------


def get_employees() -> list[Employee]:
    """
    Return every employee, each with the department the API embedded.

    Raises:
        ApiError: If the request fails.
    """
    records = api.client.get("/employees") or []
    return [Employee.from_api(record) for record in records]


def create_employee(payload: dict[str, Any]) -> Employee | None:
    created = api.client.post("/employees", payload)
    return Employee.from_api(created) if isinstance(created, dict) else None


def update_employee(employee_id, payload: dict[str, Any]) -> Employee | None:
    """PUT the full employee record; every editable field is replaced."""
    updated = api.client.put(f"/employees/{employee_id}", payload)
    return Employee.from_api(updated) if isinstance(updated, dict) else None


def delete_employee(employee_id) -> None:
    api.client.delete(f"/employees/{employee_id}")


RESOURCE = Resource(
    list=get_employees,
    create=create_employee,
    update=update_employee,
    delete=delete_employee,
)


# -- Display helpers -------------------------------------------------------


def department_label(employee: Employee, directory: DepartmentDirectory) -> str:
    """
    Name of the employee's department for the table.

    Prefers the department the API embedded in the employee record, then
    the directory entry for ``department_id``, then ``N/A``.  A
    ``department_id`` that no longer exists is not an error.
    """
    if employee.department is not None and employee.department.name:
        return employee.department.name
    return directory.name_for(employee.department_id)


class EmployeeManager(EntityManager):
    """
    Entity manager for the employee panel.

    Adds the read-only department directory used by the editor's select
    control and by ``department_label``.
    """

    def __init__(
        self,
        directory: DepartmentDirectory,
        resource: Resource = RESOURCE,
        notification_duration_ms: int | None = None,
    ) -> None:
        if notification_duration_ms is None:
            notification_duration_ms = current_app.config["NOTIFICATION_DURATION_MS"]
        super().__init__(Employee, resource, notification_duration_ms)
        self.directory = directory

    def department_label(self, employee: Employee) -> str:
        return department_label(employee, self.directory)


def employee_manager(directory: DepartmentDirectory | None = None) -> EmployeeManager:
    """Employee manager for the current request, with its own directory."""
    return EmployeeManager(directory or DepartmentDirectory())

