"""
Employee record: references its department through ``department_id``.

The embedded ``department`` comes from the API's list response and is
display-only; the editable relation is ``department_id``.  Manager is a
free-form identifier that is never checked against the employee list.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from roster.models.department import Department
from roster.models.fields import coerce_number, date_part, is_blank, normalize_date


@dataclass
class Employee:
    """An employee as listed by the API, or a draft from the editor."""

    LABEL: ClassVar[str] = "Employee"

    REQUIRED_FIELDS: ClassVar[dict[str, str]] = {
        "name": "Employee name is required.",
        "salary": "Salary is required.",
        "department_id": "Department is required.",
        "manager_id": "Manager is required.",
        "date_of_joining": "Date of joining is required.",
        "designation": "Designation is required.",
    }

    id: Any = None
    name: str = ""
    salary: Any = ""
    department_id: Any = ""
    manager_id: Any = ""
    date_of_joining: Any = ""
    designation: str = ""
    department: Department | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Employee":
        """Build an Employee from an API record, keeping the embedded department."""
        # The API may send JSON null for the embedded department.
        embedded = data.get("department")
        return cls(
            id=data.get("e_no"),
            name=data.get("e_name") or "",
            salary=data.get("salary", ""),
            department_id=data.get("d_no", ""),
            manager_id=data.get("mgr_no", ""),
            date_of_joining=data.get("date_of_join") or "",
            designation=data.get("designation") or "",
            department=Department.from_api(embedded) if isinstance(embedded, dict) else None,
        )

    @classmethod
    def from_form(cls, form) -> "Employee":
        """Build a draft from submitted form fields."""
        return cls(
            id=form.get("id") or None,
            name=form.get("name", ""),
            salary=form.get("salary", ""),
            department_id=form.get("department_id", ""),
            manager_id=form.get("manager_id", ""),
            date_of_joining=form.get("date_of_joining", ""),
            designation=form.get("designation", ""),
        )

    @property
    def joined_on(self) -> str:
        """Date of joining without any time-of-day suffix, for display."""
        return date_part(self.date_of_joining)

    def to_api(self) -> dict[str, Any]:
        """
        Serialize every editable field for POST or PUT.

        ``date_of_join`` is always exactly ``YYYY-MM-DD``.

        Raises:
            FieldError: If the date of joining cannot be read as a date.
        """
        return {
            "e_name": str(self.name).strip(),
            "salary": coerce_number(self.salary),
            "d_no": coerce_number(self.department_id),
            "mgr_no": str(self.manager_id).strip(),
            "date_of_join": normalize_date(self.date_of_joining, field="date_of_joining"),
            "designation": str(self.designation).strip(),
        }

    def missing_fields(self) -> dict[str, str]:
        """Return a message for every required field that is blank."""
        return {
            field: message
            for field, message in self.REQUIRED_FIELDS.items()
            if is_blank(getattr(self, field))
        }

    def editable_copy(self) -> "Employee":
        """Draft seeded from this record, with the date ready for a date input."""
        return Employee(
            id=self.id,
            name=self.name,
            salary=self.salary,
            department_id=self.department_id,
            manager_id=self.manager_id,
            date_of_joining=self.joined_on,
            designation=self.designation,
        )

    def __repr__(self) -> str:
        return f"<Employee {self.id}: {self.name}>"
