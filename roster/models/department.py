"""
Department record: a leaf entity with no foreign keys.

The API speaks ``d_no`` / ``d_name`` / ``dept_hod``; the rest of the
application uses the attribute names below.  ``from_api`` and
``to_api`` are the only places that know the wire keys.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from roster.models.fields import is_blank


@dataclass
class Department:
    """
    An organizational department.

    ``id`` is None for a draft that has not been created yet and holds
    the server-assigned identifier afterwards.
    """

    LABEL: ClassVar[str] = "Department"

    # Field name -> message shown when the field is missing.
    REQUIRED_FIELDS: ClassVar[dict[str, str]] = {
        "name": "Department name is required.",
        "head_of_department": "HOD name is required.",
    }

    id: Any = None
    name: str = ""
    head_of_department: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Department":
        """Build a Department from an API record."""
        return cls(
            id=data.get("d_no"),
            name=data.get("d_name") or "",
            head_of_department=data.get("dept_hod") or "",
        )

    @classmethod
    def from_form(cls, form) -> "Department":
        """Build a draft from submitted form fields."""
        return cls(
            id=form.get("id") or None,
            name=form.get("name", ""),
            head_of_department=form.get("head_of_department", ""),
        )

    def to_api(self) -> dict[str, Any]:
        """
        Serialize the editable fields for POST or PATCH.

        The identifier travels in the URL, never in the body.
        """
        return {
            "d_name": self.name.strip(),
            "dept_hod": self.head_of_department.strip(),
        }

    def missing_fields(self) -> dict[str, str]:
        """Return a message for every required field that is blank."""
        return {
            field: message
            for field, message in self.REQUIRED_FIELDS.items()
            if is_blank(getattr(self, field))
        }

    def editable_copy(self) -> "Department":
        """Draft seeded from this record."""
        return Department(
            id=self.id,
            name=self.name,
            head_of_department=self.head_of_department,
        )

    def __repr__(self) -> str:
        return f"<Department {self.id}: {self.name}>"
