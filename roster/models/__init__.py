"""
Model package: plain dataclasses for the records served by the roster API.

  - department.py -> Department (leaf entity)
  - employee.py   -> Employee (many-to-one to Department via department_id)
  - fields.py     -> presence checks and pre-submit normalization
"""

from roster.models.department import Department  # noqa: F401
from roster.models.employee import Employee  # noqa: F401
from roster.models.fields import FieldError  # noqa: F401
