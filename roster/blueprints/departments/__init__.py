"""
Departments blueprint: the department panel (list, create, edit, delete).
"""

from flask import Blueprint

bp = Blueprint(
    "departments",
    __name__,
    template_folder="templates",
)

# Import routes after blueprint creation to avoid circular imports.
from roster.blueprints.departments import routes  # noqa: E402, F401
