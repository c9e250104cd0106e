"""
Employees blueprint: the employee panel.  Reads departments through the
shared read-only directory for its select control and display labels.
"""

from flask import Blueprint

bp = Blueprint(
    "employees",
    __name__,
    template_folder="templates",
)

from roster.blueprints.employees import routes  # noqa: E402, F401
