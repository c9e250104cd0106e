"""
Reports blueprint: CSV and Excel exports of the roster.
"""

from flask import Blueprint

bp = Blueprint(
    "reports",
    __name__,
    template_folder="templates",
)

from roster.blueprints.reports import routes  # noqa: E402, F401
