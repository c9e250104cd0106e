"""
Routes for the main blueprint: host view and health check.
"""

from flask import redirect, url_for

from roster.blueprints.main import bp
from roster.extensions import api
from roster.services.api_client import ApiError

# Tab shown when the host view is opened without one.
DEFAULT_TAB = "departments"


@bp.route("/")
def index():
    """
    Host view.  Mounts the default panel; the tab strip rendered by
    ``host.html`` switches between panels.
    """
    return redirect(url_for(f"{DEFAULT_TAB}.panel"))


@bp.route("/health")
def health_check():
    """
    Health check endpoint for monitoring and load balancers.

    Returns 200 if the app is running and the roster API answers.
    """
    try:
        api.client.get("/departments")
        return {"status": "healthy", "api": "reachable"}, 200
    except ApiError as exc:
        return {"status": "unhealthy", "api": str(exc)}, 503
