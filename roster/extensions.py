"""
Flask extension instances.

Extensions are created here without binding to an application so that
the application factory can call ``init_app()`` on each one during
``create_app()``.  This avoids circular imports and follows the
standard Flask extension pattern.
"""

from flask import Flask, current_app
from flask_wtf.csrf import CSRFProtect

from roster.services.api_client import RosterApiClient


class RosterApi:
    """
    Binds one ``RosterApiClient`` to each application.

    Services reach the client through ``api.client`` inside an app or
    request context, so they never read API configuration themselves.
    """

    extension_name = "roster_api"

    def __init__(self, app: Flask | None = None) -> None:
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Create the client from ``ROSTER_API_*`` settings."""
        app.extensions[self.extension_name] = RosterApiClient(
            app.config["ROSTER_API_BASE_URL"],
            timeout=app.config["ROSTER_API_TIMEOUT"],
        )

    @property
    def client(self) -> RosterApiClient:
        """The client bound to the current application."""
        return current_app.extensions[self.extension_name]


# -- Roster REST API -------------------------------------------------------
# The ``api`` instance is imported by services throughout the app.
api = RosterApi()

# -- CSRF protection for form submissions ---------------------------------
csrf = CSRFProtect()
