"""
Application factory for the Department and Employee Management UI.

Usage::

    from roster import create_app
    app = create_app()           # Uses FLASK_ENV to pick config.
    app = create_app("testing")  # Explicit config for tests.
"""

import logging
import os

from flask import Flask, render_template

from .config import config_by_name
from .extensions import api, csrf


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config_name: One of 'development', 'testing', or 'production'.
                     Defaults to the FLASK_ENV environment variable,
                     falling back to 'development'.

    Returns:
        A fully configured Flask application instance.
    """
    # Resolve the configuration class.
    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")
    config_class = config_by_name.get(config_name)
    if config_class is None:
        raise ValueError(
            f"Unknown config '{config_name}'. "
            f"Valid options: {list(config_by_name.keys())}"
        )

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Refuse to run production with the default secret key.
    if config_name == "production":
        config_class.validate_production_secrets(app.config)

    # -- Configure logging -------------------------------------------------
    _configure_logging(app)

    # -- Initialize extensions ---------------------------------------------
    _register_extensions(app)

    # -- Register blueprints -----------------------------------------------
    _register_blueprints(app)

    # -- Register template helpers -----------------------------------------
    _register_template_helpers(app)

    # -- Register error handlers -------------------------------------------
    _register_error_handlers(app)

    # -- Register custom CLI commands --------------------------------------
    _register_cli_commands(app)

    return app


def _register_extensions(app: Flask) -> None:
    """Bind all Flask extensions to the application instance."""
    api.init_app(app)
    csrf.init_app(app)


def _register_blueprints(app: Flask) -> None:
    """
    Import and register each blueprint with its URL prefix.

    Blueprints are imported inside this function to avoid circular
    imports, so services can safely import ``api`` from extensions at
    module level.
    """
    # pylint: disable=import-outside-toplevel

    # Main blueprint: host view at root URL, health check.
    from .blueprints.main import bp as main_bp

    app.register_blueprint(main_bp)

    # Department panel.
    from .blueprints.departments import bp as departments_bp

    app.register_blueprint(departments_bp, url_prefix="/departments")

    # Employee panel.
    from .blueprints.employees import bp as employees_bp

    app.register_blueprint(employees_bp, url_prefix="/employees")

    # Reports: CSV / Excel exports.
    from .blueprints.reports import bp as reports_bp

    app.register_blueprint(reports_bp, url_prefix="/reports")


def _register_template_helpers(app: Flask) -> None:
    """Set up form tokens and expose them and panel settings to templates."""
    from .decorators import (  # pylint: disable=import-outside-toplevel
        FORM_TOKEN_FIELD,
        form_token,
        init_form_tokens,
    )

    init_form_tokens(app)

    app.jinja_env.globals["form_token"] = form_token
    app.jinja_env.globals["FORM_TOKEN_FIELD"] = FORM_TOKEN_FIELD

    @app.context_processor
    def inject_panel_settings():
        """Make the toast duration available to every template."""
        return {"notification_ms": app.config["NOTIFICATION_DURATION_MS"]}


def _register_error_handlers(app: Flask) -> None:
    """Register custom error pages for common HTTP error codes."""

    @app.errorhandler(404)
    def not_found(error):  # pylint: disable=unused-argument
        """Handle 404 Not Found errors."""
        return render_template("errors/404.html"), 404

    @app.errorhandler(500)
    def internal_error(error):  # pylint: disable=unused-argument
        """Handle 500 Internal Server Error."""
        return render_template("errors/500.html"), 500


def _register_cli_commands(app: Flask) -> None:
    """Register custom Flask CLI commands (e.g., flask api-check)."""
    from .cli import register_commands  # pylint: disable=import-outside-toplevel

    register_commands(app)


def _configure_logging(app: Flask) -> None:
    """
    Set up application logging.

    The level comes from ``LOG_LEVEL``.  In debug mode urllib3's
    connection chatter is quieted so API calls stay readable.
    """
    log_level = app.config.get("LOG_LEVEL", "INFO")
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO))

    if app.debug:
        logging.getLogger("urllib3.connectionpool").setLevel(logging.WARNING)
