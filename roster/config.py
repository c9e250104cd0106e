"""
Application configuration classes.

Each class represents a deployment environment. The factory function
``create_app`` in ``roster/__init__.py`` selects the appropriate config
based on the FLASK_ENV environment variable.

The application keeps no database of its own: every department and
employee record lives behind the external REST API named by
``ROSTER_API_BASE_URL``.
"""

import logging
import os

# Module-level logger for startup warnings emitted by config classes.
_logger = logging.getLogger(__name__)

# =========================================================================
# Sentinel for detecting unset SECRET_KEY in production.
# =========================================================================
_DEFAULT_SECRET_KEY = "dev-secret-change-me"


class BaseConfig:
    """
    Shared configuration values inherited by all environments.

    Secrets and endpoints are loaded from environment variables so they
    never appear in source control.
    """

    # -- Flask core --------------------------------------------------------
    SECRET_KEY: str = os.environ.get("SECRET_KEY", _DEFAULT_SECRET_KEY)

    # -- Session cookie hardening ------------------------------------------
    # The session only carries flash messages and form tokens, but it is
    # still signed with SECRET_KEY and should not leak to scripts.
    SESSION_COOKIE_HTTPONLY: bool = True
    SESSION_COOKIE_SAMESITE: str = "Lax"

    # ProductionConfig overrides this to True (requires HTTPS).
    SESSION_COOKIE_SECURE: bool = False

    PERMANENT_SESSION_LIFETIME: int = int(
        os.environ.get("PERMANENT_SESSION_LIFETIME", "3600")
    )

    # -- Roster REST API ---------------------------------------------------
    ROSTER_API_BASE_URL: str = os.environ.get(
        "ROSTER_API_BASE_URL", "http://localhost:8000"
    )

    # Seconds to wait for connect and for each read.  A hung API server
    # must not pin a worker thread forever.
    ROSTER_API_TIMEOUT: float = float(os.environ.get("ROSTER_API_TIMEOUT", "10"))

    # -- Panel behaviour ---------------------------------------------------
    # How long the success toast stays visible before it auto-dismisses.
    NOTIFICATION_DURATION_MS: int = int(
        os.environ.get("NOTIFICATION_DURATION_MS", "3000")
    )

    # Maximum outstanding single-use form tokens kept per session.
    # Older tokens are dropped first (e.g. from long-abandoned tabs).
    FORM_TOKEN_LIMIT: int = int(os.environ.get("FORM_TOKEN_LIMIT", "20"))

    # Consumed tokens remembered server-side, oldest dropped first.
    FORM_TOKEN_SPENT_LIMIT: int = int(os.environ.get("FORM_TOKEN_SPENT_LIMIT", "10000"))

    # -- Logging -----------------------------------------------------------
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # =====================================================================
    # Production validation helpers
    # =====================================================================

    @classmethod
    def validate_production_secrets(cls, app_config: dict) -> None:
        """
        Verify that required settings are sane for production.

        Called by ``create_app()`` when ``config_name == 'production'``.
        Raises ``RuntimeError`` for hard requirements and logs warnings
        for soft requirements.

        Args:
            app_config: The ``app.config`` dict after loading the
                        config class.

        Raises:
            RuntimeError: If any critical setting is missing or still
                          set to its insecure default value.
        """
        errors: list[str] = []

        # -- SECRET_KEY (hard fail) ----------------------------------------
        if app_config.get("SECRET_KEY") == _DEFAULT_SECRET_KEY:
            errors.append(
                "SECRET_KEY is still the insecure default. "
                "Generate one with: python -c "
                '"import secrets; print(secrets.token_hex(32))"'
            )

        # -- API base URL (hard fail) --------------------------------------
        if not app_config.get("ROSTER_API_BASE_URL"):
            errors.append("ROSTER_API_BASE_URL is not set.")

        if errors:
            combined = "\n  - ".join(errors)
            raise RuntimeError(f"Production configuration errors:\n  - {combined}")

        # -- Plain HTTP API (soft warning) ---------------------------------
        base_url = app_config.get("ROSTER_API_BASE_URL", "")
        if not base_url.startswith("https://"):
            _logger.warning(
                "ROSTER_API_BASE_URL (%s) is not HTTPS; employee records "
                "(including salaries) will cross the network unencrypted.",
                base_url,
            )

        # -- LOG_LEVEL sanity check (soft warning) -------------------------
        if app_config.get("LOG_LEVEL", "").upper() == "DEBUG":
            _logger.warning(
                "LOG_LEVEL=DEBUG is not recommended in production; "
                "request URLs and payload sizes will appear in logs. "
                "Consider INFO or WARNING."
            )


class DevelopmentConfig(BaseConfig):
    """Development environment: verbose logging."""

    DEBUG: bool = True
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "DEBUG")


class TestingConfig(BaseConfig):
    """
    Testing environment.

    WTF_CSRF_ENABLED is disabled so form submissions in tests don't
    need CSRF tokens.  The API base URL points at a host that is never
    resolved; tests replace the HTTP pool with an in-memory fake.
    """

    TESTING: bool = True
    WTF_CSRF_ENABLED: bool = False

    ROSTER_API_BASE_URL: str = "http://roster-api.test"
    ROSTER_API_TIMEOUT: float = 1.0
    LOG_LEVEL: str = "DEBUG"


class ProductionConfig(BaseConfig):
    """
    Production environment: strict settings, no debug output.

    The application factory calls ``validate_production_secrets()`` at
    startup and will refuse to launch if critical values are missing.
    """

    DEBUG: bool = False
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "WARNING")

    # -- Session cookie: require HTTPS in production -----------------------
    SESSION_COOKIE_SECURE: bool = True


# Lookup dict used by the application factory.
config_by_name: dict[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}
