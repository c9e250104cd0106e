"""
Route decorators and helpers guarding form submissions.

Every rendered panel carries one single-use form token.  Outstanding
tokens are listed in the Flask session; consumed tokens are recorded in
a server-side ledger held by the application, so replaying an older
session cookie cannot revive a spent token.  Mutation routes wrapped in
``@single_submission`` consume the token before doing anything else, so
a second POST of the same form (a double click or a browser resubmit)
never reaches the API::

    @bp.route("/save", methods=["POST"])
    @single_submission("departments.panel")
    def save():
        ...

The ledger lives in process memory.  Waitress serves from one process
with many threads, which the lock below covers.
"""

import logging
import secrets
import threading
from collections import OrderedDict
from functools import wraps

from flask import Flask, current_app, flash, g, redirect, request, session, url_for

logger = logging.getLogger(__name__)

# Session key holding the outstanding tokens, oldest first.
_SESSION_KEY = "form_tokens"

# ``app.extensions`` key of the spent-token ledger.
_LEDGER_KEY = "form_token_ledger"

# Name of the hidden input carrying the token.
FORM_TOKEN_FIELD = "form_token"


class SpentTokenLedger:
    """
    Bounded, thread-safe set of consumed form tokens.

    Args:
        limit: Number of tokens remembered; the oldest is forgotten first.
    """

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self._spent: OrderedDict[str, None] = OrderedDict()
        self._lock = threading.Lock()

    def spend(self, token: str) -> bool:
        """Record ``token`` as used.  False if it was already spent."""
        with self._lock:
            if token in self._spent:
                return False
            self._spent[token] = None
            while len(self._spent) > self.limit:
                self._spent.popitem(last=False)
            return True


def init_form_tokens(app: Flask) -> None:
    """Attach a fresh spent-token ledger to ``app``."""
    app.extensions[_LEDGER_KEY] = SpentTokenLedger(
        app.config.get("FORM_TOKEN_SPENT_LIMIT", 10000)
    )


def form_token() -> str:
    """
    Return this request's form token, issuing it on first use.

    Exposed to templates as ``form_token()``; every form rendered in
    the same response shares the token.
    """
    token = g.get("form_token")
    if token is None:
        token = secrets.token_urlsafe(16)
        limit = current_app.config.get("FORM_TOKEN_LIMIT", 20)
        tokens = session.get(_SESSION_KEY, [])
        tokens.append(token)
        session[_SESSION_KEY] = tokens[-limit:]
        g.form_token = token
    return token


def consume_form_token(token: str | None) -> bool:
    """
    Spend ``token``.  False if the session never listed it or the
    ledger already holds it.
    """
    tokens = session.get(_SESSION_KEY, [])
    if not token or token not in tokens:
        return False
    tokens.remove(token)
    session[_SESSION_KEY] = tokens
    return current_app.extensions[_LEDGER_KEY].spend(token)


def single_submission(fallback_endpoint: str):
    """
    Decorator that rejects a POST whose form token was already used.

    Args:
        fallback_endpoint: Endpoint to redirect to when the token is
                           missing, unknown or spent.

    Usage::

        @single_submission("employees.panel")
        def delete(employee_id):
            ...
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not consume_form_token(request.form.get(FORM_TOKEN_FIELD)):
                logger.warning(
                    "Rejected repeated or stale submission: %s %s",
                    request.method,
                    request.path,
                )
                flash(
                    "This form was already submitted. "
                    "The list below shows the current data.",
                    "warning",
                )
                return redirect(url_for(fallback_endpoint))
            return func(*args, **kwargs)

        return wrapper

    return decorator
