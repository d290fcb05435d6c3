"""Optional HTTP Basic access gate.

Disabled unless both a user and a password are configured.
"""

import hmac

from flask import Flask, Response, request

from app.config.settings import Settings
from app.logging.logger import Log

OPEN_ENDPOINTS = frozenset({"healthz", "static"})


def _matches(provided: str | None, expected: str) -> bool:
    return hmac.compare_digest((provided or "").encode("utf-8"), expected.encode("utf-8"))


def _unauthorized() -> Response:
    return Response(
        "Authentication required",
        status=401,
        headers={"WWW-Authenticate": 'Basic realm="Protected"'},
    )


def register_basic_auth(app: Flask, settings: Settings) -> None:
    user = settings.basic_auth_user
    password = settings.basic_auth_pass
    if not user or not password:
        return
    Log.info("Basic auth gate enabled")

    @app.before_request
    def require_basic_auth() -> Response | None:
        if request.endpoint in OPEN_ENDPOINTS:
            return None
        auth = request.authorization
        if auth is None or auth.type != "basic":
            return _unauthorized()
        user_ok = _matches(auth.username, user)
        password_ok = _matches(auth.password, password)
        if not (user_ok and password_ok):
            return _unauthorized()
        return None
