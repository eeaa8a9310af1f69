# ------- merchstore/utils/decorators.py -------
import hashlib
import hmac
from functools import wraps

from flask import current_app, request

from .api import err


def _digest(value: str) -> bytes:
    return hashlib.sha256(value.encode("utf-8")).digest()


def safe_compare(expected_secret, provided_secret) -> bool:
    """Constant-time secret check. Both sides are hashed first so the
    comparison never depends on the length of the configured secret."""
    if not isinstance(expected_secret, str) or not expected_secret:
        return False
    if not isinstance(provided_secret, str) or not provided_secret:
        return False
    return hmac.compare_digest(_digest(expected_secret), _digest(provided_secret))


def bearer_token() -> str | None:
    header = request.headers.get("Authorization")
    if not isinstance(header, str):
        return None
    scheme, _, token = header.partition(" ")
    if scheme != "Bearer" or not token:
        return None
    return token


def admin_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        secret = current_app.config.get("ADMIN_PORTAL_PASSWORD")
        if not secret:
            return err("admin portal not configured, set ADMIN_PORTAL_PASSWORD", 500)
        if not safe_compare(secret, bearer_token()):
            return err("unauthorized", 401)
        return fn(*args, **kwargs)
    return wrapper
