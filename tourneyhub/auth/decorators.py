"""Decorators for the auth blueprint."""

from functools import wraps

from flask import g

from tourneyhub.errors import AuthenticationError, PermissionDeniedError

from .utils import is_admin


def login_required(f=None, admin_required=False):
    """Raise ``AuthenticationError`` unless a verified user is loaded.

    Usage:
    @login_required
    def protected_view():
        ...

    @login_required(admin_required=True)
    def admin_view():
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            if not g.get("user"):
                raise AuthenticationError()
            if admin_required and not is_admin(g.user):
                raise PermissionDeniedError()
            return func(*args, **kwargs)

        return decorated_function

    if f:
        return decorator(f)
    return decorator


def admin_required(f):
    """Shorthand for ``login_required(admin_required=True)``."""
    return login_required(f, admin_required=True)
