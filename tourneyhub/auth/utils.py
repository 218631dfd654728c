"""Helpers for identity, roles and Firebase Auth error messages."""

from __future__ import annotations

from typing import Any

from firebase_admin import auth

from tourneyhub.core.constants import ADMIN_ROLE
from tourneyhub.errors import PermissionDeniedError

DEFAULT_AUTH_ERROR = "Something went wrong. Please try again."

AUTH_ERROR_MESSAGES = {
    auth.EmailAlreadyExistsError: "This email is already registered.",
    auth.UserNotFoundError: "No account found with this email.",
    auth.ExpiredIdTokenError: "Your session has expired. Please sign in again.",
    auth.RevokedIdTokenError: "Your session has been revoked. Please sign in again.",
    auth.InvalidIdTokenError: "Your session is invalid. Please sign in again.",
}


def friendly_auth_error(error: Exception) -> str:
    """Map a Firebase Auth exception to a user-facing message."""
    for error_type, message in AUTH_ERROR_MESSAGES.items():
        if isinstance(error, error_type):
            return message
    if isinstance(error, ValueError):
        # The Admin SDK raises ValueError for malformed emails and weak passwords.
        text = str(error).lower()
        if "email" in text:
            return "Please enter a valid email address."
        if "password" in text:
            return "Password should be at least 6 characters."
    return DEFAULT_AUTH_ERROR


def is_admin(user: dict[str, Any] | None) -> bool:
    """Return True if the user document carries the admin role."""
    if not user:
        return False
    return ADMIN_ROLE in (user.get("roles") or [])


def ensure_admin(user: dict[str, Any] | None) -> None:
    """Raise PermissionDeniedError unless the user is an admin."""
    if not is_admin(user):
        raise PermissionDeniedError()
