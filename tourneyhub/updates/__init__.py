"""Updates blueprint."""

from flask import Blueprint

bp = Blueprint("updates", __name__, url_prefix="/updates")

from . import routes  # noqa: E402, F401
from .services import UpdatesService, has_unread_updates  # noqa: E402

__all__ = ["UpdatesService", "has_unread_updates", "routes"]
