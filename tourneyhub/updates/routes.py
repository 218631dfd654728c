"""Routes for the updates blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import g, jsonify

from tourneyhub.auth.decorators import login_required

from . import bp
from .services import UpdatesService


@bp.route("/", methods=["GET"])
@login_required
def list_updates() -> Any:
    """List room releases from the last hour for the user's tournaments."""
    return jsonify(UpdatesService.get_feed(firestore.client(), g.user))


@bp.route("/unread", methods=["GET"])
@login_required
def unread() -> Any:
    """Return whether the notification badge should be shown."""
    return jsonify({"hasUnread": UpdatesService.has_unread(firestore.client(), g.user)})


@bp.route("/read", methods=["POST"])
@login_required
def mark_read() -> Any:
    """Clear the badge for every update published so far."""
    read_at = UpdatesService.mark_read(firestore.client(), g.user["uid"])
    return jsonify({"lastUpdatesRead": read_at.isoformat()})
