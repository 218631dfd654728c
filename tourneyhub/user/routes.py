"""Routes for the user blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import current_app, g, jsonify

from tourneyhub.auth.decorators import login_required
from tourneyhub.utils import form_error_response

from . import bp
from .forms import GameDetailsForm
from .services import UserService


@bp.route("/me", methods=["GET"])
@login_required
def get_profile() -> Any:
    """Return the current user's profile."""
    return jsonify(UserService.public_profile(g.user))


@bp.route("/me", methods=["PATCH", "POST"])
@login_required
def update_profile() -> Any:
    """Update the in-game name and UID."""
    form = GameDetailsForm()
    if not form.validate_on_submit():
        return form_error_response(form)

    db = firestore.client()
    uid = g.user["uid"]
    synced = UserService.update_game_details(
        db, uid, form.inGameName.data, form.inGameUID.data
    )
    current_app.logger.info(f"Profile updated for {uid}; {synced} slot(s) synced")
    user = UserService.get_user(db, uid) or {}
    return jsonify(
        {"profile": UserService.public_profile(user), "tournamentsUpdated": synced}
    )


@bp.route("/me/tour", methods=["POST"])
@login_required
def complete_tour() -> Any:
    """Mark the product tour as seen."""
    UserService.mark_tour_seen(firestore.client(), g.user["uid"])
    return jsonify({"hasSeenTour": True})


@bp.route("/me/stats", methods=["GET"])
@login_required
def get_stats() -> Any:
    """Return joined and won tournament counts."""
    return jsonify(UserService.get_stats(firestore.client(), g.user["uid"]))


@bp.route("/leaderboard", methods=["GET"])
@login_required
def leaderboard() -> Any:
    """Return the top users by coins."""
    size = current_app.config["LEADERBOARD_SIZE"]
    return jsonify({"users": UserService.get_leaderboard(firestore.client(), size)})
