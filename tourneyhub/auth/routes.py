"""Routes for the auth blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import auth, firestore
from flask import current_app, g, jsonify

from tourneyhub.user.models import UserProfile
from tourneyhub.user.services import UserService
from tourneyhub.utils import form_error_response

from . import bp
from .decorators import login_required
from .forms import RegisterForm
from .utils import friendly_auth_error


@bp.route("/register", methods=["POST"])
def register() -> Any:
    """Create a Firebase Auth account and its Firestore profile."""
    form = RegisterForm()
    if not form.validate_on_submit():
        return form_error_response(form)

    try:
        user_record = auth.create_user(
            email=form.email.data, password=form.password.data
        )
    except Exception as e:
        current_app.logger.warning(f"Registration rejected: {e}")
        return jsonify({"error": friendly_auth_error(e)}), 400

    db = firestore.client()
    profile = UserProfile(
        email=form.email.data,
        in_game_name=form.inGameName.data,
        in_game_uid=form.inGameUID.data,
        phone_number=form.phoneNumber.data,
    )
    try:
        user = UserService.create_profile(
            db,
            user_record.uid,
            profile,
            starting_coins=current_app.config["STARTING_COINS"],
        )
    except Exception as e:
        # Do not leave an Auth account without a profile behind.
        current_app.logger.error(f"Error creating profile for {user_record.uid}: {e}")
        auth.delete_user(user_record.uid)
        return jsonify({"error": "Registration failed. Please try again."}), 500

    return jsonify(UserService.public_profile(user)), 201


@bp.route("/me", methods=["GET"])
@login_required
def me() -> Any:
    """Return the verified identity and its profile."""
    return jsonify(
        {
            "uid": g.user["uid"],
            "email": g.user.get("email") or g.get("token_email"),
            "profile": UserService.public_profile(g.user),
        }
    )
