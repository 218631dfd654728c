"""Routes for the feedback blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import current_app, g, jsonify

from tourneyhub.auth.decorators import login_required
from tourneyhub.utils import form_error_response

from . import bp
from .forms import FeedbackForm
from .services import FeedbackService


@bp.route("/", methods=["POST"])
@login_required
def submit_feedback() -> Any:
    """Submit feedback about the app."""
    form = FeedbackForm()
    if not form.validate_on_submit():
        return form_error_response(form)

    entry = FeedbackService.submit(
        firestore.client(),
        g.user,
        form.type.data,
        form.rating.data or 5,
        form.message.data,
        recipient=current_app.config.get("FEEDBACK_EMAIL"),
    )
    return (
        jsonify(
            {
                "id": entry["id"],
                "emailed": entry["emailed"],
                "message": "Thank you! Your feedback has been sent.",
            }
        ),
        201,
    )
