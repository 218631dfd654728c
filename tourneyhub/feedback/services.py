"""Service layer for user feedback."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from tourneyhub.core.constants import FEEDBACK_COLLECTION
from tourneyhub.core.timestamps import utcnow
from tourneyhub.utils import EmailError, send_email

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

logger = logging.getLogger(__name__)


class FeedbackService:
    """Stores feedback and forwards it by email."""

    @staticmethod
    def submit(
        db: Client,
        user: dict[str, Any],
        feedback_type: str,
        rating: int,
        message: str,
        recipient: str | None = None,
    ) -> dict[str, Any]:
        """Store a feedback entry and email it to ``recipient`` if configured.

        Delivery is best effort: a mail failure is logged and the stored entry
        is still returned.
        """
        entry = {
            "userId": user.get("uid"),
            "email": user.get("email"),
            "inGameName": user.get("inGameName"),
            "type": feedback_type,
            "rating": rating,
            "message": message,
            "createdAt": utcnow(),
        }
        _, ref = db.collection(FEEDBACK_COLLECTION).add(entry)
        entry["id"] = ref.id
        entry["emailed"] = False

        if recipient:
            try:
                send_email(
                    to=recipient,
                    subject=f"App Feedback - {feedback_type.capitalize()}",
                    template="email/feedback.html",
                    feedback=entry,
                )
                entry["emailed"] = True
            except EmailError as e:
                logger.error(f"Feedback {ref.id} stored but not emailed: {e}")
        return entry
