"""Tests for the feedback blueprint."""

from __future__ import annotations

import unittest
from unittest.mock import patch

from tourneyhub.utils import EmailError

from tests.helpers import PLAYER_ID, FirestoreTestCase


class FeedbackTestCase(FirestoreTestCase):
    """Test case for submitting feedback."""

    def setUp(self) -> None:
        super().setUp()
        self.create_user(PLAYER_ID)
        self.app.config["FEEDBACK_EMAIL"] = "support@gmail.com"

    def stored_feedback(self):
        return [doc.to_dict() for doc in self.mock_db.collection("feedback").stream()]

    @patch("tourneyhub.feedback.services.send_email")
    def test_submit_feedback(self, mock_send_email) -> None:
        response = self.client.post(
            "/feedback/",
            json={"type": "bug", "rating": 4, "message": " Slot grid froze "},
            headers=self.login(),
        )

        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.json["emailed"])
        stored = self.stored_feedback()
        self.assertEqual(len(stored), 1)
        self.assertEqual(stored[0]["message"], "Slot grid froze")
        self.assertEqual(stored[0]["userId"], PLAYER_ID)
        self.assertEqual(mock_send_email.call_args.kwargs["to"], "support@gmail.com")

    def test_email_is_rendered(self) -> None:
        with self.app.extensions["mail"].record_messages() as outbox:
            response = self.client.post(
                "/feedback/", json={"message": "Great app"}, headers=self.login()
            )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(len(outbox), 1)
        self.assertEqual(outbox[0].subject, "App Feedback - General")
        self.assertIn("Great app", outbox[0].html)
        self.assertIn("5/5 stars", outbox[0].html)

    @patch("tourneyhub.feedback.services.send_email")
    def test_mail_failure_keeps_feedback(self, mock_send_email) -> None:
        mock_send_email.side_effect = EmailError("SMTP down")

        response = self.client.post(
            "/feedback/", json={"message": "Hello"}, headers=self.login()
        )

        self.assertEqual(response.status_code, 201)
        self.assertFalse(response.json["emailed"])
        self.assertEqual(len(self.stored_feedback()), 1)

    def test_validation(self) -> None:
        headers = self.login()
        empty = self.client.post("/feedback/", json={"message": "  "}, headers=headers)
        self.assertEqual(empty.status_code, 400)

        bad_rating = self.client.post(
            "/feedback/", json={"message": "x", "rating": 9}, headers=headers
        )
        self.assertEqual(bad_rating.status_code, 400)

        bad_type = self.client.post(
            "/feedback/", json={"message": "x", "type": "spam"}, headers=headers
        )
        self.assertEqual(bad_type.status_code, 400)

    def test_requires_login(self) -> None:
        response = self.client.post("/feedback/", json={"message": "x"})
        self.assertEqual(response.status_code, 401)


if __name__ == "__main__":
    unittest.main()
