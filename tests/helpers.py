"""Shared test case for the Flask app running against mockfirestore."""

from __future__ import annotations

import datetime
import unittest
from typing import Any
from unittest.mock import MagicMock, patch

from mockfirestore import MockFirestore

from tests.mock_utils import MockBatch, MockFirestoreBuilder, MockTransaction

from tourneyhub import create_app

FIRESTORE_PATCH_TARGETS = (
    "tourneyhub.firestore",
    "tourneyhub.auth.routes.firestore",
    "tourneyhub.feedback.routes.firestore",
    "tourneyhub.tournament.routes.firestore",
    "tourneyhub.tournament.services.firestore",
    "tourneyhub.updates.routes.firestore",
    "tourneyhub.user.routes.firestore",
    "tourneyhub.user.services.firestore",
    "tourneyhub.wallet.routes.firestore",
    "tourneyhub.wallet.services.firestore",
)

PLAYER_ID = "player1"
ADMIN_ID = "admin1"
NOW = datetime.datetime(2024, 6, 1, 12, 0, tzinfo=datetime.timezone.utc)


class FirestoreTestCase(unittest.TestCase):
    """Test case with a mockfirestore database behind every firestore import."""

    def setUp(self) -> None:
        """Set up a test client and a comprehensive mock environment."""
        self.mock_db = MockFirestore()
        self.mock_db.batch = MagicMock(side_effect=lambda: MockBatch(self.mock_db))
        self.mock_db.transaction = MagicMock(side_effect=MockTransaction)

        self.mock_firestore_module = MockFirestoreBuilder.build_firestore_module(
            self.mock_db
        )

        patchers = {
            target: patch(target, new=self.mock_firestore_module)
            for target in FIRESTORE_PATCH_TARGETS
        }
        patchers["init_app"] = patch("firebase_admin.initialize_app")
        patchers["verify_id_token"] = patch("firebase_admin.auth.verify_id_token")

        self.mocks = {name: p.start() for name, p in patchers.items()}
        for p in patchers.values():
            self.addCleanup(p.stop)

        self.app = create_app(
            {"TESTING": True, "WTF_CSRF_ENABLED": False, "SERVER_NAME": "localhost"}
        )
        self.client = self.app.test_client()
        self.app_context = self.app.app_context()
        self.app_context.push()

    def tearDown(self) -> None:
        """Tear down the test client."""
        self.mock_db.reset()
        self.app_context.pop()

    def create_user(self, uid: str = PLAYER_ID, **fields: Any) -> dict[str, Any]:
        """Store a user document and return its data."""
        data = {
            "email": f"{uid}@example.com",
            "inGameName": f"{uid}-ign",
            "inGameUID": "123456",
            "phoneNumber": "03001234567",
            "coins": 0,
            "wonTournaments": 0,
            "hasSeenTour": False,
            "roles": [],
        }
        data.update(fields)
        self.mock_db.collection("users").document(uid).set(data)
        return data

    def create_admin(self, uid: str = ADMIN_ID, **fields: Any) -> dict[str, Any]:
        """Store a user document carrying the admin role."""
        return self.create_user(uid, roles=["admin"], **fields)

    def create_tournament(self, tournament_id: str = "t1", **fields: Any) -> dict[str, Any]:
        """Store an active tournament document and return its data."""
        data = {
            "name": "Squad Battle",
            "categoryId": "br",
            "entryFee": 50,
            "prizePool": 1000,
            "slots": 10,
            "isActive": True,
            "bookedSlots": [],
        }
        data.update(fields)
        self.mock_db.collection("active-tournaments").document(tournament_id).set(data)
        return data

    def get_doc(self, collection: str, doc_id: str) -> dict[str, Any]:
        """Return the stored data of a document."""
        return self.mock_db.collection(collection).document(doc_id).get().to_dict()

    def login(self, uid: str = PLAYER_ID) -> dict[str, str]:
        """Make the next requests authenticate as ``uid``; return the headers."""
        self.mocks["verify_id_token"].return_value = {
            "uid": uid,
            "email": f"{uid}@example.com",
        }
        return {"Authorization": "Bearer mock-token"}
