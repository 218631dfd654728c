"""Tests for user profiles, stats and the leaderboard."""

from __future__ import annotations

import unittest

from tourneyhub.errors import NotFoundError, ValidationError
from tourneyhub.user.services import UserService

from tests.helpers import PLAYER_ID, FirestoreTestCase


class UserServiceTestCase(FirestoreTestCase):
    """Test case for UserService."""

    def setUp(self) -> None:
        super().setUp()
        self.create_user(PLAYER_ID, coins=40, wonTournaments=2, inGameName="Old")
        self.create_tournament(
            "t1",
            bookedSlots=[
                {"slotNumber": 1, "uid": PLAYER_ID, "inGameName": "Old"},
                {"slotNumber": 2, "uid": "other", "inGameName": "Someone"},
            ],
        )
        self.create_tournament(
            "t2", bookedSlots=[{"slotNumber": 5, "uid": PLAYER_ID, "inGameName": "Old"}]
        )
        self.create_tournament("t3", bookedSlots=[])

    def test_update_game_details_syncs_booked_slots(self) -> None:
        updated = UserService.update_game_details(
            self.mock_db, PLAYER_ID, " New ", "424242"
        )

        self.assertEqual(updated, 2)
        user = self.get_doc("users", PLAYER_ID)
        self.assertEqual(user["inGameName"], "New")
        self.assertEqual(user["inGameUID"], "424242")

        slots = self.get_doc("active-tournaments", "t1")["bookedSlots"]
        self.assertEqual(slots[0]["inGameName"], "New")
        self.assertEqual(slots[0]["inGameUID"], "424242")
        self.assertIn("updatedAt", slots[0])
        self.assertEqual(slots[1]["inGameName"], "Someone")
        self.assertEqual(
            self.get_doc("active-tournaments", "t2")["bookedSlots"][0]["inGameName"],
            "New",
        )

    def test_unchanged_details_skip_sync(self) -> None:
        user = self.get_doc("users", PLAYER_ID)
        updated = UserService.update_game_details(
            self.mock_db, PLAYER_ID, user["inGameName"], user["inGameUID"]
        )
        self.assertEqual(updated, 0)
        self.mock_db.batch.assert_not_called()

    def test_update_game_details_validation(self) -> None:
        with self.assertRaises(ValidationError):
            UserService.update_game_details(self.mock_db, PLAYER_ID, "", "1")
        with self.assertRaises(NotFoundError):
            UserService.update_game_details(self.mock_db, "ghost", "a", "1")

    def test_stats(self) -> None:
        stats = UserService.get_stats(self.mock_db, PLAYER_ID)
        self.assertEqual(
            stats, {"joinedTournaments": 2, "wonTournaments": 2, "coins": 40}
        )

    def test_leaderboard_ranks_by_coins(self) -> None:
        self.create_user("rich", coins=900, inGameName="Rich")
        self.create_user("mid", coins=100, inGameName="Mid")

        board = UserService.get_leaderboard(self.mock_db, limit=2)

        self.assertEqual([e["inGameName"] for e in board], ["Rich", "Mid"])
        self.assertEqual([e["rank"] for e in board], [1, 2])

    def test_public_profile_hides_private_fields(self) -> None:
        profile = UserService.public_profile(
            {"uid": PLAYER_ID, "coins": "15", "lastUpdatesRead": "x"}
        )
        self.assertEqual(profile["id"], PLAYER_ID)
        self.assertEqual(profile["coins"], 15)
        self.assertNotIn("lastUpdatesRead", profile)


class UserRoutesTestCase(FirestoreTestCase):
    """Test case for the user blueprint."""

    def setUp(self) -> None:
        super().setUp()
        self.create_user(PLAYER_ID, coins=40)

    def test_get_profile(self) -> None:
        response = self.client.get("/users/me", headers=self.login())
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json["coins"], 40)
        self.assertEqual(response.json["id"], PLAYER_ID)

    def test_update_profile(self) -> None:
        self.create_tournament("t1", bookedSlots=[{"slotNumber": 1, "uid": PLAYER_ID}])
        response = self.client.patch(
            "/users/me",
            json={"inGameName": "Viper", "inGameUID": 1234},
            headers=self.login(),
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json["profile"]["inGameName"], "Viper")
        self.assertEqual(response.json["tournamentsUpdated"], 1)

    def test_update_profile_requires_fields(self) -> None:
        response = self.client.patch(
            "/users/me", json={"inGameName": "Viper"}, headers=self.login()
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json["error"], "Please enter your UID")

    def test_complete_tour(self) -> None:
        response = self.client.post("/users/me/tour", headers=self.login())
        self.assertEqual(response.status_code, 200)
        self.assertTrue(self.get_doc("users", PLAYER_ID)["hasSeenTour"])

    def test_stats_and_leaderboard(self) -> None:
        headers = self.login()
        stats = self.client.get("/users/me/stats", headers=headers)
        self.assertEqual(stats.json["joinedTournaments"], 0)

        board = self.client.get("/users/leaderboard", headers=headers)
        self.assertEqual(board.status_code, 200)
        self.assertEqual(board.json["users"][0]["id"], PLAYER_ID)


if __name__ == "__main__":
    unittest.main()
