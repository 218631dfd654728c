"""Service layer for user profiles, stats and the leaderboard."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from tourneyhub.core.constants import (
    FIRESTORE_BATCH_LIMIT,
    LEADERBOARD_SIZE,
    STARTING_COINS,
    TOURNAMENTS_COLLECTION,
    USERS_COLLECTION,
)
from tourneyhub.core.timestamps import utcnow
from tourneyhub.errors import NotFoundError, ValidationError

from .models import User, UserProfile

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client

logger = logging.getLogger(__name__)

PUBLIC_FIELDS = (
    "email",
    "inGameName",
    "inGameUID",
    "phoneNumber",
    "coins",
    "wonTournaments",
    "hasSeenTour",
    "roles",
)


def has_slot(tournament: dict[str, Any], uid: str) -> bool:
    """Return True if ``uid`` holds a slot in the tournament."""
    return any(
        slot and slot.get("uid") == uid for slot in tournament.get("bookedSlots") or []
    )


class UserService:
    """Handles business logic and data access for user documents."""

    @staticmethod
    def create_profile(
        db: Client,
        uid: str,
        profile: UserProfile,
        starting_coins: int = STARTING_COINS,
    ) -> dict[str, Any]:
        """Create the Firestore document for a newly registered user."""
        now = utcnow()
        data = {
            "email": profile.email,
            "inGameName": profile.in_game_name,
            "inGameUID": profile.in_game_uid,
            "phoneNumber": profile.phone_number,
            "coins": starting_coins,
            "wonTournaments": 0,
            "hasSeenTour": False,
            "roles": [],
            "createdAt": now,
            "updatedAt": now,
        }
        db.collection(USERS_COLLECTION).document(uid).set(data)
        logger.info(f"Created profile for {uid} with {starting_coins} coins")
        return {**data, "id": uid}

    @staticmethod
    def get_user(db: Client, uid: str) -> User | None:
        """Fetch a user by their ID."""
        user_doc = cast("DocumentSnapshot", db.collection(USERS_COLLECTION).document(uid).get())
        if not user_doc.exists:
            return None
        data = user_doc.to_dict()
        if data is None:
            return None
        data["id"] = uid
        return cast("User", data)

    @staticmethod
    def public_profile(user: dict[str, Any]) -> dict[str, Any]:
        """Return the fields of a user document that are safe to expose."""
        profile = {key: user.get(key) for key in PUBLIC_FIELDS}
        profile["id"] = user.get("id") or user.get("uid")
        profile["coins"] = int(user.get("coins") or 0)
        profile["wonTournaments"] = int(user.get("wonTournaments") or 0)
        profile["hasSeenTour"] = bool(user.get("hasSeenTour"))
        profile["roles"] = list(user.get("roles") or [])
        return profile

    @staticmethod
    def update_game_details(
        db: Client, uid: str, in_game_name: str, in_game_uid: str
    ) -> int:
        """Update the in-game name and UID, then rewrite the user's booked slots.

        Returns the number of tournaments whose slot entry was rewritten.
        """
        in_game_name = (in_game_name or "").strip()
        in_game_uid = (in_game_uid or "").strip()
        if not in_game_name or not in_game_uid:
            raise ValidationError("In-game name and UID are required.")

        user = UserService.get_user(db, uid)
        if user is None:
            raise NotFoundError("User not found.")

        db.collection(USERS_COLLECTION).document(uid).update(
            {"inGameName": in_game_name, "inGameUID": in_game_uid, "updatedAt": utcnow()}
        )

        if (
            user.get("inGameName") == in_game_name
            and user.get("inGameUID") == in_game_uid
        ):
            return 0
        return UserService._sync_booked_slots(db, uid, in_game_name, in_game_uid)

    @staticmethod
    def _sync_booked_slots(
        db: Client, uid: str, in_game_name: str, in_game_uid: str
    ) -> int:
        """Copy new in-game details into every slot the user holds."""
        updated_at = utcnow().isoformat()
        batch = db.batch()
        pending = 0
        updated = 0

        for doc in db.collection(TOURNAMENTS_COLLECTION).stream():
            data = doc.to_dict() or {}
            slots = data.get("bookedSlots")
            if not isinstance(slots, list) or not has_slot(data, uid):
                continue

            new_slots = [
                {
                    **slot,
                    "inGameName": in_game_name,
                    "inGameUID": in_game_uid,
                    "updatedAt": updated_at,
                }
                if slot and slot.get("uid") == uid
                else slot
                for slot in slots
            ]
            batch.update(doc.reference, {"bookedSlots": new_slots})
            pending += 1
            updated += 1

            if pending >= FIRESTORE_BATCH_LIMIT:
                batch.commit()
                batch = db.batch()
                pending = 0

        if pending:
            batch.commit()
        if updated:
            logger.info(f"Updated {updated} tournament registration(s) for {uid}")
        return updated

    @staticmethod
    def mark_tour_seen(db: Client, uid: str) -> None:
        """Record that the user has completed the product tour."""
        db.collection(USERS_COLLECTION).document(uid).set(
            {"hasSeenTour": True}, merge=True
        )

    @staticmethod
    def get_stats(db: Client, uid: str) -> dict[str, int]:
        """Count joined tournaments and read the win counter and balance."""
        user = UserService.get_user(db, uid) or {}
        joined = sum(
            1
            for doc in db.collection(TOURNAMENTS_COLLECTION).stream()
            if has_slot(doc.to_dict() or {}, uid)
        )
        return {
            "joinedTournaments": joined,
            "wonTournaments": int(user.get("wonTournaments") or 0),
            "coins": int(user.get("coins") or 0),
        }

    @staticmethod
    def get_leaderboard(db: Client, limit: int = LEADERBOARD_SIZE) -> list[dict[str, Any]]:
        """Return the top users by coin balance, ranked from 1."""
        query = (
            db.collection(USERS_COLLECTION)
            .order_by("coins", direction=firestore.Query.DESCENDING)
            .limit(limit)
        )
        leaderboard = []
        for rank, doc in enumerate(query.stream(), start=1):
            data = doc.to_dict() or {}
            leaderboard.append(
                {
                    "id": doc.id,
                    "rank": rank,
                    "inGameName": data.get("inGameName") or "Unknown",
                    "coins": int(data.get("coins") or 0),
                    "wonTournaments": int(data.get("wonTournaments") or 0),
                }
            )
        return leaderboard
