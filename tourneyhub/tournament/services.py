"""Service layer for tournament business logic."""

from __future__ import annotations

import datetime
import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from tourneyhub.auth.utils import ensure_admin
from tourneyhub.core.constants import (
    CATEGORIES_COLLECTION,
    DEFAULT_TOURNAMENT_SLOTS,
    SLOT_STATUS_CONFIRMED,
    TOURNAMENTS_COLLECTION,
    USERS_COLLECTION,
)
from tourneyhub.core.timestamps import isoformat, utcnow
from tourneyhub.errors import (
    DuplicateResourceError,
    InsufficientCoinsError,
    NotFoundError,
    SlotUnavailableError,
    ValidationError,
)

from .models import BookedSlot, SlotBooking, Tournament, TournamentCategory

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.transaction import Transaction

logger = logging.getLogger(__name__)


def _doc_to_dict(doc: Any) -> dict[str, Any]:
    data = doc.to_dict() or {}
    data["id"] = doc.id
    return data


class TournamentService:
    """Handles business logic and data access for tournaments."""

    @staticmethod
    def list_categories(db: Client | None = None) -> list[TournamentCategory]:
        """Fetch all tournament categories."""
        if db is None:
            db = firestore.client()
        return [
            cast("TournamentCategory", _doc_to_dict(doc))
            for doc in db.collection(CATEGORIES_COLLECTION).stream()
        ]

    @staticmethod
    def list_active_tournaments(
        db: Client | None = None, category_id: str | None = None
    ) -> dict[str, list[dict[str, Any]]]:
        """Fetch active tournaments grouped by category ID."""
        if db is None:
            db = firestore.client()
        query = db.collection(TOURNAMENTS_COLLECTION).where(
            filter=firestore.FieldFilter("isActive", "==", True)
        )
        grouped: dict[str, list[dict[str, Any]]] = defaultdict(list)
        for doc in query.stream():
            data = _doc_to_dict(doc)
            if category_id and data.get("categoryId") != category_id:
                continue
            grouped[str(data.get("categoryId"))].append(
                TournamentService.summarize(data)
            )
        return dict(grouped)

    @staticmethod
    def summarize(tournament: dict[str, Any]) -> dict[str, Any]:
        """Return the listing view of a tournament, without player details."""
        capacity = TournamentService.capacity(tournament)
        booked = len(tournament.get("bookedSlots") or [])
        return {
            "id": tournament.get("id"),
            "name": tournament.get("name"),
            "categoryId": tournament.get("categoryId"),
            "entryFee": int(tournament.get("entryFee") or 0),
            "prizePool": tournament.get("prizePool"),
            "startTime": isoformat(tournament.get("startTime"))
            or tournament.get("startTime"),
            "slots": capacity,
            "bookedCount": booked,
            "availableSlots": max(capacity - booked, 0),
        }

    @staticmethod
    def get_tournament(db: Client, tournament_id: str) -> Tournament:
        """Fetch a tournament or raise NotFoundError."""
        doc = db.collection(TOURNAMENTS_COLLECTION).document(tournament_id).get()
        if not doc.exists:
            raise NotFoundError("Tournament not found!")
        return cast("Tournament", _doc_to_dict(doc))

    @staticmethod
    def capacity(tournament: dict[str, Any]) -> int:
        """Total number of slots in a tournament."""
        return int(tournament.get("slots") or DEFAULT_TOURNAMENT_SLOTS)

    @staticmethod
    def find_user_slot(tournament: dict[str, Any], uid: str) -> BookedSlot | None:
        """Return the slot entry held by ``uid``, if any."""
        for slot in tournament.get("bookedSlots") or []:
            if slot and slot.get("uid") == uid:
                return slot
        return None

    @staticmethod
    def slot_grid(tournament: dict[str, Any], uid: str) -> list[dict[str, Any]]:
        """Describe every slot number of a tournament from one user's view."""
        by_number = {
            slot.get("slotNumber"): slot
            for slot in tournament.get("bookedSlots") or []
            if slot
        }
        grid = []
        for number in range(1, TournamentService.capacity(tournament) + 1):
            slot = by_number.get(number)
            grid.append(
                {
                    "slotNumber": number,
                    "booked": slot is not None,
                    "inGameName": slot.get("inGameName") if slot else None,
                    "isMine": bool(slot and slot.get("uid") == uid),
                }
            )
        return grid

    @staticmethod
    def _check_booking(
        tournament: dict[str, Any],
        user: dict[str, Any],
        uid: str,
        booking: SlotBooking,
    ) -> int:
        """Evaluate the booking preconditions, returning the entry fee."""
        if tournament.get("isActive") is False:
            raise ValidationError("This tournament is no longer accepting bookings.")

        capacity = TournamentService.capacity(tournament)
        if booking.slot_number > capacity:
            raise ValidationError(f"Slot must be between 1 and {capacity}.")

        if TournamentService.find_user_slot(tournament, uid):
            raise DuplicateResourceError(
                "You already have a slot booked in this tournament!"
            )

        entry_fee = int(tournament.get("entryFee") or 0)
        coins = int(user.get("coins") or 0)
        if coins < entry_fee:
            raise InsufficientCoinsError(
                f"Insufficient coins! You need {entry_fee} coins, but you have {coins}."
            )

        if any(
            slot and slot.get("slotNumber") == booking.slot_number
            for slot in tournament.get("bookedSlots") or []
        ):
            raise SlotUnavailableError()

        return entry_fee

    @staticmethod
    def book_slot(
        db: Client,
        tournament_id: str,
        uid: str,
        booking: SlotBooking,
        now: datetime.datetime | None = None,
    ) -> dict[str, Any]:
        """Reserve a slot and debit the entry fee in a single transaction.

        The tournament's slot array and the user's balance are read and written
        in the same Firestore transaction, so a competing booking forces a
        retry that re-evaluates every precondition.
        """
        booking.validate()
        booked_at = now or utcnow()

        tournament_ref = db.collection(TOURNAMENTS_COLLECTION).document(tournament_id)
        user_ref = db.collection(USERS_COLLECTION).document(uid)

        @firestore.transactional
        def book_in_transaction(transaction: Transaction) -> tuple[BookedSlot, int, int]:
            tournament_snap = tournament_ref.get(transaction=transaction)
            user_snap = user_ref.get(transaction=transaction)
            if not tournament_snap.exists:
                raise NotFoundError("Tournament not found!")
            if not user_snap.exists:
                raise NotFoundError("User not found.")

            tournament = tournament_snap.to_dict() or {}
            user = user_snap.to_dict() or {}
            entry_fee = TournamentService._check_booking(
                tournament, user, uid, booking
            )

            entry: BookedSlot = {
                "slotNumber": booking.slot_number,
                "uid": uid,
                "inGameName": booking.in_game_name,
                "inGameUID": booking.in_game_uid,
                "status": SLOT_STATUS_CONFIRMED,
                "bookedAt": booked_at,
            }
            remaining = int(user.get("coins") or 0) - entry_fee

            transaction.update(
                user_ref,
                {
                    "coins": remaining,
                    "inGameName": booking.in_game_name,
                    "inGameUID": booking.in_game_uid,
                },
            )
            transaction.update(
                tournament_ref,
                {"bookedSlots": list(tournament.get("bookedSlots") or []) + [entry]},
            )
            return entry, entry_fee, remaining

        entry, entry_fee, remaining = book_in_transaction(db.transaction())
        logger.info(
            f"User {uid} booked slot {booking.slot_number} in {tournament_id} "
            f"for {entry_fee} coins"
        )
        return {
            "slot": {**entry, "bookedAt": booked_at.isoformat()},
            "entryFee": entry_fee,
            "coins": remaining,
        }

    @staticmethod
    def release_room(
        db: Client,
        tournament_id: str,
        room_id: str | None,
        password: str | None,
        admin: dict[str, Any],
        now: datetime.datetime | None = None,
    ) -> dict[str, Any]:
        """Publish a tournament's room ID and password to its players."""
        ensure_admin(admin)
        room_id = (room_id or "").strip()
        password = (password or "").strip()
        if not room_id and not password:
            raise ValidationError("Room ID or password is required.")

        ref = db.collection(TOURNAMENTS_COLLECTION).document(tournament_id)
        if not ref.get().exists:
            raise NotFoundError("Tournament not found!")

        updated_at = now or utcnow()
        update = {"roomId": room_id, "pass": password, "updatedAt": updated_at}
        ref.update(update)
        logger.info(f"Room details released for {tournament_id} by {admin.get('uid')}")
        return {**update, "id": tournament_id, "updatedAt": updated_at.isoformat()}
