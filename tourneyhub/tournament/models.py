"""Data models for the tournament blueprint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypedDict

from tourneyhub.core.types import FirestoreDocument
from tourneyhub.errors import ValidationError


class BookedSlot(TypedDict, total=False):
    """An entry of a tournament's ``bookedSlots`` array."""

    slotNumber: int
    uid: str
    inGameName: str
    inGameUID: str
    status: str
    bookedAt: Any
    updatedAt: Any


class Tournament(FirestoreDocument, total=False):
    """A document in the ``active-tournaments`` collection."""

    name: str
    categoryId: str
    entryFee: int
    prizePool: Any
    slots: int
    startTime: Any
    isActive: bool
    roomId: str
    bookedSlots: list[BookedSlot]


class TournamentCategory(FirestoreDocument, total=False):
    """A read-only tournament category."""

    name: str
    description: str
    imageUrl: str


@dataclass
class SlotBooking:
    """A request to book a numbered slot."""

    slot_number: int
    in_game_name: str
    in_game_uid: str

    def validate(self) -> None:
        """Reject missing fields before anything is read or written."""
        self.in_game_name = (self.in_game_name or "").strip()
        self.in_game_uid = (self.in_game_uid or "").strip()
        if not self.in_game_name:
            raise ValidationError("Please enter your In-Game Name")
        if not self.in_game_uid:
            raise ValidationError("Please enter your UID")
        if not isinstance(self.slot_number, int) or self.slot_number < 1:
            raise ValidationError("Please select a slot")
