"""Data models for the user blueprint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tourneyhub.core.types import FirestoreDocument


class User(FirestoreDocument, total=False):
    """A user document in Firestore."""

    uid: str
    email: str
    inGameName: str
    inGameUID: str
    phoneNumber: str
    coins: int
    wonTournaments: int
    hasSeenTour: bool
    roles: list[str]
    lastUpdatesRead: Any


@dataclass
class UserProfile:
    """Registration details for a new user."""

    email: str
    in_game_name: str
    in_game_uid: str
    phone_number: str
