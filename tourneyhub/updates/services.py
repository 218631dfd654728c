"""Room/password release updates and the unread badge.

The unread decision is a pure function of the tournament documents, the
user's ID, their last-read marker and the current time, so every consumer
shares one implementation.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from tourneyhub.core.constants import (
    LAST_READ_FIELD,
    LEGACY_LAST_READ_FIELD,
    NOT_AVAILABLE,
    TOURNAMENTS_COLLECTION,
    UPDATE_FRESHNESS_WINDOW,
    USERS_COLLECTION,
)
from tourneyhub.core.timestamps import to_datetime, utcnow
from tourneyhub.user.services import has_slot

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

logger = logging.getLogger(__name__)


def update_time(
    tournament: dict[str, Any], uid: str, now: datetime.datetime
) -> datetime.datetime | None:
    """Return when the tournament's room details changed, if ``uid`` should see it."""
    if not has_slot(tournament, uid):
        return None
    if not tournament.get("roomId") and not tournament.get("pass"):
        return None

    updated_at = to_datetime(tournament.get("updatedAt"))
    if updated_at is None:
        return None
    if updated_at <= now - UPDATE_FRESHNESS_WINDOW:
        return None
    return updated_at


def is_unread(
    tournament: dict[str, Any],
    uid: str,
    last_read_at: datetime.datetime | None,
    now: datetime.datetime,
) -> bool:
    """Return True if the tournament has an update the user has not seen."""
    updated_at = update_time(tournament, uid, now)
    if updated_at is None:
        return False
    return last_read_at is None or updated_at > last_read_at


def has_unread_updates(
    tournaments: Iterable[dict[str, Any]],
    uid: str,
    last_read_at: Any,
    now: datetime.datetime,
) -> bool:
    """Return True if any tournament holds an unread update for ``uid``."""
    last_read = to_datetime(last_read_at)
    return any(is_unread(t, uid, last_read, now) for t in tournaments)


def recent_updates(
    tournaments: Iterable[dict[str, Any]],
    uid: str,
    last_read_at: Any,
    now: datetime.datetime,
) -> list[dict[str, Any]]:
    """Build the update cards for ``uid``, newest first."""
    last_read = to_datetime(last_read_at)
    cards = []
    for tournament in tournaments:
        updated_at = update_time(tournament, uid, now)
        if updated_at is None:
            continue
        cards.append(
            (
                updated_at,
                {
                    "id": tournament.get("id"),
                    "name": tournament.get("name"),
                    "roomId": tournament.get("roomId") or NOT_AVAILABLE,
                    "pass": tournament.get("pass") or NOT_AVAILABLE,
                    "updatedAt": updated_at.isoformat(),
                    "unread": last_read is None or updated_at > last_read,
                },
            )
        )
    cards.sort(key=lambda item: item[0], reverse=True)
    return [card for _, card in cards]


def last_read_marker(user: dict[str, Any]) -> Any:
    """Return the user's last-read marker, accepting the legacy field name."""
    marker = user.get(LAST_READ_FIELD)
    if marker is None:
        marker = user.get(LEGACY_LAST_READ_FIELD)
    return marker


class UpdatesService:
    """Data access for the updates feed."""

    @staticmethod
    def _tournaments(db: Client) -> list[dict[str, Any]]:
        tournaments = []
        for doc in db.collection(TOURNAMENTS_COLLECTION).stream():
            data = doc.to_dict() or {}
            data["id"] = doc.id
            tournaments.append(data)
        return tournaments

    @staticmethod
    def get_feed(
        db: Client, user: dict[str, Any], now: datetime.datetime | None = None
    ) -> dict[str, Any]:
        """Return the visible updates and the unread flag for a user."""
        now = now or utcnow()
        tournaments = UpdatesService._tournaments(db)
        marker = last_read_marker(user)
        return {
            "updates": recent_updates(tournaments, user["uid"], marker, now),
            "hasUnread": has_unread_updates(tournaments, user["uid"], marker, now),
        }

    @staticmethod
    def has_unread(
        db: Client, user: dict[str, Any], now: datetime.datetime | None = None
    ) -> bool:
        """Return the badge flag for a user."""
        return has_unread_updates(
            UpdatesService._tournaments(db),
            user["uid"],
            last_read_marker(user),
            now or utcnow(),
        )

    @staticmethod
    def mark_read(
        db: Client, uid: str, now: datetime.datetime | None = None
    ) -> datetime.datetime:
        """Record that the user has seen every update published so far."""
        read_at = now or utcnow()
        db.collection(USERS_COLLECTION).document(uid).set(
            {LAST_READ_FIELD: read_at}, merge=True
        )
        logger.info(f"Updates marked as read for {uid}")
        return read_at
