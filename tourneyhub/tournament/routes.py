"""Routes for the tournament blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import g, jsonify, request

from tourneyhub.auth.decorators import admin_required, login_required
from tourneyhub.core.constants import NOT_AVAILABLE
from tourneyhub.core.timestamps import isoformat
from tourneyhub.utils import form_error_response

from . import bp
from .forms import BookSlotForm, RoomReleaseForm
from .models import SlotBooking
from .services import TournamentService


@bp.route("/categories", methods=["GET"])
@login_required
def list_categories() -> Any:
    """List tournament categories."""
    return jsonify({"categories": TournamentService.list_categories(firestore.client())})


@bp.route("/", methods=["GET"])
@login_required
def list_tournaments() -> Any:
    """List active tournaments grouped by category."""
    grouped = TournamentService.list_active_tournaments(
        firestore.client(), category_id=request.args.get("category")
    )
    return jsonify({"tournaments": grouped})


@bp.route("/<string:tournament_id>", methods=["GET"])
@login_required
def view_tournament(tournament_id: str) -> Any:
    """View a tournament with its slot grid."""
    db = firestore.client()
    uid = g.user["uid"]
    tournament = TournamentService.get_tournament(db, tournament_id)

    data = TournamentService.summarize(tournament)
    data["slotGrid"] = TournamentService.slot_grid(tournament, uid)

    my_slot = TournamentService.find_user_slot(tournament, uid)
    if my_slot:
        # Show the current profile details rather than those stored at booking.
        data["mySlot"] = {
            "slotNumber": my_slot.get("slotNumber"),
            "inGameName": g.user.get("inGameName") or my_slot.get("inGameName"),
            "inGameUID": g.user.get("inGameUID") or my_slot.get("inGameUID"),
            "bookedAt": isoformat(my_slot.get("bookedAt")),
        }
        data["roomId"] = tournament.get("roomId") or NOT_AVAILABLE
        data["pass"] = tournament.get("pass") or NOT_AVAILABLE
    else:
        data["mySlot"] = None
    return jsonify(data)


@bp.route("/<string:tournament_id>/book", methods=["POST"])
@login_required
def book_slot(tournament_id: str) -> Any:
    """Book a slot, paying the entry fee from the wallet."""
    form = BookSlotForm()
    if not form.validate_on_submit():
        return form_error_response(form)

    booking = SlotBooking(
        slot_number=form.slotNumber.data,
        in_game_name=form.inGameName.data,
        in_game_uid=form.inGameUID.data,
    )
    result = TournamentService.book_slot(
        firestore.client(), tournament_id, g.user["uid"], booking
    )
    result["message"] = (
        f"Slot {booking.slot_number} booked successfully! "
        f"{result['entryFee']} coins deducted."
    )
    return jsonify(result), 201


@bp.route("/<string:tournament_id>/room", methods=["POST"])
@admin_required
def release_room(tournament_id: str) -> Any:
    """Publish the room ID and password for a tournament."""
    form = RoomReleaseForm()
    if not form.validate_on_submit():
        return form_error_response(form)

    result = TournamentService.release_room(
        firestore.client(),
        tournament_id,
        form.roomId.data,
        form.password.data,
        g.user,
    )
    return jsonify(result)
