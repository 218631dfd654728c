"""Routes for the wallet blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import current_app, g, jsonify, request

from tourneyhub.auth.decorators import admin_required, login_required
from tourneyhub.utils import form_error_response

from . import bp
from .forms import DepositForm, WithdrawForm
from .models import DepositRequest, WithdrawRequest
from .services import WalletService
from .uploads import upload_proof


@bp.route("/", methods=["GET"])
@login_required
def wallet() -> Any:
    """Return the balance and the visible transactions."""
    db = firestore.client()
    transactions = WalletService.list_transactions(
        db, g.user, status=request.args.get("status")
    )
    return jsonify(
        {
            "coins": int(g.user.get("coins") or 0),
            "transactions": [WalletService.serialize(t) for t in transactions],
        }
    )


@bp.route("/deposit", methods=["POST"])
@login_required
def deposit() -> Any:
    """Submit a deposit request for admin approval."""
    form = DepositForm()
    if not form.validate_on_submit():
        return form_error_response(form)

    proof_url = form.proofUrl.data
    if form.proof.data:
        proof_url = upload_proof(
            form.proof.data,
            current_app.config["CLOUDINARY_CLOUD_NAME"],
            current_app.config["CLOUDINARY_UPLOAD_PRESET"],
            timeout=current_app.config["UPLOAD_TIMEOUT"],
        )

    transaction = WalletService.request_deposit(
        firestore.client(),
        g.user["uid"],
        DepositRequest(amount=form.amount.data, proof_url=proof_url),
    )
    return (
        jsonify(
            {
                "transaction": WalletService.serialize(transaction),
                "message": "Deposit request submitted. Awaiting admin approval.",
            }
        ),
        201,
    )


@bp.route("/withdraw", methods=["POST"])
@login_required
def withdraw() -> Any:
    """Submit a withdrawal request for admin approval."""
    form = WithdrawForm()
    if not form.validate_on_submit():
        return form_error_response(form)

    withdrawal = WithdrawRequest(
        amount=form.amount.data,
        account_number=form.accountNumber.data,
        account_type=form.accountType.data,
        account_name=form.accountName.data,
    )
    transaction = WalletService.request_withdraw(
        firestore.client(),
        g.user["uid"],
        withdrawal,
        min_withdrawal=current_app.config["MIN_WITHDRAWAL"],
    )
    return (
        jsonify(
            {
                "transaction": WalletService.serialize(transaction),
                "message": "Withdrawal request submitted. Awaiting admin approval.",
            }
        ),
        201,
    )


@bp.route("/transactions/<string:transaction_id>/approve", methods=["POST"])
@admin_required
def approve_transaction(transaction_id: str) -> Any:
    """Approve a pending transaction."""
    result = WalletService.approve(firestore.client(), transaction_id, g.user)
    return jsonify(WalletService.serialize(result))


@bp.route("/transactions/<string:transaction_id>/reject", methods=["POST"])
@admin_required
def reject_transaction(transaction_id: str) -> Any:
    """Reject a pending transaction."""
    result = WalletService.reject(firestore.client(), transaction_id, g.user)
    return jsonify(WalletService.serialize(result))
