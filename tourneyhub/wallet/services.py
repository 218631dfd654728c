"""Service layer for the coin wallet: deposit and withdrawal requests and their settlement."""

from __future__ import annotations

import datetime
import logging
from typing import TYPE_CHECKING, Any

from firebase_admin import firestore

from tourneyhub.auth.utils import ensure_admin, is_admin
from tourneyhub.core.constants import (
    MIN_WITHDRAWAL,
    STATUS_APPROVED,
    STATUS_FAILED,
    STATUS_PENDING,
    STATUS_REJECTED,
    TERMINAL_STATUSES,
    TRANSACTION_DEPOSIT,
    TRANSACTION_TYPES,
    TRANSACTION_WITHDRAW,
    TRANSACTIONS_COLLECTION,
    USERS_COLLECTION,
)
from tourneyhub.core.timestamps import isoformat, to_datetime, utcnow
from tourneyhub.errors import (
    InsufficientCoinsError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)

from .models import DepositRequest, Transaction, WithdrawRequest

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.transaction import Transaction as FirestoreTransaction

logger = logging.getLogger(__name__)

EPOCH = datetime.datetime.min.replace(tzinfo=datetime.timezone.utc)


class WalletService:
    """Handles business logic and data access for wallet transactions."""

    @staticmethod
    def get_balance(db: Client, uid: str) -> int:
        """Return the user's current coin balance."""
        doc = db.collection(USERS_COLLECTION).document(uid).get()
        if not doc.exists:
            raise NotFoundError("User not found.")
        return int((doc.to_dict() or {}).get("coins") or 0)

    @staticmethod
    def request_deposit(
        db: Client,
        uid: str,
        request: DepositRequest,
        now: datetime.datetime | None = None,
    ) -> Transaction:
        """Create a pending deposit. The balance changes only on approval."""
        request.validate()
        data = {
            "userId": uid,
            "type": TRANSACTION_DEPOSIT,
            "amount": request.amount,
            "proof": request.proof_url,
            "status": STATUS_PENDING,
            "timestamp": now or utcnow(),
        }
        _, ref = db.collection(TRANSACTIONS_COLLECTION).add(data)
        logger.info(f"Deposit {ref.id} of {request.amount} coins requested by {uid}")
        return {**data, "id": ref.id}

    @staticmethod
    def request_withdraw(
        db: Client,
        uid: str,
        request: WithdrawRequest,
        min_withdrawal: int = MIN_WITHDRAWAL,
        now: datetime.datetime | None = None,
    ) -> Transaction:
        """Create a pending withdrawal if the current balance covers it."""
        request.validate(min_withdrawal)
        coins = WalletService.get_balance(db, uid)
        if coins < request.amount:
            raise InsufficientCoinsError(
                f"You don't have enough coins. Current balance: {coins} coins"
            )

        data = {
            "userId": uid,
            "type": TRANSACTION_WITHDRAW,
            "amount": request.amount,
            "accountNumber": request.account_number,
            "accountType": request.account_type,
            "accountName": request.account_name,
            "proof": None,
            "status": STATUS_PENDING,
            "timestamp": now or utcnow(),
        }
        _, ref = db.collection(TRANSACTIONS_COLLECTION).add(data)
        logger.info(f"Withdrawal {ref.id} of {request.amount} coins requested by {uid}")
        return {**data, "id": ref.id}

    @staticmethod
    def approve(
        db: Client,
        transaction_id: str,
        admin: dict[str, Any],
        now: datetime.datetime | None = None,
    ) -> Transaction:
        """Approve a pending transaction and apply it to the owner's balance.

        A withdrawal is checked again against the balance at approval time;
        if the balance no longer covers it the transaction is marked failed.
        """
        ensure_admin(admin)
        settled_at = now or utcnow()
        tx_ref = db.collection(TRANSACTIONS_COLLECTION).document(transaction_id)

        @firestore.transactional
        def approve_in_transaction(transaction: FirestoreTransaction) -> dict[str, Any]:
            data = WalletService._read_pending(tx_ref, transaction)
            user_ref = db.collection(USERS_COLLECTION).document(data["userId"])
            user_snap = user_ref.get(transaction=transaction)
            if not user_snap.exists:
                raise NotFoundError("User not found.")

            coins = int((user_snap.to_dict() or {}).get("coins") or 0)
            amount = int(data.get("amount") or 0)
            tx_type = data.get("type")
            if tx_type not in TRANSACTION_TYPES:
                raise ValidationError(f"Unknown transaction type: {tx_type}")

            if tx_type == TRANSACTION_DEPOSIT:
                new_coins, status = coins + amount, STATUS_APPROVED
            elif coins >= amount:
                new_coins, status = coins - amount, STATUS_APPROVED
            else:
                new_coins, status = None, STATUS_FAILED

            if new_coins is not None:
                transaction.update(user_ref, {"coins": new_coins})
            update = {
                "status": status,
                "settledBy": admin.get("uid"),
                "settledAt": settled_at,
            }
            transaction.update(tx_ref, update)
            return {**data, **update, "id": transaction_id, "balance": new_coins}

        result = approve_in_transaction(db.transaction())
        if result["status"] == STATUS_FAILED:
            logger.warning(
                f"Withdrawal {transaction_id} failed: balance below {result['amount']} coins"
            )
        else:
            logger.info(
                f"Approved {result['type']} {transaction_id} of {result['amount']} "
                f"coins for user {result['userId']}"
            )
        return result

    @staticmethod
    def reject(
        db: Client,
        transaction_id: str,
        admin: dict[str, Any],
        now: datetime.datetime | None = None,
    ) -> Transaction:
        """Reject a pending transaction without touching any balance."""
        ensure_admin(admin)
        settled_at = now or utcnow()
        tx_ref = db.collection(TRANSACTIONS_COLLECTION).document(transaction_id)

        @firestore.transactional
        def reject_in_transaction(transaction: FirestoreTransaction) -> dict[str, Any]:
            data = WalletService._read_pending(tx_ref, transaction)
            update = {
                "status": STATUS_REJECTED,
                "settledBy": admin.get("uid"),
                "settledAt": settled_at,
            }
            transaction.update(tx_ref, update)
            return {**data, **update, "id": transaction_id}

        result = reject_in_transaction(db.transaction())
        logger.info(f"Rejected {result.get('type')} {transaction_id}")
        return result

    @staticmethod
    def _read_pending(tx_ref: Any, transaction: FirestoreTransaction) -> dict[str, Any]:
        """Read a transaction document, requiring it to still be pending."""
        snap = tx_ref.get(transaction=transaction)
        if not snap.exists:
            raise NotFoundError("Transaction not found.")
        data = snap.to_dict() or {}
        status = data.get("status")
        if status in TERMINAL_STATUSES:
            raise InvalidTransitionError(f"Transaction is already {status}.")
        if status != STATUS_PENDING:
            raise InvalidTransitionError(f"Transaction has unknown status: {status}")
        return data

    @staticmethod
    def list_transactions(
        db: Client, user: dict[str, Any], status: str | None = None
    ) -> list[Transaction]:
        """List transactions, newest first.

        Admins see every user's transactions; everyone else sees their own.
        """
        query: Any = db.collection(TRANSACTIONS_COLLECTION)
        if not is_admin(user):
            query = query.where(
                filter=firestore.FieldFilter("userId", "==", user["uid"])
            )
        if status:
            query = query.where(filter=firestore.FieldFilter("status", "==", status))

        owners: dict[str, dict[str, Any] | None] = {}
        transactions = []
        for doc in query.stream():
            data = doc.to_dict() or {}
            data["id"] = doc.id
            owner_id = data.get("userId")
            if owner_id and owner_id not in owners:
                owner_doc = db.collection(USERS_COLLECTION).document(owner_id).get()
                owners[owner_id] = owner_doc.to_dict() if owner_doc.exists else None
            owner = owners.get(owner_id) if owner_id else None
            data["inGameName"] = (owner or {}).get("inGameName") or (
                "Unknown" if owner else "Unknown User"
            )
            data["inGameUID"] = (owner or {}).get("inGameUID") or "Unknown"
            transactions.append(data)

        transactions.sort(
            key=lambda t: to_datetime(t.get("timestamp")) or EPOCH, reverse=True
        )
        return transactions

    @staticmethod
    def serialize(transaction: dict[str, Any]) -> dict[str, Any]:
        """Return a JSON-safe copy of a transaction."""
        data = dict(transaction)
        for key in ("timestamp", "settledAt"):
            if key in data:
                data[key] = isoformat(data[key])
        return data
