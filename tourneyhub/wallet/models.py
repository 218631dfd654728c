"""Data models for the wallet blueprint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from tourneyhub.core.constants import MIN_WITHDRAWAL
from tourneyhub.core.types import FirestoreDocument
from tourneyhub.errors import ValidationError


class Transaction(FirestoreDocument, total=False):
    """A deposit or withdrawal request in the ``transactions`` collection."""

    userId: str
    type: str
    amount: int
    status: str
    proof: Optional[str]
    accountNumber: str
    accountType: str
    accountName: str
    timestamp: Any
    settledBy: str
    settledAt: Any

    # Display fields joined from the owner's profile
    inGameName: str
    inGameUID: str


@dataclass
class DepositRequest:
    """A request to add coins, backed by a payment proof image."""

    amount: int
    proof_url: Optional[str]

    def validate(self) -> None:
        """Validate the deposit request."""
        if not isinstance(self.amount, int) or self.amount <= 0:
            raise ValidationError("Please enter a valid amount")
        if not self.proof_url:
            raise ValidationError("Please upload payment proof")


@dataclass
class WithdrawRequest:
    """A request to cash out coins to a mobile wallet account."""

    amount: int
    account_number: str
    account_type: str
    account_name: str

    def validate(self, min_withdrawal: int = MIN_WITHDRAWAL) -> None:
        """Validate the withdrawal request."""
        if not isinstance(self.amount, int) or self.amount < min_withdrawal:
            raise ValidationError(f"Minimum withdrawal is {min_withdrawal} coins")
        self.account_number = (self.account_number or "").strip()
        self.account_type = (self.account_type or "").strip()
        self.account_name = (self.account_name or "").strip()
        if not self.account_number:
            raise ValidationError("Please enter your account number")
        if not self.account_type:
            raise ValidationError("Please enter account type (EasyPaisa/JazzCash)")
        if not self.account_name:
            raise ValidationError("Please enter account holder name")
