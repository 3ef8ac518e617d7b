"""AMC renewal domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from gaurakshak.database.base import Database
from gaurakshak.domain.entities import AmcRenewal as RenewalEntity, PaymentMode, RenewalStatus
from gaurakshak.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    user_not_found,
)
from gaurakshak.utils.choice_parser import parse_choice

logger = logging.getLogger(__name__)


class RenewalService:
    """Service for AMC renewal requests and their approval."""

    def __init__(self, db: Database):
        """Initialize renewal service.

        Args:
            db: Database instance
        """
        self.db = db

    def submit_renewal(
        self,
        user_id: int,
        amount: Decimal,
        payment_date: date,
        payment_mode: str | PaymentMode,
    ) -> int:
        """Submit a renewal payment for approval.

        Args:
            user_id: Submitting user
            amount: Amount paid, greater than zero
            payment_date: Day of payment
            payment_mode: RTGS, NEFT, UPI, Cash or Other

        Returns:
            Renewal ID

        Raises:
            NotFoundError: If user not found
            ValidationError: If amount or date is invalid
            ConflictError: If the user already has a pending request
        """
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))
        if amount is None or Decimal(amount) <= 0 or payment_date is None:
            raise ValidationError("Please enter a valid amount and date.")
        mode = parse_choice(PaymentMode, payment_mode, "payment mode")
        if self.db.list_renewals(status=RenewalStatus.PENDING, user_id=user_id):
            logger.debug("Rejected second pending renewal for user %s", user_id)
            raise ConflictError(f"User {user_id} already has a renewal pending approval")

        return self.db.create_renewal(
            user_id=user.id,
            user_name=user.name,
            customer_id=user.customer_id,
            date=payment_date,
            amount=Decimal(amount),
            payment_mode=mode,
            status=RenewalStatus.PENDING,
        )

    def get_renewal(self, renewal_id: int) -> Optional[RenewalEntity]:
        return self.db.get_renewal(renewal_id)

    def list_renewals(self, status: Optional[str | RenewalStatus] = None) -> list[RenewalEntity]:
        if status is None:
            return self.db.list_renewals()
        return self.db.list_renewals(status=parse_choice(RenewalStatus, status, "status"))

    def approve_renewal(self, renewal_id: int, validity_date: date) -> None:
        """Approve a pending renewal and extend its user's validity.

        The renewal and the user are updated in one atomic write.

        Raises:
            NotFoundError: If renewal not found
            ValidationError: If it is already approved or no date is given
        """
        renewal = self.db.get_renewal(renewal_id)
        if renewal is None:
            raise NotFoundError(f"Renewal {renewal_id} not found")
        if renewal.status is not RenewalStatus.PENDING:
            raise ValidationError(f"Renewal {renewal_id} is already approved")
        if validity_date is None:
            raise ValidationError("Please select a new validity date.")

        self.db.approve_renewal(renewal_id, validity_date)
