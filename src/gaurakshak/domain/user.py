"""User account and approval domain service."""

import logging
import re
from datetime import date
from typing import Iterable, Optional

from gaurakshak.database.base import Database
from gaurakshak.domain.entities import User as UserEntity, UserRole, UserStatus
from gaurakshak.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    user_not_found,
)
from gaurakshak.utils.choice_parser import parse_choice

logger = logging.getLogger(__name__)

CUSTOMER_ID_PREFIX = "G-"
FIRST_CUSTOMER_ID = "G-001"
ADMIN_VALIDITY = date(2099, 12, 31)

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def next_customer_id(users: Iterable[UserEntity]) -> str:
    """One past the highest ``G-NNN`` customer ID, zero padded to three digits."""
    numbers = []
    for user in users:
        if user.customer_id and user.customer_id.startswith(CUSTOMER_ID_PREFIX):
            suffix = user.customer_id[len(CUSTOMER_ID_PREFIX):]
            if suffix.isdigit():
                numbers.append(int(suffix))
    if not numbers:
        return FIRST_CUSTOMER_ID
    return f"{CUSTOMER_ID_PREFIX}{max(numbers) + 1:03d}"


class UserService:
    """Service for user signup, approval and expiry."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_user(self, user_id: int) -> UserEntity:
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))
        return user

    def sign_up(
        self,
        name: str,
        email: str,
        address: Optional[str] = None,
        mobile_no: Optional[str] = None,
        signup_date: Optional[date] = None,
    ) -> int:
        """Register a user.

        The very first user becomes an Active Admin with customer ID G-001
        and an open-ended validity; everyone after waits Pending approval.

        Returns:
            User ID

        Raises:
            ValidationError: If name or email is missing or malformed
            ConflictError: If the email is already registered
        """
        name = (name or "").strip()
        email = (email or "").strip().lower()
        if not name:
            raise ValidationError("Name is required")
        if not _EMAIL_PATTERN.match(email):
            raise ValidationError(f"Invalid email address '{email}'")
        if self.db.get_user_by_email(email) is not None:
            logger.debug("Rejected duplicate signup for %s", email)
            raise ConflictError(f"A user with email '{email}' already exists")

        is_first = not self.db.list_users()
        return self.db.create_user(
            name=name,
            email=email,
            role=UserRole.ADMIN if is_first else UserRole.USER,
            status=UserStatus.ACTIVE if is_first else UserStatus.PENDING,
            signup_date=signup_date or date.today(),
            customer_id=FIRST_CUSTOMER_ID if is_first else None,
            validity_date=ADMIN_VALIDITY if is_first else None,
            address=address or None,
            mobile_no=mobile_no or None,
        )

    def get_user(self, user_id: int) -> Optional[UserEntity]:
        return self.db.get_user(user_id)

    def list_users(self, status: Optional[str | UserStatus] = None) -> list[UserEntity]:
        if status is None:
            return self.db.list_users()
        return self.db.list_users(status=parse_choice(UserStatus, status, "status"))

    def approve_user(self, user_id: int, validity_date: date) -> str:
        """Activate a pending user.

        Args:
            user_id: User ID
            validity_date: Last day of access

        Returns:
            The customer ID assigned to the user

        Raises:
            NotFoundError: If user not found
            ValidationError: If the user is not pending or no validity date is given
        """
        user = self._require_user(user_id)
        if user.status is not UserStatus.PENDING:
            raise ValidationError(f"User {user_id} is not pending approval")
        if validity_date is None:
            raise ValidationError("Please select a validity date.")

        customer_id = next_customer_id(self.db.list_users())
        self.db.update_user(
            user_id,
            status=UserStatus.ACTIVE,
            customer_id=customer_id,
            validity_date=validity_date,
        )
        return customer_id

    def deactivate_user(self, user_id: int) -> None:
        """Mark a user Inactive.

        Raises:
            NotFoundError: If user not found
        """
        self._require_user(user_id)
        self.db.update_user(user_id, status=UserStatus.INACTIVE)

    def expire_users(self, today: Optional[date] = None) -> list[int]:
        """Mark Active users whose validity date has passed as Expired.

        Returns:
            IDs of the users that were expired
        """
        today = today or date.today()
        expired = []
        for user in self.db.list_users(status=UserStatus.ACTIVE):
            if user.validity_date is not None and user.validity_date < today:
                self.db.update_user(user.id, status=UserStatus.EXPIRED)
                expired.append(user.id)
        return expired
