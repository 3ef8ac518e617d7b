"""Support ticket domain service."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Optional

from gaurakshak.database.base import Database
from gaurakshak.domain.entities import SupportTicket as TicketEntity, TicketStatus
from gaurakshak.domain.errors import NotFoundError, ValidationError, user_not_found
from gaurakshak.utils.choice_parser import parse_choice

logger = logging.getLogger(__name__)

# Closed tickets drop out of the default listing after this many days.
CLOSED_TICKET_RETENTION_DAYS = 15


def _naive_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without a zone; compare everything as naive UTC
    if value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


def matches_ticket_search(ticket: TicketEntity, term: str) -> bool:
    needle = term.lower()
    values = (ticket.user_name, ticket.user_email, ticket.subject, ticket.customer_id or "")
    return any(needle in value.lower() for value in values)


class SupportService:
    """Service for support tickets raised by app users."""

    def __init__(self, db: Database):
        """Initialize support service.

        Args:
            db: Database instance
        """
        self.db = db

    def submit_ticket(self, user_id: int, subject: str, description: str) -> int:
        """Open a support ticket on behalf of a user.

        The user's name, email and customer ID are copied onto the ticket.

        Returns:
            Ticket ID

        Raises:
            NotFoundError: If user not found
            ValidationError: If subject or description is blank
        """
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))
        subject = (subject or "").strip()
        description = (description or "").strip()
        if not subject or not description:
            logger.debug("Rejected ticket without subject or description")
            raise ValidationError("Please fill out all fields.")

        return self.db.create_support_ticket(
            user_id=user.id,
            user_name=user.name,
            user_email=user.email,
            customer_id=user.customer_id,
            subject=subject,
            description=description,
            status=TicketStatus.OPEN,
        )

    def get_ticket(self, ticket_id: int) -> Optional[TicketEntity]:
        return self.db.get_support_ticket(ticket_id)

    def list_tickets(
        self,
        user_id: Optional[int] = None,
        status: Optional[str | TicketStatus] = None,
        search: Optional[str] = None,
        closed_within_days: Optional[int] = CLOSED_TICKET_RETENTION_DAYS,
        now: Optional[datetime] = None,
    ) -> list[TicketEntity]:
        """List tickets, newest first.

        Args:
            user_id: Only this user's tickets
            status: Open or Closed
            search: Substring of name, email, subject or customer ID
            closed_within_days: Hide tickets closed longer ago than this;
                None keeps every closed ticket
            now: Reference time for the closed-ticket cutoff

        Returns:
            Tickets by submission time; closed-only listings by closing time
        """
        ticket_status = parse_choice(TicketStatus, status, "status") if status else None
        tickets = self.db.list_support_tickets(status=ticket_status, user_id=user_id)

        if closed_within_days is not None:
            cutoff = _naive_utc(now or datetime.now(UTC)) - timedelta(days=closed_within_days)
            tickets = [
                t
                for t in tickets
                if t.status is TicketStatus.OPEN
                or t.closed_at is None
                or _naive_utc(t.closed_at) > cutoff
            ]
        if search:
            tickets = [t for t in tickets if matches_ticket_search(t, search)]
        if ticket_status is TicketStatus.CLOSED:
            tickets.sort(key=lambda t: _naive_utc(t.closed_at or t.submitted_at), reverse=True)
        return tickets

    def set_status(
        self, ticket_id: int, status: str | TicketStatus, now: Optional[datetime] = None
    ) -> None:
        """Close or reopen a ticket.

        Closing stamps ``closed_at``; reopening clears it.

        Raises:
            NotFoundError: If ticket not found
            ValidationError: If the status is invalid or unchanged
        """
        ticket = self.db.get_support_ticket(ticket_id)
        if ticket is None:
            raise NotFoundError(f"Support ticket {ticket_id} not found")
        new_status = parse_choice(TicketStatus, status, "status")
        if ticket.status is new_status:
            raise ValidationError(f"Ticket {ticket_id} is already {new_status.value}")

        closed_at = (now or datetime.now(UTC)) if new_status is TicketStatus.CLOSED else None
        self.db.update_support_ticket(ticket_id, status=new_status, closed_at=closed_at)
        logger.info("Marked support ticket %s as %s", ticket_id, new_status.value)
