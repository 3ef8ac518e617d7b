"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including turning stored strings
back into domain enums, so the schema can change without touching services.
"""

from gaurakshak.domain import entities as domain
from gaurakshak.database.models import (
    Account as ORMAccount,
    AmcRenewal as ORMAmcRenewal,
    Animal as ORMAnimal,
    MilkRecord as ORMMilkRecord,
    Movement as ORMMovement,
    SupportTicket as ORMSupportTicket,
    Transaction as ORMTransaction,
    User as ORMUser,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        created_at=orm_account.created_at,
    )


def animal_to_domain(orm_animal: ORMAnimal) -> domain.Animal:
    """Convert SQLAlchemy Animal model to domain Animal entity."""
    return domain.Animal(
        id=orm_animal.id,
        animal_type=orm_animal.animal_type,
        govt_tag_no=orm_animal.govt_tag_no,
        breed=orm_animal.breed,
        color=orm_animal.color,
        gender=domain.Gender(orm_animal.gender),
        year_of_birth=orm_animal.year_of_birth,
        health_status=domain.HealthStatus(orm_animal.health_status),
        tag_color=orm_animal.tag_color,
        identification_mark=orm_animal.identification_mark,
        image_url=orm_animal.image_url,
        created_at=orm_animal.created_at,
    )


def movement_to_domain(orm_movement: ORMMovement) -> domain.Movement:
    """Convert SQLAlchemy Movement model to domain Movement entity."""
    return domain.Movement(
        id=orm_movement.id,
        animal_id=orm_movement.animal_id,
        movement_type=domain.MovementType(orm_movement.movement_type),
        date=orm_movement.date,
        reason=orm_movement.reason,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    milk_sale = None
    if orm_transaction.customer_name is not None:
        milk_sale = domain.MilkSaleDetails(
            customer_name=orm_transaction.customer_name,
            quantity=orm_transaction.quantity,
            rate=orm_transaction.rate,
            invoice_no=orm_transaction.invoice_no,
        )
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        record_type=domain.RecordType(orm_transaction.record_type),
        amount=orm_transaction.amount,
        description=orm_transaction.description or "",
        account_id=orm_transaction.account_id,
        category=orm_transaction.category,
        milk_sale=milk_sale,
        transfer_group=orm_transaction.transfer_group,
    )


def milk_record_to_domain(orm_record: ORMMilkRecord) -> domain.MilkRecord:
    """Convert SQLAlchemy MilkRecord model to domain MilkRecord entity."""
    return domain.MilkRecord(
        id=orm_record.id,
        date=orm_record.date,
        animal_id=orm_record.animal_id,
        animal_tag=orm_record.animal_tag,
        quantity=orm_record.quantity,
        session=domain.MilkSession(orm_record.session),
    )


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        name=orm_user.name,
        email=orm_user.email,
        role=domain.UserRole(orm_user.role),
        status=domain.UserStatus(orm_user.status),
        signup_date=orm_user.signup_date,
        customer_id=orm_user.customer_id,
        validity_date=orm_user.validity_date,
        address=orm_user.address,
        mobile_no=orm_user.mobile_no,
    )


def renewal_to_domain(orm_renewal: ORMAmcRenewal) -> domain.AmcRenewal:
    """Convert SQLAlchemy AmcRenewal model to domain AmcRenewal entity."""
    return domain.AmcRenewal(
        id=orm_renewal.id,
        user_id=orm_renewal.user_id,
        user_name=orm_renewal.user_name,
        customer_id=orm_renewal.customer_id,
        date=orm_renewal.date,
        amount=orm_renewal.amount,
        payment_mode=domain.PaymentMode(orm_renewal.payment_mode),
        status=domain.RenewalStatus(orm_renewal.status),
        submitted_at=orm_renewal.submitted_at,
    )


def support_ticket_to_domain(orm_ticket: ORMSupportTicket) -> domain.SupportTicket:
    """Convert SQLAlchemy SupportTicket model to domain SupportTicket entity."""
    return domain.SupportTicket(
        id=orm_ticket.id,
        user_id=orm_ticket.user_id,
        user_name=orm_ticket.user_name,
        user_email=orm_ticket.user_email,
        customer_id=orm_ticket.customer_id,
        subject=orm_ticket.subject,
        description=orm_ticket.description,
        status=domain.TicketStatus(orm_ticket.status),
        submitted_at=orm_ticket.submitted_at,
        closed_at=orm_ticket.closed_at,
    )
