"""SQLAlchemy models for gaurakshak database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Ledger account model (customer, bank or expense head)."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    account_type = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="account")


class Animal(Base):
    """Registered animal model."""

    __tablename__ = "animals"

    id = Column(Integer, primary_key=True)
    animal_type = Column(String, nullable=False)
    # Uniqueness is checked by AnimalService before writing, not by a constraint
    govt_tag_no = Column(String, nullable=False, index=True)
    breed = Column(String, nullable=False)
    color = Column(String, nullable=False, default="")
    gender = Column(String, nullable=False)
    year_of_birth = Column(Integer, nullable=False)
    health_status = Column(String, nullable=False)
    tag_color = Column(String, nullable=False, default="")
    identification_mark = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    movements = relationship("Movement", back_populates="animal")
    milk_records = relationship("MilkRecord", back_populates="animal")


class Movement(Base):
    """Animal entry/exit event model."""

    __tablename__ = "movements"

    id = Column(Integer, primary_key=True)
    animal_id = Column(Integer, ForeignKey("animals.id"), nullable=False)
    movement_type = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    reason = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    animal = relationship("Animal", back_populates="movements")


class Transaction(Base):
    """Financial record model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    record_type = Column(String, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=True)
    customer_name = Column(String, nullable=True)
    quantity = Column(Numeric(10, 2), nullable=True)
    rate = Column(Numeric(10, 2), nullable=True)
    invoice_no = Column(String, nullable=True)
    transfer_group = Column(String, nullable=True, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")


class MilkRecord(Base):
    """Milk production model."""

    __tablename__ = "milk_records"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    animal_id = Column(Integer, ForeignKey("animals.id"), nullable=False)
    animal_tag = Column(String, nullable=False)
    quantity = Column(Numeric(10, 2), nullable=False)
    session = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    animal = relationship("Animal", back_populates="milk_records")


class User(Base):
    """Application user model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    role = Column(String, nullable=False)
    status = Column(String, nullable=False)
    signup_date = Column(Date, nullable=False)
    customer_id = Column(String, nullable=True)
    validity_date = Column(Date, nullable=True)
    address = Column(String, nullable=True)
    mobile_no = Column(String, nullable=True)

    # Relationships
    renewals = relationship("AmcRenewal", back_populates="user")
    support_tickets = relationship("SupportTicket", back_populates="user")


class AmcRenewal(Base):
    """AMC renewal request model."""

    __tablename__ = "amc_renewals"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    user_name = Column(String, nullable=False)
    customer_id = Column(String, nullable=True)
    date = Column(Date, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_mode = Column(String, nullable=False)
    status = Column(String, nullable=False)
    submitted_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    user = relationship("User", back_populates="renewals")


class SupportTicket(Base):
    """Support ticket model."""

    __tablename__ = "support_tickets"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    user_name = Column(String, nullable=False)
    user_email = Column(String, nullable=False)
    customer_id = Column(String, nullable=True)
    subject = Column(String, nullable=False)
    description = Column(String, nullable=False)
    status = Column(String, nullable=False)
    submitted_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    closed_at = Column(DateTime, nullable=True)

    # Relationships
    user = relationship("User", back_populates="support_tickets")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
