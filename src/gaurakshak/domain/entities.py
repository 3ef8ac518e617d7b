"""Domain model entities for gaurakshak.

These are pure data classes representing the gaushala's records, independent
of the database schema. Everything the store hands back is one of these
frozen entities, so reports always work on an immutable snapshot.
"""

from dataclasses import dataclass, field
from datetime import datetime, date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Iterator, Optional, Union

CASH_CUSTOMER_ID = "cash-customer"
CASH_CUSTOMER_NAME = "Cash Customer"

MILK_SALE_CATEGORY = "Milk Sale"
TRANSFER_CATEGORY = "Bank Transfer"

AccountRef = Union[int, str]


class AccountType(str, Enum):
    CUSTOMER = "Customer"
    BANK = "Bank"
    EXPENSE = "Expense"


class RecordType(str, Enum):
    """Stored discriminator of a financial record."""

    RECEIPT = "Receipt"
    PAYMENT = "Payment"
    EXPENSE = "Expense"
    MILK_SALE = "Milk Sale"


class TransactionKind(str, Enum):
    """Semantic kind of a financial record, derived from type and category."""

    RECEIPT = "Receipt"
    PAYMENT = "Payment"
    EXPENSE = "Expense"
    TRANSFER_RECEIPT = "Transfer Receipt"
    TRANSFER_PAYMENT = "Transfer Payment"
    MILK_SALE = "Milk Sale"
    MILK_SALE_RECEIPT = "Milk Sale Receipt"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class HealthStatus(str, Enum):
    HEALTHY = "Healthy"
    SICK = "Sick"
    UNDER_TREATMENT = "Under Treatment"


class MovementType(str, Enum):
    ENTRY = "Entry"
    EXIT = "Exit"


class AgeCohort(str, Enum):
    YOUNG = "0-3yr"
    MATURE = ">3yr"


class MilkSession(str, Enum):
    MORNING = "Morning"
    EVENING = "Evening"


class UserRole(str, Enum):
    ADMIN = "Admin"
    USER = "User"


class UserStatus(str, Enum):
    PENDING = "Pending"
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    EXPIRED = "Expired"


class RenewalStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"


class PaymentMode(str, Enum):
    RTGS = "RTGS"
    NEFT = "NEFT"
    UPI = "UPI"
    CASH = "Cash"
    OTHER = "Other"


class TicketStatus(str, Enum):
    OPEN = "Open"
    CLOSED = "Closed"


@dataclass(frozen=True)
class Account:
    """Ledger account domain entity."""

    id: int
    name: str
    account_type: AccountType
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Animal:
    """Registered animal domain entity."""

    id: int
    animal_type: str
    govt_tag_no: str
    breed: str
    color: str
    gender: Gender
    year_of_birth: int
    health_status: HealthStatus = HealthStatus.HEALTHY
    tag_color: str = ""
    identification_mark: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    def age_in(self, year: int) -> int:
        """Coarse age in whole years for a reporting year."""
        return year - self.year_of_birth

    def cohort_in(self, year: int) -> AgeCohort:
        return AgeCohort.YOUNG if self.age_in(year) <= 3 else AgeCohort.MATURE


@dataclass(frozen=True)
class Movement:
    """Animal entry or exit event."""

    id: int
    animal_id: int
    movement_type: MovementType
    date: date
    reason: str


@dataclass(frozen=True)
class MilkSaleDetails:
    """Invoice fields carried by milk-sale records."""

    customer_name: str
    quantity: Optional[Decimal] = None
    rate: Optional[Decimal] = None
    invoice_no: Optional[str] = None


_CREDIT_KINDS = frozenset(
    {
        TransactionKind.RECEIPT,
        TransactionKind.TRANSFER_RECEIPT,
        TransactionKind.MILK_SALE_RECEIPT,
    }
)


@dataclass(frozen=True)
class Transaction:
    """Financial record domain entity.

    ``amount`` is always positive; whether it credits or debits an account is
    decided by :attr:`kind`.
    """

    id: int
    date: date
    record_type: RecordType
    amount: Decimal
    description: str = ""
    account_id: Optional[int] = None
    category: Optional[str] = None
    milk_sale: Optional[MilkSaleDetails] = None
    transfer_group: Optional[str] = None

    @property
    def kind(self) -> TransactionKind:
        if self.record_type is RecordType.RECEIPT:
            if self.category == TRANSFER_CATEGORY:
                return TransactionKind.TRANSFER_RECEIPT
            if self.category == MILK_SALE_CATEGORY:
                return TransactionKind.MILK_SALE_RECEIPT
            return TransactionKind.RECEIPT
        if self.record_type is RecordType.PAYMENT:
            if self.category == TRANSFER_CATEGORY:
                return TransactionKind.TRANSFER_PAYMENT
            return TransactionKind.PAYMENT
        if self.record_type is RecordType.EXPENSE:
            return TransactionKind.EXPENSE
        return TransactionKind.MILK_SALE

    @property
    def is_credit(self) -> bool:
        return self.kind in _CREDIT_KINDS

    @property
    def credit(self) -> Decimal:
        return self.amount if self.is_credit else Decimal("0")

    @property
    def debit(self) -> Decimal:
        return Decimal("0") if self.is_credit else self.amount

    @property
    def is_transfer_leg(self) -> bool:
        return self.kind in (TransactionKind.TRANSFER_RECEIPT, TransactionKind.TRANSFER_PAYMENT)


@dataclass(frozen=True)
class MilkRecord:
    """Per-animal milk production for one session of one day."""

    id: int
    date: date
    animal_id: int
    animal_tag: str
    quantity: Decimal
    session: MilkSession


@dataclass(frozen=True)
class MilkDailyTotal:
    date: date
    morning: Decimal
    evening: Decimal

    @property
    def total(self) -> Decimal:
        return self.morning + self.evening


@dataclass(frozen=True)
class User:
    """Application user (a gaushala operator subscribing to the service)."""

    id: int
    name: str
    email: str
    role: UserRole
    status: UserStatus
    signup_date: date
    customer_id: Optional[str] = None
    validity_date: Optional[date] = None
    address: Optional[str] = None
    mobile_no: Optional[str] = None


@dataclass(frozen=True)
class AmcRenewal:
    """Annual maintenance contract renewal request."""

    id: int
    user_id: int
    user_name: str
    customer_id: Optional[str]
    date: date
    amount: Decimal
    payment_mode: PaymentMode
    status: RenewalStatus
    submitted_at: Optional[datetime] = None


@dataclass(frozen=True)
class SupportTicket:
    """Help request raised by an app user."""

    id: int
    user_id: int
    user_name: str
    user_email: str
    customer_id: Optional[str]
    subject: str
    description: str
    status: TicketStatus = TicketStatus.OPEN
    submitted_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-day window; a missing bound is open on that side."""

    start: Optional[date] = None
    end: Optional[date] = None

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True

    def days(self) -> Iterator[date]:
        """Iterate every day from start to end (start alone if end is open)."""
        if self.start is None:
            return
        last = self.end if self.end is not None else self.start
        current = self.start
        while current <= last:
            yield current
            current += timedelta(days=1)


@dataclass(frozen=True)
class LedgerRow:
    transaction_id: int
    date: date
    description: str
    debit: Decimal
    credit: Decimal
    balance: Decimal


@dataclass(frozen=True)
class LedgerReport:
    """Account statement for a window of the transaction log."""

    account_id: Optional[AccountRef]
    rows: tuple[LedgerRow, ...] = ()
    opening_balance: Decimal = Decimal("0")
    closing_balance: Decimal = Decimal("0")
    show_opening: bool = False

    @property
    def total_debit(self) -> Decimal:
        return sum((row.debit for row in self.rows), Decimal("0"))

    @property
    def total_credit(self) -> Decimal:
        return sum((row.credit for row in self.rows), Decimal("0"))


@dataclass(frozen=True)
class CohortCounts:
    """Headcount split by gender and, independently, by age cohort."""

    male: int = 0
    female: int = 0
    age_0_3: int = 0
    age_gt_3: int = 0

    @classmethod
    def single(cls, animal: Animal, year: int) -> "CohortCounts":
        """Counts contributed by one animal in a reporting year."""
        is_male = animal.gender is Gender.MALE
        is_young = animal.cohort_in(year) is AgeCohort.YOUNG
        return cls(
            male=int(is_male),
            female=int(not is_male),
            age_0_3=int(is_young),
            age_gt_3=int(not is_young),
        )

    def __add__(self, other: "CohortCounts") -> "CohortCounts":
        return CohortCounts(
            male=self.male + other.male,
            female=self.female + other.female,
            age_0_3=self.age_0_3 + other.age_0_3,
            age_gt_3=self.age_gt_3 + other.age_gt_3,
        )

    def __sub__(self, other: "CohortCounts") -> "CohortCounts":
        return CohortCounts(
            male=self.male - other.male,
            female=self.female - other.female,
            age_0_3=self.age_0_3 - other.age_0_3,
            age_gt_3=self.age_gt_3 - other.age_gt_3,
        )


@dataclass(frozen=True)
class DailySummaryRow:
    date: date
    opening: CohortCounts
    inflow: CohortCounts
    outflow: CohortCounts
    closing: CohortCounts
    in_reasons: str = ""
    out_reasons: str = ""


@dataclass(frozen=True)
class AgeBreakdown:
    age_0_3: int = 0
    age_gt_3: int = 0

    @property
    def total(self) -> int:
        return self.age_0_3 + self.age_gt_3

    def plus(self, cohort: AgeCohort) -> "AgeBreakdown":
        if cohort is AgeCohort.YOUNG:
            return AgeBreakdown(self.age_0_3 + 1, self.age_gt_3)
        return AgeBreakdown(self.age_0_3, self.age_gt_3 + 1)

    def __add__(self, other: "AgeBreakdown") -> "AgeBreakdown":
        return AgeBreakdown(self.age_0_3 + other.age_0_3, self.age_gt_3 + other.age_gt_3)

    def __sub__(self, other: "AgeBreakdown") -> "AgeBreakdown":
        return AgeBreakdown(self.age_0_3 - other.age_0_3, self.age_gt_3 - other.age_gt_3)


@dataclass(frozen=True)
class CrossTabSummary:
    opening: AgeBreakdown = field(default_factory=AgeBreakdown)
    inflow: AgeBreakdown = field(default_factory=AgeBreakdown)
    outflow: AgeBreakdown = field(default_factory=AgeBreakdown)
    closing: AgeBreakdown = field(default_factory=AgeBreakdown)
    in_reasons: tuple[str, ...] = ()
    out_reasons: tuple[str, ...] = ()

    def __add__(self, other: "CrossTabSummary") -> "CrossTabSummary":
        return CrossTabSummary(
            opening=self.opening + other.opening,
            inflow=self.inflow + other.inflow,
            outflow=self.outflow + other.outflow,
            closing=self.closing + other.closing,
            in_reasons=self.in_reasons + other.in_reasons,
            out_reasons=self.out_reasons + other.out_reasons,
        )


@dataclass(frozen=True)
class CrossTabReport:
    start: date
    end: date
    male: CrossTabSummary
    female: CrossTabSummary

    @property
    def total(self) -> CrossTabSummary:
        return self.male + self.female


@dataclass(frozen=True)
class DetailedReportRow:
    """Roster line for an animal that has any movement history."""

    animal: Animal
    age: int
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    check_out_reason: Optional[str] = None
