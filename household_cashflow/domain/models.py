"""Domain models - pure Python dataclasses representing household finance records"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional

from household_cashflow.domain.exceptions import InvalidFrequencyError, InvalidInputError


class Frequency(str, Enum):
    """How often a recurring inflow or outflow repeats"""

    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value) -> "Frequency":
        """Convert a raw frequency string into the enum, rejecting unknown values"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            raise InvalidFrequencyError(f"Unknown frequency: {value!r}") from e


# Incomes and BNPL plans never repeat less often than monthly
PAY_FREQUENCIES = (Frequency.WEEKLY, Frequency.FORTNIGHTLY, Frequency.MONTHLY)


class EventKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    BNPL = "bnpl"
    CREDIT_CARD = "credit_card"
    PURCHASE = "purchase"


def minimum_payment_for(balance_cents: int) -> int:
    """Card minimum payment policy: $25 or 2% of the balance, whichever is greater"""
    return max(2500, -(-balance_cents * 2 // 100))


@dataclass(frozen=True)
class IncomeSource:
    """Recurring inflow such as a salary"""

    name: str
    amount_cents: int
    frequency: Frequency
    next_occurrence_date: date

    def __post_init__(self):
        object.__setattr__(self, "frequency", Frequency.parse(self.frequency))
        if self.frequency not in PAY_FREQUENCIES:
            raise InvalidInputError(f"Income {self.name!r} cannot be paid {self.frequency.value}")
        if self.amount_cents <= 0:
            raise InvalidInputError(f"Income {self.name!r} must have a positive amount")


@dataclass(frozen=True)
class FixedExpense:
    """Recurring bill"""

    name: str
    amount_cents: int
    frequency: Frequency
    next_due_date: date

    def __post_init__(self):
        object.__setattr__(self, "frequency", Frequency.parse(self.frequency))
        if self.amount_cents <= 0:
            raise InvalidInputError(f"Expense {self.name!r} must have a positive amount")


@dataclass(frozen=True)
class BnplInstalmentPlan:
    """Existing BNPL purchase still being repaid"""

    item_name: str
    provider_name: str
    instalment_amount_cents: int
    instalment_frequency: Frequency
    instalments_remaining: int
    next_payment_date: date

    def __post_init__(self):
        object.__setattr__(self, "instalment_frequency", Frequency.parse(self.instalment_frequency))
        if self.instalment_frequency not in PAY_FREQUENCIES:
            raise InvalidInputError(
                f"BNPL plan {self.item_name!r} cannot be repaid {self.instalment_frequency.value}"
            )
        if self.instalments_remaining < 0:
            raise InvalidInputError(f"BNPL plan {self.item_name!r} has negative instalments remaining")

    @property
    def label(self) -> str:
        return f"{self.provider_name} - {self.item_name}"

    @property
    def outstanding_cents(self) -> int:
        return self.instalment_amount_cents * self.instalments_remaining


@dataclass(frozen=True)
class CreditCardObligation:
    """Credit card account with a monthly minimum repayment"""

    name: str
    outstanding_balance_cents: int
    minimum_payment_cents: int
    due_day_of_month: int
    credit_limit_cents: int = 0
    annual_interest_rate: float = 19.99

    def __post_init__(self):
        if not 1 <= self.due_day_of_month <= 31:
            raise InvalidInputError(f"Card {self.name!r} due day must be between 1 and 31")

    @classmethod
    def from_balance(
        cls,
        name: str,
        outstanding_balance_cents: int,
        due_day_of_month: int = 15,
        credit_limit_cents: int = 0,
        annual_interest_rate: float = 19.99,
    ) -> "CreditCardObligation":
        """Build a card whose minimum payment follows the standard policy"""
        minimum = minimum_payment_for(outstanding_balance_cents) if outstanding_balance_cents > 0 else 0
        return cls(
            name=name,
            outstanding_balance_cents=outstanding_balance_cents,
            minimum_payment_cents=minimum,
            due_day_of_month=due_day_of_month,
            credit_limit_cents=credit_limit_cents,
            annual_interest_rate=annual_interest_rate,
        )

    @property
    def available_credit_cents(self) -> int:
        return self.credit_limit_cents - self.outstanding_balance_cents

    @property
    def has_minimum_due(self) -> bool:
        return self.outstanding_balance_cents > 0 and self.minimum_payment_cents > 0


@dataclass(frozen=True)
class BnplAccount:
    """BNPL provider account that could finance a new purchase"""

    provider: str
    available_limit_cents: int


@dataclass(frozen=True)
class SavingsGoal:
    name: str
    target_amount_cents: int
    current_amount_cents: int = 0

    @property
    def shortfall_cents(self) -> int:
        return max(0, self.target_amount_cents - self.current_amount_cents)


@dataclass(frozen=True)
class CashEvent:
    """Single dated cash movement (positive = inflow, negative = outflow)"""

    date: date
    description: str
    signed_amount_cents: int
    kind: EventKind


@dataclass
class DailyBalance:
    """Balance at the end of one calendar day"""

    date: date
    balance_cents: int
    events: List[CashEvent] = field(default_factory=list)


@dataclass(frozen=True)
class ScheduledPayment:
    """Single payment in a strategy's repayment schedule"""

    date: date
    amount_cents: int
    label: str


@dataclass(frozen=True)
class UpcomingObligation:
    name: str
    amount_cents: int
    date: date
    kind: EventKind


@dataclass
class SafeToSpend:
    """Spendable balance for the current pay cycle"""

    safe_to_spend_cents: int
    next_pay_date: date
    days_until_pay: int
    upcoming_obligations: List[UpcomingObligation]


@dataclass
class PaymentStrategy:
    """One candidate way to pay for a purchase"""

    name: str
    provider_label: str
    is_available: bool
    total_cost_cents: int
    total_fees_cents: int
    payment_schedule: List[ScheduledPayment]
    projected_daily_balances: List[DailyBalance]
    minimum_projected_balance_cents: int
    unavailable_reason: Optional[str] = None
    savings_goal_impact_cents: int = 0
    outstanding_after_schedule_cents: int = 0
    score: int = 0

    @property
    def payment_count(self) -> int:
        return len(self.payment_schedule)


@dataclass(frozen=True)
class IncomePayment:
    """Income that has landed and should be credited"""

    income_name: str
    date: date
    amount_cents: int


@dataclass
class IncomeProcessingResult:
    payments: List[IncomePayment]
    incomes: List[IncomeSource]

    @property
    def total_credited_cents(self) -> int:
        return sum(p.amount_cents for p in self.payments)
