"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from household_cashflow.domain.models import (
    BnplAccount,
    BnplInstalmentPlan,
    CashEvent,
    CreditCardObligation,
    EventKind,
    FixedExpense,
    Frequency,
    IncomeSource,
    SavingsGoal,
)


# --- Input records -------------------------------------------------------


class IncomeSchema(BaseModel):
    """Recurring income (weekly, fortnightly or monthly)"""

    name: str = Field(..., min_length=1)
    amount_cents: int = Field(..., gt=0)
    frequency: Frequency
    next_occurrence_date: date

    def to_domain(self) -> IncomeSource:
        return IncomeSource(self.name, self.amount_cents, self.frequency, self.next_occurrence_date)


class ExpenseSchema(BaseModel):
    name: str = Field(..., min_length=1)
    amount_cents: int = Field(..., gt=0)
    frequency: Frequency
    next_due_date: date

    def to_domain(self) -> FixedExpense:
        return FixedExpense(self.name, self.amount_cents, self.frequency, self.next_due_date)


class BnplPlanSchema(BaseModel):
    """Existing BNPL purchase still being repaid"""

    item_name: str = Field(..., min_length=1)
    provider_name: str = Field(..., min_length=1)
    instalment_amount_cents: int = Field(..., gt=0)
    instalment_frequency: Frequency
    instalments_remaining: int = Field(..., ge=0)
    next_payment_date: date

    def to_domain(self) -> BnplInstalmentPlan:
        return BnplInstalmentPlan(
            item_name=self.item_name,
            provider_name=self.provider_name,
            instalment_amount_cents=self.instalment_amount_cents,
            instalment_frequency=self.instalment_frequency,
            instalments_remaining=self.instalments_remaining,
            next_payment_date=self.next_payment_date,
        )


class CreditCardSchema(BaseModel):
    """Credit card; minimum payment defaults to max($25, 2% of balance)"""

    name: str = Field(..., min_length=1)
    balance_cents: int = Field(..., ge=0)
    minimum_payment_cents: Optional[int] = Field(None, ge=0)
    due_day_of_month: int = Field(15, ge=1, le=31)
    credit_limit_cents: int = Field(0, ge=0)
    annual_interest_rate: float = Field(19.99, ge=0)

    def to_domain(self) -> CreditCardObligation:
        if self.minimum_payment_cents is None:
            return CreditCardObligation.from_balance(
                self.name,
                self.balance_cents,
                due_day_of_month=self.due_day_of_month,
                credit_limit_cents=self.credit_limit_cents,
                annual_interest_rate=self.annual_interest_rate,
            )
        return CreditCardObligation(
            name=self.name,
            outstanding_balance_cents=self.balance_cents,
            minimum_payment_cents=self.minimum_payment_cents,
            due_day_of_month=self.due_day_of_month,
            credit_limit_cents=self.credit_limit_cents,
            annual_interest_rate=self.annual_interest_rate,
        )


class BnplAccountSchema(BaseModel):
    provider: str = Field(..., min_length=1, description="afterpay, zip_pay, zip_money or paypal_pay4")
    available_limit_cents: int = Field(..., ge=0)

    def to_domain(self) -> BnplAccount:
        return BnplAccount(self.provider, self.available_limit_cents)


class SavingsGoalSchema(BaseModel):
    name: str = Field(..., min_length=1)
    target_amount_cents: int = Field(..., ge=0)
    current_amount_cents: int = Field(0, ge=0)

    def to_domain(self) -> SavingsGoal:
        return SavingsGoal(self.name, self.target_amount_cents, self.current_amount_cents)


class CashEventSchema(BaseModel):
    """Single dated cash movement (positive = inflow)"""

    model_config = ConfigDict(from_attributes=True)

    date: date
    description: str
    signed_amount_cents: int
    kind: EventKind = EventKind.PURCHASE

    def to_domain(self) -> CashEvent:
        return CashEvent(self.date, self.description, self.signed_amount_cents, self.kind)


# --- Requests ------------------------------------------------------------


class SnapshotRequest(BaseModel):
    """Financial snapshot shared by every engine request"""

    incomes: List[IncomeSchema] = Field(default_factory=list)
    expenses: List[ExpenseSchema] = Field(default_factory=list)
    bnpl_plans: List[BnplPlanSchema] = Field(default_factory=list)
    credit_cards: List[CreditCardSchema] = Field(default_factory=list)
    today: Optional[date] = Field(None, description="Evaluation date, defaults to the server's today")

    def domain_incomes(self) -> List[IncomeSource]:
        return [i.to_domain() for i in self.incomes]

    def domain_expenses(self) -> List[FixedExpense]:
        return [e.to_domain() for e in self.expenses]

    def domain_bnpl_plans(self) -> List[BnplInstalmentPlan]:
        return [p.to_domain() for p in self.bnpl_plans]

    def domain_credit_cards(self) -> List[CreditCardObligation]:
        return [c.to_domain() for c in self.credit_cards]


class ProjectionRequest(SnapshotRequest):
    """Request body for POST /v1/projection"""

    starting_balance_cents: int
    weeks_ahead: Optional[int] = Field(None, ge=1, le=52)
    extra_events: List[CashEventSchema] = Field(default_factory=list)


class SafeToSpendRequest(SnapshotRequest):
    """Request body for POST /v1/safe-to-spend"""

    current_balance_cents: int


class UpcomingPaymentsRequest(SnapshotRequest):
    """Request body for POST /v1/upcoming-payments"""

    days: Optional[int] = Field(None, ge=1, le=366)
    bank_balance_cents: int = 0


class StrategyRequest(SnapshotRequest):
    """Request body for POST /v1/strategies"""

    item: str = Field("purchase", min_length=1)
    price_cents: int = Field(..., gt=0, description="Purchase price in cents")
    starting_balance_cents: int
    bnpl_accounts: List[BnplAccountSchema] = Field(default_factory=list)
    savings_goals: List[SavingsGoalSchema] = Field(default_factory=list)
    weeks_ahead: Optional[int] = Field(None, ge=1, le=52)


class IncomeProcessRequest(BaseModel):
    """Request body for POST /v1/income/process"""

    incomes: List[IncomeSchema]
    today: Optional[date] = None


# --- Responses -----------------------------------------------------------


class DailyBalanceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: date
    balance_cents: int
    events: List[CashEventSchema]


class BalancePointSchema(BaseModel):
    """Date and balance only, for charting"""

    model_config = ConfigDict(from_attributes=True)

    date: date
    balance_cents: int


class ProjectionResponse(BaseModel):
    """Response for POST /v1/projection"""

    daily_balances: List[DailyBalanceSchema]
    minimum_balance_cents: int


class ObligationSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    amount_cents: int
    date: date
    kind: EventKind


class SafeToSpendResponse(BaseModel):
    """Response for POST /v1/safe-to-spend"""

    model_config = ConfigDict(from_attributes=True)

    safe_to_spend_cents: int
    next_pay_date: date
    days_until_pay: int
    upcoming_obligations: List[ObligationSchema]


class UpcomingPaymentsResponse(BaseModel):
    """Response for POST /v1/upcoming-payments"""

    payments: List[ObligationSchema]
    total_cents: int
    net_position_cents: int
    monthly_commitments_cents: int


class ScheduledPaymentSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: date
    amount_cents: int
    label: str


class StrategySchema(BaseModel):
    """Single ranked payment strategy"""

    model_config = ConfigDict(from_attributes=True)

    name: str
    provider_label: str
    is_available: bool
    unavailable_reason: Optional[str] = None
    total_cost_cents: int
    total_fees_cents: int
    payment_schedule: List[ScheduledPaymentSchema]
    projected_daily_balances: List[BalancePointSchema]
    minimum_projected_balance_cents: int
    savings_goal_impact_cents: int
    outstanding_after_schedule_cents: int
    score: int


class StrategiesResponse(BaseModel):
    """Response for POST /v1/strategies"""

    item: str
    price_cents: int
    strategies: List[StrategySchema]
    baseline_projection: List[BalancePointSchema]


class IncomePaymentSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    income_name: str
    date: date
    amount_cents: int


class IncomeProcessResponse(BaseModel):
    """Response for POST /v1/income/process"""

    payments: List[IncomePaymentSchema]
    incomes: List[IncomeSchema]
    total_credited_cents: int
