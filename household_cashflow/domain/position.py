"""Dashboard summaries: upcoming payments, net position, monthly equivalents"""

from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

from household_cashflow.domain.models import (
    BnplInstalmentPlan,
    CreditCardObligation,
    FixedExpense,
    Frequency,
    UpcomingObligation,
)
from household_cashflow.domain.safe_to_spend import obligations_between

DEFAULT_UPCOMING_DAYS = 14

# Average occurrences per month
MONTHLY_MULTIPLIERS = {
    Frequency.WEEKLY: Decimal("4.33"),
    Frequency.FORTNIGHTLY: Decimal("2.17"),
    Frequency.MONTHLY: Decimal("1"),
    Frequency.QUARTERLY: Decimal("1") / Decimal("3"),
    Frequency.YEARLY: Decimal("1") / Decimal("12"),
}


def upcoming_payments(
    expenses: Iterable[FixedExpense] = (),
    bnpl_plans: Iterable[BnplInstalmentPlan] = (),
    credit_cards: Iterable[CreditCardObligation] = (),
    days: int = DEFAULT_UPCOMING_DAYS,
    today: Optional[date] = None,
) -> List[UpcomingObligation]:
    """Obligations due from today through ``days`` days ahead, earliest first"""
    today = today or date.today()
    return obligations_between(
        today, today + timedelta(days=days), expenses, bnpl_plans, credit_cards, card_label="payment"
    )


def monthly_equivalent(amount_cents: int, frequency) -> int:
    """Normalise a recurring amount to an average month, rounded to the cent"""
    multiplier = MONTHLY_MULTIPLIERS[Frequency.parse(frequency)]
    return int((Decimal(amount_cents) * multiplier).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def net_position(
    bank_balance_cents: int,
    credit_cards: Iterable[CreditCardObligation] = (),
    bnpl_plans: Iterable[BnplInstalmentPlan] = (),
) -> int:
    """Bank balance less card balances and outstanding BNPL instalments"""
    card_debt = sum(c.outstanding_balance_cents for c in credit_cards)
    bnpl_debt = sum(p.outstanding_cents for p in bnpl_plans)
    return bank_balance_cents - card_debt - bnpl_debt


def monthly_commitments(
    expenses: Iterable[FixedExpense] = (),
    bnpl_plans: Iterable[BnplInstalmentPlan] = (),
    credit_cards: Iterable[CreditCardObligation] = (),
) -> int:
    """Average monthly outgoings: bills and live BNPL plans normalised to a month, plus card minimums"""
    total = sum(monthly_equivalent(e.amount_cents, e.frequency) for e in expenses)
    total += sum(
        monthly_equivalent(p.instalment_amount_cents, p.instalment_frequency)
        for p in bnpl_plans
        if p.instalments_remaining > 0
    )
    total += sum(c.minimum_payment_cents for c in credit_cards)
    return total
