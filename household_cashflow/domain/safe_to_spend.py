"""Safe-to-spend for the current pay cycle"""

from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence

from household_cashflow.domain.events import bnpl_payment_dates, credit_card_due_dates
from household_cashflow.domain.models import (
    BnplInstalmentPlan,
    CreditCardObligation,
    EventKind,
    FixedExpense,
    IncomeSource,
    SafeToSpend,
    UpcomingObligation,
)
from household_cashflow.domain.recurrence import expand_occurrences, next_occurrence_after

# Used as the cycle end when no income is configured yet
NO_INCOME_CYCLE_DAYS = 14


def next_pay_date(incomes: Sequence[IncomeSource], today: date) -> date:
    """Earliest income date strictly after today, or today + 14 days without income"""
    candidates = [next_occurrence_after(i.next_occurrence_date, i.frequency, today) for i in incomes]
    if not candidates:
        return today + timedelta(days=NO_INCOME_CYCLE_DAYS)
    return min(candidates)


def obligations_between(
    window_start: date,
    window_end: date,
    expenses: Iterable[FixedExpense] = (),
    bnpl_plans: Iterable[BnplInstalmentPlan] = (),
    credit_cards: Iterable[CreditCardObligation] = (),
    card_label: str = "min. payment",
) -> List[UpcomingObligation]:
    """Every outgoing obligation in the window, sorted by date (stable)"""
    obligations: List[UpcomingObligation] = []

    for expense in expenses:
        for day in expand_occurrences(expense.next_due_date, expense.frequency, window_start, window_end):
            obligations.append(UpcomingObligation(expense.name, expense.amount_cents, day, EventKind.EXPENSE))

    for plan in bnpl_plans:
        for day in bnpl_payment_dates(plan, window_start, window_end):
            obligations.append(UpcomingObligation(plan.label, plan.instalment_amount_cents, day, EventKind.BNPL))

    for card in credit_cards:
        if not card.has_minimum_due:
            continue
        for day in credit_card_due_dates(card.due_day_of_month, window_start, window_end):
            obligations.append(
                UpcomingObligation(
                    f"{card.name} {card_label}", card.minimum_payment_cents, day, EventKind.CREDIT_CARD
                )
            )

    obligations.sort(key=lambda o: o.date)
    return obligations


def compute_safe_to_spend(
    current_balance_cents: int,
    incomes: Sequence[IncomeSource] = (),
    expenses: Iterable[FixedExpense] = (),
    bnpl_plans: Iterable[BnplInstalmentPlan] = (),
    credit_cards: Iterable[CreditCardObligation] = (),
    today: Optional[date] = None,
) -> SafeToSpend:
    """
    How much of the current balance is not already owed before the next pay day.

    The window runs from today to the next income date inclusive. The result
    may be negative, meaning obligations before pay day exceed the balance.
    """
    today = today or date.today()
    pay_date = next_pay_date(incomes, today)

    obligations = obligations_between(today, pay_date, expenses, bnpl_plans, credit_cards)
    owed = sum(o.amount_cents for o in obligations)

    return SafeToSpend(
        safe_to_spend_cents=current_balance_cents - owed,
        next_pay_date=pay_date,
        days_until_pay=(pay_date - today).days,
        upcoming_obligations=obligations,
    )
