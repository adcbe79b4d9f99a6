"""Flatten typed financial records into dated cash events"""

from datetime import date
from typing import Iterable, List, Sequence

from household_cashflow.domain.models import (
    BnplInstalmentPlan,
    CashEvent,
    CreditCardObligation,
    EventKind,
    FixedExpense,
    IncomeSource,
)
from household_cashflow.domain.recurrence import expand_occurrences
from household_cashflow.utils.date_utils import day_in_month


def credit_card_due_dates(due_day: int, window_start: date, window_end: date) -> List[date]:
    """
    Monthly due dates for a card inside the window.

    Starts in the window's first month; if that month's due date has already
    passed, rolls to the following month. Short months clamp the due day.
    """
    dates: List[date] = []
    year, month = window_start.year, window_start.month
    current = day_in_month(year, month, due_day)
    if current < window_start:
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
        current = day_in_month(year, month, due_day)

    while current <= window_end:
        dates.append(current)
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
        current = day_in_month(year, month, due_day)

    return dates


def bnpl_payment_dates(plan: BnplInstalmentPlan, window_start: date, window_end: date) -> List[date]:
    """Instalment dates in the window, never more than the plan has left"""
    dates = expand_occurrences(plan.next_payment_date, plan.instalment_frequency, window_start, window_end)
    return dates[: min(len(dates), plan.instalments_remaining)]


def collect_events(
    window_start: date,
    window_end: date,
    incomes: Iterable[IncomeSource] = (),
    expenses: Iterable[FixedExpense] = (),
    bnpl_plans: Iterable[BnplInstalmentPlan] = (),
    credit_cards: Iterable[CreditCardObligation] = (),
    extra_events: Sequence[CashEvent] = (),
) -> List[CashEvent]:
    """
    Build the flat list of signed cash events for a window.

    Extra events (hypothetical purchases, a strategy's own schedule) come
    first, in the order given, followed by income, expenses, BNPL instalments
    and card minimum payments.
    """
    events: List[CashEvent] = list(extra_events)

    for income in incomes:
        for day in expand_occurrences(income.next_occurrence_date, income.frequency, window_start, window_end):
            events.append(CashEvent(day, income.name, income.amount_cents, EventKind.INCOME))

    for expense in expenses:
        for day in expand_occurrences(expense.next_due_date, expense.frequency, window_start, window_end):
            events.append(CashEvent(day, expense.name, -expense.amount_cents, EventKind.EXPENSE))

    for plan in bnpl_plans:
        for day in bnpl_payment_dates(plan, window_start, window_end):
            events.append(CashEvent(day, plan.label, -plan.instalment_amount_cents, EventKind.BNPL))

    for card in credit_cards:
        if not card.has_minimum_due:
            continue
        for day in credit_card_due_dates(card.due_day_of_month, window_start, window_end):
            events.append(
                CashEvent(day, f"{card.name} minimum payment", -card.minimum_payment_cents, EventKind.CREDIT_CARD)
            )

    return events
