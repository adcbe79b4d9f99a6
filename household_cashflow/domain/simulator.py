"""Day-by-day bank balance projection"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from household_cashflow.domain.events import collect_events
from household_cashflow.domain.models import (
    BnplInstalmentPlan,
    CashEvent,
    CreditCardObligation,
    DailyBalance,
    FixedExpense,
    IncomeSource,
)
from household_cashflow.utils.date_utils import generate_date_range

DEFAULT_WEEKS_AHEAD = 8


def simulate(
    starting_balance_cents: int,
    events: Iterable[CashEvent],
    window_start: date,
    window_end: date,
) -> List[DailyBalance]:
    """
    Walk the window one day at a time applying each day's events.

    Requirements:
    - One entry per calendar day, start and end inclusive
    - Days without events repeat the previous balance
    - Same-day events keep the order they were collected in
    - Events dated outside the window are ignored
    """
    by_date: Dict[date, List[CashEvent]] = defaultdict(list)
    for event in events:
        by_date[event.date].append(event)

    running = starting_balance_cents
    daily: List[DailyBalance] = []
    for day in generate_date_range(window_start, window_end):
        day_events = by_date.get(day, [])
        running += sum(e.signed_amount_cents for e in day_events)
        daily.append(DailyBalance(date=day, balance_cents=running, events=list(day_events)))

    return daily


def minimum_balance(daily: Sequence[DailyBalance], default: int = 0) -> int:
    """Lowest end-of-day balance in a projection"""
    return min((d.balance_cents for d in daily), default=default)


def projection_window(weeks_ahead: int = DEFAULT_WEEKS_AHEAD, today: Optional[date] = None) -> tuple[date, date]:
    start = today or date.today()
    return start, start + timedelta(weeks=weeks_ahead)


def project_cashflow(
    starting_balance_cents: int,
    incomes: Iterable[IncomeSource] = (),
    expenses: Iterable[FixedExpense] = (),
    bnpl_plans: Iterable[BnplInstalmentPlan] = (),
    credit_cards: Iterable[CreditCardObligation] = (),
    weeks_ahead: int = DEFAULT_WEEKS_AHEAD,
    extra_events: Sequence[CashEvent] = (),
    today: Optional[date] = None,
) -> List[DailyBalance]:
    """Main entry point: collect every event in the window and simulate it"""
    window_start, window_end = projection_window(weeks_ahead, today)
    events = collect_events(
        window_start,
        window_end,
        incomes=incomes,
        expenses=expenses,
        bnpl_plans=bnpl_plans,
        credit_cards=credit_cards,
        extra_events=extra_events,
    )
    return simulate(starting_balance_cents, events, window_start, window_end)
