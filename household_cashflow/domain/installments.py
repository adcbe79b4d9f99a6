"""Instalment schedule generation for purchase repayment plans"""

import math
from datetime import date
from decimal import Decimal
from typing import List, Tuple

from household_cashflow.domain.models import Frequency, ScheduledPayment
from household_cashflow.domain.recurrence import first_occurrences
from household_cashflow.utils.date_utils import add_months, day_in_month


def monthly_interest(remaining_cents: int, annual_rate: float) -> int:
    """One month of interest on a balance, rounded up to the cent"""
    return math.ceil(Decimal(remaining_cents) * Decimal(str(annual_rate)) / Decimal(1200))


def generate_instalment_schedule(
    amount_cents: int,
    num_instalments: int = 4,
    frequency: Frequency = Frequency.FORTNIGHTLY,
    start_date: date | None = None,
    label: str = "Instalment",
) -> List[ScheduledPayment]:
    """
    Split a purchase into equal instalments.

    Requirements:
    - First instalment due on the start date (the day of purchase)
    - Equal instalments at the given frequency
    - Last instalment absorbs rounding remainder (≤ num_instalments-1 cents drift)

    Example:
        $10.01 → [$2.50, $2.50, $2.50, $2.51]
        1001 cents / 4 = 250 base, remainder 1
        Last instalment: 250 + 1 = 251
    """
    if amount_cents <= 0 or num_instalments <= 0:
        return []

    start_date = start_date or date.today()

    base_amount = amount_cents // num_instalments
    remainder = amount_cents % num_instalments

    schedule = []
    for i, due_date in enumerate(first_occurrences(start_date, frequency, num_instalments)):
        # Last instalment absorbs remainder to ensure exact total
        amount = base_amount + (remainder if i == num_instalments - 1 else 0)
        schedule.append(ScheduledPayment(due_date, amount, f"{label} payment {i + 1}/{num_instalments}"))

    return schedule


def generate_revolving_schedule(
    principal_cents: int,
    payment_cents: int,
    annual_rate: float,
    due_day: int,
    start_date: date | None = None,
    max_months: int = 24,
    label: str = "Card",
) -> Tuple[List[ScheduledPayment], int, int]:
    """
    Minimum-payment repayment of a card purchase.

    Each month interest on the remaining balance is added first, then the
    payment (capped at the new remaining balance) is taken. Payments fall on
    the card's due day one month apart, starting next month. The day is capped
    at 28 so every month has it.

    Returns:
        (schedule, total_interest_cents, remaining_cents). ``remaining_cents``
        is non-zero only when ``max_months`` ran out before the debt cleared.
    """
    start_date = start_date or date.today()
    schedule: List[ScheduledPayment] = []
    remaining = principal_cents
    total_interest = 0
    month = 0

    while remaining > 0 and month < max_months:
        interest = monthly_interest(remaining, annual_rate)
        total_interest += interest
        remaining += interest

        payment = min(payment_cents, remaining)
        remaining -= payment

        pay_month = add_months(start_date, month + 1)
        pay_date = day_in_month(pay_month.year, pay_month.month, min(due_day, 28))
        schedule.append(ScheduledPayment(pay_date, payment, f"{label} min payment {month + 1}"))
        month += 1

    return schedule, total_interest, remaining
