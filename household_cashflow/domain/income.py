"""Catch-up processing of income that has already landed"""

import dataclasses
from datetime import date
from typing import Iterable, List, Optional

from household_cashflow.domain.models import IncomePayment, IncomeProcessingResult, IncomeSource
from household_cashflow.domain.recurrence import expand_occurrences, next_occurrence_after


def process_due_income(incomes: Iterable[IncomeSource], today: Optional[date] = None) -> IncomeProcessingResult:
    """
    Find every pay date on or before today that has not been credited yet.

    Requirements:
    - Missed pay dates are all reported (the app may not have run for weeks)
    - Each income comes back advanced to its first date after today
    - Incomes with a future date are returned unchanged
    - Inputs are never mutated; callers persist the returned copies
    """
    today = today or date.today()
    payments: List[IncomePayment] = []
    advanced: List[IncomeSource] = []

    for income in incomes:
        anchor = income.next_occurrence_date
        if anchor > today:
            advanced.append(income)
            continue

        for pay_date in expand_occurrences(anchor, income.frequency, anchor, today):
            payments.append(IncomePayment(income.name, pay_date, income.amount_cents))

        next_date = next_occurrence_after(anchor, income.frequency, today)
        advanced.append(dataclasses.replace(income, next_occurrence_date=next_date))

    payments.sort(key=lambda p: p.date)
    return IncomeProcessingResult(payments=payments, incomes=advanced)
