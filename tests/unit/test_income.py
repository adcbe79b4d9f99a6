"""Unit tests for income catch-up processing"""

from datetime import date

from household_cashflow.domain.income import process_due_income
from household_cashflow.domain.models import Frequency, IncomeSource


def test_missed_pay_dates_are_all_credited(today):
    """App last ran four weeks ago: three fortnightly pays have landed"""
    income = IncomeSource("Salary", 200_000, Frequency.FORTNIGHTLY, date(2024, 12, 9))
    result = process_due_income([income], today=today)

    assert [p.date for p in result.payments] == [date(2024, 12, 9), date(2024, 12, 23), date(2025, 1, 6)]
    assert result.total_credited_cents == 600_000
    assert result.incomes[0].next_occurrence_date == date(2025, 1, 20)
    assert income.next_occurrence_date == date(2024, 12, 9)


def test_future_income_is_untouched(today, salary):
    result = process_due_income([salary], today=today)

    assert result.payments == []
    assert result.incomes == [salary]
    assert result.total_credited_cents == 0


def test_payments_from_several_incomes_sorted_by_date(today):
    salary = IncomeSource("Salary", 200_000, Frequency.FORTNIGHTLY, date(2024, 12, 30))
    rent_in = IncomeSource("Boarder", 25_000, Frequency.WEEKLY, date(2025, 1, 1))
    result = process_due_income([salary, rent_in], today=today)

    assert [(p.income_name, p.date) for p in result.payments] == [
        ("Salary", date(2024, 12, 30)),
        ("Boarder", date(2025, 1, 1)),
    ]
    assert [i.next_occurrence_date for i in result.incomes] == [date(2025, 1, 13), date(2025, 1, 8)]


def test_monthly_income_carries_clamped_day_forward(today):
    income = IncomeSource("Pension", 150_000, Frequency.MONTHLY, date(2024, 10, 31))
    result = process_due_income([income], today=today)

    assert [p.date for p in result.payments] == [date(2024, 10, 31), date(2024, 11, 30), date(2024, 12, 30)]
    assert result.incomes[0].next_occurrence_date == date(2025, 1, 30)
