"""Date manipulation utilities"""

import calendar
from datetime import date, timedelta
from typing import List

from dateutil.relativedelta import relativedelta


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def add_months(from_date: date, months: int) -> date:
    """Add calendar months, clamping to the last day of shorter months"""
    return from_date + relativedelta(months=months)


def day_in_month(year: int, month: int, day: int) -> date:
    """Build a date, clamping ``day`` to the month's length (e.g. 31 -> Feb 28)"""
    return date(year, month, min(day, calendar.monthrange(year, month)[1]))

