"""Date manipulation utilities"""

from datetime import date, timedelta
from typing import Optional


def days_ago(today: date, days: int) -> date:
    """Start date of a trailing window of `days` days ending today"""
    return today - timedelta(days=days)


def months_until(deadline: Optional[date], today: date, days_per_month: float = 30.0) -> Optional[float]:
    """Fractional months from today to deadline, None when there is no deadline"""
    if deadline is None:
        return None
    return (deadline - today).days / days_per_month
