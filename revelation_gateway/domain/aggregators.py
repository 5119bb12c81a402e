"""Signal aggregators - pure reductions of raw transactions into numeric summaries"""

from datetime import date
from typing import Dict, Iterable, List, Tuple

from revelation_gateway.domain.models import Transaction

UNCATEGORIZED = "Other"


def group_by_category(transactions: Iterable[Transaction]) -> Dict[str, float]:
    """Sum absolute amounts per category, in first-seen order"""
    totals: Dict[str, float] = {}
    for txn in transactions:
        category = txn.category or UNCATEGORIZED
        totals[category] = totals.get(category, 0.0) + abs(txn.amount)
    return totals


def category_amount(transactions: Iterable[Transaction], category: str) -> float:
    return sum(abs(t.amount) for t in transactions if (t.category or UNCATEGORIZED) == category)


def period_split(
    transactions: Iterable[Transaction], boundary: date
) -> Tuple[List[Transaction], List[Transaction]]:
    """Partition into (before, after) where before means date < boundary"""
    before: List[Transaction] = []
    after: List[Transaction] = []
    for txn in transactions:
        (before if txn.date < boundary else after).append(txn)
    return before, after


def within_window(transactions: Iterable[Transaction], start: date) -> List[Transaction]:
    return [t for t in transactions if t.date >= start]


def expenses(transactions: Iterable[Transaction]) -> List[Transaction]:
    return [t for t in transactions if t.is_expense]


def income_and_expenses(transactions: Iterable[Transaction]) -> Tuple[float, float]:
    """Total income and total absolute expenses"""
    income = 0.0
    spent = 0.0
    for txn in transactions:
        if txn.amount > 0:
            income += txn.amount
        elif txn.amount < 0:
            spent += abs(txn.amount)
    return income, spent


def average_income(transactions: Iterable[Transaction]) -> float:
    """Mean of strictly positive amounts; 0 if there are none"""
    incomes = [t.amount for t in transactions if t.is_income]
    return sum(incomes) / len(incomes) if incomes else 0.0


def monthly_expense_series(transactions: Iterable[Transaction]) -> List[float]:
    """Expense totals per calendar month (YYYY-MM), ordered by month"""
    by_month: Dict[str, float] = {}
    for txn in transactions:
        if txn.amount < 0:
            month = txn.date.strftime("%Y-%m")
            by_month[month] = by_month.get(month, 0.0) + abs(txn.amount)
    return [by_month[month] for month in sorted(by_month)]


def spending_on_days(transactions: Iterable[Transaction], days: Iterable[date]) -> float:
    """Absolute expense total for transactions falling on any of the given days"""
    day_set = set(days)
    return sum(abs(t.amount) for t in transactions if t.amount < 0 and t.date in day_set)
