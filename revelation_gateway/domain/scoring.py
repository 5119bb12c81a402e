"""Revelation scoring engine - composite 0-100 financial behavior score"""

import math
from datetime import date
from typing import List

from revelation_gateway.config import InsightPolicy, default_policy
from revelation_gateway.domain import aggregators
from revelation_gateway.domain.generators import detect_cognitive_biases
from revelation_gateway.domain.models import Goal, RevelationScore, ScoreBreakdown, Transaction


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (builtin round() uses banker's rounding)"""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def cashflow_score(transactions: List[Transaction], policy: InsightPolicy = default_policy) -> int:
    """
    Net cash flow as a share of income, shifted so that a zero net flow scores 50.

    No income at all scores exactly the offset.
    """
    income, spent = aggregators.income_and_expenses(transactions)
    ratio = (income - spent) / income if income > 0 else 0.0
    return clamp_score(ratio * 100 + policy.cashflow_offset)


def spending_control_score(transactions: List[Transaction], policy: InsightPolicy = default_policy) -> int:
    """
    Regularity of monthly spending: 100 minus the coefficient of variation in percent.

    Fewer than two months of expenses gives the neutral default.
    """
    monthly = aggregators.monthly_expense_series(transactions)
    if len(monthly) < 2:
        return policy.default_spending_control

    mean = sum(monthly) / len(monthly)
    variance = sum((m - mean) ** 2 for m in monthly) / len(monthly)
    coefficient = math.sqrt(variance) / mean if variance > 0 else 0.0

    return clamp_score(100 - coefficient * 100)


def saving_rate_score(transactions: List[Transaction]) -> int:
    income, spent = aggregators.income_and_expenses(transactions)
    rate = (income - spent) / income if income > 0 else 0.0
    return clamp_score(rate * 100)


def goal_achievement_score(goals: List[Goal], policy: InsightPolicy = default_policy) -> int:
    """Mean completion percentage across goals, neutral default when there are none"""
    if not goals:
        return policy.default_goal_achievement

    return round_half_up(sum(g.progress * 100 for g in goals) / len(goals))


def bias_awareness_score(
    transactions: List[Transaction],
    goals: List[Goal],
    today: date,
    policy: InsightPolicy = default_policy,
) -> int:
    """100 minus a severity penalty for each detected bias insight"""
    detected = detect_cognitive_biases(transactions, goals, today, policy)
    penalty = sum(policy.severity_penalties.get(insight.severity, 0) for insight in detected)
    return max(0, min(100, 100 - penalty))


def calculate_revelation_score(
    transactions: List[Transaction],
    goals: List[Goal],
    today: date,
    policy: InsightPolicy = default_policy,
) -> RevelationScore:
    """
    Main entry point: compute sub-scores and combine them.

    Composition (each step rounded before the next):
    - financial health       = (cashflow + saving_rate) / 2
    - behavioral discipline  = (spending_control + bias_awareness) / 2
    - goal progress          = goal_achievement
    - overall                = mean of the three dimensions
    """
    breakdown = ScoreBreakdown(
        cashflow=cashflow_score(transactions, policy),
        spending_control=spending_control_score(transactions, policy),
        saving_rate=saving_rate_score(transactions),
        goal_achievement=goal_achievement_score(goals, policy),
        bias_awareness=bias_awareness_score(transactions, goals, today, policy),
    )

    financial_health = round_half_up((breakdown.cashflow + breakdown.saving_rate) / 2)
    behavioral_discipline = round_half_up((breakdown.spending_control + breakdown.bias_awareness) / 2)
    goal_progress = breakdown.goal_achievement
    overall = round_half_up((financial_health + behavioral_discipline + goal_progress) / 3)

    return RevelationScore(
        overall=overall,
        financial_health=financial_health,
        behavioral_discipline=behavioral_discipline,
        goal_progress=goal_progress,
        breakdown=breakdown,
    )
