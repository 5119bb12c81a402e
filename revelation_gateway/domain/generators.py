"""Insight generators - one per analytical dimension

Every generator is a pure function of already-fetched data, returns a
(possibly empty) list of insights and never raises on empty input.
"""

from datetime import date, timedelta
from typing import List

from revelation_gateway.config import InsightPolicy, default_policy
from revelation_gateway.domain import aggregators
from revelation_gateway.domain.biases import OPTIMISM_BIAS, STATUS_QUO, get_bias
from revelation_gateway.domain.models import (
    Actionable,
    Comparison,
    Emotion,
    Goal,
    Insight,
    Transaction,
)
from revelation_gateway.utils.date_utils import months_until


def months_to_deadline(goal: Goal, today: date, policy: InsightPolicy = default_policy) -> float:
    """Months left before the goal deadline, at least 1; default when there is no deadline"""
    months = months_until(goal.deadline, today, policy.days_per_month)
    if months is None:
        return policy.default_months_to_deadline
    return max(1.0, months)


def required_monthly_saving(goal: Goal, today: date, policy: InsightPolicy = default_policy) -> float:
    return (goal.target_amount - goal.current_amount) / months_to_deadline(goal, today, policy)


def is_unrealistic(goal: Goal, avg_income: float, today: date, policy: InsightPolicy = default_policy) -> bool:
    return required_monthly_saving(goal, today, policy) > avg_income * policy.max_income_share_for_goals


def analyze_spending_patterns(
    transactions: List[Transaction],
    today: date,
    policy: InsightPolicy = default_policy,
) -> List[Insight]:
    """
    Compare each category's spend over the trailing period against the period before it.

    Requirements:
    - Only expenses are considered
    - Emit when |change| is strictly above the significance threshold
    - Categories with no previous spend have no baseline and are skipped
    - change% is computed as (current - previous) * 100 / previous, so +15% is exactly 15.0
    """
    insights: List[Insight] = []
    spent = aggregators.expenses(transactions)
    if not spent:
        return insights

    boundary = today - timedelta(days=policy.comparison_period_days)
    window_start = boundary - timedelta(days=policy.comparison_period_days)
    previous_period, current_period = aggregators.period_split(
        aggregators.within_window(spent, window_start), boundary
    )

    for category in aggregators.group_by_category(previous_period + current_period):
        current = aggregators.category_amount(current_period, category)
        previous = aggregators.category_amount(previous_period, category)
        if previous <= 0:
            continue

        change = (current - previous) * 100 / previous
        if abs(change) <= policy.significant_change_pct:
            continue

        increased = change > 0
        if change > policy.warning_change_pct:
            severity = "warning"
        elif change < -policy.significant_change_pct:
            severity = "positive"
        else:
            severity = "neutral"

        if increased:
            actionable = Actionable(
                title="Analyze the triggers",
                description=f"Find out what caused this {change:.1f}% increase in {category}",
                impact=f"Potential savings: {current * policy.potential_saving_ratio:.0f}/month",
            )
            fact = "Impulse purchases rise by 40% when we are stressed"
        else:
            actionable = Actionable(
                title="Keep up this discipline",
                description=f"Your {abs(change):.1f}% reduction in {category} is excellent",
                impact=f"Realized savings: {previous - current:.0f}",
            )
            fact = "Cutting back one spending category improves control over all the others"

        insights.append(
            Insight(
                id=f"spending-{category}",
                title=f"{'Increase' if increased else 'Decrease'} in {category} spending",
                description=f"{'+' if increased else ''}{change:.1f}% compared to last month",
                category="spending",
                severity=severity,
                value=current,
                comparison=Comparison(previous=previous, change=change, period="last month"),
                psychological_fact=fact,
                actionable=actionable,
            )
        )

    return insights


def analyze_goal_progress(
    goals: List[Goal],
    transactions: List[Transaction],
    today: date,
    policy: InsightPolicy = default_policy,
) -> List[Insight]:
    """One insight per active goal describing progress and the monthly effort still required"""
    insights: List[Insight] = []
    avg_income = aggregators.average_income(transactions)

    for goal in goals:
        if goal.status != "active":
            continue

        progress = goal.current_amount / goal.target_amount * 100 if goal.target_amount > 0 else 0.0
        months = months_to_deadline(goal, today, policy)
        monthly = required_monthly_saving(goal, today, policy)

        severity = "neutral"
        description = f"{progress:.1f}% reached"
        if progress >= policy.goal_positive_progress_pct:
            severity = "positive"
            description += " - excellent progress!"
        elif monthly > avg_income * policy.max_income_share_for_goals:
            severity = "warning"
            description += " - pace needs to pick up"

        insights.append(
            Insight(
                id=f"goal-{goal.id}",
                title=goal.title,
                description=description,
                category="goals",
                severity=severity,
                value=progress,
                psychological_fact=(
                    "People who reach 50% of a goal have a 90% chance of finishing it"
                    if progress > 50
                    else "Visualizing your goals daily raises the chance of success by 42%"
                ),
                actionable=Actionable(
                    title="Finish the goal" if progress > policy.goal_positive_progress_pct else "Speed up progress",
                    description=f"You need {monthly:.0f}/month to reach this goal",
                    impact=f"{months:.0f} months left",
                ),
            )
        )

    return insights


def detect_cognitive_biases(
    transactions: List[Transaction],
    goals: List[Goal],
    today: date,
    policy: InsightPolicy = default_policy,
) -> List[Insight]:
    """
    Detect status-quo bias (many subscriptions) and optimism bias (unrealistic goals).

    Other catalog biases have no detector yet.
    """
    insights: List[Insight] = []

    markers = tuple(m.lower() for m in policy.subscription_markers)
    subscriptions = [
        t
        for t in transactions
        if any(m in (t.description or "").lower() or m in (t.category or "").lower() for m in markers)
    ]
    if len(subscriptions) > policy.subscription_threshold:
        total = sum(abs(t.amount) for t in subscriptions)
        insights.append(
            Insight(
                id="bias-status-quo",
                title="Status quo bias detected",
                description=f"{len(subscriptions)} active subscriptions - some may be unused",
                category="behavioral",
                severity="warning",
                value=total,
                bias=get_bias(STATUS_QUO),
                actionable=Actionable(
                    title="Subscription audit",
                    description="Review your subscriptions and cancel the ones you no longer use",
                    impact=f"Potential savings: {total * policy.subscription_saving_ratio:.0f}/month",
                ),
            )
        )

    avg_income = aggregators.average_income(transactions)
    unrealistic = [g for g in goals if is_unrealistic(g, avg_income, today, policy)]
    if unrealistic:
        share = int(policy.max_income_share_for_goals * 100)
        insights.append(
            Insight(
                id="bias-optimism",
                title="Optimism bias in your goals",
                description=f"{len(unrealistic)} goal(s) need more than {share}% of your income",
                category="behavioral",
                severity="warning",
                value=len(unrealistic),
                bias=get_bias(OPTIMISM_BIAS),
                actionable=Actionable(
                    title="Reassess your goals",
                    description="Adjust your goals so they are realistic and reachable",
                    impact="Success rate +65% with realistic goals",
                ),
            )
        )

    return insights


def analyze_emotional_spending(
    transactions: List[Transaction],
    emotions: List[Emotion],
    policy: InsightPolicy = default_policy,
) -> List[Insight]:
    """Flag noticeably higher spending on stressful days than on happy days"""
    insights: List[Insight] = []
    if not emotions:
        return insights

    stress_moods = {m.lower() for m in policy.stress_moods}
    happy_moods = {m.lower() for m in policy.happy_moods}
    stressful_days = [e.date for e in emotions if e.mood.lower() in stress_moods]
    happy_days = [e.date for e in emotions if e.mood.lower() in happy_moods]

    stress_spending = aggregators.spending_on_days(transactions, stressful_days)
    happy_spending = aggregators.spending_on_days(transactions, happy_days)

    # No happy-day baseline means there is nothing to compare against
    if happy_spending > 0 and stress_spending > happy_spending * policy.stress_spending_ratio:
        increase = (stress_spending / happy_spending - 1) * 100
        insights.append(
            Insight(
                id="emotional-stress-spending",
                title="Emotional spending detected",
                description=f"+{increase:.0f}% spending on stressful days",
                category="emotional",
                severity="warning",
                value=stress_spending - happy_spending,
                psychological_fact="Stress increases impulse purchases by 79% on average",
                actionable=Actionable(
                    title="Anti-stress strategy",
                    description="Find alternatives to shopping when you feel stressed",
                    impact=f"Potential savings: {stress_spending * policy.emotional_saving_ratio:.0f}/month",
                ),
            )
        )

    return insights
