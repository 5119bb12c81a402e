"""Organize insights and score into the complete revelation bundle"""

from datetime import datetime
from typing import Dict, List

from revelation_gateway.config import InsightPolicy, default_policy
from revelation_gateway.domain.models import (
    SEVERITY_RANK,
    CompleteRevelation,
    Insight,
    Priority,
    RevelationScore,
    RevelationStats,
)

SEVERITY_BUCKETS = ("critical", "warning", "positive")
CATEGORY_BUCKETS = ("behavioral", "emotional", "goals", "spending")


def categorize_insights(insights: List[Insight]) -> Dict[str, List[Insight]]:
    """Bucket by severity and by category; an insight can land in two buckets"""
    buckets: Dict[str, List[Insight]] = {}
    for severity in SEVERITY_BUCKETS:
        buckets[severity] = [i for i in insights if i.severity == severity]
    for category in CATEGORY_BUCKETS:
        buckets[category] = [i for i in insights if i.category == category]
    return buckets


def generate_priorities(
    insights: List[Insight],
    score: RevelationScore,
    policy: InsightPolicy = default_policy,
) -> List[Priority]:
    priorities: List[Priority] = []

    critical = [i for i in insights if i.severity == "critical"]
    if critical:
        priorities.append(
            Priority(
                level="critical",
                title="Immediate action required",
                description=f"{len(critical)} critical issue(s) detected",
                actions=[i.actionable.title for i in critical],
            )
        )

    if score.financial_health < policy.low_score_threshold:
        priorities.append(
            Priority(
                level="high",
                title="Improve your financial health",
                description="Your cash flow and savings rate need attention",
                actions=["Analyze your expenses", "Optimize your income", "Build a realistic budget"],
            )
        )

    if score.behavioral_discipline < policy.low_score_threshold:
        priorities.append(
            Priority(
                level="high",
                title="Strengthen your behavioral discipline",
                description="Cognitive biases are affecting your financial decisions",
                actions=["Identify your triggers", "Automate your decisions", "Set up guardrails"],
            )
        )

    positive = [i for i in insights if i.severity == "positive"]
    if positive:
        priorities.append(
            Priority(
                level="opportunity",
                title="Build on your successes",
                description=f"{len(positive)} strength(s) to maintain and develop",
                actions=[i.actionable.title for i in positive],
            )
        )

    return priorities


def average_severity(insights: List[Insight]) -> float:
    if not insights:
        return 0.0
    return sum(SEVERITY_RANK[i.severity] for i in insights) / len(insights)


def improvement_potential(insights: List[Insight], policy: InsightPolicy = default_policy) -> int:
    actionable = [i for i in insights if i.severity in ("warning", "critical")]
    return min(100, len(actionable) * policy.improvement_points_per_insight)


def build_stats(insights: List[Insight], policy: InsightPolicy = default_policy) -> RevelationStats:
    return RevelationStats(
        total_insights=len(insights),
        biases_detected=sum(1 for i in insights if i.bias is not None),
        quotes_included=sum(1 for i in insights if i.quote is not None),
        average_severity=average_severity(insights),
        improvement_potential=improvement_potential(insights, policy),
    )


def assemble_revelation(
    insights: List[Insight],
    score: RevelationScore,
    generated_at: datetime,
    policy: InsightPolicy = default_policy,
) -> CompleteRevelation:
    return CompleteRevelation(
        score=score,
        insights=categorize_insights(insights),
        priorities=generate_priorities(insights, score, policy),
        stats=build_stats(insights, policy),
        timestamp=generated_at.isoformat(),
    )
