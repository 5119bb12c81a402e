"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

SEVERITY_RANK: Dict[str, int] = {"critical": 4, "warning": 3, "neutral": 2, "positive": 1}


@dataclass(frozen=True)
class Transaction:
    """Signed money movement: positive is income, negative is an expense"""

    id: str
    user_id: str
    date: date
    amount: float
    category: str
    description: Optional[str] = None

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    @property
    def is_expense(self) -> bool:
        return self.amount < 0


@dataclass(frozen=True)
class Goal:
    """Savings goal"""

    id: str
    user_id: str
    title: str
    target_amount: float
    current_amount: float
    deadline: Optional[date] = None
    status: str = "active"

    @property
    def progress(self) -> float:
        """Completion ratio clamped to [0, 1]; 0 when there is no target"""
        if self.target_amount <= 0:
            return 0.0
        return max(0.0, min(1.0, self.current_amount / self.target_amount))


@dataclass(frozen=True)
class Emotion:
    """Mood journal entry"""

    id: str
    user_id: str
    date: date
    mood: str
    note: Optional[str] = None


@dataclass(frozen=True)
class CognitiveBias:
    """Catalog entry for a behavioral-economics pattern"""

    key: str
    name: str
    type: str  # spending | saving | planning | emotional
    description: str
    psychological_fact: str
    severity: str  # low | medium | high
    recommendation: str


@dataclass
class Quote:
    text: str
    author: str


@dataclass
class Comparison:
    previous: float
    change: float  # percent
    period: str


@dataclass
class Actionable:
    title: str
    description: str
    impact: str


@dataclass
class Insight:
    """Single computed observation about a user's finances"""

    id: str
    title: str
    description: str
    category: str  # spending | saving | goals | emotional | behavioral
    severity: str  # positive | neutral | warning | critical
    value: float
    actionable: Actionable
    comparison: Optional[Comparison] = None
    bias: Optional[CognitiveBias] = None
    quote: Optional[Quote] = None
    psychological_fact: Optional[str] = None

    @property
    def severity_rank(self) -> int:
        return SEVERITY_RANK[self.severity]


@dataclass
class ScoreBreakdown:
    cashflow: int
    spending_control: int
    saving_rate: int
    goal_achievement: int
    bias_awareness: int


@dataclass
class RevelationScore:
    """Composite 0-100 health, discipline and progress score"""

    overall: int
    financial_health: int
    behavioral_discipline: int
    goal_progress: int
    breakdown: ScoreBreakdown


@dataclass
class Priority:
    level: str  # critical | high | opportunity
    title: str
    description: str
    actions: List[str]


@dataclass
class RevelationStats:
    total_insights: int
    biases_detected: int
    quotes_included: int
    average_severity: float
    improvement_potential: int


@dataclass
class CompleteRevelation:
    """Everything the revelation screen needs in one bundle"""

    score: RevelationScore
    insights: Dict[str, List[Insight]]
    priorities: List[Priority]
    stats: RevelationStats
    timestamp: str
    next_update_in: str = "24h"


@dataclass
class PsychologyFact:
    fact: str
    source: str
    category: str
    relevance: int


@dataclass
class MarketSentiment:
    sentiment: str  # positive | neutral | negative
    confidence: float
    summary: str
    recommendation: str
    details: Dict[str, Any] = field(default_factory=dict)
