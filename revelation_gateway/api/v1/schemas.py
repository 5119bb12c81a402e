"""Pydantic schemas for API request/response validation"""

import datetime as dt
from dataclasses import asdict
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from revelation_gateway.domain.models import (
    CompleteRevelation,
    Insight,
    MarketSentiment,
    PsychologyFact,
    RevelationScore,
)

Mood = Literal[
    "happy", "sad", "anxious", "excited", "stressed", "calm", "frustrated", "optimistic", "worried", "content"
]


class ApiModel(BaseModel):
    """Accept python field names as well as camelCase aliases"""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# Insights


class CognitiveBiasSchema(ApiModel):
    key: str
    name: str
    type: str
    description: str
    psychological_fact: str = Field(..., alias="psychologicalFact")
    severity: str
    recommendation: str


class QuoteSchema(ApiModel):
    text: str
    author: str


class ComparisonSchema(ApiModel):
    previous: float
    change: float
    period: str


class ActionableSchema(ApiModel):
    title: str
    description: str
    impact: str


class InsightSchema(ApiModel):
    """Single computed insight"""

    id: str
    title: str
    description: str
    category: Literal["spending", "saving", "goals", "emotional", "behavioral"]
    severity: Literal["positive", "neutral", "warning", "critical"]
    value: float
    comparison: Optional[ComparisonSchema] = None
    bias: Optional[CognitiveBiasSchema] = None
    quote: Optional[QuoteSchema] = None
    psychological_fact: Optional[str] = Field(None, alias="psychologicalFact")
    actionable: ActionableSchema

    @classmethod
    def from_domain(cls, insight: Insight) -> "InsightSchema":
        return cls.model_validate(asdict(insight))


class InsightsResponse(ApiModel):
    """Response for GET /v1/insights/revelation"""

    insights: List[InsightSchema]


class ScoreBreakdownSchema(ApiModel):
    cashflow: int = Field(..., ge=0, le=100)
    spending_control: int = Field(..., ge=0, le=100)
    saving_rate: int = Field(..., ge=0, le=100)
    goal_achievement: int = Field(..., ge=0, le=100)
    bias_awareness: int = Field(..., ge=0, le=100)


class RevelationScoreSchema(ApiModel):
    """Response for GET /v1/insights/score"""

    overall: int = Field(..., ge=0, le=100)
    financial_health: int = Field(..., ge=0, le=100, alias="financialHealth")
    behavioral_discipline: int = Field(..., ge=0, le=100, alias="behavioralDiscipline")
    goal_progress: int = Field(..., ge=0, le=100, alias="goalProgress")
    breakdown: ScoreBreakdownSchema

    @classmethod
    def from_domain(cls, score: RevelationScore) -> "RevelationScoreSchema":
        return cls.model_validate(asdict(score))


class CategorizedInsightsSchema(ApiModel):
    critical: List[InsightSchema]
    warning: List[InsightSchema]
    positive: List[InsightSchema]
    behavioral: List[InsightSchema]
    emotional: List[InsightSchema]
    goals: List[InsightSchema]
    spending: List[InsightSchema]


class PrioritySchema(ApiModel):
    level: Literal["critical", "high", "opportunity"]
    title: str
    description: str
    actions: List[str]


class RevelationStatsSchema(ApiModel):
    total_insights: int = Field(..., alias="totalInsights")
    biases_detected: int = Field(..., alias="biasesDetected")
    quotes_included: int = Field(..., alias="quotesIncluded")
    average_severity: float = Field(..., alias="averageSeverity")
    improvement_potential: int = Field(..., ge=0, le=100, alias="improvementPotential")


class CompleteRevelationResponse(ApiModel):
    """Response for GET /v1/insights/complete"""

    score: RevelationScoreSchema
    insights: CategorizedInsightsSchema
    priorities: List[PrioritySchema]
    stats: RevelationStatsSchema
    timestamp: str
    next_update_in: str = Field(..., alias="nextUpdateIn")

    @classmethod
    def from_domain(cls, revelation: CompleteRevelation) -> "CompleteRevelationResponse":
        return cls.model_validate(asdict(revelation))


class PsychologyFactSchema(ApiModel):
    fact: str
    source: str
    category: str
    relevance: int

    @classmethod
    def from_domain(cls, fact: PsychologyFact) -> "PsychologyFactSchema":
        return cls.model_validate(asdict(fact))


class FactsResponse(ApiModel):
    facts: List[PsychologyFactSchema]


class MarketSentimentSchema(ApiModel):
    sentiment: Literal["positive", "neutral", "negative"]
    confidence: float
    summary: str
    recommendation: str
    details: Dict[str, Any] = {}

    @classmethod
    def from_domain(cls, sentiment: MarketSentiment) -> "MarketSentimentSchema":
        return cls.model_validate(asdict(sentiment))


# Transactions


class TransactionCreate(ApiModel):
    """Request body for POST /v1/transactions"""

    date: dt.date
    amount: float = Field(..., allow_inf_nan=False, description="Signed amount: positive income, negative expense")
    category: str = Field(..., min_length=1)
    description: Optional[str] = None
    source: str = "manual"
    type: Optional[Literal["income", "expense"]] = Field(
        None, description="When set, the amount sign is normalized to match"
    )


class TransactionSchema(ApiModel):
    id: str
    date: dt.date
    amount: float
    category: str
    description: Optional[str] = None
    source: str


# Goals


class GoalCreate(ApiModel):
    title: str = Field(..., min_length=1)
    target_amount: float = Field(..., ge=0, allow_inf_nan=False, alias="targetAmount")
    deadline: Optional[dt.date] = None


class GoalUpdate(ApiModel):
    """Partial update; deadline may be cleared with null, other fields may only be omitted"""

    title: Optional[str] = Field(None, min_length=1)
    target_amount: Optional[float] = Field(None, ge=0, allow_inf_nan=False, alias="targetAmount")
    current_amount: Optional[float] = Field(None, ge=0, allow_inf_nan=False, alias="currentAmount")
    deadline: Optional[dt.date] = None
    status: Optional[Literal["active", "completed", "archived"]] = None

    @field_validator("title", "target_amount", "current_amount", "status")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class GoalSchema(ApiModel):
    id: str
    title: str
    target_amount: float = Field(..., alias="targetAmount")
    current_amount: float = Field(..., alias="currentAmount")
    deadline: Optional[dt.date] = None
    status: str


# Emotions


class EmotionCreate(ApiModel):
    mood: Mood
    note: Optional[str] = None
    date: Optional[dt.date] = None


class EmotionUpdate(ApiModel):
    mood: Optional[Mood] = None
    note: Optional[str] = None

    @field_validator("mood")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class EmotionSchema(ApiModel):
    id: str
    date: dt.date
    mood: str
    note: Optional[str] = None


# Notifications


class NotificationCreate(ApiModel):
    type: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


class NotificationSchema(ApiModel):
    id: str
    type: str
    message: str
    read: bool
    read_at: Optional[dt.datetime] = Field(None, alias="readAt")
    created_at: Optional[dt.datetime] = Field(None, alias="createdAt")
