"""
Pydantic schemas for the Lead Qualifier
"""

from enum import Enum
from typing import List, Optional, Any
from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================

class Intent(str, Enum):
    """Buying-intent tier"""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ClassificationSource(str, Enum):
    """Which path of the intent classifier produced a result"""
    LLM = "llm"
    HEURISTIC = "heuristic"
    DEGRADED = "degraded"


# =============================================================================
# INPUT SCHEMAS
# =============================================================================

class Lead(BaseModel):
    """A single prospect as ingested from an upload"""
    name: str
    role: str = ""
    company: str = ""
    industry: str = ""
    location: str = ""
    linkedin_bio: str = ""

    class Config:
        frozen = True


class Offer(BaseModel):
    """The product/offer leads are qualified against"""
    name: str = Field(..., min_length=1)
    value_props: List[str] = Field(..., min_length=1)
    ideal_use_cases: List[str] = Field(..., min_length=1)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "name": "AI Outreach Automation",
                "value_props": ["24/7 outreach", "6x more meetings"],
                "ideal_use_cases": ["B2B SaaS mid-market"],
            }
        }

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required")
        return value


# =============================================================================
# STAGE RESULT SCHEMAS
# =============================================================================

class ScoringBreakdown(BaseModel):
    """Itemized rule-score components"""
    role_score: int = 0
    industry_score: int = 0
    completeness_score: int = 0
    total_rule_score: int = 0


class IntentResult(BaseModel):
    """Result from the intent classifier"""
    ai_score: int
    intent: Intent
    reasoning: str
    source: ClassificationSource


# =============================================================================
# UNIFIED OUTPUT SCHEMA
# =============================================================================

class ScoredLead(Lead):
    """Lead plus its final verdict. Field order matches the export order."""
    intent: Intent
    score: int
    rule_score: int
    ai_score: int
    reasoning: str
    breakdown: Optional[ScoringBreakdown] = None


class ScoringStats(BaseModel):
    """Aggregate counts over one scored batch"""
    total: int
    high: int
    medium: int
    low: int
    average_score: int

    @classmethod
    def from_results(cls, results: List[ScoredLead]) -> "ScoringStats":
        total = len(results)
        return cls(
            total=total,
            high=sum(1 for r in results if r.intent == Intent.HIGH),
            medium=sum(1 for r in results if r.intent == Intent.MEDIUM),
            low=sum(1 for r in results if r.intent == Intent.LOW),
            average_score=round(sum(r.score for r in results) / total) if total else 0,
        )


# =============================================================================
# API RESPONSE SCHEMAS
# =============================================================================

class ApiResponse(BaseModel):
    """Envelope returned by the mutating endpoints"""
    success: bool = True
    message: Optional[str] = None
    data: Optional[Any] = None


class UploadSummary(BaseModel):
    count: int
    sample: List[Lead] = Field(default_factory=list)


class ScoreSummary(BaseModel):
    stats: ScoringStats
    top_leads: List[ScoredLead] = Field(default_factory=list)
