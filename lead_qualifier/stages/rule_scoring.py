"""
Rule-Based Scoring
==================
Deterministic, explainable scoring of a lead's profile (max 50 points).

Components:
- Role relevance (decision maker > influencer > other)
- Industry match (exact ICP > adjacent > other)
- Data completeness (all six fields present)
"""

import logging
from typing import List, Optional, Tuple

from ..models.schemas import Lead, ScoringBreakdown
from ..models.rubric_config import RubricConfig, KeywordTier, create_default_rubric

logger = logging.getLogger(__name__)

LEAD_FIELDS = ("name", "role", "company", "industry", "location", "linkedin_bio")


class RuleScoringStage:
    """
    Score a lead against the configured rubric. Pure: no I/O, no state.
    """

    def __init__(self, rubric: Optional[RubricConfig] = None):
        self.rubric = rubric or create_default_rubric()

    def process(self, lead: Lead) -> Tuple[int, ScoringBreakdown]:
        """
        Calculate the rule score for a lead.

        Args:
            lead: Lead to score

        Returns:
            (rule score, itemized breakdown)
        """
        role_score = self._score_tiers(
            lead.role, self.rubric.role_tiers, self.rubric.role_default_points
        )
        industry_score = self._score_tiers(
            lead.industry, self.rubric.industry_tiers, self.rubric.industry_default_points
        )
        completeness_score = self._score_completeness(lead)

        breakdown = ScoringBreakdown(
            role_score=role_score,
            industry_score=industry_score,
            completeness_score=completeness_score,
            total_rule_score=role_score + industry_score + completeness_score,
        )

        logger.debug(f"Rule scoring for {lead.name}: {breakdown.model_dump()}")

        return breakdown.total_rule_score, breakdown

    def _score_tiers(self, text: str, tiers: List[KeywordTier], default: int) -> int:
        tier = self._first_match(text, tiers)
        return tier.points if tier else default

    @staticmethod
    def _first_match(text: str, tiers: List[KeywordTier]) -> Optional[KeywordTier]:
        if not text or not text.strip():
            return None
        for tier in tiers:
            if tier.matches(text):
                return tier
        return None

    def _score_completeness(self, lead: Lead) -> int:
        """Full marks only when every field is non-blank"""
        complete = all(
            (getattr(lead, field) or "").strip() for field in LEAD_FIELDS
        )
        return self.rubric.completeness_points if complete else 0
