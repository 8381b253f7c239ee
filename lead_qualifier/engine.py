"""
Lead Qualifier - Main Orchestrator
==================================
Combines the two scoring halves into one verdict per lead:
  Rule Scoring (max 50) + Intent Classification (max 50) = Score (0-100)

Intent tiers are derived from the total score only:
  High >= 70, Medium >= 40, Low otherwise

Batch scoring runs leads on a bounded worker pool, isolates per-lead
failures and returns results sorted by score (highest first).
"""

import logging
import threading
import time
from typing import Optional, List, Dict, Any
from concurrent.futures import ThreadPoolExecutor

from .models.schemas import (
    Lead,
    Offer,
    Intent,
    ScoredLead,
    ClassificationSource,
)
from .models.rubric_config import RubricConfig, load_rubric_config
from .config.settings import INTENT_THRESHOLDS, BATCH_CONFIG, ERROR_PLACEHOLDER
from .stages.rule_scoring import RuleScoringStage
from .stages.intent_classifier import create_intent_classifier

logger = logging.getLogger(__name__)


def determine_intent(score: int) -> Intent:
    """Map a total score to its intent tier"""
    if score >= INTENT_THRESHOLDS["High"]:
        return Intent.HIGH
    elif score >= INTENT_THRESHOLDS["Medium"]:
        return Intent.MEDIUM
    return Intent.LOW


class LeadScoringEngine:
    """
    Orchestrates rule scoring and intent classification.
    """

    def __init__(
        self,
        rubric: Optional[RubricConfig] = None,
        intent_classifier=None,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize the scoring engine.

        Args:
            rubric: Rule rubric (loaded from settings/RUBRIC_CONFIG_PATH if not provided)
            intent_classifier: Any object with `classify(lead, offer) -> IntentResult`
            max_workers: Worker pool size for batch scoring
        """
        self.rubric = rubric or load_rubric_config()
        self.rule_stage = RuleScoringStage(self.rubric)
        self.intent_classifier = intent_classifier or create_intent_classifier()
        self.max_workers = max_workers or BATCH_CONFIG["max_workers"]

        self._stats_lock = threading.Lock()
        self.reset_stats()

    def score_lead(self, lead: Lead, offer: Offer) -> ScoredLead:
        """
        Score a single lead.

        Args:
            lead: Lead to score
            offer: Offer to evaluate against

        Returns:
            ScoredLead with total score, intent tier and reasoning
        """
        start_time = time.time()

        rule_score, breakdown = self.rule_stage.process(lead)
        intent_result = self.intent_classifier.classify(lead, offer)

        total_score = rule_score + intent_result.ai_score
        final_intent = determine_intent(total_score)

        self._record(
            source=intent_result.source,
            elapsed_ms=(time.time() - start_time) * 1000,
        )

        logger.info(f"Scored lead {lead.name}: {total_score} ({final_intent.value})")

        return ScoredLead(
            **lead.model_dump(),
            intent=final_intent,
            score=total_score,
            rule_score=rule_score,
            ai_score=intent_result.ai_score,
            reasoning=intent_result.reasoning,
            breakdown=breakdown,
        )

    def score_batch(
        self,
        leads: List[Lead],
        offer: Offer,
        max_workers: Optional[int] = None,
    ) -> List[ScoredLead]:
        """
        Score multiple leads.

        Args:
            leads: Leads to score
            offer: Offer to evaluate against
            max_workers: Override the engine's worker pool size

        Returns:
            One ScoredLead per input lead, sorted by score descending.
            Equal scores keep their input order.
        """
        if not leads:
            return []

        workers = min(max_workers or self.max_workers, len(leads))
        results: List[ScoredLead] = []

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self.score_lead, lead, offer) for lead in leads]
            # Collected in input order so the stable sort below ignores completion order
            for lead, future in zip(leads, futures):
                try:
                    results.append(future.result())
                except Exception:
                    logger.exception(f"Error scoring lead {lead.name}")
                    with self._stats_lock:
                        self.stats["errors"] += 1
                    results.append(self._create_error_result(lead))

        results.sort(key=lambda r: r.score, reverse=True)
        return results

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics"""
        with self._stats_lock:
            stats = self.stats.copy()
        if stats["total_processed"] > 0:
            stats["avg_processing_time_ms"] = round(
                stats["total_processing_time_ms"] / stats["total_processed"], 2
            )
        stats["llm_enabled"] = bool(getattr(self.intent_classifier, "llm_enabled", False))
        return stats

    def reset_stats(self):
        """Reset engine statistics"""
        with self._stats_lock:
            self.stats = {
                "total_processed": 0,
                "llm_scored": 0,
                "heuristic_scored": 0,
                "degraded": 0,
                "errors": 0,
                "total_processing_time_ms": 0,
            }

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _record(self, source: ClassificationSource, elapsed_ms: float):
        counter = {
            ClassificationSource.LLM: "llm_scored",
            ClassificationSource.HEURISTIC: "heuristic_scored",
            ClassificationSource.DEGRADED: "degraded",
        }[source]
        with self._stats_lock:
            self.stats["total_processed"] += 1
            self.stats[counter] += 1
            self.stats["total_processing_time_ms"] += elapsed_ms

    def _create_error_result(self, lead: Lead) -> ScoredLead:
        """Placeholder for a lead whose scoring raised"""
        return ScoredLead(
            **lead.model_dump(),
            intent=Intent(ERROR_PLACEHOLDER["intent"]),
            score=ERROR_PLACEHOLDER["score"],
            rule_score=ERROR_PLACEHOLDER["rule_score"],
            ai_score=ERROR_PLACEHOLDER["ai_score"],
            reasoning=ERROR_PLACEHOLDER["reasoning"],
        )
