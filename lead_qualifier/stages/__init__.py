# Scoring stages module
from .rule_scoring import RuleScoringStage
from .intent_classifier import (
    HeuristicIntentClassifier,
    LLMIntentClassifier,
    create_intent_classifier,
)
