"""
Intent Classification
=====================
Buying-intent analysis of a lead against the active offer (max 50 points).

Two implementations share the `classify(lead, offer)` interface:
- LLMIntentClassifier: asks a text-completion service for an
  INTENT/REASONING verdict
- HeuristicIntentClassifier: local keyword rules, used when no
  completion service is configured

Neither raises: a completion call that fails after being dispatched
degrades to a fixed Medium verdict.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..models.schemas import Lead, Offer, Intent, IntentResult, ClassificationSource
from ..config.settings import LLM_CONFIG, SCORING_WEIGHTS, FALLBACK_KEYWORDS
from ..llm.completion import CompletionClient, create_completion_client

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert B2B sales qualification specialist. "
    "Analyze prospects and classify their buying intent accurately."
)

INTENT_MARKER = "INTENT:"
REASONING_MARKER = "REASONING:"
DEFAULT_REASONING = "AI analysis completed"
DEGRADED_REASONING = "Unable to determine intent via AI analysis"


def intent_points(intent: Intent) -> int:
    """Fixed AI score for an intent label"""
    return SCORING_WEIGHTS["ai"][intent.value]


def build_prompt(lead: Lead, offer: Offer) -> str:
    """Generate the classification prompt for one lead"""
    return f"""
Analyze this prospect for the following product/offer:

PRODUCT/OFFER:
- Name: {offer.name}
- Value Props: {', '.join(offer.value_props)}
- Ideal Use Cases: {', '.join(offer.ideal_use_cases)}

PROSPECT:
- Name: {lead.name}
- Role: {lead.role}
- Company: {lead.company}
- Industry: {lead.industry}
- Location: {lead.location}
- LinkedIn Bio: {lead.linkedin_bio}

Based on the prospect's role, industry, and LinkedIn bio, classify their buying intent as High, Medium, or Low.

Consider:
1. Role alignment with decision-making authority
2. Industry fit with ideal use cases
3. LinkedIn bio indicators of relevant pain points or initiatives
4. Company and location factors

Respond in this exact format:
{INTENT_MARKER} [High/Medium/Low]
{REASONING_MARKER} [1-2 sentences explaining your classification]
"""


def parse_intent_response(response: str) -> Tuple[Intent, str]:
    """
    Parse a completion reply into (intent, reasoning).

    Scans line by line; a missing INTENT line resolves to Medium and a
    missing REASONING line to a generic sentence.
    """
    intent = Intent.MEDIUM
    reasoning = DEFAULT_REASONING

    for raw_line in response.splitlines():
        line = raw_line.strip()
        if line.upper().startswith(INTENT_MARKER):
            # Case-sensitive so words like "follow-up" or "highly" don't pick a tier
            label = line[len(INTENT_MARKER):].strip()
            if Intent.HIGH.value in label:
                intent = Intent.HIGH
            elif Intent.LOW.value in label:
                intent = Intent.LOW
            else:
                intent = Intent.MEDIUM
        elif line.upper().startswith(REASONING_MARKER):
            text = line[len(REASONING_MARKER):].strip()
            if text:
                reasoning = text

    return intent, reasoning


class HeuristicIntentClassifier:
    """
    Keyword heuristic over the lead's bio and industry. Pure function of
    the lead: the offer is accepted for interface parity only.
    """

    def __init__(self, keywords: Optional[Dict[str, List[str]]] = None):
        keywords = keywords or FALLBACK_KEYWORDS
        self.bio_signals = [k.lower() for k in keywords["bio_signals"]]
        self.icp_markers = [k.lower() for k in keywords["icp_industry_markers"]]
        self.tech_markers = [k.lower() for k in keywords["tech_industry_markers"]]

    def classify(self, lead: Lead, offer: Optional[Offer] = None) -> IntentResult:
        bio = (lead.linkedin_bio or "").lower()
        industry = (lead.industry or "").lower()

        has_signal = any(keyword in bio for keyword in self.bio_signals)

        if has_signal and any(marker in industry for marker in self.icp_markers):
            intent = Intent.HIGH
        elif not has_signal and not any(marker in industry for marker in self.tech_markers):
            intent = Intent.LOW
        else:
            intent = Intent.MEDIUM

        return IntentResult(
            ai_score=intent_points(intent),
            intent=intent,
            reasoning=f"Based on profile analysis: {lead.role} in {lead.industry} industry.",
            source=ClassificationSource.HEURISTIC,
        )


class LLMIntentClassifier:
    """
    Classify intent through a completion service.
    Without a client every call is delegated to the heuristic.
    """

    def __init__(
        self,
        client: Optional[CompletionClient] = None,
        fallback: Optional[HeuristicIntentClassifier] = None,
        temperature: float = LLM_CONFIG["temperature"],
        max_tokens: int = LLM_CONFIG["max_tokens"],
    ):
        self.client = client
        self.fallback = fallback or HeuristicIntentClassifier()
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    def llm_enabled(self) -> bool:
        return self.client is not None

    def classify(self, lead: Lead, offer: Offer) -> IntentResult:
        """
        Classify a lead's buying intent.

        Args:
            lead: Lead to classify
            offer: Offer the lead is evaluated against

        Returns:
            IntentResult; never raises
        """
        if not self.client:
            return self.fallback.classify(lead, offer)

        try:
            response = self.client.complete(
                SYSTEM_PROMPT,
                build_prompt(lead, offer),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            if not response or not response.strip():
                raise ValueError("Empty completion response")
        except Exception as e:
            logger.error(f"AI scoring error for {lead.name}: {e}")
            return IntentResult(
                ai_score=intent_points(Intent.MEDIUM),
                intent=Intent.MEDIUM,
                reasoning=DEGRADED_REASONING,
                source=ClassificationSource.DEGRADED,
            )

        intent, reasoning = parse_intent_response(response)
        logger.debug(f"AI scoring for {lead.name}: {intent.value} - {reasoning}")

        return IntentResult(
            ai_score=intent_points(intent),
            intent=intent,
            reasoning=reasoning,
            source=ClassificationSource.LLM,
        )


def create_intent_classifier(
    api_key: Optional[str] = None,
    provider: Optional[str] = None,
) -> LLMIntentClassifier:
    """Classifier wired to the configured completion service, if any"""
    client = create_completion_client(api_key=api_key, provider=provider)
    if client is None:
        logger.warning("LLM API key not configured, using fallback scoring")
    return LLMIntentClassifier(client=client)
