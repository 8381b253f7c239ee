"""
Configuration settings for the Lead Qualifier
"""

from typing import Dict, List, Any
import os

# =============================================================================
# LLM CONFIGURATION
# =============================================================================

LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai")  # openai, openrouter, anthropic

_PROVIDER_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}

DEFAULT_MODELS = {
    "openai": "gpt-3.5-turbo",
    "openrouter": "openai/gpt-3.5-turbo",
    "anthropic": "claude-3-haiku-20240307",
}

LLM_CONFIG = {
    "provider": LLM_PROVIDER,
    "model": os.getenv("LLM_MODEL") or DEFAULT_MODELS.get(LLM_PROVIDER, DEFAULT_MODELS["openai"]),
    "api_key": os.getenv(_PROVIDER_KEY_ENV.get(LLM_PROVIDER, "OPENAI_API_KEY"), ""),
    "base_url": os.getenv("LLM_BASE_URL", "https://openrouter.ai/api/v1"),
    "max_tokens": 150,
    "temperature": 0.3,
    "timeout": float(os.getenv("LLM_TIMEOUT_SECONDS", "20")),
    # OpenRouter specific headers
    "site_url": os.getenv("OPENROUTER_SITE_URL", "http://localhost:8000"),
    "app_name": os.getenv("OPENROUTER_APP_NAME", "Lead Qualifier"),
}

# Values shipped in sample .env files that must not count as credentials
PLACEHOLDER_API_KEYS = {
    "your_openai_api_key_here",
    "sk-placeholder",
    "changeme",
}

# =============================================================================
# SCORING WEIGHTS
# =============================================================================

SCORING_WEIGHTS = {
    "role": {
        "decision_maker": 20,
        "influencer": 10,
        "other": 0,
    },
    "industry": {
        "exact_match": 20,
        "adjacent": 10,
        "other": 0,
    },
    "completeness": {
        "all_fields": 10,
    },
    "ai": {
        "High": 50,
        "Medium": 30,
        "Low": 10,
    },
}

MAX_RULE_SCORE = 50

# =============================================================================
# DEFAULT RUBRIC (first matching tier wins)
# =============================================================================

DEFAULT_RUBRIC: Dict[str, Any] = {
    "role_tiers": [
        {
            "category": "decision_maker",
            "points": SCORING_WEIGHTS["role"]["decision_maker"],
            "keywords": [
                "CEO", "CTO", "CFO", "COO", "CMO", "CPO",
                "VP", "Director", "Head of", "Chief", "President",
                "Owner", "Founder", "Co-founder", "Managing Director",
            ],
        },
        {
            "category": "influencer",
            "points": SCORING_WEIGHTS["role"]["influencer"],
            "keywords": [
                "Manager", "Lead", "Senior", "Principal", "Architect",
                "Consultant", "Specialist", "Advisor", "Strategist",
            ],
        },
    ],
    "industry_tiers": [
        {
            "category": "exact_match",
            "points": SCORING_WEIGHTS["industry"]["exact_match"],
            "keywords": ["B2B SaaS", "Software", "Technology", "SaaS"],
        },
        {
            "category": "adjacent",
            "points": SCORING_WEIGHTS["industry"]["adjacent"],
            "keywords": [
                "IT Services", "Consulting", "Digital Marketing",
                "E-commerce", "Fintech",
            ],
        },
    ],
    "role_default_points": SCORING_WEIGHTS["role"]["other"],
    "industry_default_points": SCORING_WEIGHTS["industry"]["other"],
    "completeness_points": SCORING_WEIGHTS["completeness"]["all_fields"],
}

# =============================================================================
# INTENT THRESHOLDS (applied to the total score)
# =============================================================================

INTENT_THRESHOLDS = {
    "High": 70,
    "Medium": 40,
}

# =============================================================================
# FALLBACK HEURISTIC
# =============================================================================

FALLBACK_KEYWORDS: Dict[str, List[str]] = {
    "bio_signals": ["scale", "growth", "automation", "AI", "efficiency", "productivity"],
    "icp_industry_markers": ["saas"],
    "tech_industry_markers": ["tech"],
}

# =============================================================================
# BATCH / UPLOAD
# =============================================================================

BATCH_CONFIG = {
    "max_workers": int(os.getenv("SCORING_MAX_WORKERS", "4")),
    "max_upload_bytes": 10 * 1024 * 1024,
    "upload_sample_size": 3,
    "top_leads_size": 5,
}

# Placeholder emitted for a lead whose scoring raised
ERROR_PLACEHOLDER = {
    "rule_score": 20,
    "ai_score": 20,
    "score": 40,
    "intent": "Medium",
    "reasoning": "Error during scoring process",
}

REQUIRED_LEAD_COLUMNS = ["name", "role", "company", "industry", "location", "linkedin_bio"]

# (field, CSV header title) in canonical export order
EXPORT_COLUMNS = [
    ("name", "Name"),
    ("role", "Role"),
    ("company", "Company"),
    ("industry", "Industry"),
    ("location", "Location"),
    ("linkedin_bio", "LinkedIn Bio"),
    ("intent", "Intent"),
    ("score", "Total Score"),
    ("rule_score", "Rule Score"),
    ("ai_score", "AI Score"),
    ("reasoning", "AI Reasoning"),
]
