"""
Lead Qualifier - Hybrid Scoring
===============================
Scores sales leads against a product offer in two halves:
  Rule Scoring (0-50): role seniority, industry fit, profile completeness
  Intent Classification (0-50): LLM verdict, with a keyword heuristic fallback
The total (0-100) maps to a High/Medium/Low intent tier.
"""

__version__ = "1.0.0"
__author__ = "Lead Qualifier Team"
