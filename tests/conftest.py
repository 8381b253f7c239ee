"""Shared fixtures for Lead Qualifier tests."""

import os
import pytest

# Never reach a real completion service from tests
for _key in ("OPENAI_API_KEY", "OPENROUTER_API_KEY", "ANTHROPIC_API_KEY"):
    os.environ[_key] = ""
os.environ.pop("RUBRIC_CONFIG_PATH", None)

from lead_qualifier.engine import LeadScoringEngine
from lead_qualifier.models.schemas import Lead, Offer
from lead_qualifier.session import ScoringSession
from lead_qualifier.stages.intent_classifier import HeuristicIntentClassifier


@pytest.fixture
def offer():
    return Offer(
        name="AI Outreach Automation",
        value_props=["24/7 outreach", "6x more meetings"],
        ideal_use_cases=["B2B SaaS mid-market"],
    )


@pytest.fixture
def amy():
    return Lead(
        name="Amy Chen",
        role="VP of Sales",
        company="Acme",
        industry="B2B SaaS",
        location="NYC",
        linkedin_bio="Scaling outbound with automation",
    )


@pytest.fixture
def bare_lead():
    """Role and industry missing, bio without growth keywords"""
    return Lead(
        name="Bob Stone",
        role="",
        company="Widgets Co",
        industry="",
        location="Austin",
        linkedin_bio="Enjoys fishing on weekends",
    )


@pytest.fixture
def engine():
    return LeadScoringEngine(intent_classifier=HeuristicIntentClassifier(), max_workers=2)


@pytest.fixture
def client(engine):
    """FastAPI test client with a fresh session and a network-free engine."""
    from fastapi.testclient import TestClient
    from lead_qualifier.api.endpoints import app, get_session, get_engine

    session = ScoringSession()
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def leads_csv():
    return (
        "name,role,company,industry,location,linkedin_bio\n"
        "Amy Chen,VP of Sales,Acme,B2B SaaS,NYC,Scaling outbound with automation\n"
        "Bob Stone,,Widgets Co,,Austin,Enjoys fishing on weekends\n"
        "Cara Diaz,Marketing Manager,Shoply,E-commerce,Berlin,Building brand partnerships\n"
    ).encode("utf-8")
