"""Tests for rule-based scoring."""

import pytest
from pydantic import ValidationError

from lead_qualifier.models.schemas import Lead
from lead_qualifier.models.rubric_config import RubricConfig, KeywordTier, load_rubric_config
from lead_qualifier.stages.rule_scoring import RuleScoringStage


@pytest.fixture
def stage():
    return RuleScoringStage()


def make_lead(**overrides):
    fields = dict(
        name="Test Person",
        role="Engineer",
        company="Example Inc",
        industry="Healthcare",
        location="Denver",
        linkedin_bio="Builds things",
    )
    fields.update(overrides)
    return Lead(**fields)


# ── Role ──────────────────────────────────────────────

class TestRoleScore:
    @pytest.mark.parametrize("role", ["CEO", "VP of Sales", "Head of Growth", "chief revenue officer", "Co-Founder"])
    def test_decision_makers(self, stage, role):
        _, breakdown = stage.process(make_lead(role=role))
        assert breakdown.role_score == 20

    @pytest.mark.parametrize("role", ["Marketing Manager", "Senior Engineer", "Solutions Architect", "growth strategist"])
    def test_influencers(self, stage, role):
        _, breakdown = stage.process(make_lead(role=role))
        assert breakdown.role_score == 10

    @pytest.mark.parametrize("role", ["Intern", "", "   "])
    def test_other_roles(self, stage, role):
        _, breakdown = stage.process(make_lead(role=role))
        assert breakdown.role_score == 0

    def test_decision_maker_checked_first(self, stage):
        # Matches both tiers; the higher one wins
        _, breakdown = stage.process(make_lead(role="Senior Director of Engineering"))
        assert breakdown.role_score == 20


# ── Industry ──────────────────────────────────────────

class TestIndustryScore:
    @pytest.mark.parametrize("industry", ["B2B SaaS", "software", "Information Technology", "SaaS"])
    def test_exact_icp(self, stage, industry):
        _, breakdown = stage.process(make_lead(industry=industry))
        assert breakdown.industry_score == 20

    @pytest.mark.parametrize("industry", ["Fintech", "IT Services", "Management Consulting", "e-commerce"])
    def test_adjacent(self, stage, industry):
        _, breakdown = stage.process(make_lead(industry=industry))
        assert breakdown.industry_score == 10

    @pytest.mark.parametrize("industry", ["Healthcare", "Agriculture", ""])
    def test_other(self, stage, industry):
        _, breakdown = stage.process(make_lead(industry=industry))
        assert breakdown.industry_score == 0


# ── Completeness ──────────────────────────────────────

class TestCompleteness:
    def test_all_fields_present(self, stage):
        _, breakdown = stage.process(make_lead())
        assert breakdown.completeness_score == 10

    @pytest.mark.parametrize("field", ["role", "company", "industry", "location", "linkedin_bio"])
    def test_any_blank_field_scores_zero(self, stage, field):
        _, breakdown = stage.process(make_lead(**{field: "  "}))
        assert breakdown.completeness_score == 0


def test_total_is_sum_of_parts(stage, amy):
    score, breakdown = stage.process(amy)
    assert breakdown.role_score == 20
    assert breakdown.industry_score == 20
    assert breakdown.completeness_score == 10
    assert score == breakdown.total_rule_score == 50


def test_bare_lead_scores_zero(stage, bare_lead):
    score, breakdown = stage.process(bare_lead)
    assert score == 0
    assert breakdown.completeness_score == 0


# ── Rubric configuration ──────────────────────────────

class TestRubricConfig:
    def test_custom_rubric(self):
        rubric = RubricConfig(
            role_tiers=[KeywordTier(category="buyer", points=15, keywords=["Buyer"])],
            industry_tiers=[KeywordTier(category="retail", points=20, keywords=["Retail"])],
            completeness_points=5,
        )
        score, breakdown = RuleScoringStage(rubric).process(
            make_lead(role="Senior Buyer", industry="Retail")
        )
        assert breakdown.role_score == 15
        assert breakdown.industry_score == 20
        assert score == 40

    def test_rejects_rubric_above_cap(self):
        with pytest.raises(ValidationError):
            RubricConfig(
                role_tiers=[KeywordTier(category="a", points=30, keywords=["CEO"])],
                industry_tiers=[KeywordTier(category="b", points=20, keywords=["SaaS"])],
                completeness_points=10,
            )

    def test_rejects_negative_points(self):
        with pytest.raises(ValidationError):
            KeywordTier(category="a", points=-5, keywords=["CEO"])

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "rubric.json"
        path.write_text(
            '{"name": "Tiny", "role_tiers": [{"category": "dm", "points": 20, "keywords": ["Owner"]}],'
            ' "industry_tiers": [], "completeness_points": 10}'
        )
        rubric = load_rubric_config(path)
        assert rubric.name == "Tiny"
        _, breakdown = RuleScoringStage(rubric).process(make_lead(role="Owner", industry="SaaS"))
        assert breakdown.role_score == 20
        assert breakdown.industry_score == 0

    def test_defaults_without_path(self):
        rubric = load_rubric_config()
        assert [t.category for t in rubric.role_tiers] == ["decision_maker", "influencer"]
        assert [t.category for t in rubric.industry_tiers] == ["exact_match", "adjacent"]
