"""
Tests for brand compliance checking.

Tests:
- Regulatory checks (disclaimers, superlatives)
- Messaging checks (key messages, value proposition, prohibited terms)
- Tone detection
- Optional visual checks
- Status determination and recommendations
- Global vs local version comparison
"""

import pytest

from src.content_scoring.models import (
    BrandRuleSet,
    ComplianceStatus,
    ContentVisuals,
    IssueSeverity,
    ProhibitedTerm,
)
from src.content_scoring.scoring.brand_compliance import (
    BrandComplianceChecker,
    analyze_tone,
    check_compliance,
)

CLEAN_TEXT = (
    "Clinical evidence shows reduced FVC decline over 52 weeks. "
    "Important Safety Information: see full prescribing information."
)


@pytest.fixture
def checker():
    return BrandComplianceChecker()


class TestRegulatoryChecks:
    """Tests for disclaimers and unsubstantiated claims."""

    def test_clean_content_is_compliant(self, checker):
        result = checker.check_compliance(CLEAN_TEXT)

        assert result.category_scores == {"messaging": 80, "tone": 85, "regulatory": 85}
        assert result.score == 83
        assert result.status == ComplianceStatus.COMPLIANT
        assert result.issues == []

    def test_missing_disclaimer_is_non_compliant(self, checker):
        result = checker.check_compliance("Clinical evidence shows reduced FVC decline.")

        assert result.category_scores["regulatory"] == 55
        assert result.status == ComplianceStatus.NON_COMPLIANT
        assert any(i.severity == IssueSeverity.CRITICAL for i in result.issues)
        assert "Address critical compliance issues before proceeding" in result.recommendations

    def test_single_superlative(self, checker):
        result = checker.check_compliance("The #1 choice. " + CLEAN_TEXT)
        assert result.category_scores["regulatory"] == 65

    def test_multiple_superlatives(self, checker):
        result = checker.check_compliance("Proven and the best therapy. " + CLEAN_TEXT)

        assert result.category_scores["regulatory"] == 60
        assert result.status == ComplianceStatus.NEEDS_REVIEW
        assert "Soften absolute claims or add supporting clinical references" in result.recommendations

    def test_superlatives_match_whole_words(self, checker):
        result = checker.check_compliance("We bestow support. " + CLEAN_TEXT)
        assert result.category_scores["regulatory"] == 85


class TestMessagingChecks:
    """Tests for key messages, value proposition and prohibited terms."""

    def test_key_message_present(self, checker):
        rules = BrandRuleSet(key_messages=["reduced FVC decline"])
        result = checker.check_compliance(CLEAN_TEXT, rules)

        assert result.category_scores["messaging"] == 90
        assert "Incorporates 1 key brand messages" in result.strengths

    def test_key_message_missing(self, checker):
        rules = BrandRuleSet(key_messages=["once-daily dosing"])
        result = checker.check_compliance(CLEAN_TEXT, rules)

        assert result.category_scores["messaging"] == 60
        assert "Review and incorporate key brand messages" in result.recommendations

    def test_value_proposition_missing(self, checker):
        rules = BrandRuleSet(value_proposition="first approved antifibrotic")
        result = checker.check_compliance(CLEAN_TEXT, rules)
        assert result.category_scores["messaging"] == 65

    @pytest.mark.parametrize("severity, expected", [
        ("low", 55),
        ("medium", 55),
        ("high", 50),
        ("critical", 40),
    ])
    def test_prohibited_term_deductions(self, checker, severity, expected):
        rules = BrandRuleSet(prohibited_terms=[ProhibitedTerm(term="cure", severity=severity)])
        result = checker.check_compliance("A cure for IPF. " + CLEAN_TEXT, rules)
        assert result.category_scores["messaging"] == expected

    def test_prohibited_term_replacement(self, checker):
        rules = BrandRuleSet(prohibited_terms=[
            ProhibitedTerm(term="cure", severity="critical", replacement="treat"),
        ])
        result = checker.check_compliance("A cure for IPF. " + CLEAN_TEXT, rules)

        assert result.status == ComplianceStatus.NON_COMPLIANT
        assert result.issues[0].suggestion == 'Replace "cure" with "treat"'


class TestToneChecks:
    """Tests for tone detection and mismatch penalties."""

    def test_analyze_tone(self):
        assert analyze_tone("Clinical research shows") == "professional"
        assert analyze_tone("Therefore, and furthermore") == "formal"
        assert analyze_tone("Hey, this is awesome") == "casual"
        assert analyze_tone("") == "professional"

    def test_casual_text_against_professional_tone(self, checker):
        result = checker.check_compliance("Hey, this is awesome! Important safety information.")
        assert result.category_scores["tone"] == 55

    def test_casual_text_against_casual_tone(self, checker):
        rules = BrandRuleSet(expected_tone="casual")
        result = checker.check_compliance("Hey, this is awesome! Important safety information.", rules)
        assert result.category_scores["tone"] == 85

    def test_formal_expected_professional_detected(self, checker):
        rules = BrandRuleSet(expected_tone="formal")
        result = checker.check_compliance(CLEAN_TEXT, rules)
        assert result.category_scores["tone"] == 60


class TestVisualChecks:
    """Tests for the optional visual category."""

    def test_visual_skipped_without_visuals(self, checker):
        result = checker.check_compliance(CLEAN_TEXT)
        assert "visual" not in result.category_scores

    def test_unapproved_colors_and_missing_logo(self, checker):
        rules = BrandRuleSet(approved_colors=["#0055A4"])
        visuals = ContentVisuals(colors=["#FF0000"], has_logo=False)
        result = checker.check_compliance(CLEAN_TEXT, rules, visuals)

        assert result.category_scores["visual"] == 40
        # (80 + 85 + 40 + 85) / 4 = 72.5
        assert result.score == 73

    def test_approved_visuals(self, checker):
        rules = BrandRuleSet(approved_colors=["#0055a4"])
        visuals = ContentVisuals(colors=["#0055A4"], has_logo=True)
        result = checker.check_compliance(CLEAN_TEXT, rules, visuals)

        assert result.category_scores["visual"] == 70
        assert "Uses approved brand colors" in result.strengths
        assert "Includes brand logo" in result.strengths


class TestStatusAndBounds:
    """Tests for status thresholds and score bounds."""

    def test_scores_never_negative(self, checker):
        rules = BrandRuleSet(
            key_messages=["missing"],
            value_proposition="also missing",
            prohibited_terms=[ProhibitedTerm(term=t, severity="critical") for t in ("hey", "wow", "cool")],
            required_disclaimers=["isi", "boxed warning", "full prescribing information here"],
        )
        result = checker.check_compliance("Hey wow cool, proven best #1", rules)

        assert all(0 <= s <= 100 for s in result.category_scores.values())
        assert 0 <= result.score <= 100
        assert result.category_scores["messaging"] == 0
        assert "Consider major content revision to align with brand guidelines" in result.recommendations

    def test_category_threshold_triggers_review(self, checker):
        rules = BrandRuleSet(category_thresholds={"tone": 90.0})
        result = checker.check_compliance(CLEAN_TEXT, rules)
        assert result.status == ComplianceStatus.NEEDS_REVIEW

    def test_wrapper_matches_checker(self, checker):
        assert check_compliance(CLEAN_TEXT) == checker.check_compliance(CLEAN_TEXT)


class TestCompareVersions:
    """Tests for global vs local version comparison."""

    GLOBAL = {"headline": "A", "body": "B", "cta_text": "C", "disclaimer": "D"}

    def test_identical_versions(self, checker):
        comparison = checker.compare_versions(self.GLOBAL, dict(self.GLOBAL))
        assert comparison.differences == []
        assert comparison.similarity_score == 100

    def test_headline_and_cta_changed(self, checker):
        local = dict(self.GLOBAL, headline="A2", cta_text="C2")
        comparison = checker.compare_versions(self.GLOBAL, local)

        assert [d.field for d in comparison.differences] == ["headline", "cta_text"]
        assert [d.impact for d in comparison.differences] == ["high", "low"]
        assert comparison.similarity_score == 65

    def test_everything_changed(self, checker):
        local = {"headline": "W", "body": "X", "cta_text": "Y", "disclaimer": None}
        comparison = checker.compare_versions(self.GLOBAL, local)
        assert comparison.similarity_score == 20
