"""
Tests for evidence relevance scoring.

Tests:
- score_claim() bounds, contributions and monotonicity
- score_visual_asset() and score_content_module()
- rank_by_relevance() stable ordering
- recommend() assembly of RecommendedEvidence
"""

import itertools

import pytest

from src.content_scoring.models import AudienceType
from src.content_scoring.scoring.relevance_scorer import (
    RelevanceScorer,
    rank_by_relevance,
    score_claim,
    score_content_module,
    score_visual_asset,
)

from conftest import make_claim, make_module, make_visual


class TestScoreClaim:
    """Tests for clinical claim scoring."""

    def test_fully_matching_claim_scores_100(self):
        """Patient efficacy claim with stats and 0.85 confidence scores 40+30+15+15."""
        claim = make_claim(
            target_audiences=["Patient"],
            claim_type="efficacy",
            statistical_data={"n": 200},
            confidence_score=0.85,
        )
        assert score_claim(claim, "Patient") == 100
        assert score_claim(claim, AudienceType.PATIENT) == 100

    def test_empty_claim_scores_zero(self):
        claim = make_claim(
            target_audiences=[],
            claim_type="other",
            statistical_data=None,
            confidence_score=None,
        )
        assert score_claim(claim, "Patient") == 0

    def test_secondary_claim_types(self):
        """moa and indication claims get +20."""
        for claim_type in ("moa", "indication"):
            claim = make_claim(target_audiences=[], claim_type=claim_type,
                               statistical_data=None, confidence_score=None)
            assert score_claim(claim, "Patient") == 20

    def test_confidence_bands(self):
        def score_at(confidence):
            claim = make_claim(target_audiences=[], claim_type=None,
                               statistical_data=None, confidence_score=confidence)
            return score_claim(claim, "Patient")

        assert score_at(0.8) == 15
        assert score_at(0.79) == 10
        assert score_at(0.6) == 10
        assert score_at(0.59) == 0

    def test_empty_statistical_data_does_not_count(self):
        claim = make_claim(target_audiences=[], claim_type=None,
                           statistical_data={}, confidence_score=None)
        assert score_claim(claim, "Patient") == 0

    def test_audience_match_is_exact(self):
        """A caregiver claim does not match a patient audience."""
        claim = make_claim(target_audiences=["Caregiver-Family"], claim_type=None,
                           statistical_data=None, confidence_score=None)
        assert score_claim(claim, "Patient") == 0
        assert score_claim(claim, "Caregiver-Family") == 40

    def test_bounds_and_monotonicity(self):
        """Flipping any single signal on never lowers the score."""
        signals = {
            "target_audiences": ([], ["Patient"]),
            "claim_type": ("other", "efficacy"),
            "statistical_data": (None, {"p": 0.01}),
            "confidence_score": (0.1, 0.9),
        }
        names = list(signals)
        for flags in itertools.product([0, 1], repeat=len(names)):
            base = {n: signals[n][f] for n, f in zip(names, flags)}
            score = score_claim(make_claim(**base), "Patient")
            assert 0 <= score <= 100
            for i, name in enumerate(names):
                if flags[i] == 0:
                    flipped = dict(base, **{name: signals[name][1]})
                    assert score_claim(make_claim(**flipped), "Patient") >= score


class TestScoreVisualAsset:
    """Tests for visual asset scoring."""

    def test_audience_only_match_scores_25(self):
        """Unapproved asset with no links or categories still gets the audience match."""
        asset = make_visual(
            mlr_approved=False,
            linked_claims=[],
            applicable_audiences=["patient"],
            applicable_asset_types=[],
        )
        assert score_visual_asset(asset, AudienceType.PATIENT, "website-landing-page") == 25

    def test_all_signals_score_100(self):
        asset = make_visual(
            mlr_approved=True,
            linked_claims=["claim-1"],
            applicable_audiences=["hcp"],
            applicable_asset_types=["email"],
        )
        assert score_visual_asset(asset, "Pharmacist", "mass-email") == 100

    def test_unknown_asset_type_never_matches(self):
        asset = make_visual(applicable_audiences=[], applicable_asset_types=["landing_page"])
        assert score_visual_asset(asset, "Patient", "billboard") == 0

    def test_unknown_audience_uses_hcp_bucket(self):
        asset = make_visual(applicable_audiences=["hcp"])
        assert score_visual_asset(asset, "Investor", None) == 25

    def test_null_lists_from_store(self):
        asset = make_visual(applicable_audiences=None, linked_claims=None, applicable_asset_types=None)
        assert asset.applicable_audiences == []
        assert score_visual_asset(asset, "Patient", "website-landing-page") == 0


class TestScoreContentModule:
    """Tests for content module scoring."""

    def test_all_signals(self):
        module = make_module(mlr_approved=True, linked_claims=["c1"], applicable_audiences=["Patient"])
        assert score_content_module(module, "Patient") == 100

    def test_modules_use_full_audience_taxonomy(self):
        """Modules match on AudienceType values, not visual buckets."""
        module = make_module(applicable_audiences=["hcp"])
        assert score_content_module(module, "Pharmacist") == 0

    def test_mlr_only(self):
        module = make_module(mlr_approved=True, applicable_audiences=[])
        assert score_content_module(module, "Patient") == 40


class TestRankByRelevance:
    """Tests for ranking and truncation."""

    def test_ties_keep_retrieval_order(self):
        class Item:
            def __init__(self, name, relevance_score):
                self.name = name
                self.relevance_score = relevance_score

        items = [Item("a", 50), Item("b", 80), Item("c", 50), Item("d", 80)]
        ranked = rank_by_relevance(items)
        assert [i.name for i in ranked] == ["b", "d", "a", "c"]

    def test_truncates_to_limit(self):
        class Item:
            def __init__(self, relevance_score):
                self.relevance_score = relevance_score

        items = [Item(s) for s in (10, 90, 50, 70)]
        assert [i.relevance_score for i in rank_by_relevance(items, 2)] == [90, 70]
        assert rank_by_relevance(items, 0) == []


class TestRecommend:
    """Tests for RecommendedEvidence assembly."""

    @pytest.fixture
    def scorer(self):
        return RelevanceScorer()

    def test_matching_criteria(self, scorer):
        claims = [make_claim(id="c1"), make_claim(id="c2", target_audiences=[])]
        visuals = [make_visual(id="v1")]
        modules = [make_module(id="m1")]

        result = scorer.recommend(claims, visuals, modules, AudienceType.PATIENT, ["patient-email"])

        criteria = result.matching_criteria
        assert criteria.audience_used == "Patient"
        assert criteria.audience_mapped_to == ["patient"]
        assert criteria.asset_type_used == "patient-email"
        assert criteria.asset_type_mapped_to == ["email", "patient-brochure", "educational-material"]
        assert criteria.total_matched == 4

    def test_default_asset_type(self, scorer):
        result = scorer.recommend([], [], [], "Patient", [])
        assert result.matching_criteria.asset_type_used == "website-landing-page"
        assert result.matching_criteria.total_matched == 0

    def test_claims_ranked_and_limited(self, scorer):
        claims = [
            make_claim(id="low", target_audiences=[], statistical_data=None),
            make_claim(id="high"),
            make_claim(id="mid", statistical_data=None),
        ]
        result = scorer.recommend(claims, [], [], "Patient", None, claim_limit=2)
        assert [c.id for c in result.claims] == ["high", "mid"]
        assert result.claims[0].relevance_score == 100

    def test_claim_projection(self, scorer):
        claim = make_claim(id="abcdef1234567890", claim_id_display=None, claim_type="moa")
        rec = scorer.recommend([claim], [], [], "Patient", None).claims[0]
        assert rec.claim_id_display == "abcdef12"
        assert rec.matching_criteria.claim_type_relevance is True
        assert rec.matching_criteria.audience_match is True
        assert rec.matching_criteria.has_statistical_data is True

    def test_indication_claim_not_flagged_relevant(self, scorer):
        claim = make_claim(claim_type="indication")
        rec = scorer.recommend([claim], [], [], "Patient", None).claims[0]
        assert rec.matching_criteria.claim_type_relevance is False

    def test_visual_preview_flag(self, scorer):
        visuals = [
            make_visual(id="stored", storage_path="brand/chart.png"),
            make_visual(id="inline", visual_data={"svg": "<svg/>"}),
            make_visual(id="none"),
        ]
        result = scorer.recommend([], visuals, [], "Patient", None)
        previews = {v.id: v.has_preview for v in result.visual_assets}
        assert previews == {"stored": True, "inline": True, "none": False}

    def test_recommend_is_idempotent(self, scorer):
        claims = [make_claim(id=f"c{i}", confidence_score=i / 10) for i in range(10)]
        first = scorer.recommend(claims, [make_visual()], [make_module()], "Patient", ["mass-email"])
        second = scorer.recommend(claims, [make_visual()], [make_module()], "Patient", ["mass-email"])
        assert first.model_dump() == second.model_dump()
