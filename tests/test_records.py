"""
Tests for parsing store rows into typed records.
"""

import pytest

from src.content_scoring.models import (
    ClinicalClaim,
    ContentModule,
    VisualAsset,
    parse_record,
    parse_records,
)


class TestParseRecords:
    """Tests for parse_record() / parse_records()."""

    def test_malformed_rows_are_skipped(self):
        rows = [
            {"id": "c1", "claim_text": "A", "confidence_score": 0.7},
            {"claim_text": "no id"},
            {"id": "c3", "usage_count": "many"},
            "not a row",
            {"id": "c5", "claim_text": "E"},
        ]
        claims = parse_records(ClinicalClaim, rows)
        assert [c.id for c in claims] == ["c1", "c5"]

    def test_percentage_confidence_is_scaled(self):
        claims = parse_records(ClinicalClaim, [{"id": "c1", "confidence_score": 85}])
        assert len(claims) == 1
        assert claims[0].confidence_score == pytest.approx(0.85)

    @pytest.mark.parametrize("raw", [-0.2, 250, "high", float("nan")])
    def test_unusable_confidence_keeps_row(self, raw):
        claims = parse_records(ClinicalClaim, [{"id": "c1", "confidence_score": raw}])
        assert [c.id for c in claims] == ["c1"]
        assert claims[0].confidence_score is None

    def test_fractional_confidence_unchanged(self):
        assert parse_record(ClinicalClaim, {"id": "c1", "confidence_score": 1}).confidence_score == 1.0
        assert parse_record(ClinicalClaim, {"id": "c2", "confidence_score": 0.4}).confidence_score == 0.4

    def test_none_is_empty(self):
        assert parse_records(ClinicalClaim, None) == []
        assert parse_records(ClinicalClaim, []) == []

    def test_parsed_instances_pass_through(self):
        claim = ClinicalClaim(id="c1")
        assert parse_record(ClinicalClaim, claim) is claim

    def test_null_columns(self):
        claim = parse_record(ClinicalClaim, {"id": "c1", "target_audiences": None, "review_status": None})
        assert claim.target_audiences == []
        assert claim.review_status == "pending"

        asset = parse_record(VisualAsset, {
            "id": "v1", "applicable_audiences": None, "linked_claims": None, "mlr_approved": None,
        })
        assert asset.applicable_audiences == []
        assert asset.linked_claims == []
        assert asset.mlr_approved is False

        module = parse_record(ContentModule, {"id": "m1", "applicable_audiences": None})
        assert module.applicable_audiences == []

    def test_extra_columns_ignored(self):
        claim = parse_record(ClinicalClaim, {"id": "c1", "brand_id": "ofev", "created_at": "2024-01-01"})
        assert claim is not None
        assert claim.id == "c1"
