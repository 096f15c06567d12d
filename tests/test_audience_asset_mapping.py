"""
Tests for the audience / asset type lookup tables and compliance matrix.
"""

import pytest

from src.content_scoring.models import AudienceType
from src.content_scoring.taxonomy.audience_asset_mapping import (
    ASSET_TYPE_TO_VISUAL_CATEGORIES,
    DEFAULT_ASSET_TYPE,
    get_allowed_asset_types,
    get_asset_audience_reasoning,
    get_compliance_requirements,
    is_asset_type_allowed_for_audience,
    is_caregiver_audience,
    is_hcp_audience,
    map_asset_type_to_module_types,
    map_asset_type_to_visual_categories,
    map_audience_to_visual_bucket,
)


class TestAudienceMapping:
    """Tests for AudienceType -> visual bucket mapping."""

    @pytest.mark.parametrize("audience", list(AudienceType))
    def test_every_audience_maps_to_one_bucket(self, audience):
        buckets = map_audience_to_visual_bucket(audience)
        assert len(buckets) == 1
        assert buckets[0] in {"hcp", "patient", "caregiver"}

    def test_known_audiences(self):
        assert map_audience_to_visual_bucket(AudienceType.PHARMACIST) == ["hcp"]
        assert map_audience_to_visual_bucket("Nurse-NP-PA") == ["hcp"]
        assert map_audience_to_visual_bucket("Patient") == ["patient"]
        assert map_audience_to_visual_bucket("Caregiver-Professional") == ["caregiver"]

    def test_unknown_audience_defaults_to_hcp(self):
        assert map_audience_to_visual_bucket("Payer") == ["hcp"]
        assert map_audience_to_visual_bucket(None) == ["hcp"]
        assert map_audience_to_visual_bucket("") == ["hcp"]

    def test_audience_groups(self):
        assert is_hcp_audience(AudienceType.PHYSICIAN_SPECIALIST)
        assert not is_hcp_audience("Patient")
        assert is_caregiver_audience("Caregiver-Family")
        assert not is_caregiver_audience("Pharmacist")


class TestAssetTypeMapping:
    """Tests for asset type -> visual category / module type mapping."""

    def test_known_asset_types(self):
        assert map_asset_type_to_visual_categories("website-landing-page") == [
            "landing_page", "web", "educational-material"
        ]
        assert map_asset_type_to_visual_categories("digital-sales-aid") == [
            "detail_aid", "sales_aid", "presentation"
        ]

    def test_unknown_asset_type_maps_to_nothing(self):
        assert map_asset_type_to_visual_categories("billboard") == []
        assert map_asset_type_to_visual_categories(None) == []

    def test_module_types_default_to_general(self):
        assert map_asset_type_to_module_types("billboard") == ["general"]
        assert map_asset_type_to_module_types("patient-email") == ["safety", "general"]

    def test_mapping_returns_copies(self):
        categories = map_asset_type_to_visual_categories(DEFAULT_ASSET_TYPE)
        categories.append("mutated")
        assert "mutated" not in ASSET_TYPE_TO_VISUAL_CATEGORIES[DEFAULT_ASSET_TYPE]


class TestComplianceMatrix:
    """Tests for audience / asset type compliance rules."""

    def test_hcp_only_assets(self):
        assert is_asset_type_allowed_for_audience("mass-email", "Physician-Specialist")
        assert not is_asset_type_allowed_for_audience("mass-email", "Patient")
        assert not is_asset_type_allowed_for_audience("digital-sales-aid", "Caregiver-Family")

    def test_unknown_asset_type_is_never_allowed(self):
        assert not is_asset_type_allowed_for_audience("billboard", "Patient")
        assert get_compliance_requirements("billboard") == []
        assert get_asset_audience_reasoning("billboard", "Patient") == (
            "Asset type not found in compliance matrix"
        )

    def test_allowed_asset_types_for_patient(self):
        assert get_allowed_asset_types(AudienceType.PATIENT) == [
            "patient-email", "social-media-post", "website-landing-page"
        ]

    def test_allowed_asset_types_for_caregiver(self):
        assert "caregiver-email" in get_allowed_asset_types("Caregiver-Family")
        assert "mass-email" not in get_allowed_asset_types("Caregiver-Family")

    def test_reasoning_for_disallowed_audience(self):
        reasoning = get_asset_audience_reasoning("rep-triggered-email", "Patient")
        assert reasoning.startswith("This asset type is not compliant for Patient audiences.")

    def test_requirements(self):
        assert "MLR approval required" in get_compliance_requirements("digital-sales-aid")
