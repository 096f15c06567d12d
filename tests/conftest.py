"""
Shared fixtures for content scoring tests.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from src.content_scoring.models import (
    ClinicalClaim,
    ContentModule,
    ContentPerformanceRecord,
    VisualAsset,
)
from src.content_scoring.protocols.data_source_protocol import ContentDataSourceProtocol


NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def make_claim(**overrides) -> ClinicalClaim:
    data = {
        "id": "claim-0001-aaaa",
        "claim_text": "Reduced annual FVC decline",
        "claim_type": "efficacy",
        "target_audiences": ["Patient"],
        "statistical_data": {"n": 200},
        "confidence_score": 0.85,
        "review_status": "approved",
    }
    data.update(overrides)
    return ClinicalClaim(**data)


def make_visual(**overrides) -> VisualAsset:
    data = {
        "id": "visual-0001",
        "title": "FVC decline chart",
        "visual_type": "chart",
        "applicable_audiences": ["patient"],
        "applicable_asset_types": [],
        "linked_claims": [],
        "mlr_approved": False,
    }
    data.update(overrides)
    return VisualAsset(**data)


def make_module(**overrides) -> ContentModule:
    data = {
        "id": "module-0001",
        "module_text": "Important safety information",
        "module_type": "safety",
        "applicable_audiences": ["Patient"],
        "linked_claims": [],
        "mlr_approved": False,
    }
    data.update(overrides)
    return ContentModule(**data)


def make_performance(score, layers=(), collected_at=None, **overrides) -> ContentPerformanceRecord:
    data = {
        "intelligence_layers_used": [{"type": layer, "incorporated": True} for layer in layers],
        "performance_score": score,
        "collected_at": collected_at,
    }
    data.update(overrides)
    return ContentPerformanceRecord(**data)


@pytest.fixture
def data_source():
    """Data source mock that returns no rows for every fetch."""
    source = MagicMock(spec=ContentDataSourceProtocol)
    source.is_available = True
    source.fetch_clinical_claims.return_value = []
    source.fetch_visual_assets.return_value = []
    source.fetch_content_modules.return_value = []
    source.fetch_clinical_references.return_value = []
    source.fetch_campaign_performance.return_value = []
    source.fetch_competitive_intelligence.return_value = []
    source.fetch_content_element_performance.return_value = []
    source.fetch_compliance_history.return_value = []
    source.fetch_content_performance.return_value = []
    source.insert_content_performance.return_value = True
    source.update_intelligence_feedback.return_value = 1
    return source
