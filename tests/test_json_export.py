"""
Tests for JSON export of scoring results.
"""

import json
from datetime import timedelta

from src.content_scoring.export import (
    export_theme_metrics_summary,
    export_to_json,
    theme_metrics_summary,
)
from src.content_scoring.models import CampaignPerformanceRecord
from src.content_scoring.scoring.theme_metrics import ThemeMetricsAggregator

from conftest import NOW


def _metrics():
    campaigns = [CampaignPerformanceRecord(engagement_score=50.5, calculated_at=NOW - timedelta(days=2))]
    return ThemeMetricsAggregator().aggregate(campaigns, [], [], [], [], [], now=NOW)


class TestExportToJson:
    """Tests for export_to_json()."""

    def test_writes_nulls_and_timestamps(self, tmp_path):
        path = export_to_json(_metrics(), str(tmp_path / "nested" / "metrics.json"))

        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        assert data["evidence_strength"] is None
        assert data["competitive_edge"] is None
        assert data["success_probability"] == 60
        assert data["attribution"]["sources"][0]["last_updated"].startswith("2024-06-13")
        assert data["attribution"]["confidence_level"] == "low"


class TestThemeMetricsSummary:
    """Tests for display labels."""

    def test_missing_metrics_labelled(self):
        summary = theme_metrics_summary(_metrics())

        assert summary["evidence_strength"] == "Insufficient data"
        assert summary["data_confidence"] == "2%"
        assert summary["engagement_rate"] == "50.5"
        assert summary["data_recency"] == "2 days ago"
        assert summary["sources"] == [
            {"name": "Campaign Analytics", "table": "campaign_performance_analytics", "records": 1}
        ]

    def test_export_summary(self, tmp_path):
        path = export_theme_metrics_summary(_metrics(), str(tmp_path / "summary.json"), brand_id="ofev")

        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        assert data["brand_id"] == "ofev"
        assert data["mlr_approval_rate"] == "Insufficient data"
