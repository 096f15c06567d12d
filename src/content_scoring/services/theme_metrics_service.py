"""
Theme Metrics Service

Fetches the six analytics sources for a brand concurrently, parses them, and
computes ThemeMetrics from the complete snapshot.
"""

import logging
from datetime import datetime
from typing import Optional

from src.content_scoring.models import (
    CampaignPerformanceRecord,
    ClinicalClaim,
    ClinicalReferenceRecord,
    CompetitiveIntelRecord,
    ComplianceHistoryRecord,
    ContentElementPerformanceRecord,
    RawMetricsData,
    ThemeMetrics,
    parse_records,
)
from src.content_scoring.protocols.data_source_protocol import ContentDataSourceProtocol
from src.content_scoring.scoring.theme_metrics import (
    TOP_ELEMENT_THRESHOLD,
    ThemeMetricsAggregator,
)
from src.content_scoring.services.concurrent_fetch import fetch_concurrently

logger = logging.getLogger(__name__)


class ThemeMetricsService:
    """
    Computes theme metrics for a brand.

    A source that fails to load is treated as empty; its metrics come back
    as None rather than failing the whole calculation.
    """

    def __init__(
        self,
        data_source: ContentDataSourceProtocol,
        aggregator: Optional[ThemeMetricsAggregator] = None,
        max_workers: int = 6,
        campaign_limit: int = 50,
        compliance_limit: int = 100,
    ):
        """
        Initialize the theme metrics service.

        Args:
            data_source: Brand-scoped analytics reads
            aggregator: Metrics aggregator (created if not provided)
            max_workers: Thread pool size for source fetches
            campaign_limit: Most recent campaign rows to consider
            compliance_limit: Most recent compliance checks to consider
        """
        self._data_source = data_source
        self._aggregator = aggregator or ThemeMetricsAggregator()
        self._max_workers = max_workers
        self._campaign_limit = campaign_limit
        self._compliance_limit = compliance_limit

    def fetch_raw_metrics(self, brand_id: str) -> RawMetricsData:
        """Fetch and summarize every analytics source for a brand."""
        ds = self._data_source
        rows = fetch_concurrently(
            {
                "campaign_performance_analytics": lambda: ds.fetch_campaign_performance(
                    brand_id, limit=self._campaign_limit
                ),
                "clinical_claims": lambda: ds.fetch_clinical_claims(brand_id),
                "clinical_references": lambda: ds.fetch_clinical_references(brand_id),
                "competitive_intelligence": lambda: ds.fetch_competitive_intelligence(brand_id),
                "content_element_performance": lambda: ds.fetch_content_element_performance(
                    brand_id, min_score=TOP_ELEMENT_THRESHOLD
                ),
                "compliance_history": lambda: ds.fetch_compliance_history(
                    brand_id, limit=self._compliance_limit
                ),
            },
            max_workers=self._max_workers,
        )

        return self._aggregator.summarize_raw_metrics(
            campaigns=parse_records(CampaignPerformanceRecord, rows["campaign_performance_analytics"]),
            claims=parse_records(ClinicalClaim, rows["clinical_claims"]),
            references=parse_records(ClinicalReferenceRecord, rows["clinical_references"]),
            competitors=parse_records(CompetitiveIntelRecord, rows["competitive_intelligence"]),
            content_elements=parse_records(ContentElementPerformanceRecord, rows["content_element_performance"]),
            compliance_history=parse_records(ComplianceHistoryRecord, rows["compliance_history"]),
        )

    def get_theme_metrics(self, brand_id: str, now: Optional[datetime] = None) -> ThemeMetrics:
        """
        Calculate theme metrics for a brand.

        Args:
            brand_id: Brand ID
            now: Reference time for data recency (defaults to current UTC time)

        Returns:
            ThemeMetrics with attribution
        """
        logger.info(f"Calculating theme metrics for brand {brand_id}")
        raw = self.fetch_raw_metrics(brand_id)
        metrics = self._aggregator.calculate_metrics(raw, now)
        logger.info(
            f"Theme metrics for brand {brand_id}: {metrics.attribution.total_records} records, "
            f"confidence {metrics.attribution.confidence_level.value}"
        )
        return metrics
