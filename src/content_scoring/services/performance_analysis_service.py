"""
Performance Analysis Service

Reads a brand's content performance metrics and runs the intelligence impact,
trend and success pattern analyses over them. Also records new performance
measurements with a blended performance score, and writes success patterns
back onto the brand's theme intelligence.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence

from src.content_scoring.models import (
    ContentPerformanceRecord,
    IntelligenceImpactAnalysis,
    IntelligenceLayerUsage,
    PerformanceFeedback,
    PerformanceTrend,
    SuccessPatterns,
    parse_records,
)
from src.content_scoring.protocols.data_source_protocol import ContentDataSourceProtocol
from src.content_scoring.scoring.performance_impact import (
    SUCCESS_THRESHOLD,
    PerformanceImpactAnalyzer,
    calculate_performance_score,
)

logger = logging.getLogger(__name__)


class PerformanceAnalysisService:
    """Intelligence layer performance analytics for a brand."""

    def __init__(
        self,
        data_source: ContentDataSourceProtocol,
        analyzer: Optional[PerformanceImpactAnalyzer] = None,
        fetch_limit: int = 200,
        feedback_limit: int = 10,
    ):
        self._data_source = data_source
        self._analyzer = analyzer or PerformanceImpactAnalyzer()
        self._fetch_limit = fetch_limit
        self._feedback_limit = feedback_limit

    def _load_records(
        self,
        brand_id: str,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[ContentPerformanceRecord]:
        try:
            rows = self._data_source.fetch_content_performance(brand_id, since=since, limit=limit)
        except Exception as e:
            logger.error(f"Failed to fetch content performance for brand {brand_id}: {e}")
            rows = []
        records = parse_records(ContentPerformanceRecord, rows)
        logger.info(f"Loaded {len(records)} content performance records for brand {brand_id}")
        return records

    def analyze_intelligence_impact(self, brand_id: str) -> IntelligenceImpactAnalysis:
        """Rank intelligence layers and combinations by performance for a brand."""
        records = self._load_records(brand_id, limit=self._fetch_limit)
        return self._analyzer.analyze_intelligence_impact(records)

    def get_performance_trends(
        self,
        brand_id: str,
        days: int = 30,
        now: Optional[datetime] = None,
    ) -> Optional[PerformanceTrend]:
        """
        Daily performance trend over a trailing window.

        Args:
            brand_id: Brand ID
            days: Window length in days
            now: End of the window (defaults to current UTC time)

        Returns:
            PerformanceTrend, or None when there is no usable data
        """
        end = now or datetime.now(timezone.utc)
        records = self._load_records(brand_id, since=end - timedelta(days=days))
        return self._analyzer.analyze_trends(records)

    def get_success_patterns(
        self,
        brand_id: str,
        layer_type: str,
        threshold: float = SUCCESS_THRESHOLD,
    ) -> SuccessPatterns:
        """Top performers that incorporated a layer, and the layers they share."""
        records = self._load_records(brand_id, limit=self._fetch_limit)
        return self._analyzer.extract_success_patterns(records, layer_type=layer_type, threshold=threshold)

    def track_performance(
        self,
        asset_id: str,
        theme_id: str,
        intelligence_layers: Sequence[IntelligenceLayerUsage],
        campaign_metrics: Dict[str, Any],
        audience_segment: Optional[str] = None,
        market: Optional[str] = None,
    ) -> Optional[float]:
        """
        Record a performance measurement for generated content.

        Returns:
            The blended performance score that was stored (None if no metric
            was present)
        """
        score = calculate_performance_score(campaign_metrics)
        stored = self._data_source.insert_content_performance({
            "asset_id": asset_id,
            "theme_id": theme_id,
            "intelligence_layers_used": [layer.model_dump() for layer in intelligence_layers],
            "campaign_metrics": campaign_metrics,
            "audience_segment": audience_segment,
            "market": market,
            "performance_score": score,
        })
        if not stored:
            logger.warning(f"Performance for asset {asset_id} was not stored")
        return score

    def enrich_intelligence_with_performance(
        self,
        brand_id: str,
        intelligence_type: str,
        now: Optional[datetime] = None,
    ) -> PerformanceFeedback:
        """
        Feed success patterns for one intelligence layer back into the brand's
        most recent theme intelligence of that type.

        Args:
            brand_id: Brand ID
            intelligence_type: Layer type (evidence, audience, brand, performance, competitive)
            now: Feedback timestamp (defaults to current UTC time)

        Returns:
            The feedback that was written; average_score is None when no
            record cleared the success threshold
        """
        patterns = self.get_success_patterns(brand_id, intelligence_type)
        feedback = PerformanceFeedback(
            average_score=patterns.average_score,
            successful_patterns=patterns.common_patterns,
            last_updated=now or datetime.now(timezone.utc),
        )

        updated = self._data_source.update_intelligence_feedback(
            brand_id, intelligence_type, feedback.to_intelligence_data(), limit=self._feedback_limit
        )
        if not updated:
            logger.warning(f"No {intelligence_type} intelligence rows updated for brand {brand_id}")
        return feedback
