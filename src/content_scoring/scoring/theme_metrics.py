"""
Theme Metrics Aggregator

Turns brand-level analytics records into bounded theme metrics with data
attribution. Two steps:

1. summarize_raw_metrics: per-source summaries (counts, averages, newest
   timestamps) from the fetched record collections.
2. calculate_metrics: weighted, clamped metrics from those summaries.

A metric whose source collection is empty is None, never 0.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from src.content_scoring.models import (
    CampaignPerformanceRecord,
    ClinicalClaim,
    ClinicalReferenceRecord,
    CompetitiveIntelRecord,
    ContentElementPerformanceRecord,
    ComplianceHistoryRecord,
    CampaignPerformanceSummary,
    ClinicalEvidenceSummary,
    CompetitiveIntelSummary,
    ContentPerformanceSummary,
    MlrHistorySummary,
    RawMetricsData,
    DataSource,
    DataAttribution,
    ThemeMetrics,
    ConfidenceLevel,
)
from src.content_scoring.scoring.missing_data import (
    as_utc,
    latest_timestamp,
    mean_or_none,
    mean_over_records,
)

logger = logging.getLogger(__name__)

NO_RECENT_DATA = "No recent data"

THREAT_LEVELS = {"high": 3, "medium": 2, "low": 1}
DEFAULT_THREAT = 1

TOP_ELEMENT_THRESHOLD = 70.0


@dataclass
class ThemeMetricsWeights:
    """
    Weights and saturation points for theme metrics.

    Data confidence: 40 campaigns / 30 claims / 20 competitors / 10 content,
    each saturating at its own record count.
    Evidence strength: 60 quantity (saturates at 20 items) / 0.4 x approval %.
    """
    # Data confidence contributions (must sum to 100)
    campaign_points: float = 40.0
    claim_points: float = 30.0
    competitor_points: float = 20.0
    content_points: float = 10.0

    campaign_saturation: int = 20
    claim_saturation: int = 10
    competitor_saturation: int = 3
    content_saturation: int = 10

    # Evidence strength
    evidence_quantity_points: float = 60.0
    evidence_quantity_saturation: int = 20
    evidence_approval_factor: float = 0.4

    # Success probability
    engagement_factor: float = 0.6
    conversion_factor: float = 10.0
    content_bonus_factor: float = 0.5
    content_baseline: float = 70.0
    success_base: float = 30.0

    # Competitive edge
    competitive_base: float = 50.0
    market_share_bonus: float = 15.0
    per_competitor_bonus: float = 5.0
    max_competitor_bonus: float = 20.0
    threat_factor: float = 5.0

    # Expected reach
    base_reach: int = 5000
    baseline_engagement: float = 50.0

    # Bounds for probability-like scores
    score_floor: int = 20
    score_ceiling: int = 95

    def validate(self) -> bool:
        """Validate that data confidence contributions sum to 100."""
        confidence_sum = (
            self.campaign_points + self.claim_points +
            self.competitor_points + self.content_points
        )
        saturations = [
            self.campaign_saturation, self.claim_saturation,
            self.competitor_saturation, self.content_saturation,
            self.evidence_quantity_saturation,
        ]
        return all([
            abs(confidence_sum - 100.0) < 0.001,
            all(s > 0 for s in saturations),
            self.baseline_engagement > 0,
            self.score_floor <= self.score_ceiling,
        ])


DEFAULT_THEME_WEIGHTS = ThemeMetricsWeights()


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive scores (round() uses banker's rounding)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def format_recency(timestamp: datetime, now: Optional[datetime] = None) -> str:
    """
    Human-readable age of a timestamp.

    Today / Yesterday / N days ago / N weeks ago / N months ago / Over 3 months ago
    """
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)
    diff_days = (now - as_utc(timestamp)).days

    if diff_days <= 0:
        return "Today"
    if diff_days == 1:
        return "Yesterday"
    if diff_days < 7:
        return f"{diff_days} days ago"
    if diff_days < 30:
        return f"{diff_days // 7} weeks ago"
    if diff_days < 90:
        return f"{diff_days // 30} months ago"
    return "Over 3 months ago"


def _threat_value(level: Optional[str]) -> int:
    return THREAT_LEVELS.get((level or "").lower(), DEFAULT_THREAT)


class ThemeMetricsAggregator:
    """
    Computes ThemeMetrics for a brand from its analytics records.

    Pure: all inputs are passed in, including the clock used for recency.
    """

    def __init__(self, weights: ThemeMetricsWeights = DEFAULT_THEME_WEIGHTS):
        self._weights = weights

        if not weights.validate():
            raise ValueError("Theme metrics weights are invalid: data confidence points must sum to 100")

    @property
    def weights(self) -> ThemeMetricsWeights:
        return self._weights

    # -------------------------------------------------------------------------
    # Step 1: raw summaries
    # -------------------------------------------------------------------------

    def summarize_raw_metrics(
        self,
        campaigns: Sequence[CampaignPerformanceRecord],
        claims: Sequence[ClinicalClaim],
        references: Sequence[ClinicalReferenceRecord],
        competitors: Sequence[CompetitiveIntelRecord],
        content_elements: Sequence[ContentElementPerformanceRecord],
        compliance_history: Sequence[ComplianceHistoryRecord],
    ) -> RawMetricsData:
        """
        Summarize each source collection.

        Campaign and compliance averages cover every record, with a missing
        field counted as 0; an empty collection averages to None. Content
        elements below the top-performer threshold are ignored.
        """
        top_elements = [
            e for e in content_elements
            if e.avg_performance_score is not None
            and e.avg_performance_score >= TOP_ELEMENT_THRESHOLD
        ]

        return RawMetricsData(
            campaign_performance=CampaignPerformanceSummary(
                avg_engagement=mean_over_records(c.engagement_score for c in campaigns),
                avg_open_rate=mean_over_records(c.open_rate for c in campaigns),
                avg_click_rate=mean_over_records(c.click_rate for c in campaigns),
                avg_conversion=mean_over_records(c.conversion_rate for c in campaigns),
                total_campaigns=len(campaigns),
                last_updated=latest_timestamp(c.calculated_at for c in campaigns),
            ),
            clinical_evidence=ClinicalEvidenceSummary(
                claim_count=len(claims),
                approved_claim_count=sum(1 for c in claims if c.review_status == "approved"),
                reference_count=len(references),
                last_updated=latest_timestamp(c.updated_at for c in claims),
                references_last_updated=latest_timestamp(r.updated_at for r in references),
            ),
            competitive_intel=CompetitiveIntelSummary(
                competitor_count=len(competitors),
                avg_threat_level=mean_or_none(_threat_value(c.threat_level) for c in competitors),
                market_share_data=any(c.market_share_percent is not None for c in competitors),
                last_updated=latest_timestamp(c.last_updated for c in competitors),
            ),
            content_performance=ContentPerformanceSummary(
                top_performing_elements=len(top_elements),
                avg_performance_score=mean_or_none(e.avg_performance_score for e in top_elements),
                last_updated=latest_timestamp(e.last_calculated for e in top_elements),
            ),
            mlr_history=MlrHistorySummary(
                total_submissions=len(compliance_history),
                approval_rate=mean_over_records(c.overall_compliance_score for c in compliance_history),
                last_updated=latest_timestamp(c.checked_at for c in compliance_history),
            ),
        )

    # -------------------------------------------------------------------------
    # Step 2: metrics
    # -------------------------------------------------------------------------

    def calculate_metrics(self, raw: RawMetricsData, now: Optional[datetime] = None) -> ThemeMetrics:
        """
        Calculate theme metrics and their attribution.

        Args:
            raw: Per-source summaries
            now: Reference time for data recency (defaults to current UTC time)

        Returns:
            ThemeMetrics with None for every metric lacking data
        """
        attribution = self.build_attribution(raw, now)

        metrics = ThemeMetrics(
            data_confidence=self.calculate_data_confidence(raw),
            evidence_strength=self.calculate_evidence_strength(raw),
            success_probability=self.calculate_success_probability(raw),
            competitive_edge=self.calculate_competitive_edge(raw),
            engagement_rate=raw.campaign_performance.avg_engagement,
            mlr_approval_rate=raw.mlr_history.approval_rate,
            expected_reach=self.calculate_expected_reach(raw),
            attribution=attribution,
        )

        logger.debug(
            f"Theme metrics: confidence={metrics.data_confidence}, "
            f"evidence={metrics.evidence_strength}, level={attribution.confidence_level.value}"
        )
        return metrics

    def calculate_data_confidence(self, raw: RawMetricsData) -> Optional[int]:
        w = self._weights
        total = (
            min(raw.campaign_performance.total_campaigns / w.campaign_saturation, 1) * w.campaign_points +
            min(raw.clinical_evidence.claim_count / w.claim_saturation, 1) * w.claim_points +
            min(raw.competitive_intel.competitor_count / w.competitor_saturation, 1) * w.competitor_points +
            min(raw.content_performance.top_performing_elements / w.content_saturation, 1) * w.content_points
        )
        if total == 0:
            return None
        return round_half_up(total)

    def calculate_evidence_strength(self, raw: RawMetricsData) -> Optional[int]:
        w = self._weights
        evidence = raw.clinical_evidence
        total_evidence = evidence.claim_count + evidence.reference_count
        if total_evidence == 0:
            return None

        approval_pct = 0.0
        if evidence.claim_count > 0:
            approval_pct = evidence.approved_claim_count / evidence.claim_count * 100

        quantity = min(total_evidence / w.evidence_quantity_saturation, 1) * w.evidence_quantity_points
        quality = approval_pct * w.evidence_approval_factor
        return round_half_up(quantity + quality)

    def calculate_success_probability(self, raw: RawMetricsData) -> Optional[int]:
        w = self._weights
        campaigns = raw.campaign_performance
        if campaigns.total_campaigns == 0:
            return None

        score = (campaigns.avg_engagement or 0) * w.engagement_factor + w.success_base
        score += (campaigns.avg_conversion or 0) * w.conversion_factor
        content_avg = raw.content_performance.avg_performance_score
        if content_avg is not None:
            score += (content_avg - w.content_baseline) * w.content_bonus_factor

        return int(clamp(round_half_up(score), w.score_floor, w.score_ceiling))

    def calculate_competitive_edge(self, raw: RawMetricsData) -> Optional[int]:
        w = self._weights
        intel = raw.competitive_intel
        if intel.competitor_count == 0:
            return None

        score = w.competitive_base
        if intel.market_share_data:
            score += w.market_share_bonus
        score += min(intel.competitor_count * w.per_competitor_bonus, w.max_competitor_bonus)
        if intel.avg_threat_level is not None:
            # Lower threat means a larger edge
            score += (3 - intel.avg_threat_level) * w.threat_factor

        return int(clamp(round_half_up(score), w.score_floor, w.score_ceiling))

    def calculate_expected_reach(self, raw: RawMetricsData) -> Optional[int]:
        w = self._weights
        campaigns = raw.campaign_performance
        if campaigns.total_campaigns == 0:
            return None
        return round_half_up(w.base_reach * (campaigns.avg_engagement or 0) / w.baseline_engagement)

    @staticmethod
    def determine_confidence_level(raw: RawMetricsData) -> ConfidenceLevel:
        campaigns = raw.campaign_performance.total_campaigns
        claims = raw.clinical_evidence.claim_count
        any_data = any([
            campaigns,
            claims,
            raw.clinical_evidence.reference_count,
            raw.competitive_intel.competitor_count,
            raw.content_performance.top_performing_elements,
            raw.mlr_history.total_submissions,
        ])
        has_performance = campaigns >= 10
        has_evidence = claims >= 5
        has_competitive = raw.competitive_intel.competitor_count >= 1

        if has_performance and has_evidence and has_competitive:
            return ConfidenceLevel.HIGH
        if has_performance or has_evidence:
            return ConfidenceLevel.MEDIUM
        if any_data:
            return ConfidenceLevel.LOW
        return ConfidenceLevel.INSUFFICIENT

    def build_attribution(self, raw: RawMetricsData, now: Optional[datetime] = None) -> DataAttribution:
        """One DataSource per non-empty source table, plus overall recency."""
        candidates = [
            ("Campaign Analytics", "campaign_performance_analytics",
             raw.campaign_performance.total_campaigns, raw.campaign_performance.last_updated),
            ("Clinical Claims", "clinical_claims",
             raw.clinical_evidence.claim_count, raw.clinical_evidence.last_updated),
            ("Clinical References", "clinical_references",
             raw.clinical_evidence.reference_count, raw.clinical_evidence.references_last_updated),
            ("Competitive Intelligence", "competitive_intelligence",
             raw.competitive_intel.competitor_count, raw.competitive_intel.last_updated),
            ("Content Performance", "content_element_performance",
             raw.content_performance.top_performing_elements, raw.content_performance.last_updated),
            ("Compliance History", "compliance_history",
             raw.mlr_history.total_submissions, raw.mlr_history.last_updated),
        ]

        sources: List[DataSource] = [
            DataSource(name=name, table=table, record_count=count, last_updated=updated)
            for name, table, count, updated in candidates
            if count > 0
        ]

        newest = latest_timestamp(s.last_updated for s in sources)
        recency = format_recency(newest, now) if newest is not None else NO_RECENT_DATA

        return DataAttribution(
            sources=sources,
            total_records=sum(s.record_count for s in sources),
            data_recency=recency,
            confidence_level=self.determine_confidence_level(raw),
        )

    def aggregate(
        self,
        campaigns: Sequence[CampaignPerformanceRecord],
        claims: Sequence[ClinicalClaim],
        references: Sequence[ClinicalReferenceRecord],
        competitors: Sequence[CompetitiveIntelRecord],
        content_elements: Sequence[ContentElementPerformanceRecord],
        compliance_history: Sequence[ComplianceHistoryRecord],
        now: Optional[datetime] = None,
    ) -> ThemeMetrics:
        """Summarize and calculate in one call."""
        raw = self.summarize_raw_metrics(
            campaigns, claims, references, competitors, content_elements, compliance_history
        )
        return self.calculate_metrics(raw, now)
