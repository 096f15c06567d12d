"""
Performance Impact Analyzer

Determines which intelligence layers (evidence, audience, brand, performance,
competitive) and layer combinations correlate with higher content performance.

Grouping:
    Records are grouped by the sorted, deduplicated set of incorporated layer
    types. The group key is the comma-joined list, or "none".

Layer impact:
    Each layer's average is weighted by the sample size of every group that
    contains it, so a layer seen mostly in large groups is not swamped by many
    small ones.

Combinations:
    Only groups with at least MIN_COMBINATION_SAMPLE records are reported.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from src.content_scoring.models import (
    ContentPerformanceRecord,
    DailyPerformance,
    IntelligenceImpactAnalysis,
    LayerCombination,
    LayerImpact,
    PerformanceTrend,
    SuccessPatterns,
)
from src.content_scoring.scoring.missing_data import as_utc, mean_or_none

logger = logging.getLogger(__name__)

NO_LAYERS_KEY = "none"
MIN_COMBINATION_SAMPLE = 3
MAX_COMBINATIONS = 10

TREND_WINDOW_DAYS = 7
TREND_THRESHOLD = 5.0

SUCCESS_THRESHOLD = 70.0
MAX_TOP_PERFORMERS = 10

NO_DATA_RECOMMENDATION = "Collect performance data to enable intelligence impact analysis"
KEEP_TRACKING_RECOMMENDATION = "Continue tracking performance to refine intelligence impact"

# Campaign metric -> weight in the blended performance score
PERFORMANCE_METRIC_WEIGHTS = {
    "open_rate": 0.2,
    "click_rate": 0.3,
    "conversion_rate": 0.4,
    "engagement_score": 0.1,
}


@dataclass
class _GroupStats:
    layers: List[str]
    average: float
    sample_size: int


def incorporated_layers(record: ContentPerformanceRecord) -> List[str]:
    """Sorted, deduplicated incorporated layer types."""
    return sorted({layer.type for layer in record.intelligence_layers_used if layer.incorporated})


def layer_key(record: ContentPerformanceRecord) -> str:
    return ",".join(incorporated_layers(record)) or NO_LAYERS_KEY


def score_of(record: ContentPerformanceRecord) -> float:
    """A record that was tracked without a score counts as 0."""
    return record.performance_score or 0.0


def calculate_performance_score(campaign_metrics: Optional[Mapping[str, Any]]) -> Optional[float]:
    """
    Blend campaign metrics (percentages, 0-100) into one 0-100 score.

    Weights are renormalized over the metrics that are present.

    Returns:
        Score, or None when no weighted metric is present
    """
    if not campaign_metrics:
        return None

    score = 0.0
    total_weight = 0.0
    for metric, weight in PERFORMANCE_METRIC_WEIGHTS.items():
        value = campaign_metrics.get(metric)
        if value is None:
            continue
        score += float(value) * weight
        total_weight += weight

    if total_weight == 0:
        return None
    return score / total_weight


class PerformanceImpactAnalyzer:
    """
    Analyzes content performance records by intelligence layers used.

    Pure and stateless; records are passed per call.
    """

    def __init__(
        self,
        min_combination_sample: int = MIN_COMBINATION_SAMPLE,
        max_combinations: int = MAX_COMBINATIONS,
    ):
        if min_combination_sample < 1 or max_combinations < 0:
            raise ValueError("Combination sample size must be >= 1 and max combinations >= 0")
        self._min_combination_sample = min_combination_sample
        self._max_combinations = max_combinations

    def group_by_layers(self, records: Sequence[ContentPerformanceRecord]) -> List[_GroupStats]:
        """
        Average score and sample size per layer group, best first.

        Records without a score count as 0 in their group.
        """
        groups: "OrderedDict[str, List[float]]" = OrderedDict()
        for record in records:
            groups.setdefault(layer_key(record), []).append(score_of(record))

        stats = [
            _GroupStats(
                layers=[] if key == NO_LAYERS_KEY else key.split(","),
                average=sum(scores) / len(scores),
                sample_size=len(scores),
            )
            for key, scores in groups.items()
        ]
        return sorted(stats, key=lambda g: g.average, reverse=True)

    @staticmethod
    def calculate_layer_impact(groups: Sequence[_GroupStats]) -> List[LayerImpact]:
        """Sample-size-weighted average per individual layer, best first."""
        totals: Dict[str, float] = {}
        counts: Dict[str, int] = {}
        for group in groups:
            for layer in group.layers:
                totals[layer] = totals.get(layer, 0.0) + group.average * group.sample_size
                counts[layer] = counts.get(layer, 0) + group.sample_size

        impacts = [
            LayerImpact(
                layer_type=layer,
                average_performance=totals[layer] / counts[layer],
                sample_size=counts[layer],
            )
            for layer in totals
        ]
        return sorted(impacts, key=lambda i: i.average_performance, reverse=True)

    def find_combinations(self, groups: Sequence[_GroupStats]) -> List[LayerCombination]:
        """Top groups by average that meet the minimum sample size."""
        eligible = [g for g in groups if g.sample_size >= self._min_combination_sample]
        return [
            LayerCombination(combination=g.layers, performance=g.average, count=g.sample_size)
            for g in eligible[:self._max_combinations]
        ]

    @staticmethod
    def generate_recommendations(
        layers: Sequence[LayerImpact],
        combinations: Sequence[LayerCombination],
    ) -> List[str]:
        recommendations = []

        if layers:
            best = layers[0]
            recommendations.append(
                f"Prioritize {best.layer_type} intelligence - shows "
                f"{best.average_performance:.1f}% average performance"
            )

        if combinations:
            best_combo = combinations[0]
            combo_label = " + ".join(best_combo.combination) or NO_LAYERS_KEY
            recommendations.append(f"Optimal intelligence combination: {combo_label}")

        recommendations.append(KEEP_TRACKING_RECOMMENDATION)
        return recommendations

    def analyze_intelligence_impact(
        self, records: Sequence[ContentPerformanceRecord]
    ) -> IntelligenceImpactAnalysis:
        """
        Rank intelligence layers and layer combinations by performance.

        Args:
            records: Content performance records

        Returns:
            IntelligenceImpactAnalysis; with no records the only
            recommendation is to collect data
        """
        groups = self.group_by_layers(records)
        if not groups:
            logger.info("No performance records; skipping intelligence impact analysis")
            return IntelligenceImpactAnalysis(recommendations=[NO_DATA_RECOMMENDATION])

        layers = self.calculate_layer_impact(groups)
        combinations = self.find_combinations(groups)

        logger.debug(
            f"Intelligence impact: {len(groups)} groups, {len(layers)} layers, "
            f"{len(combinations)} combinations"
        )

        return IntelligenceImpactAnalysis(
            most_impactful_layers=layers,
            layer_combinations=combinations,
            recommendations=self.generate_recommendations(layers, combinations),
        )

    # -------------------------------------------------------------------------
    # Trends and success patterns
    # -------------------------------------------------------------------------

    @staticmethod
    def analyze_trends(records: Sequence[ContentPerformanceRecord]) -> Optional[PerformanceTrend]:
        """
        Daily average scores and overall trend direction.

        Records without a collection time are ignored; a missing score
        counts as 0.

        Returns:
            PerformanceTrend, or None when no record is usable
        """
        usable = [r for r in records if r.collected_at is not None]
        if not usable:
            return None

        daily_scores: Dict[str, List[float]] = {}
        for record in usable:
            day = as_utc(record.collected_at).date().isoformat()
            daily_scores.setdefault(day, []).append(score_of(record))

        daily = [
            DailyPerformance(date=day, average_score=sum(scores) / len(scores), count=len(scores))
            for day, scores in sorted(daily_scores.items())
        ]

        return PerformanceTrend(
            daily=daily,
            overall_average=sum(score_of(r) for r in usable) / len(usable),
            trend=trend_direction(daily),
        )

    @staticmethod
    def extract_success_patterns(
        records: Sequence[ContentPerformanceRecord],
        layer_type: Optional[str] = None,
        threshold: float = SUCCESS_THRESHOLD,
    ) -> SuccessPatterns:
        """
        Top performers above a threshold and the layers they share.

        Args:
            records: Content performance records
            layer_type: Only consider records that incorporated this layer
            threshold: Minimum score (exclusive)
        """
        candidates = records
        if layer_type:
            candidates = [r for r in records if layer_type in incorporated_layers(r)]

        successful = sorted(
            (r for r in candidates if score_of(r) > threshold),
            key=score_of,
            reverse=True,
        )

        common: List[str] = []
        for record in successful:
            for layer in incorporated_layers(record):
                if layer not in common:
                    common.append(layer)

        return SuccessPatterns(
            top_performers=successful[:MAX_TOP_PERFORMERS],
            average_score=mean_or_none(score_of(r) for r in successful),
            common_patterns=common,
        )


def trend_direction(daily: Sequence[DailyPerformance]) -> str:
    """
    Compare the last week of daily averages with up to a week before it.

    Returns:
        "up", "down" or "stable"
    """
    if len(daily) < 2:
        return "stable"

    recent = daily[-TREND_WINDOW_DAYS:]
    older = daily[:max(0, min(TREND_WINDOW_DAYS, len(daily) - TREND_WINDOW_DAYS))]
    if not older:
        return "stable"

    recent_avg = sum(d.average_score for d in recent) / len(recent)
    older_avg = sum(d.average_score for d in older) / len(older)
    diff = recent_avg - older_avg

    if diff > TREND_THRESHOLD:
        return "up"
    if diff < -TREND_THRESHOLD:
        return "down"
    return "stable"
