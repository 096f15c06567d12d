"""
Scoring Engine for Content Evidence and Themes

Pure, synchronous scorers:
- Relevance of clinical claims, visual assets and content modules
- Theme metrics with data attribution
- Brand compliance (messaging, tone, visual, regulatory)
- Intelligence layer performance impact
"""

from src.content_scoring.scoring.missing_data import (
    INSUFFICIENT_DATA_LABEL,
    describe_metric,
    latest_timestamp,
    mean_or_none,
    mean_over_records,
)
from src.content_scoring.scoring.relevance_scorer import (
    RelevanceRubric,
    RelevanceScorer,
    rank_by_relevance,
    score_claim,
    score_visual_asset,
    score_content_module,
)
from src.content_scoring.scoring.theme_metrics import (
    ThemeMetricsAggregator,
    ThemeMetricsWeights,
    format_recency,
)
from src.content_scoring.scoring.brand_compliance import (
    BrandComplianceChecker,
    ComplianceBaselines,
    analyze_tone,
    check_compliance,
)
from src.content_scoring.scoring.performance_impact import (
    PerformanceImpactAnalyzer,
    calculate_performance_score,
)

__all__ = [
    # Missing data
    "INSUFFICIENT_DATA_LABEL",
    "describe_metric",
    "latest_timestamp",
    "mean_or_none",
    "mean_over_records",
    # Relevance
    "RelevanceRubric",
    "RelevanceScorer",
    "rank_by_relevance",
    "score_claim",
    "score_visual_asset",
    "score_content_module",
    # Theme metrics
    "ThemeMetricsAggregator",
    "ThemeMetricsWeights",
    "format_recency",
    # Brand compliance
    "BrandComplianceChecker",
    "ComplianceBaselines",
    "analyze_tone",
    "check_compliance",
    # Performance impact
    "PerformanceImpactAnalyzer",
    "calculate_performance_score",
]
