"""
Services for content scoring.

Each service wraps a scorer with data access:
- EvidenceRecommendationService: Ranked claims, visual assets and content modules
- ThemeMetricsService: Theme metrics from brand analytics
- PerformanceAnalysisService: Intelligence layer performance analytics
- CitationService: Citation needs, suggestions and formatting
"""

from src.content_scoring.services.concurrent_fetch import fetch_concurrently
from src.content_scoring.services.evidence_recommendation_service import (
    EvidenceRecommendationService,
    RecommendationOptions,
)
from src.content_scoring.services.theme_metrics_service import ThemeMetricsService
from src.content_scoring.services.performance_analysis_service import PerformanceAnalysisService
from src.content_scoring.services.citation_service import (
    CitationService,
    build_citation_index,
    infer_therapeutic_area,
)

__all__ = [
    "fetch_concurrently",
    "EvidenceRecommendationService",
    "RecommendationOptions",
    "ThemeMetricsService",
    "PerformanceAnalysisService",
    "CitationService",
    "build_citation_index",
    "infer_therapeutic_area",
]
