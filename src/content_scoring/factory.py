"""
Factory Functions for Content Scoring

Provides factory functions to create fully-wired services from settings.
"""

import logging
from typing import Iterable, Optional

from src.content_scoring.models import Citation
from src.content_scoring.protocols.data_source_protocol import ContentDataSourceProtocol
from src.content_scoring.repositories.content_repository import ContentRepository
from src.content_scoring.scoring.theme_metrics import ThemeMetricsAggregator, ThemeMetricsWeights
from src.content_scoring.services.citation_service import CitationService
from src.content_scoring.services.evidence_recommendation_service import (
    EvidenceRecommendationService,
    RecommendationOptions,
)
from src.content_scoring.services.performance_analysis_service import PerformanceAnalysisService
from src.content_scoring.services.theme_metrics_service import ThemeMetricsService
from src.utils.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_repository(settings: Optional[Settings] = None) -> ContentRepository:
    """
    Create the content repository.

    Without a configured database the repository returns empty results.
    """
    settings = settings or get_settings()
    if settings.has_database:
        logger.info("Created ContentRepository with database connection")
        return ContentRepository(settings.database_url)
    logger.warning("No database URL configured, scores will report insufficient data")
    return ContentRepository(None)


def create_recommendation_service(
    data_source: Optional[ContentDataSourceProtocol] = None,
    settings: Optional[Settings] = None,
) -> EvidenceRecommendationService:
    settings = settings or get_settings()
    return EvidenceRecommendationService(
        data_source=data_source or create_repository(settings),
        default_options=RecommendationOptions(
            claim_limit=settings.claim_limit,
            visual_limit=settings.visual_limit,
            module_limit=settings.module_limit,
            include_non_mlr_approved=settings.include_non_mlr_approved,
        ),
        max_workers=min(3, settings.fetch_max_workers),
        default_asset_type=settings.default_asset_type,
    )


def create_theme_metrics_service(
    data_source: Optional[ContentDataSourceProtocol] = None,
    settings: Optional[Settings] = None,
    weights: Optional[ThemeMetricsWeights] = None,
) -> ThemeMetricsService:
    settings = settings or get_settings()
    aggregator = ThemeMetricsAggregator(weights) if weights else ThemeMetricsAggregator()
    return ThemeMetricsService(
        data_source=data_source or create_repository(settings),
        aggregator=aggregator,
        max_workers=settings.fetch_max_workers,
        campaign_limit=settings.campaign_fetch_limit,
        compliance_limit=settings.compliance_fetch_limit,
    )


def create_performance_analysis_service(
    data_source: Optional[ContentDataSourceProtocol] = None,
    settings: Optional[Settings] = None,
) -> PerformanceAnalysisService:
    settings = settings or get_settings()
    return PerformanceAnalysisService(
        data_source=data_source or create_repository(settings),
        fetch_limit=settings.performance_fetch_limit,
        feedback_limit=settings.intelligence_feedback_limit,
    )


def create_citation_service(
    citations: Optional[Iterable[Citation]] = None,
    data_source: Optional[ContentDataSourceProtocol] = None,
    brand_id: Optional[str] = None,
) -> CitationService:
    """
    Create a citation service.

    Args:
        citations: Approved citations to index directly
        data_source: Otherwise, load the brand's clinical references from here
        brand_id: Brand whose references are loaded

    Returns:
        CitationService over the built index (empty if nothing was supplied)
    """
    if citations is not None:
        return CitationService.from_citations(citations)
    if data_source is not None and brand_id:
        try:
            rows = data_source.fetch_clinical_references(brand_id)
        except Exception as e:
            logger.error(f"Failed to load clinical references for brand {brand_id}: {e}")
            rows = []
        return CitationService.from_rows(rows)
    logger.warning("No citation catalog supplied, citation suggestions will be empty")
    return CitationService()
