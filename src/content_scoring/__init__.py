"""
Content Scoring Module

Evidence and theme relevance scoring for pharmaceutical marketing content.

Components:
- models: Typed records and result models
- taxonomy: Audience / asset type mappings and compliance matrix
- scoring: Pure relevance, theme metrics, compliance and impact scorers
- protocols: Interfaces for dependency injection
- repositories: Data access layer
- services: Fetch + score workflows
- export: JSON export utilities
"""

from src.content_scoring.factory import (
    create_repository,
    create_recommendation_service,
    create_theme_metrics_service,
    create_performance_analysis_service,
    create_citation_service,
)

__all__ = [
    "create_repository",
    "create_recommendation_service",
    "create_theme_metrics_service",
    "create_performance_analysis_service",
    "create_citation_service",
]
