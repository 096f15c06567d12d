"""
Models for the Content Scoring Engine

Re-exports the Pydantic models from the main models module.
Also exports the record boundary helpers.
"""

from src.models.content_scoring_schemas import (
    # Enums
    AudienceType,
    VisualAudienceBucket,
    ClaimType,
    ConfidenceLevel,
    ComplianceCategory,
    IssueSeverity,
    ComplianceStatus,
    # Evidence records
    ClinicalClaim,
    VisualAsset,
    ContentModule,
    # Analytics records
    CampaignPerformanceRecord,
    ClinicalReferenceRecord,
    CompetitiveIntelRecord,
    ContentElementPerformanceRecord,
    ComplianceHistoryRecord,
    IntelligenceLayerUsage,
    ContentPerformanceRecord,
    # Recommendations
    ClaimMatchingCriteria,
    RecommendedClaim,
    VisualAssetMatchingCriteria,
    RecommendedVisualAsset,
    ModuleMatchingCriteria,
    RecommendedContentModule,
    RecommendationCriteria,
    RecommendedEvidence,
    # Theme metrics
    CampaignPerformanceSummary,
    ClinicalEvidenceSummary,
    CompetitiveIntelSummary,
    ContentPerformanceSummary,
    MlrHistorySummary,
    RawMetricsData,
    DataSource,
    DataAttribution,
    ThemeMetrics,
    # Brand compliance
    ProhibitedTerm,
    ContentVisuals,
    BrandRuleSet,
    ComplianceIssue,
    ComplianceCheckResult,
    ContentDifference,
    VersionComparison,
    # Performance impact
    LayerImpact,
    LayerCombination,
    IntelligenceImpactAnalysis,
    DailyPerformance,
    PerformanceTrend,
    SuccessPatterns,
    PerformanceFeedback,
    # Citations
    Citation,
    CitationNeed,
    ReferenceCheck,
    CitationCoverage,
)
from src.content_scoring.models.records import parse_record, parse_records

__all__ = [
    # Enums
    "AudienceType",
    "VisualAudienceBucket",
    "ClaimType",
    "ConfidenceLevel",
    "ComplianceCategory",
    "IssueSeverity",
    "ComplianceStatus",
    # Evidence records
    "ClinicalClaim",
    "VisualAsset",
    "ContentModule",
    # Analytics records
    "CampaignPerformanceRecord",
    "ClinicalReferenceRecord",
    "CompetitiveIntelRecord",
    "ContentElementPerformanceRecord",
    "ComplianceHistoryRecord",
    "IntelligenceLayerUsage",
    "ContentPerformanceRecord",
    # Recommendations
    "ClaimMatchingCriteria",
    "RecommendedClaim",
    "VisualAssetMatchingCriteria",
    "RecommendedVisualAsset",
    "ModuleMatchingCriteria",
    "RecommendedContentModule",
    "RecommendationCriteria",
    "RecommendedEvidence",
    # Theme metrics
    "CampaignPerformanceSummary",
    "ClinicalEvidenceSummary",
    "CompetitiveIntelSummary",
    "ContentPerformanceSummary",
    "MlrHistorySummary",
    "RawMetricsData",
    "DataSource",
    "DataAttribution",
    "ThemeMetrics",
    # Brand compliance
    "ProhibitedTerm",
    "ContentVisuals",
    "BrandRuleSet",
    "ComplianceIssue",
    "ComplianceCheckResult",
    "ContentDifference",
    "VersionComparison",
    # Performance impact
    "LayerImpact",
    "LayerCombination",
    "IntelligenceImpactAnalysis",
    "DailyPerformance",
    "PerformanceTrend",
    "SuccessPatterns",
    "PerformanceFeedback",
    # Citations
    "Citation",
    "CitationNeed",
    "ReferenceCheck",
    "CitationCoverage",
    # Record boundary
    "parse_record",
    "parse_records",
]
