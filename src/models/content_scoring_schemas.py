"""
Pydantic schemas for the Content Scoring Engine

Defines structured data models for:
- Evidence records (clinical claims, visual assets, content modules)
- Analytics records feeding theme metrics
- Recommendation, theme metrics, compliance and impact results
"""

import math
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class AudienceType(str, Enum):
    """Audience taxonomy used by intake and content modules"""
    PHYSICIAN_SPECIALIST = "Physician-Specialist"
    PHYSICIAN_PRIMARY_CARE = "Physician-PrimaryCare"
    PHARMACIST = "Pharmacist"
    NURSE_RN = "Nurse-RN"
    NURSE_NP_PA = "Nurse-NP-PA"
    PATIENT = "Patient"
    CAREGIVER_FAMILY = "Caregiver-Family"
    CAREGIVER_PROFESSIONAL = "Caregiver-Professional"


class VisualAudienceBucket(str, Enum):
    """Collapsed audience taxonomy used by visual assets"""
    HCP = "hcp"
    PATIENT = "patient"
    CAREGIVER = "caregiver"


class ClaimType(str, Enum):
    """Clinical claim categories"""
    EFFICACY = "efficacy"
    SAFETY = "safety"
    MOA = "moa"
    INDICATION = "indication"
    DOSING = "dosing"
    OTHER = "other"


class ConfidenceLevel(str, Enum):
    """How much underlying data backs a set of metrics"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INSUFFICIENT = "insufficient"


class ComplianceCategory(str, Enum):
    MESSAGING = "messaging"
    TONE = "tone"
    VISUAL = "visual"
    REGULATORY = "regulatory"


class IssueSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ComplianceStatus(str, Enum):
    COMPLIANT = "compliant"
    NEEDS_REVIEW = "needs_review"
    NON_COMPLIANT = "non_compliant"


def _none_to_list(v):
    """NULL array columns come back as None from the store."""
    return [] if v is None else v


# ============================================================
# Evidence Records
# ============================================================

class ClinicalClaim(BaseModel):
    """Row from clinical_claims"""
    id: str = Field(..., description="Claim UUID")
    claim_id_display: Optional[str] = Field(None, description="Short human-readable claim id")
    claim_text: str = Field("", description="Claim text")
    claim_type: Optional[str] = Field(None, description="efficacy, safety, moa, indication, ...")
    target_audiences: List[str] = Field(default_factory=list, description="AudienceType values")
    statistical_data: Optional[Dict[str, Any]] = Field(None, description="Structured statistics payload")
    confidence_score: Optional[float] = Field(None, ge=0.0, le=1.0, description="Extraction confidence (0-1)")
    review_status: str = Field("pending", description="pending, approved, rejected")
    usage_count: Optional[int] = Field(None, description="Times the claim has been used")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    @field_validator("target_audiences", mode="before")
    @classmethod
    def parse_null_audiences(cls, v):
        return _none_to_list(v)

    @field_validator("review_status", mode="before")
    @classmethod
    def parse_null_status(cls, v):
        return v or "pending"

    @field_validator("confidence_score", mode="before")
    @classmethod
    def normalize_confidence(cls, v):
        """Percentages (1-100] are scaled to 0-1; other out-of-range values become None."""
        if v is None:
            return None
        try:
            value = float(v)
        except (TypeError, ValueError):
            return None
        if math.isnan(value) or value < 0 or value > 100:
            return None
        if value > 1:
            return value / 100
        return value


class VisualAsset(BaseModel):
    """Row from visual_assets"""
    id: str = Field(..., description="Asset UUID")
    title: str = Field("", description="Asset title")
    visual_type: Optional[str] = Field(None, description="chart, image, infographic, ...")
    applicable_audiences: List[str] = Field(default_factory=list, description="hcp, patient, caregiver")
    applicable_asset_types: List[str] = Field(default_factory=list, description="Visual asset categories")
    linked_claims: List[str] = Field(default_factory=list, description="Linked claim ids")
    mlr_approved: bool = Field(False, description="Passed MLR review")
    storage_path: Optional[str] = Field(None, description="Storage bucket path")
    visual_data: Optional[Any] = Field(None, description="Inline visual payload")

    @field_validator("applicable_audiences", "applicable_asset_types", "linked_claims", mode="before")
    @classmethod
    def parse_null_lists(cls, v):
        return _none_to_list(v)

    @field_validator("mlr_approved", mode="before")
    @classmethod
    def parse_null_flag(cls, v):
        return bool(v) if v is not None else False


class ContentModule(BaseModel):
    """Row from content_modules"""
    id: str = Field(..., description="Module UUID")
    module_text: str = Field("", description="Module text")
    module_type: Optional[str] = Field(None, description="efficacy, safety, moa, general, ...")
    applicable_audiences: List[str] = Field(default_factory=list, description="AudienceType values")
    linked_claims: List[str] = Field(default_factory=list, description="Linked claim ids")
    mlr_approved: bool = Field(False, description="Passed MLR review")
    usage_score: Optional[float] = Field(None, description="Historical usage score")

    @field_validator("applicable_audiences", "linked_claims", mode="before")
    @classmethod
    def parse_null_lists(cls, v):
        return _none_to_list(v)

    @field_validator("mlr_approved", mode="before")
    @classmethod
    def parse_null_flag(cls, v):
        return bool(v) if v is not None else False


# ============================================================
# Analytics Records
# ============================================================

class CampaignPerformanceRecord(BaseModel):
    """Row from campaign_performance_analytics"""
    engagement_score: Optional[float] = None
    open_rate: Optional[float] = None
    click_rate: Optional[float] = None
    conversion_rate: Optional[float] = None
    calculated_at: Optional[datetime] = None


class ClinicalReferenceRecord(BaseModel):
    """Row from clinical_references"""
    id: str
    updated_at: Optional[datetime] = None


class CompetitiveIntelRecord(BaseModel):
    """Row from competitive_intelligence"""
    id: str
    threat_level: Optional[str] = Field(None, description="high, medium, low")
    market_share_percent: Optional[float] = None
    last_updated: Optional[datetime] = None


class ContentElementPerformanceRecord(BaseModel):
    """Row from content_element_performance"""
    id: str
    avg_performance_score: Optional[float] = None
    last_calculated: Optional[datetime] = None


class ComplianceHistoryRecord(BaseModel):
    """Row from compliance_history"""
    id: str
    overall_compliance_score: Optional[float] = None
    checked_at: Optional[datetime] = None


class IntelligenceLayerUsage(BaseModel):
    """One intelligence layer attached to generated content"""
    type: str = Field(..., description="evidence, audience, brand, performance, competitive")
    incorporated: bool = Field(False, description="Whether the layer made it into the content")

    @field_validator("incorporated", mode="before")
    @classmethod
    def parse_null_flag(cls, v):
        return bool(v) if v is not None else False


class ContentPerformanceRecord(BaseModel):
    """Row from content_performance_metrics"""
    id: Optional[str] = None
    asset_id: Optional[str] = None
    theme_id: Optional[str] = None
    intelligence_layers_used: List[IntelligenceLayerUsage] = Field(default_factory=list)
    campaign_metrics: Optional[Dict[str, Any]] = None
    performance_score: Optional[float] = None
    collected_at: Optional[datetime] = None

    @field_validator("intelligence_layers_used", mode="before")
    @classmethod
    def parse_null_layers(cls, v):
        return _none_to_list(v)


# ============================================================
# Recommendation Results
# ============================================================

class ClaimMatchingCriteria(BaseModel):
    audience_match: bool
    claim_type_relevance: bool
    has_statistical_data: bool
    confidence_score: float


class RecommendedClaim(BaseModel):
    id: str
    claim_id_display: str
    claim_text: str
    claim_type: Optional[str] = None
    review_status: str
    relevance_score: int
    linked_references: List[str] = Field(default_factory=list)
    matching_criteria: ClaimMatchingCriteria


class VisualAssetMatchingCriteria(BaseModel):
    audience_match: bool
    asset_type_match: bool
    has_linked_claims: bool


class RecommendedVisualAsset(BaseModel):
    id: str
    title: str
    visual_type: Optional[str] = None
    relevance_score: int
    linked_claims: List[str] = Field(default_factory=list)
    has_preview: bool
    mlr_approved: bool
    matching_criteria: VisualAssetMatchingCriteria


class ModuleMatchingCriteria(BaseModel):
    audience_match: bool
    mlr_approved: bool


class RecommendedContentModule(BaseModel):
    id: str
    module_text: str
    module_type: Optional[str] = None
    mlr_approved: bool
    relevance_score: int
    linked_claims: List[str] = Field(default_factory=list)
    matching_criteria: ModuleMatchingCriteria


class RecommendationCriteria(BaseModel):
    """Which mapped filters were applied to a recommendation request"""
    audience_used: str
    audience_mapped_to: List[str]
    asset_type_used: str
    asset_type_mapped_to: List[str]
    total_matched: int


class RecommendedEvidence(BaseModel):
    """Ranked, length-capped evidence for one audience/asset-type context"""
    claims: List[RecommendedClaim] = Field(default_factory=list)
    visual_assets: List[RecommendedVisualAsset] = Field(default_factory=list)
    content_modules: List[RecommendedContentModule] = Field(default_factory=list)
    matching_criteria: RecommendationCriteria


# ============================================================
# Theme Metrics
# ============================================================

class CampaignPerformanceSummary(BaseModel):
    avg_engagement: Optional[float] = None
    avg_open_rate: Optional[float] = None
    avg_click_rate: Optional[float] = None
    avg_conversion: Optional[float] = None
    total_campaigns: int = 0
    last_updated: Optional[datetime] = None


class ClinicalEvidenceSummary(BaseModel):
    claim_count: int = 0
    approved_claim_count: int = 0
    reference_count: int = 0
    last_updated: Optional[datetime] = None
    references_last_updated: Optional[datetime] = None


class CompetitiveIntelSummary(BaseModel):
    competitor_count: int = 0
    avg_threat_level: Optional[float] = None
    market_share_data: bool = False
    last_updated: Optional[datetime] = None


class ContentPerformanceSummary(BaseModel):
    top_performing_elements: int = 0
    avg_performance_score: Optional[float] = None
    last_updated: Optional[datetime] = None


class MlrHistorySummary(BaseModel):
    total_submissions: int = 0
    approval_rate: Optional[float] = None
    last_updated: Optional[datetime] = None


class RawMetricsData(BaseModel):
    """Per-source summaries that theme metrics are calculated from"""
    campaign_performance: CampaignPerformanceSummary = Field(default_factory=CampaignPerformanceSummary)
    clinical_evidence: ClinicalEvidenceSummary = Field(default_factory=ClinicalEvidenceSummary)
    competitive_intel: CompetitiveIntelSummary = Field(default_factory=CompetitiveIntelSummary)
    content_performance: ContentPerformanceSummary = Field(default_factory=ContentPerformanceSummary)
    mlr_history: MlrHistorySummary = Field(default_factory=MlrHistorySummary)


class DataSource(BaseModel):
    name: str
    table: str
    record_count: int
    last_updated: Optional[datetime] = None


class DataAttribution(BaseModel):
    sources: List[DataSource] = Field(default_factory=list)
    total_records: int = 0
    data_recency: str = "No recent data"
    confidence_level: ConfidenceLevel = ConfidenceLevel.INSUFFICIENT


class ThemeMetrics(BaseModel):
    """Bounded theme scores; None means insufficient data, never zero"""
    data_confidence: Optional[int] = Field(None, description="Data coverage score (0-100)")
    evidence_strength: Optional[int] = Field(None, description="Claim approval and reference score (0-100)")
    success_probability: Optional[int] = Field(None, description="Historical performance score (20-95)")
    competitive_edge: Optional[int] = Field(None, description="Competitive intelligence score (20-95)")
    engagement_rate: Optional[float] = Field(None, description="Average campaign engagement")
    mlr_approval_rate: Optional[float] = Field(None, description="Average compliance score")
    expected_reach: Optional[int] = Field(None, description="Estimated reach")
    attribution: DataAttribution = Field(default_factory=DataAttribution)


# ============================================================
# Brand Compliance
# ============================================================

class ProhibitedTerm(BaseModel):
    term: str
    severity: IssueSeverity = IssueSeverity.HIGH
    replacement: Optional[str] = None


class ContentVisuals(BaseModel):
    """Visual brand elements used by a piece of content"""
    colors: List[str] = Field(default_factory=list)
    has_logo: bool = False


class BrandRuleSet(BaseModel):
    """Brand, tone and regulatory rules a text is checked against"""
    key_messages: List[str] = Field(default_factory=list)
    value_proposition: Optional[str] = None
    expected_tone: str = "professional"
    prohibited_terms: List[ProhibitedTerm] = Field(default_factory=list)
    required_disclaimers: List[str] = Field(default_factory=lambda: ["important safety information"])
    superlative_terms: List[str] = Field(
        default_factory=lambda: ["proven", "guaranteed", "best", "most effective", "#1"]
    )
    approved_colors: List[str] = Field(default_factory=list)
    review_threshold: float = 70.0
    category_thresholds: Dict[str, float] = Field(
        default_factory=lambda: {"regulatory": 80.0}
    )


class ComplianceIssue(BaseModel):
    category: ComplianceCategory
    severity: IssueSeverity
    description: str
    suggestion: str
    location: str


class ComplianceCheckResult(BaseModel):
    score: int = Field(..., ge=0, le=100)
    category_scores: Dict[str, int] = Field(default_factory=dict)
    issues: List[ComplianceIssue] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    status: ComplianceStatus


class ContentDifference(BaseModel):
    field: str
    global_value: Optional[str] = None
    local_value: Optional[str] = None
    impact: str
    recommendation: str


class VersionComparison(BaseModel):
    differences: List[ContentDifference] = Field(default_factory=list)
    similarity_score: int


# ============================================================
# Performance Impact
# ============================================================

class LayerImpact(BaseModel):
    layer_type: str
    average_performance: float
    sample_size: int


class LayerCombination(BaseModel):
    combination: List[str]
    performance: float
    count: int


class IntelligenceImpactAnalysis(BaseModel):
    most_impactful_layers: List[LayerImpact] = Field(default_factory=list)
    layer_combinations: List[LayerCombination] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class DailyPerformance(BaseModel):
    date: str
    average_score: float
    count: int


class PerformanceTrend(BaseModel):
    daily: List[DailyPerformance] = Field(default_factory=list)
    overall_average: float
    trend: str = Field(..., description="up, down, stable")


class SuccessPatterns(BaseModel):
    top_performers: List[ContentPerformanceRecord] = Field(default_factory=list)
    average_score: Optional[float] = None
    common_patterns: List[str] = Field(default_factory=list)


class PerformanceFeedback(BaseModel):
    """Success patterns written back onto theme_intelligence.intelligence_data"""
    average_score: Optional[float] = Field(None, serialization_alias="averageScore")
    successful_patterns: List[str] = Field(default_factory=list, serialization_alias="successfulPatterns")
    last_updated: datetime = Field(..., serialization_alias="lastUpdated")

    def to_intelligence_data(self) -> Dict[str, Any]:
        """JSON payload stored under the performanceFeedback key"""
        return self.model_dump(mode="json", by_alias=True)


# ============================================================
# Citations
# ============================================================

class Citation(BaseModel):
    """Approved reference that can back a claim"""
    id: str
    type: str = Field("journal", description="journal, clinical_trial, guidelines, regulatory, other")
    title: str
    authors: List[str] = Field(default_factory=list)
    journal: Optional[str] = None
    year: Optional[int] = None
    doi: Optional[str] = None
    pmid: Optional[str] = None
    url: Optional[str] = None
    relevance_score: float = 0.0
    evidence_level: str = Field("C", description="A, B, C, D")
    key_findings: List[str] = Field(default_factory=list)
    is_approved: bool = True
    veeva_id: Optional[str] = None

    model_config = {"frozen": True}


class CitationNeed(BaseModel):
    id: str
    claim_text: str
    claim_type: str
    start: int
    end: int
    required_evidence_level: List[str]
    suggested_citations: List[Citation] = Field(default_factory=list)
    priority: str
    context: str


class ReferenceCheck(BaseModel):
    reference_count: int = 0
    issues: List[str] = Field(default_factory=list)


class CitationCoverage(BaseModel):
    citation_coverage: float
    missing_references: List[CitationNeed] = Field(default_factory=list)
    reference_count: int = 0
    compliance_score: float
