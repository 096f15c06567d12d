"""
Relevance Scorer

Scores individual evidence items (clinical claims, visual assets, content
modules) for an audience / asset type context and ranks them into a
RecommendedEvidence result.

All scores are integers on a 0-100 scale built from additive, non-negative
contributions, so each score is monotonic in every signal.
"""

import logging
from typing import Callable, List, Optional, Sequence, TypeVar

from src.content_scoring.models import (
    ClinicalClaim,
    VisualAsset,
    ContentModule,
    ClaimMatchingCriteria,
    RecommendedClaim,
    VisualAssetMatchingCriteria,
    RecommendedVisualAsset,
    ModuleMatchingCriteria,
    RecommendedContentModule,
    RecommendationCriteria,
    RecommendedEvidence,
)
from src.content_scoring.taxonomy.audience_asset_mapping import (
    AudienceInput,
    DEFAULT_ASSET_TYPE,
    audience_value,
    map_audience_to_visual_bucket,
    map_asset_type_to_visual_categories,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_SCORE = 100


class RelevanceRubric:
    """
    Point values for relevance scoring.

    These are product-tuned heuristics, kept here as configuration.
    """

    # Clinical claims
    CLAIM_AUDIENCE_MATCH = 40
    CLAIM_PRIMARY_TYPE = 30            # efficacy, safety
    CLAIM_SECONDARY_TYPE = 20          # moa, indication
    CLAIM_STATISTICAL_DATA = 15
    CLAIM_HIGH_CONFIDENCE = 15         # confidence >= 0.8
    CLAIM_MEDIUM_CONFIDENCE = 10       # 0.6 <= confidence < 0.8

    PRIMARY_CLAIM_TYPES = frozenset({"efficacy", "safety"})
    SECONDARY_CLAIM_TYPES = frozenset({"moa", "indication"})
    # Types flagged as clinically relevant in per-claim matching criteria
    RELEVANT_CLAIM_TYPES = frozenset({"efficacy", "safety", "moa"})

    HIGH_CONFIDENCE_THRESHOLD = 0.8
    MEDIUM_CONFIDENCE_THRESHOLD = 0.6

    # Visual assets
    VISUAL_MLR_APPROVED = 30
    VISUAL_LINKED_CLAIMS = 25
    VISUAL_AUDIENCE_MATCH = 25
    VISUAL_ASSET_TYPE_MATCH = 20

    # Content modules
    MODULE_MLR_APPROVED = 40
    MODULE_LINKED_CLAIMS = 30
    MODULE_AUDIENCE_MATCH = 30


def _has_statistical_data(claim: ClinicalClaim) -> bool:
    return bool(claim.statistical_data)


def _claim_audience_match(claim: ClinicalClaim, audience: AudienceInput) -> bool:
    return audience_value(audience) in claim.target_audiences


def _visual_audience_match(asset: VisualAsset, audience: AudienceInput) -> bool:
    buckets = map_audience_to_visual_bucket(audience)
    return any(b in asset.applicable_audiences for b in buckets)


def _visual_asset_type_match(asset: VisualAsset, asset_type: Optional[str]) -> bool:
    # An unknown asset type maps to no categories and so never matches
    categories = map_asset_type_to_visual_categories(asset_type)
    return any(c in asset.applicable_asset_types for c in categories)


def _module_audience_match(module: ContentModule, audience: AudienceInput) -> bool:
    # Modules use the full AudienceType taxonomy, not the visual asset buckets
    return audience_value(audience) in module.applicable_audiences


class RelevanceScorer:
    """
    Scores evidence items for an audience / asset type context.

    Stateless; a single instance can be shared across threads.
    """

    def __init__(self, rubric: type = RelevanceRubric):
        """
        Initialize the relevance scorer.

        Args:
            rubric: Class holding the point values (RelevanceRubric by default)
        """
        self._rubric = rubric

    def score_claim(
        self,
        claim: ClinicalClaim,
        audience: AudienceInput,
        asset_type: Optional[str] = None,
    ) -> int:
        """
        Score a clinical claim.

        Scoring:
        - +40 exact audience match
        - +30 efficacy/safety claim, +20 moa/indication claim
        - +15 has statistical data
        - +15 confidence >= 0.8, +10 confidence >= 0.6

        asset_type is accepted for signature symmetry; claims are not
        filtered by asset type.

        Returns:
            Score from 0-100
        """
        r = self._rubric
        score = 0

        if _claim_audience_match(claim, audience):
            score += r.CLAIM_AUDIENCE_MATCH

        claim_type = (claim.claim_type or "").lower()
        if claim_type in r.PRIMARY_CLAIM_TYPES:
            score += r.CLAIM_PRIMARY_TYPE
        elif claim_type in r.SECONDARY_CLAIM_TYPES:
            score += r.CLAIM_SECONDARY_TYPE

        if _has_statistical_data(claim):
            score += r.CLAIM_STATISTICAL_DATA

        confidence = claim.confidence_score or 0.0
        if confidence >= r.HIGH_CONFIDENCE_THRESHOLD:
            score += r.CLAIM_HIGH_CONFIDENCE
        elif confidence >= r.MEDIUM_CONFIDENCE_THRESHOLD:
            score += r.CLAIM_MEDIUM_CONFIDENCE

        return min(score, MAX_SCORE)

    def score_visual_asset(
        self,
        asset: VisualAsset,
        audience: AudienceInput,
        asset_type: Optional[str],
    ) -> int:
        """
        Score a visual asset.

        Scoring:
        - +30 MLR approved
        - +25 has linked claims
        - +25 audience bucket overlaps applicable audiences
        - +20 asset categories overlap applicable asset types

        Non-approved assets are still scored, they just rank lower.

        Returns:
            Score from 0-100
        """
        r = self._rubric
        score = 0

        if asset.mlr_approved is True:
            score += r.VISUAL_MLR_APPROVED
        if asset.linked_claims:
            score += r.VISUAL_LINKED_CLAIMS
        if _visual_audience_match(asset, audience):
            score += r.VISUAL_AUDIENCE_MATCH
        if _visual_asset_type_match(asset, asset_type):
            score += r.VISUAL_ASSET_TYPE_MATCH

        return min(score, MAX_SCORE)

    def score_content_module(self, module: ContentModule, audience: AudienceInput) -> int:
        """
        Score a content module.

        Scoring:
        - +40 MLR approved
        - +30 has linked claims
        - +30 exact audience match

        Returns:
            Score from 0-100
        """
        r = self._rubric
        score = 0

        if module.mlr_approved is True:
            score += r.MODULE_MLR_APPROVED
        if module.linked_claims:
            score += r.MODULE_LINKED_CLAIMS
        if _module_audience_match(module, audience):
            score += r.MODULE_AUDIENCE_MATCH

        return min(score, MAX_SCORE)

    # -------------------------------------------------------------------------
    # Recommendation assembly
    # -------------------------------------------------------------------------

    def recommend_claims(
        self,
        claims: Sequence[ClinicalClaim],
        audience: AudienceInput,
        asset_type: Optional[str],
        limit: int,
    ) -> List[RecommendedClaim]:
        r = self._rubric
        recommended = []
        for claim in claims:
            recommended.append(RecommendedClaim(
                id=claim.id,
                claim_id_display=claim.claim_id_display or claim.id[:8],
                claim_text=claim.claim_text,
                claim_type=claim.claim_type,
                review_status=claim.review_status,
                relevance_score=self.score_claim(claim, audience, asset_type),
                linked_references=[],
                matching_criteria=ClaimMatchingCriteria(
                    audience_match=_claim_audience_match(claim, audience),
                    claim_type_relevance=(claim.claim_type or "").lower() in r.RELEVANT_CLAIM_TYPES,
                    has_statistical_data=_has_statistical_data(claim),
                    confidence_score=claim.confidence_score or 0.0,
                ),
            ))
        return rank_by_relevance(recommended, limit)

    def recommend_visual_assets(
        self,
        assets: Sequence[VisualAsset],
        audience: AudienceInput,
        asset_type: Optional[str],
        limit: int,
    ) -> List[RecommendedVisualAsset]:
        recommended = []
        for asset in assets:
            recommended.append(RecommendedVisualAsset(
                id=asset.id,
                title=asset.title,
                visual_type=asset.visual_type,
                relevance_score=self.score_visual_asset(asset, audience, asset_type),
                linked_claims=list(asset.linked_claims),
                has_preview=bool(asset.storage_path or asset.visual_data),
                mlr_approved=asset.mlr_approved,
                matching_criteria=VisualAssetMatchingCriteria(
                    audience_match=_visual_audience_match(asset, audience),
                    asset_type_match=_visual_asset_type_match(asset, asset_type),
                    has_linked_claims=bool(asset.linked_claims),
                ),
            ))
        return rank_by_relevance(recommended, limit)

    def recommend_content_modules(
        self,
        modules: Sequence[ContentModule],
        audience: AudienceInput,
        limit: int,
    ) -> List[RecommendedContentModule]:
        recommended = []
        for module in modules:
            recommended.append(RecommendedContentModule(
                id=module.id,
                module_text=module.module_text,
                module_type=module.module_type,
                mlr_approved=module.mlr_approved,
                relevance_score=self.score_content_module(module, audience),
                linked_claims=list(module.linked_claims),
                matching_criteria=ModuleMatchingCriteria(
                    audience_match=_module_audience_match(module, audience),
                    mlr_approved=module.mlr_approved,
                ),
            ))
        return rank_by_relevance(recommended, limit)

    def recommend(
        self,
        claims: Sequence[ClinicalClaim],
        visual_assets: Sequence[VisualAsset],
        content_modules: Sequence[ContentModule],
        audience: AudienceInput,
        asset_types: Optional[Sequence[str]] = None,
        claim_limit: int = 5,
        visual_limit: int = 5,
        module_limit: int = 5,
    ) -> RecommendedEvidence:
        """
        Score, rank and truncate each evidence list for one context.

        Args:
            claims: Candidate clinical claims (retrieval order)
            visual_assets: Candidate visual assets (retrieval order)
            content_modules: Candidate content modules (retrieval order)
            audience: Target audience
            asset_types: Requested asset types; the first one drives matching
            claim_limit: Max claims returned
            visual_limit: Max visual assets returned
            module_limit: Max content modules returned

        Returns:
            RecommendedEvidence with matching criteria
        """
        primary_asset_type = primary_asset_type_of(asset_types)

        recommended_claims = self.recommend_claims(claims, audience, primary_asset_type, claim_limit)
        recommended_visuals = self.recommend_visual_assets(
            visual_assets, audience, primary_asset_type, visual_limit
        )
        recommended_modules = self.recommend_content_modules(content_modules, audience, module_limit)

        total = len(recommended_claims) + len(recommended_visuals) + len(recommended_modules)

        logger.debug(
            f"Recommended {len(recommended_claims)} claims, {len(recommended_visuals)} visuals, "
            f"{len(recommended_modules)} modules for {audience_value(audience)} / {primary_asset_type}"
        )

        return RecommendedEvidence(
            claims=recommended_claims,
            visual_assets=recommended_visuals,
            content_modules=recommended_modules,
            matching_criteria=RecommendationCriteria(
                audience_used=audience_value(audience),
                audience_mapped_to=map_audience_to_visual_bucket(audience),
                asset_type_used=primary_asset_type,
                asset_type_mapped_to=map_asset_type_to_visual_categories(primary_asset_type),
                total_matched=total,
            ),
        )


def primary_asset_type_of(asset_types: Optional[Sequence[str]], default: str = DEFAULT_ASSET_TYPE) -> str:
    """First requested asset type, or the default (landing page)."""
    if asset_types:
        return asset_types[0] or default
    return default


def rank_by_relevance(
    items: Sequence[T],
    limit: Optional[int] = None,
    key: Callable[[T], float] = lambda item: item.relevance_score,
) -> List[T]:
    """
    Sort descending by score and truncate.

    sorted() is stable, so ties keep their retrieval order.
    """
    ranked = sorted(items, key=key, reverse=True)
    if limit is not None:
        ranked = ranked[:max(limit, 0)]
    return ranked


# Module-level convenience functions over a default scorer

_default_scorer = RelevanceScorer()


def score_claim(claim: ClinicalClaim, audience: AudienceInput, asset_type: Optional[str] = None) -> int:
    return _default_scorer.score_claim(claim, audience, asset_type)


def score_visual_asset(asset: VisualAsset, audience: AudienceInput, asset_type: Optional[str]) -> int:
    return _default_scorer.score_visual_asset(asset, audience, asset_type)


def score_content_module(module: ContentModule, audience: AudienceInput) -> int:
    return _default_scorer.score_content_module(module, audience)
