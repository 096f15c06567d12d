"""
Evidence Recommendation Service

Fetches a brand's clinical claims, visual assets and content modules for an
audience / asset type context, parses them at the record boundary, and hands
them to the RelevanceScorer for ranking.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from src.content_scoring.models import (
    ClinicalClaim,
    ContentModule,
    RecommendedEvidence,
    VisualAsset,
    parse_records,
)
from src.content_scoring.protocols.data_source_protocol import ContentDataSourceProtocol
from src.content_scoring.scoring.relevance_scorer import RelevanceScorer, primary_asset_type_of
from src.content_scoring.services.concurrent_fetch import fetch_concurrently
from src.content_scoring.taxonomy.audience_asset_mapping import (
    AudienceInput,
    DEFAULT_ASSET_TYPE,
    audience_value,
    map_audience_to_visual_bucket,
    map_asset_type_to_visual_categories,
)

logger = logging.getLogger(__name__)

# Rows fetched per requested result, so ranking has candidates to choose from
OVERFETCH_FACTOR = 2


@dataclass
class RecommendationOptions:
    """Per-request limits and filters."""
    claim_limit: int = 5
    visual_limit: int = 5
    module_limit: int = 5
    include_non_mlr_approved: bool = True


class EvidenceRecommendationService:
    """
    Recommends evidence for content generation.

    Steps:
    1. Map the audience and primary asset type to store filters
    2. Fetch claims, visual assets and content modules concurrently
    3. Parse rows, dropping malformed ones
    4. Score, rank and truncate each list
    """

    def __init__(
        self,
        data_source: ContentDataSourceProtocol,
        scorer: Optional[RelevanceScorer] = None,
        default_options: Optional[RecommendationOptions] = None,
        max_workers: int = 3,
        default_asset_type: str = DEFAULT_ASSET_TYPE,
    ):
        """
        Initialize the recommendation service.

        Args:
            data_source: Brand-scoped content reads
            scorer: Relevance scorer (created if not provided)
            default_options: Limits used when a request does not pass its own
            max_workers: Thread pool size for the three fetches
            default_asset_type: Asset type used when a request names none
        """
        self._data_source = data_source
        self._scorer = scorer or RelevanceScorer()
        self._default_options = default_options or RecommendationOptions()
        self._max_workers = max_workers
        self._default_asset_type = default_asset_type

    def get_recommended_evidence(
        self,
        brand_id: str,
        audience: AudienceInput,
        asset_types: Optional[Sequence[str]] = None,
        options: Optional[RecommendationOptions] = None,
    ) -> RecommendedEvidence:
        """
        Get ranked evidence for a brand, audience and asset types.

        Args:
            brand_id: Brand ID
            audience: Target audience
            asset_types: Requested asset types (first one drives matching)
            options: Limits and MLR filter (service defaults if omitted)

        Returns:
            RecommendedEvidence; lists are empty for sources that failed
        """
        opts = options or self._default_options
        primary_asset_type = primary_asset_type_of(asset_types, self._default_asset_type)
        audience_str = audience_value(audience)
        mlr_only = not opts.include_non_mlr_approved

        logger.info(f"Recommending evidence for brand {brand_id}: {audience_str} / {primary_asset_type}")

        rows = fetch_concurrently(
            {
                "clinical_claims": lambda: self._data_source.fetch_clinical_claims(
                    brand_id,
                    audience=audience_str or None,
                    limit=opts.claim_limit * OVERFETCH_FACTOR,
                ),
                "visual_assets": lambda: self._data_source.fetch_visual_assets(
                    brand_id,
                    audience_buckets=map_audience_to_visual_bucket(audience),
                    asset_categories=map_asset_type_to_visual_categories(primary_asset_type),
                    mlr_approved_only=mlr_only,
                    limit=opts.visual_limit * OVERFETCH_FACTOR,
                ),
                "content_modules": lambda: self._data_source.fetch_content_modules(
                    brand_id,
                    mlr_approved_only=mlr_only,
                    limit=opts.module_limit * OVERFETCH_FACTOR,
                ),
            },
            max_workers=self._max_workers,
        )

        claims: List[ClinicalClaim] = parse_records(ClinicalClaim, rows["clinical_claims"])
        visuals: List[VisualAsset] = parse_records(VisualAsset, rows["visual_assets"])
        modules: List[ContentModule] = parse_records(ContentModule, rows["content_modules"])

        logger.info(
            f"Fetched {len(claims)} claims, {len(visuals)} visual assets, "
            f"{len(modules)} content modules"
        )

        return self._scorer.recommend(
            claims,
            visuals,
            modules,
            audience,
            [primary_asset_type],
            claim_limit=opts.claim_limit,
            visual_limit=opts.visual_limit,
            module_limit=opts.module_limit,
        )
