"""
Audience / Asset Type Mapping

Static lookup tables between the intake taxonomies (AudienceType, asset type)
and the lower-level values stored on visual assets and content modules.

Also carries the audience/asset compliance matrix used to decide which
asset types an audience may receive.

Every lookup is total: unknown input resolves to a documented default and
never raises.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from src.models.content_scoring_schemas import AudienceType, VisualAudienceBucket

logger = logging.getLogger(__name__)

AudienceInput = Union[AudienceType, str, None]

DEFAULT_VISUAL_BUCKET = VisualAudienceBucket.HCP.value
DEFAULT_MODULE_TYPES = ["general"]
DEFAULT_ASSET_TYPE = "website-landing-page"

HCP_AUDIENCES = frozenset({
    AudienceType.PHYSICIAN_SPECIALIST.value,
    AudienceType.PHYSICIAN_PRIMARY_CARE.value,
    AudienceType.PHARMACIST.value,
    AudienceType.NURSE_RN.value,
    AudienceType.NURSE_NP_PA.value,
})

CAREGIVER_AUDIENCES = frozenset({
    AudienceType.CAREGIVER_FAMILY.value,
    AudienceType.CAREGIVER_PROFESSIONAL.value,
})

ALL_AUDIENCES = [a.value for a in AudienceType]

# AudienceType -> visual_assets.applicable_audiences bucket
AUDIENCE_TO_VISUAL_BUCKET: Dict[str, str] = {
    AudienceType.PHYSICIAN_SPECIALIST.value: VisualAudienceBucket.HCP.value,
    AudienceType.PHYSICIAN_PRIMARY_CARE.value: VisualAudienceBucket.HCP.value,
    AudienceType.PHARMACIST.value: VisualAudienceBucket.HCP.value,
    AudienceType.NURSE_RN.value: VisualAudienceBucket.HCP.value,
    AudienceType.NURSE_NP_PA.value: VisualAudienceBucket.HCP.value,
    AudienceType.PATIENT.value: VisualAudienceBucket.PATIENT.value,
    AudienceType.CAREGIVER_FAMILY.value: VisualAudienceBucket.CAREGIVER.value,
    AudienceType.CAREGIVER_PROFESSIONAL.value: VisualAudienceBucket.CAREGIVER.value,
}

# Intake asset type -> visual_assets.applicable_asset_types values
ASSET_TYPE_TO_VISUAL_CATEGORIES: Dict[str, List[str]] = {
    'website-landing-page': ['landing_page', 'web', 'educational-material'],
    'mass-email': ['email', 'educational-material'],
    'patient-email': ['email', 'patient-brochure', 'educational-material'],
    'rep-triggered-email': ['email', 'detail_aid'],
    'digital-sales-aid': ['detail_aid', 'sales_aid', 'presentation'],
    'social-media-post': ['social', 'educational-material'],
}

# Intake asset type -> content_modules.module_type values
ASSET_TYPE_TO_MODULE_TYPES: Dict[str, List[str]] = {
    'website-landing-page': ['efficacy', 'safety', 'moa', 'general'],
    'mass-email': ['efficacy', 'safety', 'general'],
    'patient-email': ['safety', 'general'],
    'rep-triggered-email': ['efficacy', 'safety', 'moa'],
    'digital-sales-aid': ['efficacy', 'safety', 'moa', 'general'],
    'social-media-post': ['general'],
}


def audience_value(audience: AudienceInput) -> str:
    """Plain string value for an AudienceType member or raw string."""
    if isinstance(audience, AudienceType):
        return audience.value
    return str(audience) if audience is not None else ""


def map_audience_to_visual_bucket(audience: AudienceInput) -> List[str]:
    """
    Map an intake audience to the visual asset audience filter.

    Visual assets use the collapsed hcp/patient/caregiver taxonomy.
    Unknown audiences default to hcp.

    Returns:
        Single-element list with the bucket value
    """
    bucket = AUDIENCE_TO_VISUAL_BUCKET.get(audience_value(audience))
    if bucket is None:
        logger.debug(f"Unknown audience {audience!r}, defaulting to {DEFAULT_VISUAL_BUCKET}")
        bucket = DEFAULT_VISUAL_BUCKET
    return [bucket]


def map_asset_type_to_visual_categories(asset_type: Optional[str]) -> List[str]:
    """
    Map an intake asset type to visual asset categories.

    Unknown asset types map to an empty list. The query layer reads that as
    "no filter"; the scorer reads it as "matches nothing".
    """
    return list(ASSET_TYPE_TO_VISUAL_CATEGORIES.get(asset_type or "", []))


def map_asset_type_to_module_types(asset_type: Optional[str]) -> List[str]:
    """Map an intake asset type to content module types (defaults to general)."""
    return list(ASSET_TYPE_TO_MODULE_TYPES.get(asset_type or "", DEFAULT_MODULE_TYPES))


def is_hcp_audience(audience: AudienceInput) -> bool:
    return audience_value(audience) in HCP_AUDIENCES


def is_caregiver_audience(audience: AudienceInput) -> bool:
    return audience_value(audience) in CAREGIVER_AUDIENCES


# =============================================================================
# Audience / Asset Compliance Matrix
# =============================================================================

@dataclass(frozen=True)
class AudienceAssetRule:
    """Which audiences an asset type may target, and under what restrictions."""
    asset_type: str
    allowed_audiences: List[str]
    primary_audience: str
    compliance_level: str               # "high" or "medium"
    regulatory_restrictions: List[str] = field(default_factory=list)
    reasoning: str = ""


_HCP_ONLY = sorted(HCP_AUDIENCES, key=ALL_AUDIENCES.index)

AUDIENCE_ASSET_RULES: List[AudienceAssetRule] = [
    AudienceAssetRule(
        asset_type='mass-email',
        allowed_audiences=_HCP_ONLY,
        primary_audience=AudienceType.PHYSICIAN_SPECIALIST.value,
        compliance_level='high',
        regulatory_restrictions=['MLR approval required', 'Fair balance mandatory', 'ISI placement rules'],
        reasoning='Mass emails to HCPs are regulated promotional communications requiring strict compliance oversight',
    ),
    AudienceAssetRule(
        asset_type='rep-triggered-email',
        allowed_audiences=_HCP_ONLY,
        primary_audience=AudienceType.PHYSICIAN_SPECIALIST.value,
        compliance_level='high',
        regulatory_restrictions=['MLR approval required', 'Fair balance mandatory', 'Rep training required'],
        reasoning='Rep-triggered emails are direct HCP communications requiring MLR approval and rep compliance training',
    ),
    AudienceAssetRule(
        asset_type='patient-email',
        allowed_audiences=[AudienceType.PATIENT.value],
        primary_audience=AudienceType.PATIENT.value,
        compliance_level='medium',
        regulatory_restrictions=['Patient privacy compliance', 'Clear opt-out mechanisms', 'Educational focus required'],
        reasoning='Patient emails focus on education and support rather than promotional content',
    ),
    AudienceAssetRule(
        asset_type='caregiver-email',
        allowed_audiences=[AudienceType.CAREGIVER_PROFESSIONAL.value, AudienceType.CAREGIVER_FAMILY.value],
        primary_audience=AudienceType.CAREGIVER_PROFESSIONAL.value,
        compliance_level='medium',
        regulatory_restrictions=['Privacy compliance', 'Supportive content focus', 'Clear disclaimers'],
        reasoning='Caregiver emails provide support resources and education over promotional content',
    ),
    AudienceAssetRule(
        asset_type='social-media-post',
        allowed_audiences=list(ALL_AUDIENCES),
        primary_audience=AudienceType.PATIENT.value,
        compliance_level='medium',
        regulatory_restrictions=['Character limits apply', 'Platform-specific rules', 'Monitoring required'],
        reasoning='Social media can target multiple audiences but requires content adaptation per audience type',
    ),
    AudienceAssetRule(
        asset_type='website-landing-page',
        allowed_audiences=list(ALL_AUDIENCES),
        primary_audience=AudienceType.PATIENT.value,
        compliance_level='medium',
        regulatory_restrictions=['Age-gating for HCP content', 'ISI placement', 'Accessibility compliance'],
        reasoning='Websites can serve multiple audiences with proper content segmentation and compliance measures',
    ),
    AudienceAssetRule(
        asset_type='digital-sales-aid',
        allowed_audiences=_HCP_ONLY,
        primary_audience=AudienceType.PHYSICIAN_SPECIALIST.value,
        compliance_level='high',
        regulatory_restrictions=[
            'MLR approval required', 'Fair balance mandatory',
            'Rep training required', 'Veeva Vault compliance',
        ],
        reasoning='Digital sales aids are HCP-only promotional tools requiring comprehensive MLR approval',
    ),
]

_RULES_BY_ASSET_TYPE: Dict[str, AudienceAssetRule] = {r.asset_type: r for r in AUDIENCE_ASSET_RULES}


def get_asset_rule(asset_type: Optional[str]) -> Optional[AudienceAssetRule]:
    return _RULES_BY_ASSET_TYPE.get(asset_type or "")


def get_allowed_asset_types(audience: AudienceInput) -> List[str]:
    """Asset types an audience may receive, in matrix order."""
    value = audience_value(audience)
    return [r.asset_type for r in AUDIENCE_ASSET_RULES if value in r.allowed_audiences]


def is_asset_type_allowed_for_audience(asset_type: Optional[str], audience: AudienceInput) -> bool:
    """Unknown asset types are never allowed."""
    rule = get_asset_rule(asset_type)
    return rule is not None and audience_value(audience) in rule.allowed_audiences


def get_compliance_requirements(asset_type: Optional[str]) -> List[str]:
    rule = get_asset_rule(asset_type)
    return list(rule.regulatory_restrictions) if rule else []


def get_asset_audience_reasoning(asset_type: Optional[str], audience: AudienceInput) -> str:
    rule = get_asset_rule(asset_type)
    if rule is None:
        return 'Asset type not found in compliance matrix'
    if audience_value(audience) in rule.allowed_audiences:
        return rule.reasoning
    return f"This asset type is not compliant for {audience_value(audience)} audiences. {rule.reasoning}"
