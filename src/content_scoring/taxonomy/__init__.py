"""
Audience / Asset Taxonomy

Static mappings from intake audiences and asset types to the values stored
on visual assets and content modules, plus the audience/asset compliance matrix.
"""

from src.content_scoring.taxonomy.audience_asset_mapping import (
    AudienceAssetRule,
    AUDIENCE_ASSET_RULES,
    DEFAULT_ASSET_TYPE,
    audience_value,
    map_audience_to_visual_bucket,
    map_asset_type_to_visual_categories,
    map_asset_type_to_module_types,
    is_hcp_audience,
    is_caregiver_audience,
    get_asset_rule,
    get_allowed_asset_types,
    is_asset_type_allowed_for_audience,
    get_compliance_requirements,
    get_asset_audience_reasoning,
)

__all__ = [
    "AudienceAssetRule",
    "AUDIENCE_ASSET_RULES",
    "DEFAULT_ASSET_TYPE",
    "audience_value",
    "map_audience_to_visual_bucket",
    "map_asset_type_to_visual_categories",
    "map_asset_type_to_module_types",
    "is_hcp_audience",
    "is_caregiver_audience",
    "get_asset_rule",
    "get_allowed_asset_types",
    "is_asset_type_allowed_for_audience",
    "get_compliance_requirements",
    "get_asset_audience_reasoning",
]
