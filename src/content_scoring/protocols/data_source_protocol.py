"""
Content Data Source Protocol

Defines the interface the scoring services read from. Every fetch returns
plain row dicts, already filtered by brand; the services parse them into
typed records before scoring.
"""

from typing import Protocol, Optional, List, Dict, Any
from datetime import datetime


class ContentDataSourceProtocol(Protocol):
    """Protocol for brand-scoped content and analytics reads."""

    @property
    def is_available(self) -> bool:
        """Whether the underlying store can be queried."""
        ...

    # --- Evidence ---

    def fetch_clinical_claims(
        self,
        brand_id: str,
        audience: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Get clinical claims for a brand.

        Args:
            brand_id: Brand ID
            audience: Only claims whose target_audiences contain this value
            limit: Maximum rows (most used first)

        Returns:
            clinical_claims rows
        """
        ...

    def fetch_visual_assets(
        self,
        brand_id: str,
        audience_buckets: Optional[List[str]] = None,
        asset_categories: Optional[List[str]] = None,
        mlr_approved_only: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Get visual assets for a brand.

        Args:
            brand_id: Brand ID
            audience_buckets: Overlap filter on applicable_audiences (empty = no filter)
            asset_categories: Overlap filter on applicable_asset_types (empty = no filter)
            mlr_approved_only: Only MLR-approved assets
            limit: Maximum rows

        Returns:
            visual_assets rows
        """
        ...

    def fetch_content_modules(
        self,
        brand_id: str,
        mlr_approved_only: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Get content modules for a brand (highest usage score first)."""
        ...

    def fetch_clinical_references(self, brand_id: str) -> List[Dict[str, Any]]:
        """Get clinical references for a brand."""
        ...

    # --- Analytics ---

    def fetch_campaign_performance(self, brand_id: str, limit: int = 50) -> List[Dict[str, Any]]:
        """Get the most recent campaign performance analytics rows."""
        ...

    def fetch_competitive_intelligence(self, brand_id: str) -> List[Dict[str, Any]]:
        """Get competitive intelligence rows for a brand."""
        ...

    def fetch_content_element_performance(
        self,
        brand_id: str,
        min_score: Optional[float] = None,
    ) -> List[Dict[str, Any]]:
        """Get content element performance rows, optionally above a minimum score."""
        ...

    def fetch_compliance_history(self, brand_id: str, limit: int = 100) -> List[Dict[str, Any]]:
        """Get the most recent compliance check results."""
        ...

    def fetch_content_performance(
        self,
        brand_id: str,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Get content performance metrics for a brand's themes.

        Args:
            brand_id: Brand ID (resolved through theme_library)
            since: Only rows collected at or after this time
            limit: Maximum rows (most recent first)

        Returns:
            content_performance_metrics rows
        """
        ...

    def insert_content_performance(self, row: Dict[str, Any]) -> bool:
        """
        Store one content performance metrics row.

        Returns:
            True if the row was written
        """
        ...

    def update_intelligence_feedback(
        self,
        brand_id: str,
        intelligence_type: str,
        feedback: Dict[str, Any],
        limit: int = 10,
    ) -> int:
        """
        Merge performance feedback into the newest theme_intelligence rows.

        Args:
            brand_id: Brand ID
            intelligence_type: Intelligence layer type (evidence, audience, ...)
            feedback: JSON payload stored under intelligence_data.performanceFeedback
            limit: Number of most recent rows to update

        Returns:
            Number of rows updated
        """
        ...
