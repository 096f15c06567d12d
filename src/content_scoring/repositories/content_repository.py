"""
Content Repository

Implements the ContentDataSourceProtocol over PostgreSQL with psycopg2.
All reads are brand-scoped and return plain row dicts.

Can operate without a database: reads return empty lists and writes are
no-ops, so the scorers degrade to "insufficient data" instead of failing.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import psycopg2
from psycopg2.extras import Json, RealDictCursor

logger = logging.getLogger(__name__)


class ContentRepository:
    """
    Repository for brand content and analytics reads.

    Opens a short-lived connection per query. Query failures are logged and
    returned as empty results.
    """

    def __init__(self, database_url: Optional[str] = None):
        """
        Initialize the repository.

        Args:
            database_url: PostgreSQL database URL. If None, the repository
                          returns empty results for every read.
        """
        self._database_url = database_url
        self._available: Optional[bool] = None

        if not database_url:
            logger.info("ContentRepository: no database URL configured, operating without a store")
            self._available = False

    @property
    def is_available(self) -> bool:
        """Check if database is available."""
        if self._available is not None:
            return self._available
        try:
            conn = self._get_connection()
            conn.close()
            self._available = True
            logger.info("ContentRepository connected to database")
        except Exception as e:
            logger.warning(f"ContentRepository: database not available: {e}")
            self._available = False
        return self._available

    def _get_connection(self):
        """Get a new database connection."""
        return psycopg2.connect(self._database_url)

    def _fetch_all(self, query: str, params: Sequence[Any], label: str) -> List[Dict[str, Any]]:
        """Run a read query and return rows as dicts; [] when unavailable or on error."""
        if not self.is_available:
            return []

        try:
            conn = self._get_connection()
        except Exception as e:
            logger.error(f"Error connecting to fetch {label}: {e}")
            return []

        try:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(query, tuple(params))
                rows = [dict(row) for row in cur.fetchall()]
                logger.debug(f"Fetched {len(rows)} {label} rows")
                return rows
        except Exception as e:
            logger.error(f"Error fetching {label}: {e}")
            return []
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Evidence
    # -------------------------------------------------------------------------

    def fetch_clinical_claims(
        self,
        brand_id: str,
        audience: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Get clinical claims for a brand, most used first."""
        query = """
            SELECT id, claim_id_display, claim_text, claim_type, target_audiences,
                   statistical_data, confidence_score, review_status, usage_count, updated_at
            FROM clinical_claims
            WHERE brand_id = %s
        """
        params: List[Any] = [brand_id]
        if audience:
            query += " AND target_audiences @> %s"
            params.append([audience])
        query += " ORDER BY usage_count DESC NULLS LAST"
        if limit:
            query += " LIMIT %s"
            params.append(limit)
        return self._fetch_all(query, params, "clinical_claims")

    def fetch_visual_assets(
        self,
        brand_id: str,
        audience_buckets: Optional[List[str]] = None,
        asset_categories: Optional[List[str]] = None,
        mlr_approved_only: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Get visual assets for a brand. Empty filter lists apply no filter."""
        query = """
            SELECT id, title, visual_type, applicable_audiences, applicable_asset_types,
                   linked_claims, mlr_approved, storage_path, visual_data
            FROM visual_assets
            WHERE brand_id = %s
        """
        params: List[Any] = [brand_id]
        if audience_buckets:
            query += " AND applicable_audiences && %s"
            params.append(list(audience_buckets))
        if asset_categories:
            query += " AND applicable_asset_types && %s"
            params.append(list(asset_categories))
        if mlr_approved_only:
            query += " AND mlr_approved = TRUE"
        if limit:
            query += " LIMIT %s"
            params.append(limit)
        return self._fetch_all(query, params, "visual_assets")

    def fetch_content_modules(
        self,
        brand_id: str,
        mlr_approved_only: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Get content modules for a brand, highest usage score first."""
        query = """
            SELECT id, module_text, module_type, applicable_audiences,
                   linked_claims, mlr_approved, usage_score
            FROM content_modules
            WHERE brand_id = %s
        """
        params: List[Any] = [brand_id]
        if mlr_approved_only:
            query += " AND mlr_approved = TRUE"
        query += " ORDER BY usage_score DESC NULLS LAST"
        if limit:
            query += " LIMIT %s"
            params.append(limit)
        return self._fetch_all(query, params, "content_modules")

    def fetch_clinical_references(self, brand_id: str) -> List[Dict[str, Any]]:
        return self._fetch_all(
            "SELECT * FROM clinical_references WHERE brand_id = %s",
            [brand_id],
            "clinical_references",
        )

    # -------------------------------------------------------------------------
    # Analytics
    # -------------------------------------------------------------------------

    def fetch_campaign_performance(self, brand_id: str, limit: int = 50) -> List[Dict[str, Any]]:
        return self._fetch_all(
            """
            SELECT engagement_score, open_rate, click_rate, conversion_rate, calculated_at
            FROM campaign_performance_analytics
            WHERE brand_id = %s
            ORDER BY calculated_at DESC
            LIMIT %s
            """,
            [brand_id, limit],
            "campaign_performance_analytics",
        )

    def fetch_competitive_intelligence(self, brand_id: str) -> List[Dict[str, Any]]:
        return self._fetch_all(
            """
            SELECT id, threat_level, market_share_percent, last_updated
            FROM competitive_intelligence
            WHERE brand_id = %s
            """,
            [brand_id],
            "competitive_intelligence",
        )

    def fetch_content_element_performance(
        self,
        brand_id: str,
        min_score: Optional[float] = None,
    ) -> List[Dict[str, Any]]:
        query = """
            SELECT id, avg_performance_score, last_calculated
            FROM content_element_performance
            WHERE brand_id = %s
        """
        params: List[Any] = [brand_id]
        if min_score is not None:
            query += " AND avg_performance_score >= %s"
            params.append(min_score)
        return self._fetch_all(query, params, "content_element_performance")

    def fetch_compliance_history(self, brand_id: str, limit: int = 100) -> List[Dict[str, Any]]:
        return self._fetch_all(
            """
            SELECT id, overall_compliance_score, checked_at
            FROM compliance_history
            WHERE brand_id = %s
            ORDER BY checked_at DESC
            LIMIT %s
            """,
            [brand_id, limit],
            "compliance_history",
        )

    def fetch_content_performance(
        self,
        brand_id: str,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Get content performance metrics for the brand's themes, most recent first."""
        query = """
            SELECT m.id, m.asset_id, m.theme_id, m.intelligence_layers_used,
                   m.campaign_metrics, m.performance_score, m.collected_at
            FROM content_performance_metrics m
            JOIN theme_library t ON t.id = m.theme_id
            WHERE t.brand_id = %s
        """
        params: List[Any] = [brand_id]
        if since is not None:
            query += " AND m.collected_at >= %s"
            params.append(since)
        query += " ORDER BY m.collected_at DESC"
        if limit:
            query += " LIMIT %s"
            params.append(limit)
        return self._fetch_all(query, params, "content_performance_metrics")

    def insert_content_performance(self, row: Dict[str, Any]) -> bool:
        """Store one content performance metrics row."""
        if not self.is_available:
            return False

        try:
            conn = self._get_connection()
        except Exception as e:
            logger.error(f"Error connecting to store content performance: {e}")
            return False

        try:
            with conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO content_performance_metrics
                        (asset_id, theme_id, intelligence_layers_used, campaign_metrics,
                         audience_segment, market, performance_score)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                """, (
                    row.get("asset_id"),
                    row.get("theme_id"),
                    Json(row.get("intelligence_layers_used") or []),
                    Json(row.get("campaign_metrics") or {}),
                    row.get("audience_segment"),
                    row.get("market"),
                    row.get("performance_score"),
                ))
                conn.commit()
                logger.info(
                    f"Tracked performance for asset {row.get('asset_id')}: "
                    f"score={row.get('performance_score')}"
                )
                return True
        except Exception as e:
            conn.rollback()
            logger.error(f"Error storing content performance: {e}")
            return False
        finally:
            conn.close()

    def update_intelligence_feedback(
        self,
        brand_id: str,
        intelligence_type: str,
        feedback: Dict[str, Any],
        limit: int = 10,
    ) -> int:
        """Merge feedback into the newest theme_intelligence rows of one type."""
        if not self.is_available:
            return 0

        try:
            conn = self._get_connection()
        except Exception as e:
            logger.error(f"Error connecting to update intelligence feedback: {e}")
            return 0

        try:
            with conn.cursor() as cur:
                # Non-object intelligence_data is replaced rather than merged
                cur.execute("""
                    UPDATE theme_intelligence
                    SET intelligence_data = (
                            CASE WHEN jsonb_typeof(intelligence_data) = 'object'
                                 THEN intelligence_data ELSE '{}'::jsonb END
                        ) || jsonb_build_object('performanceFeedback', %s::jsonb),
                        updated_at = NOW()
                    WHERE id IN (
                        SELECT id FROM theme_intelligence
                        WHERE brand_id = %s AND intelligence_type = %s
                        ORDER BY created_at DESC
                        LIMIT %s
                    )
                """, (Json(feedback), brand_id, intelligence_type, limit))
                updated = cur.rowcount
                conn.commit()
                logger.info(
                    f"Updated performance feedback on {updated} {intelligence_type} "
                    f"intelligence rows for brand {brand_id}"
                )
                return updated
        except Exception as e:
            conn.rollback()
            logger.error(f"Error updating intelligence feedback: {e}")
            return 0
        finally:
            conn.close()
