"""
JSON Exporter for Content Scoring Results
"""

import json
import logging
from pathlib import Path
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from src.content_scoring.models import ThemeMetrics
from src.content_scoring.scoring.missing_data import describe_metric

logger = logging.getLogger(__name__)


class DateTimeEncoder(json.JSONEncoder):
    """Custom JSON encoder for datetime objects."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


def export_to_json(
    result: BaseModel,
    output_path: str,
    indent: int = 2,
) -> str:
    """
    Export any scoring result model to a JSON file.

    Missing metrics are written as null.

    Args:
        result: RecommendedEvidence, ThemeMetrics, ComplianceCheckResult, ...
        output_path: Output file path
        indent: JSON indentation level

    Returns:
        Path to created file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = result.model_dump()

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, cls=DateTimeEncoder)

    logger.info(f"Exported {type(result).__name__} to {output_path}")
    return str(output_path)


def theme_metrics_summary(metrics: ThemeMetrics) -> dict:
    """Display labels for theme metrics; None is shown as insufficient data."""
    return {
        'data_confidence': describe_metric(metrics.data_confidence, '%'),
        'evidence_strength': describe_metric(metrics.evidence_strength, '%'),
        'success_probability': describe_metric(metrics.success_probability, '%'),
        'competitive_edge': describe_metric(metrics.competitive_edge, '%'),
        'engagement_rate': describe_metric(metrics.engagement_rate),
        'mlr_approval_rate': describe_metric(metrics.mlr_approval_rate, '%'),
        'expected_reach': describe_metric(metrics.expected_reach),
        'confidence_level': metrics.attribution.confidence_level.value,
        'data_recency': metrics.attribution.data_recency,
        'sources': [
            {'name': s.name, 'table': s.table, 'records': s.record_count}
            for s in metrics.attribution.sources
        ],
    }


def export_theme_metrics_summary(
    metrics: ThemeMetrics,
    output_path: str,
    brand_id: Optional[str] = None,
) -> str:
    """
    Export a display summary of theme metrics to JSON.

    Args:
        metrics: ThemeMetrics to summarize
        output_path: Output file path
        brand_id: Brand the metrics belong to

    Returns:
        Path to created file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    summary = {'brand_id': brand_id, **theme_metrics_summary(metrics)}

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(summary, f, indent=2)

    logger.info(f"Exported theme metrics summary to {output_path}")
    return str(output_path)
