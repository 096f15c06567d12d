"""
Export Utilities for Content Scoring Results
"""

from src.content_scoring.export.json_exporter import (
    export_to_json,
    export_theme_metrics_summary,
    theme_metrics_summary,
)

__all__ = [
    "export_to_json",
    "export_theme_metrics_summary",
    "theme_metrics_summary",
]
