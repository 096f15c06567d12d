"""
Content Scoring - Main Entry Point

Usage:
    python -m src.content_scoring.main --brand ofev --recommend --audience Patient --asset-type patient-email
    python -m src.content_scoring.main --brand ofev --theme-metrics --output output/theme_metrics.json
    python -m src.content_scoring.main --brand ofev --impact
    python -m src.content_scoring.main --brand ofev --enrich evidence
    python -m src.content_scoring.main --check-text content.txt --expected-tone professional
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel

from src.content_scoring.export.json_exporter import export_to_json, theme_metrics_summary
from src.content_scoring.factory import (
    create_performance_analysis_service,
    create_recommendation_service,
    create_theme_metrics_service,
)
from src.content_scoring.models import BrandRuleSet
from src.content_scoring.scoring.brand_compliance import check_compliance
from src.utils.config import get_settings
from src.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def _emit(result: BaseModel, output: Optional[str]) -> None:
    if output:
        export_to_json(result, output)
    else:
        print(result.model_dump_json(indent=2))


def run_recommend(brand_id: str, audience: str, asset_type: Optional[str], output: Optional[str]):
    """Recommend evidence for one audience / asset type."""
    service = create_recommendation_service()
    result = service.get_recommended_evidence(brand_id, audience, [asset_type] if asset_type else None)

    logger.info(
        f"Recommended {len(result.claims)} claims, {len(result.visual_assets)} visual assets, "
        f"{len(result.content_modules)} content modules"
    )
    _emit(result, output)
    return result


def run_theme_metrics(brand_id: str, output: Optional[str]):
    """Calculate theme metrics for a brand."""
    metrics = create_theme_metrics_service().get_theme_metrics(brand_id)

    for name, label in theme_metrics_summary(metrics).items():
        if name != "sources":
            logger.info(f"  {name}: {label}")
    _emit(metrics, output)
    return metrics


def run_impact(brand_id: str, output: Optional[str]):
    """Analyze intelligence layer impact for a brand."""
    analysis = create_performance_analysis_service().analyze_intelligence_impact(brand_id)

    for recommendation in analysis.recommendations:
        logger.info(f"  - {recommendation}")
    _emit(analysis, output)
    return analysis


def run_enrich(brand_id: str, intelligence_type: str, output: Optional[str]):
    """Write success patterns back onto a brand's theme intelligence."""
    feedback = create_performance_analysis_service().enrich_intelligence_with_performance(
        brand_id, intelligence_type
    )

    logger.info(f"  successful patterns: {', '.join(feedback.successful_patterns) or 'none'}")
    _emit(feedback, output)
    return feedback


def run_check_text(text_path: str, expected_tone: str, output: Optional[str]):
    """Check a text file against the default brand rules."""
    text = Path(text_path).read_text(encoding="utf-8")
    result = check_compliance(text, BrandRuleSet(expected_tone=expected_tone))

    logger.info(f"Compliance score {result.score} ({result.status.value}), {len(result.issues)} issues")
    _emit(result, output)
    return result


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Content Scoring - Evidence and theme relevance scoring"
    )

    parser.add_argument("--brand", type=str, help="Brand ID")
    parser.add_argument("--recommend", action="store_true",
                        help="Recommend claims, visual assets and content modules")
    parser.add_argument("--audience", type=str, default="Physician-Specialist",
                        help="Target audience (AudienceType value)")
    parser.add_argument("--asset-type", type=str, default=None,
                        help="Asset type, e.g. mass-email or website-landing-page")
    parser.add_argument("--theme-metrics", action="store_true",
                        help="Calculate theme metrics")
    parser.add_argument("--impact", action="store_true",
                        help="Analyze intelligence layer impact")
    parser.add_argument("--enrich", type=str, metavar="LAYER",
                        choices=["evidence", "audience", "brand", "performance", "competitive"],
                        help="Write success patterns for a layer back onto theme intelligence")
    parser.add_argument("--check-text", type=str, help="Path to a text file to check for brand compliance")
    parser.add_argument("--expected-tone", type=str, default="professional",
                        choices=["professional", "formal", "casual"])
    parser.add_argument("--output", type=str, help="Write the result as JSON to this path")
    parser.add_argument("--log-level", type=str, default=settings.log_level.upper(),
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", type=str, default=None,
                        help="Also write logs to this file")

    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    needs_brand = args.recommend or args.theme_metrics or args.impact or args.enrich
    if needs_brand and not args.brand:
        parser.error("--brand is required for --recommend, --theme-metrics, --impact and --enrich")

    try:
        if args.recommend:
            run_recommend(args.brand, args.audience, args.asset_type, args.output)

        elif args.theme_metrics:
            run_theme_metrics(args.brand, args.output)

        elif args.impact:
            run_impact(args.brand, args.output)

        elif args.enrich:
            run_enrich(args.brand, args.enrich, args.output)

        elif args.check_text:
            run_check_text(args.check_text, args.expected_tone, args.output)

        else:
            parser.print_help()
            sys.exit(1)

    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
