"""
Brand Compliance Checker

Scores a piece of content against a brand rule set across four categories:
messaging, tone, visual and regulatory. Every check is a case-insensitive
keyword or substring match, so results are deterministic.

Each category starts from a baseline, takes independent deductions per failed
rule, and is clamped to 0-100. The overall score is the arithmetic mean of the
evaluated categories.
"""

import logging
import re
from typing import List, Mapping, Optional

from src.content_scoring.models import (
    BrandRuleSet,
    ComplianceCategory,
    ComplianceCheckResult,
    ComplianceIssue,
    ComplianceStatus,
    ContentDifference,
    ContentVisuals,
    IssueSeverity,
    VersionComparison,
)
from src.content_scoring.scoring.theme_metrics import round_half_up

logger = logging.getLogger(__name__)


class ComplianceBaselines:
    """Starting scores, bonuses and deductions per category."""

    MESSAGING = 80
    TONE = 75
    VISUAL = 70
    REGULATORY = 85

    STRENGTH_BONUS = 10

    MISSING_KEY_MESSAGE = 20
    MISSING_VALUE_PROPOSITION = 15

    TONE_MISMATCH = 15
    CASUAL_TONE_MISMATCH = 20

    MISSING_DISCLAIMER = 30
    SUPERLATIVE = 20
    MULTIPLE_SUPERLATIVES = 25

    UNAPPROVED_COLORS = 20
    MISSING_LOGO = 10

    PROHIBITED_TERM = {
        IssueSeverity.LOW.value: 25,
        IssueSeverity.MEDIUM.value: 25,
        IssueSeverity.HIGH.value: 30,
        IssueSeverity.CRITICAL.value: 40,
    }

    MAJOR_REVISION_THRESHOLD = 60


# Keyword lists for the tone heuristic
FORMAL_WORDS = ("therefore", "furthermore", "consequently", "accordingly")
CASUAL_WORDS = ("hey", "wow", "awesome", "cool")
PROFESSIONAL_WORDS = ("proven", "evidence", "clinical", "research")

STRICT_TONES = frozenset({"professional", "formal"})

# Impact weights for version comparison
IMPACT_WEIGHTS = {"low": 5, "medium": 15, "high": 30}
COMPARED_FIELDS = ("headline", "body", "cta_text", "disclaimer")


def _contains_term(text: str, term: str) -> bool:
    """Whole-word, case-insensitive match. Works for terms like '#1'."""
    pattern = r"(?<!\w)" + re.escape(term.lower()) + r"(?!\w)"
    return re.search(pattern, text) is not None


def _clamp_score(score: float) -> int:
    return int(max(0, min(100, score)))


def analyze_tone(text: str) -> str:
    """
    Detect tone from keyword counts.

    Returns:
        "professional", "formal" or "casual" (professional when nothing matches)
    """
    lower = (text or "").lower()
    formal = sum(1 for w in FORMAL_WORDS if _contains_term(lower, w))
    casual = sum(1 for w in CASUAL_WORDS if _contains_term(lower, w))
    professional = sum(1 for w in PROFESSIONAL_WORDS if _contains_term(lower, w))

    if professional > 0:
        return "professional"
    if formal > casual:
        return "formal"
    if casual > 0:
        return "casual"
    return "professional"


class _CategoryResult:
    """Score, issues and strengths for one category."""

    def __init__(self, category: ComplianceCategory, baseline: int):
        self.category = category
        self.score = baseline
        self.issues: List[ComplianceIssue] = []
        self.strengths: List[str] = []

    def deduct(self, points: int, severity: IssueSeverity, description: str, suggestion: str, location: str):
        self.score -= points
        self.issues.append(ComplianceIssue(
            category=self.category,
            severity=severity,
            description=description,
            suggestion=suggestion,
            location=location,
        ))

    def reward(self, points: int, strength: str):
        self.score += points
        self.strengths.append(strength)

    @property
    def final_score(self) -> int:
        return _clamp_score(self.score)


class BrandComplianceChecker:
    """
    Checks content text against a BrandRuleSet.

    Stateless; rules are passed per call.
    """

    def __init__(self, baselines: type = ComplianceBaselines):
        self._b = baselines

    def check_compliance(
        self,
        text: str,
        rules: Optional[BrandRuleSet] = None,
        visuals: Optional[ContentVisuals] = None,
    ) -> ComplianceCheckResult:
        """
        Score content against brand rules.

        Args:
            text: Content text (headline, body and disclaimer combined)
            rules: Brand rule set (defaults apply when omitted)
            visuals: Colors / logo used by the content; the visual category is
                skipped when not supplied

        Returns:
            ComplianceCheckResult with per-category scores and status
        """
        rules = rules or BrandRuleSet()
        lower = (text or "").lower()

        categories = [
            self._check_messaging(lower, rules),
            self._check_tone(lower, rules),
        ]
        if visuals is not None:
            categories.append(self._check_visual(visuals, rules))
        categories.append(self._check_regulatory(lower, rules))

        category_scores = {c.category.value: c.final_score for c in categories}
        overall = _clamp_score(round_half_up(sum(category_scores.values()) / len(category_scores)))

        issues = [issue for c in categories for issue in c.issues]
        strengths = [s for c in categories for s in c.strengths]

        status = self.determine_status(overall, category_scores, issues, rules)
        recommendations = self.generate_recommendations(issues, overall)

        logger.debug(f"Compliance check: score={overall}, status={status.value}, issues={len(issues)}")

        return ComplianceCheckResult(
            score=overall,
            category_scores=category_scores,
            issues=issues,
            strengths=strengths,
            recommendations=recommendations,
            status=status,
        )

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def _check_messaging(self, lower: str, rules: BrandRuleSet) -> _CategoryResult:
        b = self._b
        result = _CategoryResult(ComplianceCategory.MESSAGING, b.MESSAGING)

        if rules.key_messages:
            aligned = [m for m in rules.key_messages if m.lower() in lower]
            if aligned:
                result.reward(b.STRENGTH_BONUS, f"Incorporates {len(aligned)} key brand messages")
            else:
                result.deduct(
                    b.MISSING_KEY_MESSAGE,
                    IssueSeverity.HIGH,
                    "Content does not include any key brand messages",
                    f"Consider incorporating these key messages: {', '.join(rules.key_messages[:3])}",
                    "headline/body",
                )

        if rules.value_proposition and rules.value_proposition.lower() not in lower:
            result.deduct(
                b.MISSING_VALUE_PROPOSITION,
                IssueSeverity.MEDIUM,
                "Content does not reflect unique value proposition",
                f"Consider highlighting: {rules.value_proposition}",
                "content strategy",
            )

        for prohibited in rules.prohibited_terms:
            if not _contains_term(lower, prohibited.term):
                continue
            severity = IssueSeverity(prohibited.severity)
            suggestion = (
                f'Replace "{prohibited.term}" with "{prohibited.replacement}"'
                if prohibited.replacement
                else f'Remove "{prohibited.term}"'
            )
            result.deduct(
                b.PROHIBITED_TERM[severity.value],
                severity,
                f'Prohibited term used: "{prohibited.term}"',
                suggestion,
                "content",
            )

        return result

    def _check_tone(self, lower: str, rules: BrandRuleSet) -> _CategoryResult:
        b = self._b
        result = _CategoryResult(ComplianceCategory.TONE, b.TONE)

        expected = (rules.expected_tone or "professional").lower()
        detected = analyze_tone(lower)

        if detected == expected:
            result.reward(b.STRENGTH_BONUS, f"Maintains consistent {expected} tone")
        else:
            points = b.TONE_MISMATCH
            if detected == "casual" and expected in STRICT_TONES:
                points = b.CASUAL_TONE_MISMATCH
            result.deduct(
                points,
                IssueSeverity.MEDIUM,
                f'Tone mismatch: detected "{detected}", expected "{expected}"',
                f"Adjust language to be more {expected}",
                "overall content",
            )

        return result

    def _check_visual(self, visuals: ContentVisuals, rules: BrandRuleSet) -> _CategoryResult:
        b = self._b
        result = _CategoryResult(ComplianceCategory.VISUAL, b.VISUAL)

        if visuals.colors:
            approved = {c.lower() for c in rules.approved_colors}
            unapproved = [c for c in visuals.colors if c.lower() not in approved]
            if unapproved:
                result.deduct(
                    b.UNAPPROVED_COLORS,
                    IssueSeverity.HIGH,
                    f"Unapproved colors used: {', '.join(unapproved)}",
                    f"Use approved brand colors: {', '.join(rules.approved_colors[:3])}",
                    "visual elements",
                )
            else:
                result.strengths.append("Uses approved brand colors")

        if visuals.has_logo:
            result.strengths.append("Includes brand logo")
        else:
            result.deduct(
                b.MISSING_LOGO,
                IssueSeverity.MEDIUM,
                "Brand logo not present",
                "Add brand logo according to usage guidelines",
                "visual identity",
            )

        return result

    def _check_regulatory(self, lower: str, rules: BrandRuleSet) -> _CategoryResult:
        b = self._b
        result = _CategoryResult(ComplianceCategory.REGULATORY, b.REGULATORY)

        for disclaimer in rules.required_disclaimers:
            if disclaimer.lower() in lower:
                result.strengths.append(f'Includes required "{disclaimer}"')
            else:
                result.deduct(
                    b.MISSING_DISCLAIMER,
                    IssueSeverity.CRITICAL,
                    f'Missing required disclaimer: "{disclaimer}"',
                    f'Add "{disclaimer.title()}" section',
                    "legal disclaimer",
                )

        superlatives = [t for t in rules.superlative_terms if _contains_term(lower, t)]
        if superlatives:
            points = b.MULTIPLE_SUPERLATIVES if len(superlatives) >= 2 else b.SUPERLATIVE
            result.deduct(
                points,
                IssueSeverity.HIGH,
                f"Potential unsubstantiated claims detected: {', '.join(superlatives)}",
                "Ensure all claims are supported by clinical data",
                "content claims",
            )

        return result

    # -------------------------------------------------------------------------
    # Status and recommendations
    # -------------------------------------------------------------------------

    @staticmethod
    def determine_status(
        overall: int,
        category_scores: Mapping[str, int],
        issues: List[ComplianceIssue],
        rules: BrandRuleSet,
    ) -> ComplianceStatus:
        if any(i.severity == IssueSeverity.CRITICAL for i in issues):
            return ComplianceStatus.NON_COMPLIANT
        if overall < rules.review_threshold:
            return ComplianceStatus.NEEDS_REVIEW
        for category, threshold in rules.category_thresholds.items():
            score = category_scores.get(category)
            if score is not None and score < threshold:
                return ComplianceStatus.NEEDS_REVIEW
        return ComplianceStatus.COMPLIANT

    def generate_recommendations(self, issues: List[ComplianceIssue], overall: int) -> List[str]:
        recommendations = []

        if overall < self._b.MAJOR_REVISION_THRESHOLD:
            recommendations.append("Consider major content revision to align with brand guidelines")
        if any(i.severity == IssueSeverity.CRITICAL for i in issues):
            recommendations.append("Address critical compliance issues before proceeding")
        if any(i.category == ComplianceCategory.MESSAGING for i in issues):
            recommendations.append("Review and incorporate key brand messages")
        if any(i.location == "content claims" for i in issues):
            recommendations.append("Soften absolute claims or add supporting clinical references")

        return recommendations

    # -------------------------------------------------------------------------
    # Global vs local versions
    # -------------------------------------------------------------------------

    def compare_versions(
        self,
        global_content: Mapping[str, Optional[str]],
        local_content: Mapping[str, Optional[str]],
    ) -> VersionComparison:
        """
        Compare a global content version with a localized one.

        Returns:
            Field differences with impact, and a similarity score
            (100 minus the summed impact weights, floored at 0)
        """
        differences = []
        for field_name in COMPARED_FIELDS:
            global_value = global_content.get(field_name)
            local_value = local_content.get(field_name)
            if global_value == local_value:
                continue
            differences.append(ContentDifference(
                field=field_name,
                global_value=global_value,
                local_value=local_value,
                impact=assess_impact(field_name),
                recommendation=(
                    f"Consider aligning local {field_name} with global version "
                    f"while maintaining cultural relevance"
                ),
            ))

        total_impact = sum(IMPACT_WEIGHTS[d.impact] for d in differences)
        return VersionComparison(
            differences=differences,
            similarity_score=max(0, 100 - total_impact),
        )


def assess_impact(field_name: str) -> str:
    if field_name in ("headline", "disclaimer"):
        return "high"
    if field_name == "body":
        return "medium"
    return "low"


def check_compliance(
    text: str,
    rules: Optional[BrandRuleSet] = None,
    visuals: Optional[ContentVisuals] = None,
) -> ComplianceCheckResult:
    """Convenience wrapper over a default checker."""
    return BrandComplianceChecker().check_compliance(text, rules, visuals)
