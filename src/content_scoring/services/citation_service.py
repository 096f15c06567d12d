"""
Citation Service

Finds claims in content that need a supporting reference, suggests approved
citations for them, checks existing reference markers, and formats citations.

The approved citation catalog is grouped by therapeutic area with
build_citation_index() and passed to CitationService as configuration.
"""

import logging
import re
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from src.content_scoring.models import (
    Citation,
    CitationCoverage,
    CitationNeed,
    ReferenceCheck,
    parse_records,
)

logger = logging.getLogger(__name__)

CitationIndex = Mapping[str, Tuple[Citation, ...]]

GENERAL_AREA = "general"
CONTEXT_CHARS = 100
MAX_SUGGESTIONS = 3
HIGH_RELEVANCE = 0.8

PRIORITY_RANK = {"high": 3, "medium": 2, "low": 1}

# Title keywords -> therapeutic area, checked in order
THERAPEUTIC_AREA_KEYWORDS = [
    ("respiratory", ("pulmonary fibrosis", "ipf", "copd", "asthma")),
    ("oncology", ("oncology", "cancer")),
]

BRAND_THERAPEUTIC_AREAS = {
    "ofev": "respiratory",
    "pradaxa": "cardiology",
    "jardiance": "diabetes",
}

CLAIM_TYPE_KEYWORDS = {
    "clinical_efficacy": ["efficacy", "clinical", "trial", "outcome", "treatment"],
    "comparative": ["comparison", "versus", "superior", "head-to-head"],
    "statistical": ["statistical", "significant", "analysis", "endpoint"],
    "safety": ["safety", "adverse", "tolerability", "side effects"],
    "indication": ["indication", "approved", "FDA", "regulatory"],
}


class CitationPattern:
    """A phrase pattern that signals a claim needing a reference."""

    def __init__(self, claim_type: str, pattern: str, required_evidence: List[str], priority: str):
        self.claim_type = claim_type
        self.regex = re.compile(pattern, re.IGNORECASE)
        self.required_evidence = required_evidence
        self.priority = priority


CITATION_PATTERNS = [
    CitationPattern(
        "clinical_efficacy",
        r"clinically proven|proven efficacy|studies show|clinical studies demonstrate",
        ["A", "B"],
        "high",
    ),
    CitationPattern(
        "comparative",
        r"superior|better|outperforms|more effective than",
        ["A"],
        "high",
    ),
    CitationPattern(
        "statistical",
        r"\d+%\s*(?:improvement|reduction|increase|decrease)",
        ["A", "B"],
        "high",
    ),
    CitationPattern(
        "safety",
        r"well-tolerated|minimal side effects|safety profile",
        ["A", "B", "C"],
        "medium",
    ),
    CitationPattern(
        "indication",
        r"indicated for|approved for|first-line|second-line",
        ["A"],
        "high",
    ),
]

# Reference markers: [1], (1), Ref. 1, and "1. Author. Title. 2020"
REFERENCE_PATTERNS = [
    re.compile(r"\[\d+\]"),
    re.compile(r"\(\d+\)"),
    re.compile(r"(?:Reference|Ref\.?)\s*\d+", re.IGNORECASE),
    re.compile(r"\d+\.\s+[A-Z][^.]+\.\s+[A-Z][^.]+\.\s+\d{4}"),
]

INCOMPLETE_REFERENCE_PATTERNS = [
    ("[Reference]", re.compile(r"\[Reference\]", re.IGNORECASE)),
    ("[Ref]", re.compile(r"\[Ref\]", re.IGNORECASE)),
    ("[Citation needed]", re.compile(r"\[Citation needed\]", re.IGNORECASE)),
    ("TBD", re.compile(r"TBD", re.IGNORECASE)),
]


def infer_therapeutic_area(citation: Citation) -> str:
    """Therapeutic area from title keywords (general when none match)."""
    title = citation.title.lower()
    for area, keywords in THERAPEUTIC_AREA_KEYWORDS:
        if any(k in title for k in keywords):
            return area
    return GENERAL_AREA


def map_brand_to_therapeutic_area(brand_id: Optional[str]) -> str:
    return BRAND_THERAPEUTIC_AREAS.get((brand_id or "").lower(), GENERAL_AREA)


def build_citation_index(citations: Iterable[Citation]) -> CitationIndex:
    """
    Group approved citations by therapeutic area.

    Returns:
        Read-only mapping of area -> citations (input order kept)
    """
    grouped: Dict[str, List[Citation]] = {}
    for citation in citations:
        if not citation.is_approved:
            continue
        grouped.setdefault(infer_therapeutic_area(citation), []).append(citation)
    return MappingProxyType({area: tuple(items) for area, items in grouped.items()})


class CitationService:
    """
    Citation needs analysis and formatting over an approved citation index.

    The index is immutable, so a single instance can be shared across threads.
    """

    def __init__(self, index: Optional[CitationIndex] = None):
        """
        Initialize the citation service.

        Args:
            index: Approved citations by therapeutic area (see build_citation_index)
        """
        self._index: CitationIndex = index if index is not None else MappingProxyType({})

    @classmethod
    def from_citations(cls, citations: Iterable[Citation]) -> "CitationService":
        return cls(build_citation_index(citations))

    @classmethod
    def from_rows(cls, rows: Optional[Iterable[dict]]) -> "CitationService":
        """Build from reference rows; rows that are not valid citations are skipped."""
        return cls.from_citations(parse_records(Citation, rows))

    @property
    def index(self) -> CitationIndex:
        return self._index

    def get_approved_citations(self, therapeutic_area: str = "respiratory") -> List[Citation]:
        return list(self._index.get(therapeutic_area, ()))

    def search_citations(self, query: str, max_results: int = 10) -> List[Citation]:
        """Citations whose title or key findings contain the query."""
        q = query.lower()
        matches = [
            c for citations in self._index.values() for c in citations
            if q in c.title.lower() or any(q in f.lower() for f in c.key_findings)
        ]
        return matches[:max_results]

    # -------------------------------------------------------------------------
    # Needs analysis
    # -------------------------------------------------------------------------

    def analyze_reference_needs(self, content: str, brand_id: str = "ofev") -> List[CitationNeed]:
        """
        Find claims in content that need a citation.

        Args:
            content: Text to analyze
            brand_id: Brand used to pick the therapeutic area

        Returns:
            Citation needs, high priority first (stable within a priority)
        """
        content = content or ""
        needs: List[CitationNeed] = []

        for pattern in CITATION_PATTERNS:
            for match in pattern.regex.finditer(content):
                start, end = match.start(), match.end()
                context = content[max(0, start - CONTEXT_CHARS):min(len(content), end + CONTEXT_CHARS)]
                needs.append(CitationNeed(
                    id=f"need_{len(needs) + 1}",
                    claim_text=match.group(0),
                    claim_type=pattern.claim_type,
                    start=start,
                    end=end,
                    required_evidence_level=list(pattern.required_evidence),
                    suggested_citations=self.find_relevant_citations(
                        pattern.claim_type, pattern.required_evidence, brand_id
                    ),
                    priority=pattern.priority,
                    context=context,
                ))

        needs.sort(key=lambda n: PRIORITY_RANK.get(n.priority, 0), reverse=True)
        logger.debug(f"Found {len(needs)} citation needs")
        return needs

    def find_relevant_citations(
        self,
        claim_type: str,
        evidence_levels: Sequence[str],
        brand_id: Optional[str],
    ) -> List[Citation]:
        """
        Approved citations for a claim type, top 3 by relevance.

        A citation qualifies when its evidence level is acceptable and its
        title mentions a keyword for the claim type, or its relevance is high.
        """
        area = map_brand_to_therapeutic_area(brand_id)
        keywords = [k.lower() for k in CLAIM_TYPE_KEYWORDS.get(claim_type, [])]

        candidates = []
        for citation in self._index.get(area, ()):
            if citation.evidence_level not in evidence_levels:
                continue
            title = citation.title.lower()
            if any(k in title for k in keywords) or citation.relevance_score > HIGH_RELEVANCE:
                candidates.append(citation)

        candidates.sort(key=lambda c: c.relevance_score, reverse=True)
        return candidates[:MAX_SUGGESTIONS]

    @staticmethod
    def validate_existing_references(content: str) -> ReferenceCheck:
        """Count reference markers and flag incomplete ones."""
        content = content or ""
        issues = []

        found = sum(len(p.findall(content)) for p in REFERENCE_PATTERNS)
        if found == 0:
            issues.append("No reference citations found in content")

        for label, pattern in INCOMPLETE_REFERENCE_PATTERNS:
            count = len(pattern.findall(content))
            if count:
                issues.append(f"Found {count} incomplete reference(s): {label}")

        return ReferenceCheck(reference_count=found, issues=issues)

    def calculate_citation_coverage(self, content: str, brand_id: str) -> CitationCoverage:
        """
        Share of citation needs that have a suggested citation.

        Compliance score is 70% coverage plus 30 points when existing
        references have no issues.
        """
        needs = self.analyze_reference_needs(content, brand_id)
        references = self.validate_existing_references(content)

        covered = sum(1 for n in needs if n.suggested_citations)
        coverage = covered / len(needs) * 100 if needs else 100.0
        compliance = max(0.0, coverage * 0.7 + (30 if not references.issues else 0))

        return CitationCoverage(
            citation_coverage=coverage,
            missing_references=[n for n in needs if not n.suggested_citations],
            reference_count=references.reference_count,
            compliance_score=compliance,
        )

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    @staticmethod
    def format_citation(citation: Citation, style: str = "ama") -> str:
        """Format a citation in AMA (default), Vancouver or Nature style."""
        style = (style or "ama").lower()
        if style == "vancouver":
            return _format_vancouver(citation)
        if style == "nature":
            return _format_nature(citation)
        return _format_ama(citation)


def _year(citation: Citation) -> str:
    return str(citation.year) if citation.year is not None else "n.d."


def _format_ama(citation: Citation) -> str:
    if len(citation.authors) > 3:
        authors = f"{', '.join(citation.authors[:3])}, et al"
    else:
        authors = ", ".join(citation.authors)

    formatted = f"{authors}. {citation.title}."
    if citation.journal:
        formatted += f" {citation.journal}."
    formatted += f" {_year(citation)}"
    if citation.doi:
        formatted += f". doi:{citation.doi}"
    return formatted


def _format_vancouver(citation: Citation) -> str:
    formatted = f"{', '.join(citation.authors)}. {citation.title}."
    if citation.journal:
        formatted += f" {citation.journal}"
    formatted += f" {_year(citation)}"
    if citation.doi:
        formatted += f". Available from: https://doi.org/{citation.doi}"
    return formatted


def _format_nature(citation: Citation) -> str:
    formatted = f"{', '.join(citation.authors)} {citation.title}. {citation.journal or ''} {_year(citation)}"
    if citation.doi:
        formatted += f" https://doi.org/{citation.doi}"
    return formatted
