"""
Tests for the content repository.

Tests without a configured store check that every read degrades to an empty
result. Database tests run against DATABASE_URL and skip when it is not set.
"""

import os
from unittest.mock import MagicMock, patch

import pytest
from dotenv import load_dotenv

from src.content_scoring.factory import create_repository
from src.content_scoring.models import ClinicalClaim, parse_records
from src.content_scoring.protocols import ContentDataSourceProtocol
from src.content_scoring.repositories import ContentRepository
from src.utils.config import Settings


# Load environment variables
load_dotenv()


@pytest.fixture
def db():
    """Create repository connected to the test database."""
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        pytest.skip("No database URL configured")

    repo = ContentRepository(database_url)
    if not repo.is_available:
        pytest.skip("Database not available")

    return repo


class TestRepositoryWithoutDatabase:
    """Tests for a repository with no database URL."""

    @pytest.fixture
    def repo(self):
        return ContentRepository(None)

    def test_not_available(self, repo):
        assert repo.is_available is False

    def test_reads_return_empty(self, repo):
        assert repo.fetch_clinical_claims("ofev", audience="Patient", limit=10) == []
        assert repo.fetch_visual_assets("ofev", ["hcp"], ["email"], mlr_approved_only=True) == []
        assert repo.fetch_content_modules("ofev") == []
        assert repo.fetch_clinical_references("ofev") == []
        assert repo.fetch_campaign_performance("ofev") == []
        assert repo.fetch_competitive_intelligence("ofev") == []
        assert repo.fetch_content_element_performance("ofev", min_score=70.0) == []
        assert repo.fetch_compliance_history("ofev") == []
        assert repo.fetch_content_performance("ofev") == []

    def test_insert_is_noop(self, repo):
        assert repo.insert_content_performance({"asset_id": "a1"}) is False

    def test_feedback_update_is_noop(self, repo):
        assert repo.update_intelligence_feedback("ofev", "evidence", {"averageScore": 80.0}) == 0

    def test_implements_protocol_methods(self, repo):
        members = [
            name for name in dir(ContentDataSourceProtocol)
            if name.startswith(("fetch_", "insert_", "update_"))
        ]
        assert len(members) == 11
        for name in members:
            assert callable(getattr(repo, name)), f"Missing {name}"


class TestRepositoryErrors:
    """Tests for query failures."""

    def test_connection_failure_marks_unavailable(self):
        with patch("src.content_scoring.repositories.content_repository.psycopg2.connect",
                   side_effect=Exception("could not connect")):
            repo = ContentRepository("postgresql://localhost:1/missing")
            assert repo.is_available is False
            assert repo.fetch_clinical_claims("ofev") == []

    def test_query_failure_returns_empty(self):
        conn = MagicMock()
        conn.cursor.return_value.__enter__.return_value.execute.side_effect = Exception("syntax error")

        with patch("src.content_scoring.repositories.content_repository.psycopg2.connect",
                   return_value=conn):
            repo = ContentRepository("postgresql://example/content")
            assert repo.fetch_compliance_history("ofev") == []
            conn.close.assert_called()

    def test_query_parameters(self):
        conn = MagicMock()
        cursor = conn.cursor.return_value.__enter__.return_value
        cursor.fetchall.return_value = [{"id": "c1", "claim_text": "A"}]

        with patch("src.content_scoring.repositories.content_repository.psycopg2.connect",
                   return_value=conn):
            repo = ContentRepository("postgresql://example/content")
            rows = repo.fetch_clinical_claims("ofev", audience="Patient", limit=10)

        assert rows == [{"id": "c1", "claim_text": "A"}]
        query, params = cursor.execute.call_args[0]
        assert "target_audiences @> %s" in query
        assert params == ("ofev", ["Patient"], 10)

    def test_feedback_update(self):
        conn = MagicMock()
        cursor = conn.cursor.return_value.__enter__.return_value
        cursor.rowcount = 2

        with patch("src.content_scoring.repositories.content_repository.psycopg2.connect",
                   return_value=conn):
            repo = ContentRepository("postgresql://example/content")
            updated = repo.update_intelligence_feedback("ofev", "evidence", {"averageScore": 80.0}, limit=5)

        assert updated == 2
        query, params = cursor.execute.call_args[0]
        assert "UPDATE theme_intelligence" in query
        assert "performanceFeedback" in query
        assert params[0].adapted == {"averageScore": 80.0}
        assert params[1:] == ("ofev", "evidence", 5)
        conn.commit.assert_called_once()

    def test_feedback_update_failure_rolls_back(self):
        conn = MagicMock()
        conn.cursor.return_value.__enter__.return_value.execute.side_effect = Exception("no such table")

        with patch("src.content_scoring.repositories.content_repository.psycopg2.connect",
                   return_value=conn):
            repo = ContentRepository("postgresql://example/content")
            assert repo.update_intelligence_feedback("ofev", "evidence", {}) == 0

        conn.rollback.assert_called_once()
        conn.close.assert_called()


class TestCreateRepository:
    """Tests for create_repository()."""

    def test_without_database_url(self):
        repo = create_repository(Settings(database_url=None))
        assert repo.is_available is False

    def test_database_disabled(self):
        repo = create_repository(Settings(database_url="postgresql://example/content", enable_database=False))
        assert repo.is_available is False


class TestDatabaseReads:
    """Tests against a live content database."""

    def test_claims_parse(self, db):
        brand_id = os.getenv("TEST_BRAND_ID", "ofev")
        rows = db.fetch_clinical_claims(brand_id, limit=20)
        claims = parse_records(ClinicalClaim, rows)
        assert len(claims) <= 20
        for claim in claims:
            assert claim.id

    def test_compliance_history_is_brand_scoped(self, db):
        rows = db.fetch_compliance_history("no-such-brand-0000")
        assert rows == []
