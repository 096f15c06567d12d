"""
Tests for the declared package dependencies.
"""

from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def _project():
    with open(PYPROJECT, "rb") as f:
        return tomllib.load(f)["project"]


def _names(requirements):
    return {r.split(">")[0].split("=")[0].split("<")[0].strip() for r in requirements}


class TestDependencies:
    """Runtime dependencies cover only what the package imports."""

    def test_runtime_dependencies(self):
        assert _names(_project()["dependencies"]) == {
            "pydantic",
            "pydantic-settings",
            "psycopg2-binary",
        }

    def test_dotenv_is_test_only(self):
        project = _project()
        assert "python-dotenv" not in _names(project["dependencies"])
        assert "python-dotenv" in _names(project["optional-dependencies"]["test"])
