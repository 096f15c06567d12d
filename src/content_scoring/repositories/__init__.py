"""
Repository implementations for data persistence.
"""

from src.content_scoring.repositories.content_repository import ContentRepository

__all__ = [
    "ContentRepository",
]
