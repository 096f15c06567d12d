"""
Protocol definitions for dependency injection.

These protocols define the interfaces that services depend on,
allowing for easy mocking in tests and swapping implementations.
"""

from src.content_scoring.protocols.data_source_protocol import ContentDataSourceProtocol

__all__ = [
    "ContentDataSourceProtocol",
]
