"""
Record boundary parsing.

Rows from the store are plain dicts with whatever shape the table has today.
They are parsed into the typed models here, before any scorer sees them.
"""

import logging
from typing import Any, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_record(model: Type[ModelT], row: Any) -> Optional[ModelT]:
    """
    Parse a single row into a model.

    Args:
        model: Pydantic model class
        row: Dict from the store (or an already-parsed model instance)

    Returns:
        Parsed model, or None if the row is malformed
    """
    if isinstance(row, model):
        return row
    if not isinstance(row, dict):
        logger.warning(f"Skipping {model.__name__} row of type {type(row).__name__}")
        return None
    try:
        return model.model_validate(row)
    except ValidationError as e:
        row_id = row.get("id", "<no id>")
        logger.warning(
            f"Skipping malformed {model.__name__} row {row_id}: {e.error_count()} validation error(s)"
        )
        return None


def parse_records(model: Type[ModelT], rows: Optional[Iterable[Any]]) -> List[ModelT]:
    """
    Parse rows into models, dropping malformed rows.

    None is treated as an empty result set. Retrieval order is preserved,
    since ranking ties fall back to it.
    """
    if not rows:
        return []

    parsed: List[ModelT] = []
    skipped = 0
    for row in rows:
        record = parse_record(model, row)
        if record is None:
            skipped += 1
            continue
        parsed.append(record)

    if skipped:
        logger.info(f"Parsed {len(parsed)} {model.__name__} rows ({skipped} skipped)")
    return parsed
