"""
Logging setup for the content scoring engine.

Scoring modules log through module-level loggers; the CLI configures the root
logger once with setup_logging().
"""
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers capped regardless of the configured level
LIBRARY_LOG_LEVELS: Dict[str, int] = {
    "psycopg2": logging.WARNING,
}


def resolve_level(level: Union[str, int]) -> int:
    """Numeric level for a level name or number; unknown names fall back to INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    return handlers


def setup_logging(level: Union[str, int] = "INFO", log_file: Optional[str] = None) -> int:
    """
    Route all scoring logs to stdout, and optionally to a file.

    Replaces any handlers already on the root logger, so calling it again
    reconfigures rather than duplicating output.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or number
        log_file: Optional log file path; missing directories are created

    Returns:
        The numeric level applied
    """
    numeric_level = resolve_level(level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    for handler in _build_handlers(log_file):
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name, library_level in LIBRARY_LOG_LEVELS.items():
        logging.getLogger(name).setLevel(max(library_level, numeric_level))

    return numeric_level
