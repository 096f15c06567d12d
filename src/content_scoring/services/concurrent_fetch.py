"""
Concurrent source fetching.

Runs independent table fetches on a thread pool and waits for all of them.
A fetch that raises is logged and replaced with an empty list, so one
unavailable source degrades its sub-scores instead of failing the request.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

FetchTask = Callable[[], List[Dict[str, Any]]]


def fetch_concurrently(tasks: Dict[str, FetchTask], max_workers: int = 6) -> Dict[str, List[Dict[str, Any]]]:
    """
    Run fetch tasks in parallel.

    Args:
        tasks: Source name -> zero-argument fetch callable
        max_workers: Thread pool size

    Returns:
        Source name -> rows ([] for a source that failed or returned None)
    """
    results: Dict[str, List[Dict[str, Any]]] = {name: [] for name in tasks}
    if not tasks:
        return results

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(tasks)))) as executor:
        future_to_name = {
            executor.submit(task): name
            for name, task in tasks.items()
        }

        for future in as_completed(future_to_name):
            name = future_to_name[future]
            try:
                results[name] = future.result() or []
            except Exception as e:
                logger.error(f"Fetching {name} failed: {e}")
                logger.warning(f"Continuing without {name}; its scores will be None")
                results[name] = []

    empty = [name for name, rows in results.items() if not rows]
    if empty:
        logger.info(f"No rows from: {', '.join(empty)}")
    return results
