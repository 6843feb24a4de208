"""
Bulk operation runner.

Applies a single-item operation to every item of a batch. A failing item
never stops the batch: its exception is folded into the outcome's error
messages and processing continues with the next item. Two variants are
provided, a sequential one that works through items in input order and a
bounded thread-pool variant for operations that mostly wait on external
commands.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, TypeVar

from ..models.results import BulkOutcome
from ..validation import ValidationError, validate_positive_integer

logger = logging.getLogger(__name__)

T = TypeVar('T')

ProgressCallback = Callable[[int, int], None]

UNKNOWN_ERROR = "Unknown error"


def error_message(error: BaseException) -> str:
    """Message recorded for a failed item."""
    message = str(error).strip()
    return message or UNKNOWN_ERROR


def _as_list(items: Iterable[T]) -> List[T]:
    item_list = list(items)
    if not item_list:
        raise ValidationError("No items to process", field_name="items", value=item_list)
    return item_list


def run_bulk(
    items: Iterable[T],
    operation: Callable[[T], object],
    on_progress: Optional[ProgressCallback] = None,
) -> BulkOutcome:
    """
    Apply ``operation`` to each item, one at a time, in input order.

    The operation signals failure by raising. ``on_progress(completed, total)``
    is called after every item whatever its result.

    Args:
        items: The items to process.
        operation: Callable applied to each item.
        on_progress: Optional progress callback.

    Returns:
        The aggregate outcome, after every item has been attempted.

    Raises:
        ValidationError: If ``items`` is empty.
    """
    item_list = _as_list(items)
    total = len(item_list)
    outcome = BulkOutcome()

    for index, item in enumerate(item_list):
        try:
            operation(item)
            outcome.success_count += 1
        except Exception as e:
            outcome.failure_count += 1
            outcome.error_messages.append(error_message(e))
            logger.debug(f"Bulk item {index + 1}/{total} failed: {e}")

        if on_progress is not None:
            on_progress(index + 1, total)

    logger.info(
        f"Bulk run finished: {outcome.success_count} succeeded, {outcome.failure_count} failed"
    )
    return outcome


def run_bulk_concurrent(
    items: Iterable[T],
    operation: Callable[[T], object],
    max_workers: int = 4,
    on_progress: Optional[ProgressCallback] = None,
    thread_name_prefix: str = "BulkWorker",
) -> BulkOutcome:
    """
    Apply ``operation`` to the items on a bounded thread pool.

    The outcome and the progress counter are only mutated while holding one
    lock, so ``completed`` counts items finished so far (not input
    positions) and error messages appear in completion order.

    Raises:
        ValidationError: If ``items`` is empty or ``max_workers`` < 1.
    """
    item_list = _as_list(items)
    max_workers = validate_positive_integer(max_workers, min_value=1, field_name="max_workers")
    total = len(item_list)
    outcome = BulkOutcome()
    lock = threading.Lock()

    def _record(future: Future) -> None:
        error = future.exception()
        with lock:
            if error is None:
                outcome.success_count += 1
            else:
                outcome.failure_count += 1
                outcome.error_messages.append(error_message(error))
            completed = outcome.success_count + outcome.failure_count
            if on_progress is not None:
                on_progress(completed, total)

    with ThreadPoolExecutor(
        max_workers=min(max_workers, total),
        thread_name_prefix=thread_name_prefix,
    ) as pool:
        futures = [pool.submit(operation, item) for item in item_list]
        for future in futures:
            future.add_done_callback(_record)

    logger.info(
        f"Concurrent bulk run finished: {outcome.success_count} succeeded, "
        f"{outcome.failure_count} failed"
    )
    return outcome
