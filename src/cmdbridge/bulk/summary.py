"""
User-facing summaries of bulk outcomes.
"""

from ..models.results import BulkOutcome, BulkStatus, OutcomeSummary

# Number of error messages quoted when every item failed.
MAX_QUOTED_ERRORS = 3


def summarize_outcome(outcome: BulkOutcome, operation: str) -> OutcomeSummary:
    """
    Build the notification a host shows after a bulk operation.

    Args:
        outcome: The outcome returned by the runner.
        operation: Human-readable operation name, e.g. "Terminate processes".

    Returns:
        OutcomeSummary whose status distinguishes total success, total
        failure and partial failure.
    """
    status = outcome.status
    if status is BulkStatus.SUCCESS:
        return OutcomeSummary(
            status=status,
            title=f"{operation} completed",
            message=f"Successfully processed {outcome.success_count} items",
        )
    if status is BulkStatus.FAILURE:
        return OutcomeSummary(
            status=status,
            title=f"{operation} failed",
            message="; ".join(outcome.error_messages[:MAX_QUOTED_ERRORS]),
        )
    return OutcomeSummary(
        status=status,
        title=f"{operation} partially completed",
        message=f"{outcome.success_count} succeeded, {outcome.failure_count} failed",
    )
