from datetime import datetime, timedelta
from typing import NamedTuple, Optional

BILLING_UNIT = timedelta(hours=1)
MINIMUM_BILLABLE_HOURS = 1


class PaymentBreakdown(NamedTuple):
    """Result of billing a session."""

    elapsed_seconds: float
    billable_hours: int
    amount_owed: float


def compute_payment(
    rate: float,
    created_at: datetime,
    stopped_at: Optional[datetime],
    now: datetime,
) -> PaymentBreakdown:
    """
    Compute elapsed time and amount owed for a session.

    Args:
        rate: Amount charged per billable hour (>= 0)
        created_at: When the session started
        stopped_at: When the session stopped, or None while running
        now: Current time, only used while the session is running

    Returns:
        PaymentBreakdown

    Policy:
    1. Elapsed = (stopped_at or now) - created_at, clamped to zero
    2. Every started hour is billed in full (ceil)
    3. At least one hour is always billed, even for zero elapsed time
    """
    end = stopped_at if stopped_at is not None else now
    elapsed = max(end - created_at, timedelta(0))

    # divmod on timedeltas keeps the hour boundary exact
    hours, remainder = divmod(elapsed, BILLING_UNIT)
    if remainder:
        hours += 1
    billable_hours = max(MINIMUM_BILLABLE_HOURS, hours)

    return PaymentBreakdown(
        elapsed_seconds=elapsed.total_seconds(),
        billable_hours=billable_hours,
        amount_owed=billable_hours * rate,
    )


def format_elapsed(elapsed_seconds: float) -> str:
    """Render elapsed time as whole seconds, e.g. '5400s'."""
    return f"{elapsed_seconds:.0f}s"
