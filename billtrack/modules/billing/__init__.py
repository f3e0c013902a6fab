"""
Billing Module - Black Box Interface

Purpose: Convert a session's elapsed time into an amount owed
Interface: compute_payment(), format_elapsed()
Hidden: Rounding policy, negative-duration clamping

Pure functions: "now" is always supplied by the caller.
"""

from .billing import (
    MINIMUM_BILLABLE_HOURS,
    PaymentBreakdown,
    compute_payment,
    format_elapsed,
)

__all__ = [
    "MINIMUM_BILLABLE_HOURS",
    "PaymentBreakdown",
    "compute_payment",
    "format_elapsed",
]
