"""
Lifecycle Module - Black Box Interface

Purpose: Decide the next state of a session for a stop request
Interface: request_stop(), session_state()
Hidden: Idempotence rules

States: running -> stopped. Stopped is terminal; stopping again is a no-op.
Persisting the result is the session store's job.
"""

from .lifecycle import request_stop, session_state

__all__ = ["request_stop", "session_state"]
