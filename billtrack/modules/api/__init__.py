"""
API Module - Black Box Interface

Purpose: Shared request/response and record models
Interface: Pydantic models
Hidden: Field validation rules

The HTTP routes in main.py only orchestrate - they contain no business logic.
All logic is delegated to the billing, lifecycle, view and session modules.
"""

from .models import (
    CreateSessionRequest,
    ErrorResponse,
    Session,
    SessionResponse,
    SessionState,
)

__all__ = [
    "CreateSessionRequest",
    "ErrorResponse",
    "Session",
    "SessionResponse",
    "SessionState",
]
