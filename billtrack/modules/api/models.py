"""
Billtrack shared data models.

These models define the structure of all data passed between
components in the Billtrack system.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Enums


class SessionState(str, Enum):
    """Lifecycle state of a work session."""

    RUNNING = "running"
    STOPPED = "stopped"


# Domain Models


class Session(BaseModel):
    """
    Stored session record.

    Records are immutable; state changes produce new instances.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique session ID")
    title: str = Field(..., description="Free-text label")
    category: str = Field(..., description="Free-text classification")
    rate: float = Field(
        ..., description="Amount charged per billable hour", ge=0, allow_inf_nan=False
    )
    created_at: datetime = Field(..., description="When the session was started")
    updated_at: datetime = Field(..., description="When the record was last changed")
    stopped_at: Optional[datetime] = Field(None, description="When the session was stopped")

    @property
    def is_stopped(self) -> bool:
        """Check if session has been stopped."""
        return self.stopped_at is not None


# Request Models (API Input)


class CreateSessionRequest(BaseModel):
    """Request to start a work session."""

    title: str = Field(..., description="Free-text label", min_length=1, max_length=200)
    category: str = Field(..., description="Free-text classification", min_length=1, max_length=100)
    rate: float = Field(
        ..., description="Amount charged per billable hour", ge=0, allow_inf_nan=False
    )

    @field_validator("title", "category")
    @classmethod
    def validate_not_blank(cls, v):
        """Reject values made only of whitespace."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


# Response Models (API Output)


class SessionResponse(BaseModel):
    """Externally visible representation of a session."""

    id: str
    status: SessionState
    created_at: datetime
    updated_at: datetime
    stopped_at: Optional[datetime] = Field(None, description="Present once stopped")
    title: str
    category: str
    rate: float
    billable_hours: int = Field(..., description="Hours charged, partial hours rounded up", ge=1)
    amount_owed: float = Field(..., description="billable_hours * rate")
    elapsed_display: Optional[str] = Field(
        None, description="Human-readable elapsed time, present once stopped"
    )


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
