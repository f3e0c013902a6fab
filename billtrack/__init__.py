"""
Billtrack - Billable Work Session Tracker

Tracks billable work sessions: a session is opened with a title, category
and hourly rate, later stopped, and billed per started hour.

Architecture:
- Each module is self-contained with clear interfaces
- Core modules (billing, lifecycle, view) are pure and never read the clock
- Only the API layer talks to storage and time
- All communication through defined interfaces

Modules:
- billing: Time-to-payment conversion
- lifecycle: Running -> Stopped transition rules
- view: External session representation
- session: Durable session store
- storage: Redis connection management
- api: REST API models
- config: Environment configuration
"""

__version__ = "1.0.0"
