"""
Session Module - Black Box Interface

Purpose: Durable storage of work sessions
Interface: create_session(), get_session(), list_sessions(), stop_session()
Hidden: Redis key layout, serialization, atomic stop claim

Replaceable with any session backend (database, in-memory, distributed cache).
"""

from .session import SessionModule, SessionStoreError

__all__ = ["SessionModule", "SessionStoreError"]
