"""
View Module - Black Box Interface

Purpose: Build the externally visible representation of a session
Interface: to_view()
Hidden: Which fields are shown in which state

Owns no state; combines stored fields with billing output.
"""

from .projection import to_view

__all__ = ["to_view"]
