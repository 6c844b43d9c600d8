"""Utility functions for DSTest."""

from .helpers import new_object_id, utcnow

__all__ = [
    "new_object_id",
    "utcnow",
]
