"""General helper utility functions."""

import uuid
from datetime import datetime, timezone


def new_object_id() -> str:
    """
    Generate a 24 character hex identifier.
    
    Identifiers match the shape used by the configuration service so that
    locally created records and fetched records are interchangeable.
    
    Returns:
        Hex identifier string
    """
    return uuid.uuid4().hex[:24]


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
