"""Domain Types — names for the values that flow between layers.

Invariants:
    - UserId is opaque: assigned by the database, compared as a string, never parsed here
    - UserField lists the only columns a client may write

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - str Enum: field names serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


UserId = NewType("UserId", str)


class UserField(str, Enum):
    """Writable user columns, in validation order."""
    NAME = "name"
    EMAIL = "email"
    AGE = "age"
