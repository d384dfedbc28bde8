"""Field Validators — pure checks for the three user fields.

Invariants:
    - Every validator returns a ValidationResult; ordinary bad input never raises
    - Name length is measured after stripping (3-100 chars inclusive)
    - Email pattern is checked on the stripped value
    - Age accepts only ASCII base-10 integers in [18, 120]; "20.5", "٢٥" and booleans are rejected

Design Decisions:
    - Normalizers kept separate from validators: callers normalize only values
      that already passed (ADR: validate first, transform second)
    - NAME_MIN_LENGTH / AGE_MIN etc. are the single source of truth for bounds
"""

import re
from typing import Any, NamedTuple


NAME_MIN_LENGTH: int = 3
NAME_MAX_LENGTH: int = 100
AGE_MIN: int = 18
AGE_MAX: int = 120

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")


class ValidationResult(NamedTuple):
    """Outcome of a field check. message is None when valid."""
    valid: bool
    message: str | None = None


VALID = ValidationResult(True)


# ─── Validators ──────────────────────────────────────────────────

def validate_name(value: Any) -> ValidationResult:
    if not isinstance(value, str) or not value:
        return ValidationResult(False, "Name is required and must be text")
    length = len(value.strip())
    if length < NAME_MIN_LENGTH:
        return ValidationResult(
            False, f"Name must be at least {NAME_MIN_LENGTH} characters long",
        )
    if length > NAME_MAX_LENGTH:
        return ValidationResult(
            False, f"Name cannot exceed {NAME_MAX_LENGTH} characters",
        )
    return VALID


def validate_email(value: Any) -> ValidationResult:
    if not isinstance(value, str) or not value:
        return ValidationResult(False, "Email is required and must be text")
    if not EMAIL_PATTERN.match(value.strip()):
        return ValidationResult(False, "Email does not have a valid format")
    return VALID


def validate_age(value: Any) -> ValidationResult:
    """Rule: age must be a whole number between AGE_MIN and AGE_MAX."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return ValidationResult(False, "Age is required")
    age = _parse_integer(value)
    if age is None:
        return ValidationResult(False, "Age must be a valid whole number")
    if age < AGE_MIN:
        return ValidationResult(
            False, f"Age must be greater than or equal to {AGE_MIN}",
        )
    if age > AGE_MAX:
        return ValidationResult(False, f"Age cannot be greater than {AGE_MAX}")
    return VALID


def validate_user(name: Any, email: Any, age: Any) -> ValidationResult:
    """Full-record check for creation. Returns the first failure, in field order."""
    for result in (validate_name(name), validate_email(email), validate_age(age)):
        if not result.valid:
            return result
    return VALID


# ─── Normalizers (call only on validated values) ─────────────────

def normalize_name(value: str) -> str:
    return value.strip()


def normalize_email(value: str) -> str:
    return value.strip().lower()


def normalize_age(value: Any) -> int:
    age = _parse_integer(value)
    if age is None:
        raise ValueError(f"not an integer: {value!r}")
    return age


def _parse_integer(value: Any) -> int | None:
    """Parse a base-10 integer from int, integral float, or digit string."""
    # bool is an int subclass; True must not read as age 1
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        stripped = value.strip()
        if _INTEGER_PATTERN.match(stripped):
            return int(stripped, 10)
    return None
