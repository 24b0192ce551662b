"""
Field validation for malls and stores.

Every check runs and its message is collected under the field name, so a
record missing both name and city reports both. Callers raise
ValidationError when the returned dict is non-empty.
"""
from typing import Any, Optional

BLANK = "can't be blank"
TOO_SHORT = "is too short (minimum is {count} characters)"
NOT_AN_INTEGER = "is not a number"
NEGATIVE = "must be greater than or equal to 0"
TOO_LARGE = "must be less than or equal to {maximum}"

MALL_NAME_MIN_LENGTH = 5
# Largest value a 32-bit INTEGER column holds on every supported backend.
MAX_CAPACITY = 2**31 - 1

Errors = dict[str, list[str]]


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def validate_presence(errors: Errors, field: str, value: Any) -> None:
    if is_blank(value):
        errors.setdefault(field, []).append(BLANK)


def validate_min_length(errors: Errors, field: str, value: Optional[str], minimum: int) -> None:
    # A missing value counts as length 0.
    length = len(value) if isinstance(value, str) else 0
    if length < minimum:
        errors.setdefault(field, []).append(TOO_SHORT.format(count=minimum))


def validate_non_negative_int(errors: Errors, field: str, value: Any, maximum: int) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        errors.setdefault(field, []).append(NOT_AN_INTEGER)
    elif value < 0:
        errors.setdefault(field, []).append(NEGATIVE)
    elif value > maximum:
        errors.setdefault(field, []).append(TOO_LARGE.format(maximum=maximum))


def validate_mall(name: Optional[str], city: Optional[str], capacity: Any = None) -> Errors:
    errors: Errors = {}
    validate_presence(errors, "name", name)
    validate_min_length(errors, "name", name, MALL_NAME_MIN_LENGTH)
    validate_presence(errors, "city", city)
    validate_non_negative_int(errors, "capacity", capacity, MAX_CAPACITY)
    return errors


def validate_store(name: Optional[str], category: Optional[str]) -> Errors:
    errors: Errors = {}
    validate_presence(errors, "name", name)
    validate_presence(errors, "category", category)
    return errors


def has_room(store_count: int, capacity: int) -> bool:
    """A mall accepts another store only while its count is strictly below capacity."""
    return store_count < capacity
