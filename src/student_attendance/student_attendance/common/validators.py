from __future__ import annotations

from typing import Any

from ..core.exceptions import InvalidInputError


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise InvalidInputError(f"{field_name} must be at least {min_len} characters long")
    return value


def require_int_in_range(value: Any, field_name: str, *, min_value: int, max_value: int) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise InvalidInputError(f"{field_name} must be a whole number")
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{field_name} must be a whole number") from e
    if isinstance(value, float) and value != number:
        raise InvalidInputError(f"{field_name} must be a whole number")

    if number < min_value or number > max_value:
        raise InvalidInputError(f"{field_name} must be between {min_value} and {max_value}")
    return number
