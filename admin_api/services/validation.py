"""
admin_api/services/validation.py
--------------------------------
Helpers that coerce JSON payload values and raise ``ValidationError``
with a caller-facing message when a value has the wrong shape.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from admin_api.errors import ValidationError


def as_decimal(value: Any, name: str) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"'{name}' must be a number")
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"'{name}' must be a number")
    if not number.is_finite():
        raise ValidationError(f"'{name}' must be a number")
    return number


def as_int(value: Any, name: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"'{name}' must be an integer")
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"'{name}' must be an integer")
    # 2.0 is accepted, 2.5 is not
    if not number.is_finite() or number != number.to_integral_value():
        raise ValidationError(f"'{name}' must be an integer")
    return int(number)


def as_text(value: Any, name: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise ValidationError(f"'{name}' must be a string")


def as_bool(value: Any, name: str) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    raise ValidationError(f"'{name}' must be true or false")


def pick(data: dict, fields) -> dict:
    """Keep only the known fields of a payload."""
    return {name: data.get(name) for name in fields}
