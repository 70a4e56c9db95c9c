from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

from ..core.constants import MAX_RATE, MONEY_QUANTUM
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str, *, max_length: Optional[int] = None) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    clean = value.strip()
    if max_length is not None and len(clean) > max_length:
        raise ValidationError(f"{field_name} must be at most {max_length} characters")
    return clean


def require_positive_id(value: object, field_name: str) -> int:
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is invalid")
    if ident <= 0:
        raise ValidationError(f"{field_name} is invalid")
    return ident


def parse_rate(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """Parse an hourly rate into a non-negative Decimal with cent precision.

    Floats go through str() so 19.99 stays 19.99 instead of its binary expansion.
    """

    if value is None or isinstance(value, bool):
        raise ValidationError("Hourly rate is required")
    try:
        rate = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError("Hourly rate must be a number")
    if not rate.is_finite():
        raise ValidationError("Hourly rate must be a number")
    if rate < 0:
        raise ValidationError("Hourly rate cannot be negative")
    rate = rate.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
    if rate > MAX_RATE:
        raise ValidationError(f"Hourly rate cannot exceed {MAX_RATE}")
    return rate
