"""Type coercion utilities for flexible record handling."""

import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

CENT = Decimal("0.01")


def is_missing(value: Any) -> bool:
    """
    Check whether a raw value should be treated as absent.

    Covers None, empty/whitespace strings and NaN (pandas fills missing
    CSV cells with float NaN).

    Examples:
        >>> is_missing(None)
        True
        >>> is_missing(float("nan"))
        True
        >>> is_missing("  ")
        True
        >>> is_missing(0)
        False
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    return False


def safe_decimal(
    value: Any,
    default: Optional[Decimal] = None
) -> Optional[Decimal]:
    """
    Safely convert value to Decimal.

    Args:
        value: Value to convert
        default: Default value if conversion fails

    Returns:
        Decimal value or default

    Examples:
        >>> safe_decimal("1,234.50")
        Decimal('1234.50')
        >>> safe_decimal(123.45)
        Decimal('123.45')
        >>> safe_decimal("abc")
        None
        >>> safe_decimal(None)
        None
    """
    if is_missing(value):
        return default

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            # Convert to string first to avoid float precision issues
            return Decimal(str(value))
        elif isinstance(value, int):
            return Decimal(value)
        elif isinstance(value, str):
            cleaned = value.strip().replace(",", "").replace('"', "")
            return Decimal(cleaned)
        else:
            return Decimal(str(value))
    except (ValueError, TypeError, InvalidOperation):
        return default


def parse_decimal(value: Any) -> Optional[Decimal]:
    """
    Convert a raw feed amount to Decimal, keeping absent and corrupt apart.

    Returns None only for a missing value. Anything present that is not a
    finite number raises, so the row can be reported instead of silently
    booked as zero.

    Raises:
        ValueError: If the value is present but not a finite number

    Examples:
        >>> parse_decimal("1,234.50")
        Decimal('1234.50')
        >>> parse_decimal("")
        None
        >>> parse_decimal("12O.00")
        Traceback (most recent call last):
            ...
        ValueError: Unparseable amount '12O.00'
    """
    if is_missing(value):
        return None

    converted = safe_decimal(value)
    if converted is None or not converted.is_finite():
        raise ValueError(f"Unparseable amount {value!r}")
    return converted


def safe_str(
    value: Any,
    default: Optional[str] = None
) -> Optional[str]:
    """
    Safely convert value to a stripped string.

    Examples:
        >>> safe_str(123)
        '123'
        >>> safe_str(None)
        None
        >>> safe_str(" WFCSLLC ")
        'WFCSLLC'
    """
    if is_missing(value):
        return default

    if isinstance(value, float) and value.is_integer():
        # CSV readers turn numeric codes like 141 into 141.0
        return str(int(value))

    try:
        return str(value).strip()
    except (ValueError, TypeError):
        return default


def to_cents(amount: Decimal) -> Decimal:
    """
    Quantize a monetary amount to whole cents, rounding half up.

    Examples:
        >>> to_cents(Decimal("364.995"))
        Decimal('365.00')
        >>> to_cents(Decimal("-0.005"))
        Decimal('-0.01')
    """
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def normalize_participant_id(value: Any) -> str:
    """
    Normalize a participant identifier to its canonical string form.

    Purely numeric identifiers are zero-padded to four digits so that
    mappings loaded as integers compare equal to configured codes.

    Examples:
        >>> normalize_participant_id(250)
        '0250'
        >>> normalize_participant_id("0141")
        '0141'
        >>> normalize_participant_id("ABCD")
        'ABCD'
    """
    cleaned = safe_str(value, default="")
    if cleaned.isdigit():
        return cleaned.zfill(4)
    return cleaned
