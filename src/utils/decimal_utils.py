"""Helpers for Decimal normalization."""

from decimal import Decimal, InvalidOperation


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Strings may carry thousands separators ("1,250.00") as typed in the
    cashiering forms. NaN and infinite values are rejected.

    Args:
        value: Raw numeric value from SQL, forms or adapters.

    Returns:
        Decimal: Normalized finite numeric value.

    Raises:
        decimal.InvalidOperation: If a string cannot be parsed as a number,
            or the value is not finite.
        TypeError: If the value has an unsupported type.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, bool):
        raise TypeError(f"Unsupported numeric value: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, str):
        cleaned = value.replace(",", "").strip()
        if not cleaned:
            return Decimal("0")
        result = Decimal(cleaned)
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    else:
        raise TypeError(f"Unsupported numeric value: {value!r}")
    if not result.is_finite():
        raise InvalidOperation(f"Non-finite numeric value: {value!r}")
    return result


__all__ = ["coerce_decimal"]
