# app/utils/decimal_utils.py
from decimal import Decimal, InvalidOperation


def to_number(value):
    """Numeric coercion for NUMERIC columns that drivers may hand back as
    ``Decimal`` or as a string. Returns ``None`` when the value is missing
    or not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return float(number)


def to_int(value):
    number = to_number(value)
    if number is None:
        return None
    return int(number)
