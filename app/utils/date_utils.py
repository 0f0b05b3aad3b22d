# app/utils/date_utils.py
from datetime import date, datetime

# es-ES short month names
SHORT_MONTHS_ES = (
    "ene", "feb", "mar", "abr", "may", "jun",
    "jul", "ago", "sept", "oct", "nov", "dic",
)


def to_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def short_date_label(value) -> str:
    """'2024-10-05' -> '5 oct'"""
    day = to_date(value)
    return f"{day.day} {SHORT_MONTHS_ES[day.month - 1]}"
