"""Calendar helpers mapping simulation months to real dates.

Month numbers are 1-based: month 1 is the calendar month of the
simulation start date.
"""

from __future__ import annotations

from datetime import date, datetime

from brokersim.core.exceptions import InvalidParameterError

# pt-BR short month names, as rendered by the brokerage UI
_PT_BR_MONTHS = (
    "jan.", "fev.", "mar.", "abr.", "mai.", "jun.",
    "jul.", "ago.", "set.", "out.", "nov.", "dez.",
)


def parse_start_date(value: date | datetime | str) -> date:
    """Coerce a stored start date (ISO ``YYYY-MM-DD``) into a ``date``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as e:
            raise InvalidParameterError("start_date", value, "expected YYYY-MM-DD") from e
    raise InvalidParameterError("start_date", value, "expected a date or ISO string")


def current_month_index(start_date: date | str, today: date | None = None) -> int:
    """Return the 1-based simulation month that contains ``today``.

    Months strictly before this index are treated as past. If ``today``
    falls in a calendar month before the start, the index is 1.
    """
    start = parse_start_date(start_date)
    today = today or date.today()

    diff = (today.year * 12 + today.month) - (start.year * 12 + start.month)
    if diff < 0:
        return 1
    return diff + 1


def month_date(start_date: date | str, month_offset: int) -> date:
    """First day of simulation month ``month_offset``."""
    start = parse_start_date(start_date)
    total = start.year * 12 + (start.month - 1) + (month_offset - 1)
    year, month_zero = divmod(total, 12)
    return date(year, month_zero + 1, 1)


def month_label(start_date: date | str, month_offset: int) -> str:
    """Short month/year label, e.g. ``"out. de 2026"``."""
    d = month_date(start_date, month_offset)
    return f"{_PT_BR_MONTHS[d.month - 1]} de {d.year}"
