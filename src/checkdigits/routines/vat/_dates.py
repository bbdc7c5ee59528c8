"""Birth date checks shared by the personal VAT number schemes."""

from __future__ import annotations

from datetime import date

from checkdigits.routines.errors import InvalidCodeError


def birth_date(code: str, year: int, month: int, day: int) -> date:
    """Build the birth date encoded in a code.

    Args:
        code: Code the date was read from, used in the error message
        year: Four-digit year
        month: Month 1-12
        day: Day of month

    Returns:
        The date

    Raises:
        InvalidCodeError: If the date does not exist in the calendar
    """
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidCodeError(code, f"invalid birth date {year:04d}-{month:02d}-{day:02d}: {e}") from e
