"""
Date parser for the ISO and locale-short date dialects.
"""
from datetime import date, datetime, timezone
from typing import Tuple, Union

from config import ISO_DATE_PATTERN, LOCALE_SHORT_DATE_PATTERNS, MIN_YEAR


class InvalidDateError(ValueError):
    """Raised when a string is not a supported, calendar-valid date."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid date string provided: {value}")


def parse_date(value: Union[str, date]) -> date:
    """
    Parse a date value into a canonical UTC-midnight date.

    Dialects are tried in order: ISO (YYYY-MM-DD), then locale-short
    (DD.MM.YYYY or DD/MM/YYYY). Date and datetime objects are returned
    unchanged.

    Args:
        value: A date string, or an already constructed date/datetime

    Returns:
        A timezone-aware datetime at 00:00 UTC for string input

    Raises:
        InvalidDateError: If the string matches no dialect or names a day
            that does not exist, e.g. "2025-06-31"
    """
    if isinstance(value, date):
        return value

    if is_valid_iso_date_string(value):
        return _create_date_from_components(*_get_components_from_iso(value))
    if is_valid_formatted_date_string(value):
        return _create_date_from_components(*_get_components_from_formatted(value))

    raise InvalidDateError(value)


def is_valid_iso_date_string(date_string: str) -> bool:
    """
    Check whether a string is a well-formed ISO date (YYYY-MM-DD) that
    also names a real calendar day.

    Args:
        date_string: The string to verify

    Returns:
        True if both syntax and semantics are valid, False otherwise
    """
    if not isinstance(date_string, str):
        return False

    if not ISO_DATE_PATTERN.fullmatch(date_string):
        return False

    return _is_valid_date_components(*_get_components_from_iso(date_string))


def is_valid_formatted_date_string(formatted_date: str) -> bool:
    """
    Check whether a string is a locale-short date ("dd.mm.yyyy" as in de-DE,
    or "dd/mm/yyyy" as in en-GB) that also names a real calendar day.

    Args:
        formatted_date: The string to verify

    Returns:
        True if both syntax and semantics are valid, False otherwise
    """
    if not isinstance(formatted_date, str):
        return False

    if not any(p.fullmatch(formatted_date) for p in LOCALE_SHORT_DATE_PATTERNS):
        return False

    return _is_valid_date_components(*_get_components_from_formatted(formatted_date))


def is_valid_date(value: Union[str, date]) -> bool:
    """
    Check if a value can be parsed as a valid date.

    Args:
        value: A value to check

    Returns:
        True if the value is a valid date, False otherwise
    """
    try:
        parse_date(value)
    except InvalidDateError:
        return False
    return True


def _get_components_from_iso(date_string: str) -> Tuple[int, int, int]:
    year, month, day = (int(part) for part in date_string.split("-"))
    return year, month, day


def _get_components_from_formatted(formatted_date: str) -> Tuple[int, int, int]:
    separator = "." if "." in formatted_date else "/"
    day, month, year = (int(part) for part in formatted_date.split(separator))
    return year, month, day


def _create_date_from_components(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def _is_valid_date_components(year: int, month: int, day: int) -> bool:
    """
    Check that year, month and day assemble into the same calendar day.

    Catches semantically incorrect dates such as 31/06/2025, which must be
    rejected rather than rolled over to 01/07/2025.
    Years below MIN_YEAR are rejected as well.
    """
    if year < MIN_YEAR:
        return False

    try:
        assembled = _create_date_from_components(year, month, day)
    except ValueError:
        return False

    return (
        assembled.year == year
        and assembled.month == month
        and assembled.day == day
    )
