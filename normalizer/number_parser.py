"""
Number parser for locale-formatted numeric strings.

The converters only depend on the NumberParser interface; the
AutoLocaleNumberParser below is the default strategy plugged in behind it.
"""
import logging
import numbers
import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Tuple, Union

from config import CURRENCY_MARKERS, get_config

logger = logging.getLogger(__name__)

_PLAIN_NUMBER = re.compile(r"[0-9]+(\.[0-9]*)?|\.[0-9]+")
_LEADING_GROUP = re.compile(r"[0-9]{1,3}")
_GROUP = re.compile(r"[0-9]{3}")


class NumberFormat(Enum):
    """Number format styles."""
    INTERNATIONAL = "international"  # 1,234.56
    EUROPEAN = "european"  # 1.234,56


class InvalidNumberError(ValueError):
    """Raised when a string cannot be read as a number."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid number provided: {value!r}")


class NumberParser(ABC):
    """
    Interface for turning numeric text into a float.
    """

    @abstractmethod
    def parse(self, value: Union[str, int, float]) -> float:
        """
        Parse a numeric value.

        Args:
            value: Text as exported by the broker, or an already numeric value

        Returns:
            The parsed number

        Raises:
            ValueError: If the value is not a number
        """
        pass


class AutoLocaleNumberParser(NumberParser):
    """
    Parses numbers whose decimal and thousands separators are detected
    from the shape of the string.

    Handles:
    - International format: "1,234.56"
    - European format: "1.234,56", "100,50"
    - Currency markers: €, EUR, $, USD
    - Negative formats: -1000, 1000-, (1000)
    """

    def __init__(self, ambiguous_format: Optional[NumberFormat] = None):
        """
        Initialize the parser.

        Args:
            ambiguous_format: Format assumed for strings like "1.500" where a
                single separator is followed by exactly three digits. Read
                from the ambiguous_number_format setting when not given.
        """
        self._ambiguous_format = ambiguous_format

    @property
    def ambiguous_format(self) -> NumberFormat:
        if self._ambiguous_format is not None:
            return self._ambiguous_format
        return configured_number_format()

    def parse(self, value: Union[str, int, float]) -> float:
        if isinstance(value, bool):
            raise InvalidNumberError(value)
        if isinstance(value, numbers.Real):
            return float(value)
        if not isinstance(value, str):
            raise InvalidNumberError(value)

        number_str, is_negative = _split_sign(_remove_currency_markers(value.strip()))
        number_str = re.sub(r"\s+", "", number_str)

        if not number_str:
            raise InvalidNumberError(value)

        number_format = detect_number_format(number_str, self.ambiguous_format)
        logger.debug("Reading %r as %s number", value, number_format.value)

        plain = _to_plain_decimal(number_str, number_format)
        if plain is None or not _PLAIN_NUMBER.fullmatch(plain):
            raise InvalidNumberError(value)

        amount = float(plain)
        return -amount if is_negative else amount


def detect_number_format(
    text: str,
    ambiguous_format: Optional[NumberFormat] = None
) -> NumberFormat:
    """
    Detect which number format a string is written in.

    Args:
        text: Numeric string without sign or currency markers
        ambiguous_format: Result for a lone separator followed by three digits
            (default: the ambiguous_number_format setting)

    Returns:
        The detected NumberFormat
    """
    if ambiguous_format is None:
        ambiguous_format = configured_number_format()

    last_dot = text.rfind(".")
    last_comma = text.rfind(",")

    # Both present: the rightmost one is the decimal mark
    if last_dot >= 0 and last_comma >= 0:
        if last_comma > last_dot:
            return NumberFormat.EUROPEAN
        return NumberFormat.INTERNATIONAL

    if last_comma >= 0:
        separator, position = ",", last_comma
    elif last_dot >= 0:
        separator, position = ".", last_dot
    else:
        return ambiguous_format

    comma_is_decimal = separator == ","

    # Repeated separator can only be grouping
    if text.count(separator) > 1:
        return NumberFormat.INTERNATIONAL if comma_is_decimal else NumberFormat.EUROPEAN

    integer_part = text[:position]
    digits_after = len(text) - position - 1
    if digits_after != 3 or integer_part in ("", "0"):
        return NumberFormat.EUROPEAN if comma_is_decimal else NumberFormat.INTERNATIONAL

    return ambiguous_format


def configured_number_format() -> NumberFormat:
    """
    Get the NumberFormat named by the ambiguous_number_format setting.

    Raises:
        ValueError: If the setting names no known format
    """
    setting = get_config().get("ambiguous_number_format")
    try:
        return NumberFormat(setting)
    except ValueError:
        raise ValueError(
            f"Unknown ambiguous_number_format {setting!r}, expected one of: "
            f"{', '.join(f.value for f in NumberFormat)}"
        ) from None


def parse_number_with_auto_locale(value: Union[str, int, float]) -> float:
    """
    Parse a number with the default auto-locale strategy.

    Args:
        value: Numeric text such as "100,50" or "1,234.56"

    Returns:
        The parsed float

    Raises:
        InvalidNumberError: If the value is not a number
    """
    return AutoLocaleNumberParser().parse(value)


def _split_sign(value_str: str) -> Tuple[str, bool]:
    """
    Strip sign notation from a numeric string.

    Args:
        value_str: Numeric string, possibly signed

    Returns:
        Tuple of (unsigned string, whether the value is negative)
    """
    is_negative = False

    # Parentheses: (1000) means negative
    if value_str.startswith('(') and value_str.endswith(')'):
        is_negative = True
        value_str = value_str[1:-1].strip()

    if value_str.startswith('-'):
        is_negative = True
        value_str = value_str[1:]
    elif value_str.startswith('+'):
        value_str = value_str[1:]
    elif value_str.endswith('-'):
        is_negative = True
        value_str = value_str[:-1]

    return value_str.strip(), is_negative


def _remove_currency_markers(value_str: str) -> str:
    for marker in CURRENCY_MARKERS:
        value_str = re.sub(marker + r"\s*", "", value_str, flags=re.IGNORECASE)
    return value_str.strip()


def _to_plain_decimal(text: str, number_format: NumberFormat) -> Optional[str]:
    """
    Rewrite a formatted number with "." as decimal mark and no grouping.

    Returns None when the grouping is malformed, e.g. "1.23.456".
    """
    if number_format is NumberFormat.EUROPEAN:
        decimal_sep, group_sep = ",", "."
    else:
        decimal_sep, group_sep = ".", ","

    if text.count(decimal_sep) > 1:
        return None

    integer_part, _, fraction = text.partition(decimal_sep)
    if group_sep in fraction:
        return None

    if group_sep in integer_part:
        groups = integer_part.split(group_sep)
        if not _LEADING_GROUP.fullmatch(groups[0]):
            return None
        if not all(_GROUP.fullmatch(g) for g in groups[1:]):
            return None
        integer_part = "".join(groups)

    if decimal_sep in text:
        return f"{integer_part}.{fraction}"
    return integer_part
