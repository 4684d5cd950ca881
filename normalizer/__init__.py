"""
Normalizer module for parsing dates, numbers and transaction types.
"""
from .date_parser import InvalidDateError, parse_date, is_valid_date
from .number_parser import (
    AutoLocaleNumberParser, InvalidNumberError, NumberParser, parse_number_with_auto_locale
)
from .transaction_type import TransactionType, UnknownTransactionTypeError, map_transaction_type

__all__ = [
    'InvalidDateError', 'parse_date', 'is_valid_date',
    'AutoLocaleNumberParser', 'InvalidNumberError', 'NumberParser',
    'parse_number_with_auto_locale',
    'TransactionType', 'UnknownTransactionTypeError', 'map_transaction_type',
]
