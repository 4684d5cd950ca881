"""
Converter from raw broker transactions to canonical transactions.

Sign conventions of the feed:
- Sold share counts are reported as negative numbers
- Fees are always reported as negative numbers
Canonical records store magnitudes only, the direction lives in the type.
"""
import logging
from typing import Optional

from converters.base_converter import BaseConverter, Transaction
from converters.raw_records import RawTransaction
from normalizer.date_parser import parse_date
from normalizer.number_parser import AutoLocaleNumberParser, NumberParser
from normalizer.transaction_type import map_transaction_type

logger = logging.getLogger(__name__)


class TransactionConverter(BaseConverter):
    """
    Converts RawTransaction rows into Transaction records.
    """

    def __init__(self, number_parser: Optional[NumberParser] = None):
        """
        Initialize the converter.

        Args:
            number_parser: Strategy for numeric fields (default: auto-locale)
        """
        super().__init__()
        self.number_parser = number_parser or AutoLocaleNumberParser()

    def convert(self, raw: RawTransaction) -> Transaction:
        """
        Convert a raw transaction.

        Args:
            raw: The raw transaction row

        Returns:
            The canonical Transaction

        Raises:
            InvalidDateError: If the execution date is not a valid date
            UnknownTransactionTypeError: If the type token is unknown
            ValueError: If the number parser rejects a numeric field
        """
        execution_date = parse_date(raw.execution_date)
        transaction_type = map_transaction_type(raw.type)
        shares = abs(self.number_parser.parse(raw.shares))
        fees = abs(self.number_parser.parse(raw.total_fees))
        price = self.number_parser.parse(raw.price)

        logger.debug(
            "Converted %s of %s shares at %s on %s",
            transaction_type.value, shares, price, execution_date
        )

        return Transaction(
            execution_date=execution_date,
            type=transaction_type,
            shares=shares,
            price=price,
            exchange=None,  # not part of the export
            fees=fees,
        )


def convert_to_transaction(
    raw: RawTransaction,
    number_parser: Optional[NumberParser] = None
) -> Transaction:
    """
    Convert a single raw transaction.

    Args:
        raw: The raw transaction row
        number_parser: Strategy for numeric fields (default: auto-locale)

    Returns:
        The canonical Transaction
    """
    return TransactionConverter(number_parser).convert(raw)
