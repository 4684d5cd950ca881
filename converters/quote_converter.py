"""
Converter from raw quote series to canonical quote data.
"""
import logging
from typing import Optional

from converters.base_converter import BaseConverter, QuoteData, QuoteItem
from converters.raw_records import RawQuoteData, RawQuoteItem
from normalizer.number_parser import AutoLocaleNumberParser, NumberParser

logger = logging.getLogger(__name__)


class QuoteConverter(BaseConverter):
    """
    Converts RawQuoteData into QuoteData.

    Name, NSIN and exchange pass through untouched. Items keep their order
    and count; only the price is parsed, item dates are carried over as-is.
    """

    def __init__(self, number_parser: Optional[NumberParser] = None):
        super().__init__()
        self.number_parser = number_parser or AutoLocaleNumberParser()

    def convert(self, raw: RawQuoteData) -> QuoteData:
        items = [self._convert_item(item) for item in raw.items]
        logger.debug("Converted %d quote items for %s", len(items), raw.nsin)
        return QuoteData(
            name=raw.name,
            nsin=raw.nsin,
            exchange=raw.exchange,
            items=items,
        )

    def _convert_item(self, raw_item: RawQuoteItem) -> QuoteItem:
        return QuoteItem(date=raw_item.date, price=self.number_parser.parse(raw_item.price))


def convert_to_quote_data(
    raw: RawQuoteData,
    number_parser: Optional[NumberParser] = None
) -> QuoteData:
    """
    Convert a raw quote series.

    Args:
        raw: The raw quote data
        number_parser: Strategy for prices (default: auto-locale)

    Returns:
        The canonical QuoteData
    """
    return QuoteConverter(number_parser).convert(raw)
