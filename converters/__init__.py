"""
Converters module for turning raw broker records into canonical records.
"""
from .base_converter import BaseConverter, ConversionIssue, QuoteData, QuoteItem, Transaction
from .raw_records import RawQuoteData, RawQuoteItem, RawTransaction
from .transaction_converter import TransactionConverter, convert_to_transaction
from .quote_converter import QuoteConverter, convert_to_quote_data

__all__ = [
    'BaseConverter', 'ConversionIssue', 'QuoteData', 'QuoteItem', 'Transaction',
    'RawQuoteData', 'RawQuoteItem', 'RawTransaction',
    'TransactionConverter', 'convert_to_transaction',
    'QuoteConverter', 'convert_to_quote_data',
]
