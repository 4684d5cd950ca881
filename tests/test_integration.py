"""
Integration tests for batch conversion, DataFrame bridges and configuration.
"""
import logging
import os
import sys
import unittest
from datetime import datetime, timezone

import pandas as pd

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import configure_logging, get_config
from converters.frames import (
    quote_data_to_frame, raw_transactions_from_frame, transactions_to_frame
)
from converters.quote_converter import convert_to_quote_data
from converters.raw_records import RawQuoteData, RawTransaction
from converters.transaction_converter import TransactionConverter
from normalizer.date_parser import InvalidDateError
from normalizer.transaction_type import TransactionType


FEED_ROWS = [
    {'executionDate': "02.01.2023", 'type': "Kauf", 'shares': "10",
     'price': "100,50", 'totalFees': "-4,90"},
    {'executionDate': "31.06.2023", 'type': "Kauf", 'shares': "1",
     'price': "1,00", 'totalFees': "0"},
    {'executionDate': "2023-03-15", 'type': "Verkauf", 'shares': "-10",
     'price': "120,00", 'totalFees': "-4,90"},
    {'executionDate': "2023-03-16", 'type': "Dividende", 'shares': "0",
     'price': "0", 'totalFees': "0"},
]


class TestBatchConversion(unittest.TestCase):
    """Integration tests for converting many records."""

    def setUp(self):
        """Set up raw rows from the feed."""
        self.records = [RawTransaction.from_dict(row) for row in FEED_ROWS]
        self.config = get_config()
        self.original_skip = self.config.get("skip_invalid_records")

    def tearDown(self):
        """Restore configuration."""
        self.config.set("skip_invalid_records", self.original_skip)

    def test_first_failure_propagates(self):
        """Test the default batch mode stops at the first bad record."""
        converter = TransactionConverter()
        with self.assertRaises(InvalidDateError):
            converter.convert_all(self.records, skip_invalid=False)

    def test_skip_invalid_records(self):
        """Test bad records are skipped and reported."""
        converter = TransactionConverter()

        with self.assertLogs('converters.base_converter', level='WARNING') as logs:
            result = converter.convert_all(self.records, skip_invalid=True)

        self.assertEqual([t.type for t in result], [TransactionType.BUY, TransactionType.SELL])
        self.assertEqual([issue.index for issue in converter.issues], [1, 3])
        self.assertEqual(
            [issue.issue_type for issue in converter.issues],
            ["InvalidDateError", "UnknownTransactionTypeError"]
        )
        self.assertEqual(len(logs.records), 2)

    def test_skip_setting_from_config(self):
        """Test convert_all falls back to the skip_invalid_records setting."""
        self.config.set("skip_invalid_records", True)
        result = TransactionConverter().convert_all(self.records)
        self.assertEqual(len(result), 2)

    def test_issues_reset_between_runs(self):
        """Test issues only describe the last run."""
        converter = TransactionConverter()
        converter.convert_all(self.records, skip_invalid=True)
        converter.convert_all(self.records[:1], skip_invalid=True)
        self.assertEqual(converter.issues, [])


class TestFrames(unittest.TestCase):
    """Integration tests for DataFrame bridges."""

    def test_raw_transactions_from_frame(self):
        """Test reading raw rows from a DataFrame."""
        df = pd.DataFrame([FEED_ROWS[0], FEED_ROWS[2]])

        records = raw_transactions_from_frame(df)

        self.assertEqual(records[0], RawTransaction.from_dict(FEED_ROWS[0]))
        self.assertEqual(records[1].shares, "-10")

    def test_empty_cells_become_blank(self):
        """Test NaN cells are passed on as empty strings."""
        df = pd.DataFrame([{**FEED_ROWS[0], 'totalFees': None}])
        records = raw_transactions_from_frame(df)
        self.assertEqual(records[0].total_fees, "")

    def test_custom_columns(self):
        """Test custom column headers."""
        df = pd.DataFrame([{'Datum': "02.01.2023", 'Art': "Kauf", 'Stück': "5",
                            'Kurs': "10,00", 'Gebühren': "-1,00"}])
        records = raw_transactions_from_frame(df, columns={
            'execution_date': 'Datum', 'type': 'Art', 'shares': 'Stück',
            'price': 'Kurs', 'total_fees': 'Gebühren',
        })
        self.assertEqual(records[0].type, "Kauf")
        self.assertEqual(records[0].shares, "5")

    def test_numeric_and_datetime_cells(self):
        """Test numeric and datetime columns convert like their text forms."""
        df = pd.DataFrame({
            'executionDate': pd.to_datetime(["2023-01-02"]),
            'type': ["Verkauf"],
            'shares': [-5],
            'price': [100.5],
            'totalFees': [-1],
        })

        records = raw_transactions_from_frame(df)
        result = TransactionConverter().convert(records[0])

        self.assertEqual(records[0].execution_date, "2023-01-02")
        self.assertEqual(result.execution_date, datetime(2023, 1, 2, tzinfo=timezone.utc))
        self.assertEqual((result.shares, result.price, result.fees), (5.0, 100.5, 1.0))

    def test_all_numeric_frame(self):
        """Test numpy integer cells become plain floats."""
        df = pd.DataFrame({'d': [20230102], 't': [1], 's': [5], 'p': [100], 'f': [-1]})

        records = raw_transactions_from_frame(df, columns={
            'execution_date': 'd', 'type': 't', 'shares': 's',
            'price': 'p', 'total_fees': 'f',
        })

        self.assertEqual(records[0].shares, 5.0)
        self.assertIs(type(records[0].shares), float)
        self.assertEqual(records[0].total_fees, -1.0)

    def test_missing_date_cell(self):
        """Test NaT cells surface as invalid dates."""
        df = pd.DataFrame({
            'executionDate': pd.to_datetime([None]),
            'type': ["Kauf"], 'shares': [1], 'price': [1.0], 'totalFees': [0],
        })
        records = raw_transactions_from_frame(df)
        self.assertEqual(records[0].execution_date, "")
        with self.assertRaises(InvalidDateError):
            TransactionConverter().convert(records[0])

    def test_missing_columns(self):
        """Test a frame without the expected headers is rejected."""
        with self.assertRaises(KeyError):
            raw_transactions_from_frame(pd.DataFrame([{'foo': 1}]))

    def test_frame_round_trip_through_converter(self):
        """Test DataFrame in, converted DataFrame out."""
        df = pd.DataFrame([FEED_ROWS[0], FEED_ROWS[2]])
        transactions = TransactionConverter().convert_all(raw_transactions_from_frame(df))

        out = transactions_to_frame(transactions)

        self.assertEqual(list(out['type']), ["BUY", "SELL"])
        self.assertEqual(list(out['shares']), [10.0, 10.0])
        self.assertEqual(list(out['fees']), [4.9, 4.9])
        self.assertTrue(out['exchange'].isna().all())
        self.assertEqual(out['execution_date'].iloc[0],
                         datetime(2023, 1, 2, tzinfo=timezone.utc))

    def test_quote_data_to_frame(self):
        """Test quote items keep their order in the frame."""
        quote_data = convert_to_quote_data(RawQuoteData.from_dict({
            'name': "Example AG", 'nsin': "A1B2C3", 'exchange': "XETRA",
            'items': [{'date': "2023-01-03", 'price': "2,00"},
                      {'date': "2023-01-02", 'price': "1,00"}],
        }))

        df = quote_data_to_frame(quote_data)

        self.assertEqual(list(df['date']), ["2023-01-03", "2023-01-02"])
        self.assertEqual(list(df['price']), [2.0, 1.0])


class TestConfig(unittest.TestCase):
    """Tests for configuration and logging setup."""

    def test_defaults(self):
        """Test default settings are present."""
        config = get_config()
        self.assertIn(config.get("ambiguous_number_format"), ("european", "international"))
        self.assertIsInstance(config.get("skip_invalid_records"), bool)

    def test_singleton(self):
        """Test get_config returns one shared instance."""
        self.assertIs(get_config(), get_config())

    def test_reload_reads_environment(self):
        """Test reload picks up environment changes."""
        config = get_config()
        previous = os.environ.get("AMBIGUOUS_NUMBER_FORMAT")
        os.environ["AMBIGUOUS_NUMBER_FORMAT"] = "INTERNATIONAL"
        try:
            config.reload()
            self.assertEqual(config.get("ambiguous_number_format"), "international")
        finally:
            if previous is None:
                del os.environ["AMBIGUOUS_NUMBER_FORMAT"]
            else:
                os.environ["AMBIGUOUS_NUMBER_FORMAT"] = previous
            config.reload()

    def test_invalid_number_format_falls_back(self):
        """Test an unknown AMBIGUOUS_NUMBER_FORMAT is replaced by the default."""
        config = get_config()
        previous = os.environ.get("AMBIGUOUS_NUMBER_FORMAT")
        os.environ["AMBIGUOUS_NUMBER_FORMAT"] = "metric"
        try:
            with self.assertLogs('config', level='WARNING'):
                config.reload()
            self.assertEqual(config.get("ambiguous_number_format"), "european")
        finally:
            if previous is None:
                del os.environ["AMBIGUOUS_NUMBER_FORMAT"]
            else:
                os.environ["AMBIGUOUS_NUMBER_FORMAT"] = previous
            config.reload()

    def test_configure_logging(self):
        """Test the root level follows the requested level."""
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging("debug")
            self.assertEqual(root.level, logging.DEBUG)
        finally:
            root.setLevel(previous)


if __name__ == '__main__':
    unittest.main()
