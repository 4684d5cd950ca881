"""
Bridges between pandas DataFrames and broker records.
"""
import numbers
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import pandas as pd

from config import TRANSACTION_COLUMNS
from converters.base_converter import QuoteData, Transaction
from converters.raw_records import RawTransaction

TRANSACTION_FRAME_COLUMNS: List[str] = [
    'execution_date', 'type', 'shares', 'price', 'exchange', 'fees'
]


def raw_transactions_from_frame(
    df: pd.DataFrame,
    columns: Optional[Dict[str, str]] = None
) -> List[RawTransaction]:
    """
    Build raw transactions from the rows of a DataFrame.

    Args:
        df: One transaction per row
        columns: Mapping of RawTransaction field to column name
                 (default: the feed's camelCase headers)

    Returns:
        List of RawTransaction objects, in row order
    """
    mapping = {**TRANSACTION_COLUMNS, **(columns or {})}
    missing = [col for col in mapping.values() if col not in df.columns]
    if missing:
        raise KeyError(f"Missing transaction columns: {', '.join(missing)}")

    raw_transactions = []
    for _, row in df.iterrows():
        raw_transactions.append(RawTransaction(
            **{field_name: _cell(row.get(col)) for field_name, col in mapping.items()}
        ))

    return raw_transactions


def transactions_to_frame(transactions: List[Transaction]) -> pd.DataFrame:
    """
    Tabulate canonical transactions, one row each.

    Args:
        transactions: Canonical transactions

    Returns:
        DataFrame with one column per Transaction field
    """
    return pd.DataFrame(
        [txn.to_dict() for txn in transactions],
        columns=TRANSACTION_FRAME_COLUMNS,
    )


def quote_data_to_frame(quote_data: QuoteData) -> pd.DataFrame:
    """
    Tabulate a quote series as date/price rows in feed order.
    """
    return pd.DataFrame({
        'date': [item.date for item in quote_data.items],
        'price': [item.price for item in quote_data.items],
    })


def _cell(value: Any) -> Any:
    # Empty cells become "" so the field parser reports them
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    if isinstance(value, (datetime, date)):
        return value.strftime("%Y-%m-%d")
    # Numeric cells stay numeric, "1.234" in text form would be ambiguous
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return float(value)
    return str(value)
