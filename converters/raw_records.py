"""
Raw records as exported by the broker, before any parsing.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Union


@dataclass
class RawTransaction:
    """
    An order execution row, every field still text.
    """
    execution_date: str
    type: str
    shares: str
    price: str
    total_fees: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RawTransaction':
        """Create a raw transaction from the feed's camelCase keys."""
        return cls(
            execution_date=data.get('executionDate', ''),
            type=data.get('type', ''),
            shares=data.get('shares', ''),
            price=data.get('price', ''),
            total_fees=data.get('totalFees', ''),
        )


@dataclass
class RawQuoteItem:
    """A single point of a raw quote series."""
    date: Union[str, date]
    price: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RawQuoteItem':
        return cls(date=data.get('date', ''), price=data.get('price', ''))


@dataclass
class RawQuoteData:
    """
    A raw quote series for one instrument on one exchange.
    """
    name: str
    nsin: str
    exchange: str
    items: List[RawQuoteItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RawQuoteData':
        """Create raw quote data, including its items, from a dictionary."""
        return cls(
            name=data.get('name', ''),
            nsin=data.get('nsin', ''),
            exchange=data.get('exchange', ''),
            items=[RawQuoteItem.from_dict(item) for item in data.get('items', [])],
        )
