"""
Canonical records and the abstract base class for record converters.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Union

from config import get_config
from normalizer.transaction_type import TransactionType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transaction:
    """
    Represents a normalized broker transaction.

    Shares and fees are magnitudes; the direction is carried by `type`.
    `exchange` is None when the venue is unknown, which is distinct from a
    known but empty identifier.
    """
    execution_date: date
    type: TransactionType
    shares: float
    price: float
    exchange: Optional[str]
    fees: float

    def __post_init__(self):
        if self.shares < 0:
            raise ValueError(f"shares must be non-negative, got {self.shares}")
        if self.fees < 0:
            raise ValueError(f"fees must be non-negative, got {self.fees}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert transaction to dictionary."""
        return {
            'execution_date': self.execution_date,
            'type': self.type.value,
            'shares': self.shares,
            'price': self.price,
            'exchange': self.exchange,
            'fees': self.fees,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Transaction':
        """Create transaction from dictionary."""
        return cls(
            execution_date=data['execution_date'],
            type=TransactionType(data['type']),
            shares=data['shares'],
            price=data['price'],
            exchange=data.get('exchange'),
            fees=data['fees'],
        )

    @property
    def amount(self) -> float:
        """Traded value before fees."""
        return self.shares * self.price


@dataclass(frozen=True)
class QuoteItem:
    """A single point of a quote series."""
    date: Union[str, date]
    price: float


@dataclass(frozen=True)
class QuoteData:
    """
    A quote series for one instrument on one exchange.

    Items keep the order of the source feed.
    """
    name: str
    nsin: str
    exchange: str
    items: List[QuoteItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert quote data to dictionary."""
        return {
            'name': self.name,
            'nsin': self.nsin,
            'exchange': self.exchange,
            'items': [{'date': item.date, 'price': item.price} for item in self.items],
        }


@dataclass
class ConversionIssue:
    """
    Represents a record that was rejected during batch conversion.
    """
    index: int
    issue_type: str
    message: str
    severity: str = "warning"


class BaseConverter(ABC):
    """
    Abstract base class for raw-to-canonical record converters.
    """

    def __init__(self):
        self._issues: List[ConversionIssue] = []

    @abstractmethod
    def convert(self, raw: Any) -> Any:
        """
        Convert one raw record into its canonical form.

        Raises:
            ValueError: If any field of the record is invalid
        """
        pass

    def convert_all(
        self,
        records: Iterable[Any],
        skip_invalid: Optional[bool] = None
    ) -> List[Any]:
        """
        Convert records in order.

        Args:
            records: Raw records
            skip_invalid: Drop invalid records instead of raising. Defaults to
                the skip_invalid_records setting.

        Returns:
            Canonical records, in input order
        """
        if skip_invalid is None:
            skip_invalid = get_config().get("skip_invalid_records", False)

        self._issues = []
        converted = []

        for index, record in enumerate(records):
            try:
                converted.append(self.convert(record))
            except ValueError as e:
                if not skip_invalid:
                    raise
                logger.warning("Skipping record %d: %s", index, e)
                self._issues.append(ConversionIssue(
                    index=index,
                    issue_type=type(e).__name__,
                    message=str(e),
                ))

        logger.info(
            "Converted %d of %d records (%d skipped)",
            len(converted), len(converted) + len(self._issues), len(self._issues)
        )
        return converted

    @property
    def issues(self) -> List[ConversionIssue]:
        """Get issues recorded by the last convert_all call."""
        return self._issues
