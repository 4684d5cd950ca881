"""
Mapping of broker transaction vocabulary onto canonical operation types.
"""
from enum import Enum

from config import TRANSACTION_TYPE_VOCABULARY


class TransactionType(Enum):
    """Canonical transaction operations."""
    BUY = "BUY"
    SELL = "SELL"


class UnknownTransactionTypeError(ValueError):
    """Raised when a broker token is not part of the known vocabulary."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid raw transaction type: {token}")


def map_transaction_type(token: str) -> TransactionType:
    """
    Map a broker vocabulary token to its canonical type.

    Matching is exact and case-sensitive: "Kauf" is BUY, "kauf" is an error.

    Args:
        token: The raw type token, e.g. "Kauf" or "Verkauf"

    Returns:
        The canonical TransactionType

    Raises:
        UnknownTransactionTypeError: If the token is not recognized
    """
    canonical = TRANSACTION_TYPE_VOCABULARY.get(token) if isinstance(token, str) else None
    if canonical is None:
        raise UnknownTransactionTypeError(token)
    return TransactionType(canonical)
