from .transaction import Transaction, TransactionFilter, TransactionType
from .sms import SMSMessage, InboxAvailability
from .classification import VerificationResult, CategoryPrediction
from .api import (
    SMSParseRequest,
    ClearResponse,
    SeedResponse,
    CategoryTotal,
    PollStatus,
    PollResult,
    InboxStatus,
    SpendingSummary,
)

__all__ = [
    "Transaction",
    "TransactionFilter",
    "TransactionType",
    "SMSMessage",
    "InboxAvailability",
    "VerificationResult",
    "CategoryPrediction",
    "SMSParseRequest",
    "ClearResponse",
    "SeedResponse",
    "CategoryTotal",
    "PollStatus",
    "PollResult",
    "InboxStatus",
    "SpendingSummary",
]
