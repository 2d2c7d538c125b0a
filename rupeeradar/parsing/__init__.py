from .patterns import BANK_PATTERNS, BankPattern, parse_amount
from .extractor import (
    classify_type,
    extract_generic_transaction,
    extract_transaction,
    normalize_sms,
)
from .senders import (
    FINANCIAL_SENDERS,
    bank_from_sender,
    bank_from_text,
    is_financial_sender,
    is_transaction_sms,
)

__all__ = [
    "BANK_PATTERNS",
    "BankPattern",
    "parse_amount",
    "classify_type",
    "extract_generic_transaction",
    "extract_transaction",
    "normalize_sms",
    "FINANCIAL_SENDERS",
    "bank_from_sender",
    "bank_from_text",
    "is_financial_sender",
    "is_transaction_sms",
]
