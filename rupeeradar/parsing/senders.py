"""Heuristics over SMS sender IDs and message bodies."""
import re
from typing import Optional


# Known bank and payment-service sender short codes
FINANCIAL_SENDERS = (
    "HDFCBK", "SBIINB", "ICICIB", "AXISBK", "KOTAK", "YESBNK", "BOIIND",
    "PNBSMS", "CANBNK", "CENTBK", "INDBNK", "UNIONB", "PAYTM", "PYTM",
    "AMAZONPAY", "PHONPE", "GPAY", "UPIBNK",
)

FINANCIAL_SENDER_MARKERS = ("BANK", "CARD", "PAY", "UPI", "ALERT")

# Operator-prefixed sender IDs such as "VM-HDFCBK" or "AD-SBIINB"
SENDER_ID_RE = re.compile(r"[A-Z]{2}-[A-Z]{5,6}")

# (substring of the upper-cased sender, canonical bank name); first hit wins
SENDER_BANKS = (
    (("HDFCBK", "HDFC"), "HDFC"),
    (("SBIINB", "SBI"), "SBI"),
    (("ICICIB", "ICICI"), "ICICI"),
    (("AXISBK", "AXIS"), "Axis"),
    (("KOTAK",), "Kotak"),
    (("YESBNK", "YES"), "Yes Bank"),
    (("PAYTM", "PYTM"), "Paytm"),
    (("AMAZONPAY",), "Amazon Pay"),
    (("PHONPE",), "PhonePe"),
    (("GPAY",), "Google Pay"),
)

BANK_NAME_RE = re.compile(
    r"\b(HDFC|State Bank of India|SBI|ICICI|Axis|Kotak|Paytm|PhonePe|Google Pay|GPay)\b",
    re.IGNORECASE,
)

BANK_NAMES = {
    "hdfc": "HDFC",
    "state bank of india": "SBI",
    "sbi": "SBI",
    "icici": "ICICI",
    "axis": "Axis",
    "kotak": "Kotak",
    "paytm": "Paytm",
    "phonepe": "PhonePe",
    "google pay": "Google Pay",
    "gpay": "Google Pay",
}

TRANSACTION_KEYWORDS = re.compile(
    r"debited|credited|transaction|spent|payment|account|a/c|bank|bal|transfer"
    r"|upi|rupees|rs\.|inr|₹",
    re.IGNORECASE,
)


def is_financial_sender(address: str) -> bool:
    """Check whether a sender ID looks like a bank or payment service."""
    sender = (address or "").upper()
    if not sender:
        return False

    if any(code in sender for code in FINANCIAL_SENDERS):
        return True

    if any(marker in sender for marker in FINANCIAL_SENDER_MARKERS):
        return True

    return bool(SENDER_ID_RE.search(sender))


def bank_from_sender(address: str) -> Optional[str]:
    """Canonical bank/service name for a sender ID, if recognizable."""
    sender = (address or "").upper()
    for needles, bank in SENDER_BANKS:
        if any(needle in sender for needle in needles):
            return bank
    return None


def bank_from_text(text: str) -> Optional[str]:
    """Canonical bank/service name mentioned in a message body."""
    match = BANK_NAME_RE.search(text or "")
    if not match:
        return None
    return BANK_NAMES[match.group(1).lower()]


def is_transaction_sms(text: str) -> bool:
    """Cheap keyword test for messages that look transactional."""
    if not text:
        return False
    return bool(TRANSACTION_KEYWORDS.search(text))
