"""
SMS to Transaction extraction.

extract_transaction() tries the known bank templates in order and falls back to
a generic heuristic extractor. It performs no I/O and never raises for
malformed input: anything it cannot read yields None.
"""
import logging
import re
from typing import Optional

from rupeeradar.models.transaction import Transaction, TransactionType
from rupeeradar.parsing.patterns import BANK_PATTERNS, parse_amount
from rupeeradar.parsing.senders import bank_from_text
from rupeeradar.utils.dates import format_date_from_text, today_string

logger = logging.getLogger(__name__)

NUMBER = r"(\d[\d,]*(?:\.\d+)?)"

CURRENCY_AMOUNT_RE = re.compile(rf"(?:\b(?:INR|Rs\.?)|₹)\s?{NUMBER}", re.IGNORECASE)
DEBITED_BY_RE = re.compile(rf"debited by\s?{NUMBER}", re.IGNORECASE)

COMPACT_DATE_RE = re.compile(r"\b(\d{2}[A-Za-z]{3}\d{2})\b")
NUMERIC_DATE_RE = re.compile(r"\b(\d{2})[/-](\d{2})[/-](\d{4}|\d{2})\b")

RECIPIENT_RE = re.compile(
    r"\b(?:trf|transferred|transfer|paid|sent)\s+to\s+(?:VPA\s+)?(.+?)"
    r"(?=\s+(?:refno|ref\s?no|ref|on|via|from|avl|bal|using)\b|\.\s|\.?$)",
    re.IGNORECASE,
)

DEBIT_RE = re.compile(r"\b(?:debited|sent|paid|spent|withdraw(?:n|al)?|purchased?)\b", re.IGNORECASE)
CREDIT_RE = re.compile(r"\b(?:credited|received|refund(?:ed)?|cashback)\b", re.IGNORECASE)

WHITESPACE_RE = re.compile(r"\s+")

DESCRIPTION_LIMIT = 50
RECIPIENT_LIMIT = 60


def normalize_sms(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return WHITESPACE_RE.sub(" ", text or "").strip()


def classify_type(text: str) -> TransactionType:
    """Debit keywords win, then credit keywords; ambiguous text is a debit."""
    if DEBIT_RE.search(text):
        return TransactionType.DEBIT
    if CREDIT_RE.search(text):
        return TransactionType.CREDIT
    return TransactionType.DEBIT


def _find_date(text: str) -> str:
    compact = COMPACT_DATE_RE.search(text)
    if compact:
        try:
            return format_date_from_text(compact.group(1))
        except ValueError:
            pass

    numeric = NUMERIC_DATE_RE.search(text)
    if numeric:
        day, month, year = numeric.groups()
        return f"{day}-{month}-{year[-2:]}"

    return today_string()


def _describe(text: str) -> str:
    recipient = RECIPIENT_RE.search(text)
    if recipient:
        fragment = recipient.group(1).strip(" .,;:-")[:RECIPIENT_LIMIT].strip()
        if fragment:
            return f"Payment to {fragment}"

    if len(text) > DESCRIPTION_LIMIT:
        return text[:DESCRIPTION_LIMIT] + "..."
    return text


def extract_generic_transaction(sms_text: str) -> Optional[Transaction]:
    """
    Heuristic extraction for messages that match no known template.

    Needs a currency-marked amount ("INR 250", "Rs.250", "₹250") or the
    "debited by 250" phrasing; without either the text is not a transaction.
    """
    text = normalize_sms(sms_text)
    if not text:
        return None

    amount_match = CURRENCY_AMOUNT_RE.search(text) or DEBITED_BY_RE.search(text)
    if not amount_match:
        return None

    try:
        return Transaction(
            amount=parse_amount(amount_match.group(1)),
            date=_find_date(text),
            description=_describe(text),
            type=classify_type(text),
            bank=bank_from_text(text),
            original_sms=text,
        )
    except ValueError as e:
        logger.debug("Generic extraction rejected amount %r: %s", amount_match.group(1), e)
        return None


def extract_transaction(sms_text: str) -> Optional[Transaction]:
    """
    Parse one SMS into a Transaction.

    Args:
        sms_text: Raw message text

    Returns:
        Transaction from the first matching bank template, else from the
        generic extractor, else None
    """
    if not isinstance(sms_text, str):
        return None

    cleaned = normalize_sms(sms_text)
    if not cleaned:
        return None

    for pattern in BANK_PATTERNS:
        match = pattern.match(cleaned)
        if not match:
            continue
        try:
            transaction = pattern.extract(match)
        except ValueError as e:
            logger.debug("Template %s matched but failed to parse: %s", pattern.name, e)
            continue
        return transaction.with_original_sms(cleaned)

    return extract_generic_transaction(cleaned)
