"""Privacy utilities for masking sensitive SMS data in logs."""
import re

from rupeeradar.models.transaction import Transaction


def mask_digits(text: str) -> str:
    """
    Mask digits in SMS text (account numbers, amounts, reference numbers).
    Keeps letters and punctuation so the message shape stays readable.
    """
    return re.sub(r"\d", "*", text or "")


def redact_transaction(tx: Transaction) -> dict:
    """Return a log-safe view of a transaction."""
    return {
        "id": tx.id,
        "amount": tx.amount,
        "type": tx.type.value,
        "date": tx.date,
        "description": mask_digits(tx.description),
        "bank": tx.bank or "***",
        "category": tx.category or "***",
    }
