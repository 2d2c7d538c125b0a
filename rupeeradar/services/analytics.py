"""Spending aggregates over stored transactions."""
import math
from collections import defaultdict
from typing import Dict, List, Optional

from rupeeradar.models.api import CategoryTotal
from rupeeradar.models.transaction import Transaction, TransactionType

ANOMALY_MIN_HISTORY = 5
ANOMALY_Z_SCORE = 2.0


def category_totals(
    transactions: List[Transaction],
    tx_type: Optional[TransactionType] = TransactionType.DEBIT,
) -> List[CategoryTotal]:
    """
    Totals per category, largest first.

    Args:
        transactions: Transactions to aggregate
        tx_type: Only include this direction; None includes both
    """
    totals: Dict[str, float] = defaultdict(float)
    counts: Dict[str, int] = defaultdict(int)

    for tx in transactions:
        if tx_type is not None and tx.type != tx_type:
            continue
        category = tx.category or "Others"
        totals[category] += tx.amount
        counts[category] += 1

    grand_total = sum(totals.values())
    result = [
        CategoryTotal(
            category=category,
            total=round(total, 2),
            count=counts[category],
            percentage=round(total / grand_total * 100, 1) if grand_total else 0.0,
        )
        for category, total in totals.items()
    ]
    result.sort(key=lambda c: c.total, reverse=True)
    return result


def is_anomalous(transaction: Transaction, history: List[Transaction]) -> bool:
    """
    Whether an amount is unusually high for its category.

    Uses a z-score over past transactions in the same category; needs at least
    ANOMALY_MIN_HISTORY of them.
    """
    amounts = [
        tx.amount
        for tx in history
        if tx.category == transaction.category and tx.id != transaction.id
    ]
    if len(amounts) < ANOMALY_MIN_HISTORY:
        return False

    mean = sum(amounts) / len(amounts)
    std_dev = math.sqrt(sum((a - mean) ** 2 for a in amounts) / len(amounts))
    if std_dev == 0:
        return False

    return (transaction.amount - mean) / std_dev > ANOMALY_Z_SCORE
