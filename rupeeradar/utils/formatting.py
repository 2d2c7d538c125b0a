"""Display formatting for rupee amounts and transaction notifications."""
from rupeeradar.models.transaction import Transaction, TransactionType


def format_inr(amount: float, decimals: int = 0) -> str:
    """
    Format an amount with Indian digit grouping, e.g. 123456.78 -> "₹1,23,457".
    """
    text = f"{abs(amount):.{decimals}f}"
    whole, _, fraction = text.partition(".")

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])

    sign = "-" if amount < 0 else ""
    return f"{sign}₹{whole}" + (f".{fraction}" if fraction else "")


def notification_text(tx: Transaction, max_description: int = 30) -> str:
    """Short "new transaction" line, e.g. "Spent ₹1,499 - AMAZON"."""
    verb = "Spent" if tx.type == TransactionType.DEBIT else "Received"
    description = tx.description[:max_description]
    if len(tx.description) > max_description:
        description += "..."
    return f"{verb} {format_inr(tx.amount)} - {description}"
