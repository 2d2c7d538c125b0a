from .dates import (
    MONTHS,
    format_date_from_text,
    format_transaction_date,
    parse_transaction_date,
    standardize_date,
    today_string,
)

__all__ = [
    "MONTHS",
    "format_date_from_text",
    "format_transaction_date",
    "parse_transaction_date",
    "standardize_date",
    "today_string",
]
