"""Date helpers for bank-local SMS dates."""
import re
from datetime import date, datetime
from typing import Optional

from dateutil import parser as date_parser


MONTHS = {
    "jan": "01", "feb": "02", "mar": "03", "apr": "04", "may": "05", "jun": "06",
    "jul": "07", "aug": "08", "sep": "09", "oct": "10", "nov": "11", "dec": "12",
}

COMPACT_DATE_RE = re.compile(r"^(\d{2})([A-Za-z]{3})(\d{2})$")
NUMERIC_DATE_RE = re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{2}|\d{4})$")
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def format_date_from_text(date_str: str) -> str:
    """
    Convert a compact SMS date like "18Feb25" to "18-02-25".

    Raises:
        ValueError: If the token is not day + three-letter month + 2-digit year
    """
    match = COMPACT_DATE_RE.match(date_str.strip())
    if not match:
        raise ValueError(f"Not a compact date: {date_str!r}")

    day, month_name, year = match.groups()
    month = MONTHS.get(month_name.lower())
    if month is None:
        raise ValueError(f"Unknown month name: {month_name!r}")
    return f"{day}-{month}-{year}"


def today_string() -> str:
    """Today's date in the dd-mm-yy form used by bank SMS."""
    return date.today().strftime("%d-%m-%y")


def standardize_date(date_str: str) -> str:
    """
    Convert "DD-MM-YY" / "DD/MM/YYYY" to "YYYY-MM-DD".

    Strings already in ISO form, or in an unrecognized form, are returned as is.
    """
    if ISO_DATE_RE.match(date_str):
        return date_str[:10]

    match = NUMERIC_DATE_RE.match(date_str.strip())
    if not match:
        return date_str

    day, month, year = match.groups()
    full_year = f"20{year}" if len(year) == 2 else year
    return f"{full_year}-{month.zfill(2)}-{day.zfill(2)}"


def parse_transaction_date(date_str: str) -> Optional[date]:
    """
    Derive a calendar date from a stored transaction date.

    Supports "DD-MM-YY", "DD/MM/YYYY", compact "18Feb25", and ISO dates or
    timestamps. Returns None if the string cannot be interpreted.
    """
    if not date_str:
        return None

    s = date_str.strip()
    try:
        if COMPACT_DATE_RE.match(s):
            s = format_date_from_text(s)

        if NUMERIC_DATE_RE.match(s):
            return datetime.strptime(standardize_date(s), "%Y-%m-%d").date()

        if ISO_DATE_RE.match(s):
            return date_parser.isoparse(s).date()
    except ValueError:
        return None

    return None


def format_transaction_date(date_str: str) -> str:
    """Format "DD-MM-YY" as "DD/MM/YYYY" for display."""
    parsed = parse_transaction_date(date_str)
    if parsed is None:
        return date_str
    return parsed.strftime("%d/%m/%Y")
