"""
Known bank SMS templates.

Each BankPattern pairs a compiled regex with a pure extraction function over
that regex's own groups. BANK_PATTERNS is tried top to bottom and the first
match wins, so more specific shapes must come before general ones.
"""
import math
import re
from dataclasses import dataclass
from re import Match, Pattern
from typing import Callable, Optional, Tuple

from rupeeradar.models.transaction import Transaction, TransactionType
from rupeeradar.utils.dates import format_date_from_text


AMOUNT = r"([\d,]+\.?\d*)"
DATE = r"(\d{2}-\d{2}-\d{2})"
COMPACT_DATE = r"(\d{2}[A-Za-z]{3}\d{2})"


def parse_amount(text: str) -> float:
    """
    Parse an amount capture, dropping thousands separators.

    "1,23,456.78" and "123,456.78" both give 123456.78.

    Raises:
        ValueError: If the capture is not a finite, non-negative number
    """
    value = float(text.replace(",", ""))
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"Invalid amount: {text!r}")
    return value


@dataclass(frozen=True)
class BankPattern:
    """One known message shape for one bank or payment service."""

    name: str
    bank: str
    regex: Pattern[str]
    extract: Callable[[Match[str]], Transaction]

    def match(self, text: str) -> Optional[Match[str]]:
        return self.regex.search(text)


def _statement(bank: str, tx_type: TransactionType) -> Callable[[Match[str]], Transaction]:
    """Extractor for (amount, date, description, balance) templates."""

    def extract(m: Match[str]) -> Transaction:
        return Transaction(
            amount=parse_amount(m.group(1)),
            date=m.group(2),
            description=m.group(3).strip(),
            balance=parse_amount(m.group(4)),
            type=tx_type,
            bank=bank,
        )

    return extract


def _sbi_upi(m: Match[str]) -> Transaction:
    return Transaction(
        amount=parse_amount(m.group(2)),
        date=format_date_from_text(m.group(3)),
        description=f"UPI Payment to {m.group(4).strip()}",
        type=TransactionType.DEBIT,
        bank="SBI",
    )


def _sbi_yono(m: Match[str]) -> Transaction:
    return Transaction(
        amount=parse_amount(m.group(1)),
        date=format_date_from_text(m.group(2)),
        description=f"Transfer to {m.group(4).strip()} account XX{m.group(3)}",
        type=TransactionType.DEBIT,
        bank="SBI",
    )


def _icici_card(m: Match[str]) -> Transaction:
    return Transaction(
        amount=parse_amount(m.group(1)),
        date=m.group(2),
        description=m.group(3).strip(),
        type=TransactionType.DEBIT,
        bank="ICICI",
    )


def _paytm(m: Match[str]) -> Transaction:
    return Transaction(
        amount=parse_amount(m.group(1)),
        date=m.group(3),
        description=f"Paid to {m.group(2).strip()}",
        type=TransactionType.DEBIT,
        bank="PayTM",
    )


def _google_pay(m: Match[str]) -> Transaction:
    return Transaction(
        amount=parse_amount(m.group(1)),
        date=m.group(3),
        description=f"Sent to {m.group(2).strip()}",
        type=TransactionType.DEBIT,
        bank="GooglePay",
    )


def _compile(pattern: str) -> Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


BANK_PATTERNS: Tuple[BankPattern, ...] = (
    BankPattern(
        name="hdfc_debit",
        bank="HDFC",
        regex=_compile(
            rf"HDFC Bank: INR {AMOUNT} debited from a/c XX\d+ on {DATE} (.*?)\. Avl bal: INR {AMOUNT}"
        ),
        extract=_statement("HDFC", TransactionType.DEBIT),
    ),
    BankPattern(
        name="hdfc_credit",
        bank="HDFC",
        regex=_compile(
            rf"HDFC Bank: INR {AMOUNT} credited to a/c XX\d+ on {DATE} (.*?)\. Avl bal: INR {AMOUNT}"
        ),
        extract=_statement("HDFC", TransactionType.CREDIT),
    ),
    BankPattern(
        name="sbi_debit",
        bank="SBI",
        regex=_compile(
            rf"INR {AMOUNT} debited from A/c no XX\d+ on {DATE} (.*?)\. Bal: INR {AMOUNT}"
        ),
        extract=_statement("SBI", TransactionType.DEBIT),
    ),
    BankPattern(
        name="sbi_credit",
        bank="SBI",
        regex=_compile(
            rf"INR {AMOUNT} credited to A/c no XX\d+ on {DATE} (.*?)\. Bal: INR {AMOUNT}"
        ),
        extract=_statement("SBI", TransactionType.CREDIT),
    ),
    BankPattern(
        name="sbi_upi_debit",
        bank="SBI",
        regex=_compile(
            rf"Dear UPI user A/C X(\d+) debited by ([\d.,]+) on date {COMPACT_DATE} trf to (.*?) Refno (\d+)"
        ),
        extract=_sbi_upi,
    ),
    BankPattern(
        name="sbi_yono_transfer",
        bank="SBI",
        regex=_compile(
            rf"Tranx of Rs\.([\d.,]+) done on {COMPACT_DATE} to a/c no XX(\d+) of (.*?) is complete\. from SBI A/c XX(\d+)"
        ),
        extract=_sbi_yono,
    ),
    BankPattern(
        name="icici_card_spend",
        bank="ICICI",
        regex=_compile(rf"INR {AMOUNT} spent on ICICI Card XX\d+ on {DATE} at (.*?)\."),
        extract=_icici_card,
    ),
    BankPattern(
        name="axis_debit",
        bank="Axis",
        regex=_compile(
            rf"INR {AMOUNT} debited on {DATE} from A/c XX\d+ (.*?)\. Avl Bal INR {AMOUNT}"
        ),
        extract=_statement("Axis", TransactionType.DEBIT),
    ),
    BankPattern(
        name="axis_credit",
        bank="Axis",
        regex=_compile(
            rf"INR {AMOUNT} credited on {DATE} to A/c XX\d+ (.*?)\. Avl Bal INR {AMOUNT}"
        ),
        extract=_statement("Axis", TransactionType.CREDIT),
    ),
    BankPattern(
        name="paytm_upi",
        bank="PayTM",
        regex=_compile(rf"INR {AMOUNT} paid to (.*?) successfully on {DATE}"),
        extract=_paytm,
    ),
    BankPattern(
        name="google_pay_upi",
        bank="GooglePay",
        regex=_compile(rf"INR {AMOUNT} sent to (.*?) via UPI on {DATE}"),
        extract=_google_pay,
    ),
)
