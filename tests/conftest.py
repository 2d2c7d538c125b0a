"""Shared fixtures."""
import pytest

from rupeeradar.models.sms import SMSMessage
from rupeeradar.services.categorization import CategoryEngine
from rupeeradar.sources.inbox import MemoryInbox
from rupeeradar.storage.database import TransactionStore

HDFC_DEBIT_SMS = (
    "HDFC Bank: INR 1,499.00 debited from a/c XX1234 on 12-04-23 AMAZON. "
    "Avl bal: INR 24,599.35"
)
SBI_UPI_SMS = (
    "Dear UPI user A/C X4963 debited by 60.0 on date 18Feb25 trf to Jamal Store "
    "Refno 541567581752"
)
OTP_SMS = "Your OTP is 493021. Do not share it with anyone."


@pytest.fixture
def store(tmp_path):
    """Transaction store backed by a temporary SQLite file."""
    return TransactionStore(db_path=str(tmp_path / "test.db"))


@pytest.fixture
def categorizer():
    """Rule-only categorizer."""
    return CategoryEngine()


@pytest.fixture
def inbox():
    """Empty in-memory inbox."""
    return MemoryInbox()


@pytest.fixture
def make_sms():
    """Factory for inbox messages with sequential timestamps."""
    counter = {"n": 0}

    def _make(body: str, address: str = "VM-HDFCBK", message_id: str = None) -> SMSMessage:
        counter["n"] += 1
        return SMSMessage(
            id=message_id or f"sms-{counter['n']}",
            address=address,
            body=body,
            date=1700000000000 + counter["n"],
        )

    return _make
