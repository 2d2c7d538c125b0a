"""Transaction data models."""
import uuid
import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from rupeeradar.utils.dates import parse_transaction_date


class TransactionType(str, Enum):
    """Direction of money relative to the account."""

    DEBIT = "debit"
    CREDIT = "credit"


def new_transaction_id() -> str:
    return str(uuid.uuid4())


class Transaction(BaseModel):
    """A transaction extracted from one bank SMS. Immutable once created."""

    id: str = Field(default_factory=new_transaction_id)
    amount: float = Field(..., ge=0, description="Amount in INR, always non-negative")
    date: str = Field(..., description="Bank-local date text, e.g. 12-04-23")
    description: str = Field(..., description="Merchant/narrative fragment")
    type: TransactionType = Field(default=TransactionType.DEBIT)
    balance: Optional[float] = Field(None, description="Balance after the transaction, if reported")
    bank: Optional[str] = Field(None, description="Issuing bank or payment service")
    original_sms: Optional[str] = Field(None, description="Whitespace-normalized source text")
    category: Optional[str] = Field(None, description="Category attached after extraction")

    class Config:
        frozen = True
        allow_inf_nan = False
        json_schema_extra = {
            "example": {
                "id": "6f1d3a8e-2b1c-4f7e-9a51-0c2f3e4d5a6b",
                "amount": 1499.0,
                "date": "12-04-23",
                "description": "AMAZON",
                "type": "debit",
                "balance": 24599.35,
                "bank": "HDFC",
                "original_sms": "HDFC Bank: INR 1,499.00 debited from a/c XX1234 on 12-04-23 AMAZON. Avl bal: INR 24,599.35",
                "category": "Shopping",
            }
        }

    def with_category(self, category: str) -> "Transaction":
        return self.model_copy(update={"category": category})

    def with_original_sms(self, text: str) -> "Transaction":
        return self.model_copy(update={"original_sms": text})

    def normalized_date(self) -> Optional[datetime.date]:
        """Calendar date derived from the textual date, if derivable."""
        return parse_transaction_date(self.date)


class TransactionFilter(BaseModel):
    """Filters for querying stored transactions."""

    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    category: Optional[str] = None
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None
    type: Optional[TransactionType] = None
    bank: Optional[str] = None
    search: Optional[str] = None

    def matches(self, tx: Transaction) -> bool:
        if self.start_date or self.end_date:
            tx_date = tx.normalized_date()
            if tx_date is None:
                return False
            if self.start_date and tx_date < self.start_date:
                return False
            if self.end_date and tx_date > self.end_date:
                return False

        if self.category and tx.category != self.category:
            return False
        if self.min_amount is not None and tx.amount < self.min_amount:
            return False
        if self.max_amount is not None and tx.amount > self.max_amount:
            return False
        if self.type and tx.type != self.type:
            return False
        if self.bank and (tx.bank or "").lower() != self.bank.lower():
            return False

        if self.search:
            needle = self.search.lower()
            haystack = f"{tx.description} {tx.original_sms or ''}".lower()
            if needle not in haystack:
                return False

        return True
