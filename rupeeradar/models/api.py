"""Request/response and reporting models."""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from rupeeradar.models.transaction import Transaction


class SMSParseRequest(BaseModel):
    """Pasted SMS text for the manual path."""

    text: str = Field(..., description="Raw SMS text as pasted by the user")


class ClearResponse(BaseModel):
    removed: int
    message: str


class SeedResponse(BaseModel):
    added: int
    message: str


class CategoryTotal(BaseModel):
    """Spending total for one category."""

    category: str
    total: float
    count: int
    percentage: float = Field(..., description="Share of the overall total, 0-100")


class PollStatus(str, Enum):
    SKIPPED_IN_FLIGHT = "skipped_in_flight"
    EMPTY = "empty"
    UNCHANGED = "unchanged"
    PROCESSED = "processed"
    FAILED = "failed"


class PollResult(BaseModel):
    """Outcome of one inbox polling tick."""

    status: PollStatus
    fetched: int = 0
    candidates: int = 0
    transactions: List[Transaction] = Field(default_factory=list)
    error: Optional[str] = None


class InboxStatus(BaseModel):
    available: bool
    reason: Optional[str] = None
    listening: bool = False
    state: str = "idle"
    last_seen_id: Optional[str] = None


class SpendingSummary(BaseModel):
    """Category totals plus ids of unusually large debits."""

    total_debit: float
    total_credit: float
    categories: List[CategoryTotal] = Field(default_factory=list)
    anomalies: List[str] = Field(default_factory=list)
