"""Inbox message models."""
from typing import Optional, Union

from pydantic import BaseModel, Field


class SMSMessage(BaseModel):
    """One row read from a device SMS inbox."""

    id: str = Field(..., alias="_id", description="Inbox message identifier")
    address: str = Field("", description="Sender address or short code, e.g. VM-HDFCBK")
    body: str = Field("", description="Message text")
    date: Optional[Union[int, str]] = Field(None, description="Received timestamp (epoch ms)")

    class Config:
        populate_by_name = True
        coerce_numbers_to_str = True


class InboxAvailability(BaseModel):
    """Whether inbox reading is possible on this host."""

    available: bool
    reason: Optional[str] = None
