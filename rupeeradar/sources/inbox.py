"""
SMS inbox sources.

The device inbox is an external collaborator. InboxSource is the seam the
poller reads through; MemoryInbox serves tests and demos, JsonlInbox reads an
exported inbox dump (one JSON object per line, newest rows anywhere in the
file).
"""
import asyncio
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from rupeeradar.models.sms import InboxAvailability, SMSMessage

logger = logging.getLogger(__name__)


class InboxSource(ABC):
    """Read access to an SMS inbox."""

    name = "inbox"

    @abstractmethod
    def availability(self) -> InboxAvailability:
        """Whether this source can be read on this host."""
        pass

    @abstractmethod
    async def list_messages(self, max_count: int = 20) -> List[SMSMessage]:
        """Most recent messages, newest first."""
        pass


def _sort_key(message: SMSMessage) -> int:
    try:
        return int(message.date)
    except (TypeError, ValueError):
        return 0


class MemoryInbox(InboxSource):
    """In-process inbox; the last pushed message is the newest."""

    name = "memory"

    def __init__(self, messages: Optional[List[SMSMessage]] = None, available: bool = True):
        self._messages: List[SMSMessage] = list(messages or [])
        self._available = available
        self.reads = 0

    def push(self, message: Union[SMSMessage, dict]) -> SMSMessage:
        if isinstance(message, dict):
            message = SMSMessage(**message)
        self._messages.append(message)
        return message

    def availability(self) -> InboxAvailability:
        if not self._available:
            return InboxAvailability(available=False, reason="In-memory inbox disabled")
        return InboxAvailability(available=True)

    async def list_messages(self, max_count: int = 20) -> List[SMSMessage]:
        self.reads += 1
        return list(reversed(self._messages))[:max_count]


class JsonlInbox(InboxSource):
    """Inbox exported to a JSONL file (`_id`/`id`, `address`/`sender`, `body`, `date`)."""

    name = "jsonl"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def availability(self) -> InboxAvailability:
        if not self.path.exists():
            return InboxAvailability(available=False, reason=f"Inbox export not found: {self.path}")
        return InboxAvailability(available=True)

    def _load(self) -> List[SMSMessage]:
        messages = []
        with open(self.path, "r", encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    data = json.loads(line)
                    if "address" not in data and "sender" in data:
                        data["address"] = data["sender"]
                    messages.append(SMSMessage(**data))
                except (json.JSONDecodeError, ValidationError, TypeError) as e:
                    logger.warning("Skipping unreadable inbox line %d in %s: %s", line_no, self.path, e)
        return messages

    async def list_messages(self, max_count: int = 20) -> List[SMSMessage]:
        messages = await asyncio.to_thread(self._load)
        messages.sort(key=_sort_key, reverse=True)
        return messages[:max_count]


def check_inbox_availability(source: Optional[InboxSource]) -> InboxAvailability:
    """Capability check run once at start-up."""
    if source is None:
        return InboxAvailability(available=False, reason="No SMS inbox configured")
    return source.availability()
