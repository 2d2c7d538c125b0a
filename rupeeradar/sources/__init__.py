from .inbox import InboxSource, MemoryInbox, JsonlInbox, check_inbox_availability

__all__ = ["InboxSource", "MemoryInbox", "JsonlInbox", "check_inbox_availability"]
