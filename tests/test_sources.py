"""Tests for inbox sources."""
import json

import pytest

from rupeeradar.models.sms import SMSMessage
from rupeeradar.sources.inbox import JsonlInbox, MemoryInbox, check_inbox_availability


@pytest.fixture
def inbox_file(tmp_path):
    path = tmp_path / "inbox.jsonl"
    rows = [
        {"_id": "1", "address": "VM-HDFCBK", "body": "older", "date": 1700000000000},
        {"id": 2, "sender": "AD-SBIINB", "body": "newest", "date": 1700000500000},
        "not json at all",
        {"_id": "3", "address": "+919812345678", "body": "middle", "date": "1700000200000"},
        {"address": "missing id"},
    ]
    with open(path, "w") as f:
        for row in rows:
            f.write((row if isinstance(row, str) else json.dumps(row)) + "\n")
        f.write("\n")
    return path


@pytest.mark.asyncio
async def test_jsonl_inbox_newest_first(inbox_file):
    """Test rows are ordered by timestamp, newest first, skipping bad lines."""
    inbox = JsonlInbox(inbox_file)

    messages = await inbox.list_messages()

    assert [m.id for m in messages] == ["2", "3", "1"]
    assert messages[0].address == "AD-SBIINB"


@pytest.mark.asyncio
async def test_jsonl_inbox_max_count(inbox_file):
    """Test the batch size limit."""
    messages = await JsonlInbox(inbox_file).list_messages(max_count=1)
    assert [m.body for m in messages] == ["newest"]


def test_jsonl_inbox_missing_file(tmp_path):
    """Test a missing export is reported as unavailable."""
    availability = JsonlInbox(tmp_path / "nope.jsonl").availability()

    assert not availability.available
    assert "nope.jsonl" in availability.reason


@pytest.mark.asyncio
async def test_memory_inbox():
    """Test pushed messages come back newest first."""
    inbox = MemoryInbox()
    inbox.push({"_id": "a", "address": "VM-HDFCBK", "body": "first"})
    inbox.push(SMSMessage(id="b", body="second"))

    messages = await inbox.list_messages(max_count=5)

    assert [m.id for m in messages] == ["b", "a"]
    assert inbox.reads == 1


def test_check_inbox_availability():
    """Test availability for configured and missing sources."""
    assert check_inbox_availability(MemoryInbox()).available
    assert not check_inbox_availability(MemoryInbox(available=False)).available
    missing = check_inbox_availability(None)
    assert not missing.available
    assert missing.reason
