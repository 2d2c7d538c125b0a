"""Tests for rule-based and AI-assisted categorization."""
import pytest

from rupeeradar.adapters.mock import MockLLMAdapter
from rupeeradar.models.transaction import Transaction
from rupeeradar.services.categorization import (
    CATEGORY_NAMES,
    CategoryEngine,
    categorize_sync,
    find_merchant_category,
    get_category_by_name,
)


@pytest.mark.parametrize("description,category", [
    ("AMAZON", "Shopping"),
    ("Swiggy Order - Food Delivery", "Food & Dining"),
    ("Uber Ride", "Transport"),
    ("Rent Payment", "Home"),
    ("Netflix Subscription", "Entertainment"),
    ("Salary Credit", "Income"),
    ("Ramesh Kumar", "Others"),
    ("", "Others"),
])
def test_categorize_sync(description, category):
    """Test merchant table and keyword rules."""
    assert categorize_sync(description) == category


def test_merchant_table_beats_keywords():
    """Test known merchants are checked before keyword lists."""
    assert find_merchant_category("MakeMyTrip hotel booking") == "Travel"
    assert categorize_sync("Apollo pharmacy store") == "Health"


def test_get_category_by_name():
    """Test lookup ignores case."""
    assert get_category_by_name("food & dining").name == "Food & Dining"
    assert get_category_by_name("Crypto") is None
    assert CATEGORY_NAMES[-1] == "Others"


@pytest.mark.asyncio
async def test_ai_fallback_used_for_unmatched_description():
    """Test the adapter is consulted when rules give Others."""
    adapter = MockLLMAdapter("mock:gemini")
    engine = CategoryEngine(adapter)

    category = await engine.categorize("Ramesh Kumar", 500.0)

    assert category == "Shopping"
    assert len(adapter.prompts) == 1
    assert "Ramesh Kumar" in adapter.prompts[0]
    assert "Others" not in adapter.prompts[0].split("categories:")[1].split(".")[0]


@pytest.mark.asyncio
async def test_ai_fallback_skipped_when_rules_match():
    """Test a rule match never calls the adapter."""
    adapter = MockLLMAdapter("mock:gemini")
    engine = CategoryEngine(adapter)

    assert await engine.categorize("AMAZON", 1499.0) == "Shopping"
    assert adapter.prompts == []


@pytest.mark.asyncio
async def test_ai_fallback_needs_amount():
    """Test the adapter is not consulted without an amount."""
    adapter = MockLLMAdapter("mock:gemini")
    engine = CategoryEngine(adapter)

    assert await engine.categorize("Ramesh Kumar") == "Others"
    assert adapter.prompts == []


@pytest.mark.asyncio
async def test_low_confidence_prediction_ignored():
    """Test predictions at or below the threshold are dropped."""
    engine = CategoryEngine(MockLLMAdapter("mock:unsure"))
    assert await engine.categorize("Ramesh Kumar", 500.0) == "Others"

    engine = CategoryEngine(MockLLMAdapter("mock:gemini"), confidence_threshold=0.85)
    assert await engine.categorize("Ramesh Kumar", 500.0) == "Others"


@pytest.mark.asyncio
async def test_adapter_failure_falls_back():
    """Test adapter errors yield Others instead of raising."""
    engine = CategoryEngine(MockLLMAdapter("mock:gemini", fail=True))

    prediction = await engine.predict("Ramesh Kumar", 500.0)
    assert prediction.failed
    assert prediction.category == "Others"
    assert await engine.categorize("Ramesh Kumar", 500.0) == "Others"


@pytest.mark.asyncio
async def test_unknown_category_rejected():
    """Test categories outside the known list are not accepted."""
    adapter = MockLLMAdapter("mock:gemini", category={"category": "Crypto", "confidence": 0.99})
    engine = CategoryEngine(adapter)

    prediction = await engine.predict("Ramesh Kumar", 500.0)
    assert prediction.failed
    assert await engine.categorize("Ramesh Kumar", 500.0) == "Others"


@pytest.mark.asyncio
async def test_prediction_canonicalizes_case():
    """Test category names from the adapter are matched case-insensitively."""
    adapter = MockLLMAdapter("mock:gemini", category={"category": "travel", "confidence": 0.9})
    engine = CategoryEngine(adapter)

    assert await engine.categorize("Ramesh Kumar", 500.0) == "Travel"


@pytest.mark.asyncio
async def test_categorize_transaction(categorizer):
    """Test the category is attached to a copy of the transaction."""
    tx = Transaction(amount=450, date="18-04-23", description="UBER")

    categorized = await categorizer.categorize_transaction(tx)

    assert categorized.category == "Transport"
    assert categorized.id == tx.id
    assert tx.category is None
