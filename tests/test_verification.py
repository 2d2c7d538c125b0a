"""Tests for the LLM transaction check and adapter helpers."""
import pytest

from rupeeradar.adapters.base import LLMAdapter
from rupeeradar.adapters.factory import adapter_from_settings, get_llm_adapter
from rupeeradar.adapters.mock import MockLLMAdapter
from rupeeradar.config import settings
from rupeeradar.services.verification import TransactionVerifier
from tests.conftest import HDFC_DEBIT_SMS


@pytest.mark.asyncio
async def test_confident_transaction_not_skipped():
    """Test a positive answer keeps the message."""
    verifier = TransactionVerifier(MockLLMAdapter("mock:gemini"))

    result = await verifier.verify(HDFC_DEBIT_SMS)

    assert result.is_transaction
    assert not result.failed
    assert not verifier.should_skip(result)
    assert HDFC_DEBIT_SMS in verifier.adapter.prompts[0]


@pytest.mark.asyncio
async def test_confident_rejection_skipped():
    """Test a confident negative answer skips the message."""
    verifier = TransactionVerifier(MockLLMAdapter("mock:skeptic"))

    result = await verifier.verify("Get 10% cashback on your next recharge!")

    assert not result.is_transaction
    assert verifier.should_skip(result)


@pytest.mark.asyncio
async def test_unsure_rejection_not_skipped():
    """Test a negative answer below the threshold keeps the message."""
    verifier = TransactionVerifier(MockLLMAdapter("mock:unsure"))

    result = await verifier.verify(HDFC_DEBIT_SMS)

    assert not result.is_transaction
    assert not verifier.should_skip(result)


@pytest.mark.asyncio
async def test_verification_fails_open():
    """Test adapter errors are treated as transactions."""
    verifier = TransactionVerifier(MockLLMAdapter("mock:gemini", fail=True))

    result = await verifier.verify(HDFC_DEBIT_SMS)

    assert result.failed
    assert result.is_transaction
    assert result.confidence == 0.0
    assert not verifier.should_skip(result)


def test_parse_json_content():
    """Test JSON is pulled out of markdown code blocks."""
    assert LLMAdapter.parse_json_content('{"a": 1}') == {"a": 1}
    assert LLMAdapter.parse_json_content('```json\n{"a": 2}\n```') == {"a": 2}
    assert LLMAdapter.parse_json_content('Sure:\n```\n{"a": 3}\n```') == {"a": 3}


def test_confidence_is_clamped():
    """Test out-of-range confidences are clamped to 0..1."""
    result = LLMAdapter.verification_from_data({"is_transaction": False, "confidence": 1.7})
    prediction = LLMAdapter.prediction_from_data({"category": " Travel ", "confidence": -0.2})

    assert result.confidence == 1.0
    assert prediction.confidence == 0.0
    assert prediction.category == "Travel"


def test_factory_routes_mock_models():
    """Test mock model ids get the mock adapter and unknown ids are refused."""
    assert isinstance(get_llm_adapter("mock:skeptic"), MockLLMAdapter)

    with pytest.raises(ValueError):
        get_llm_adapter("llama-3-70b")


def test_adapter_from_settings_without_key(monkeypatch):
    """Test a provider without an API key disables AI features."""
    monkeypatch.setattr(settings, "llm_model_id", "gpt-4o-mini")
    monkeypatch.setattr(settings, "openai_api_key", "")

    assert adapter_from_settings() is None


def test_adapter_from_settings_mock(monkeypatch):
    """Test mock model ids need no key."""
    monkeypatch.setattr(settings, "llm_model_id", "mock:unsure")

    adapter = adapter_from_settings()
    assert isinstance(adapter, MockLLMAdapter)
    assert adapter.model_id == "mock:unsure"


def test_adapter_from_settings_unknown_model(monkeypatch):
    """Test an unrecognized model id disables AI instead of faking answers."""
    monkeypatch.setattr(settings, "llm_model_id", "llama-3-70b")

    assert adapter_from_settings() is None
