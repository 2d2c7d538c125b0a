"""Mock LLM adapter for testing without API calls."""
from typing import List

from rupeeradar.adapters.base import LLMAdapter
from rupeeradar.models.classification import CategoryPrediction, VerificationResult


class MockLLMAdapter(LLMAdapter):
    """Mock LLM adapter that returns deterministic responses per model_id."""

    MODEL_RESPONSES = {
        "mock:gemini": {
            "verification": {
                "is_transaction": True,
                "confidence": 0.92,
                "reason": "Reports a debit with amount and account",
            },
            "category": {"category": "Shopping", "confidence": 0.85},
        },
        "mock:skeptic": {
            "verification": {
                "is_transaction": False,
                "confidence": 0.95,
                "reason": "Promotional offer, no money moved",
            },
            "category": {"category": "Others", "confidence": 0.9},
        },
        "mock:unsure": {
            "verification": {
                "is_transaction": False,
                "confidence": 0.6,
                "reason": "Could be an offer or a payment",
            },
            "category": {"category": "Travel", "confidence": 0.4},
        },
    }

    def __init__(self, model_id: str = "mock:gemini", **kwargs):
        super().__init__(model_id, **kwargs)
        defaults = self.MODEL_RESPONSES.get(model_id, self.MODEL_RESPONSES["mock:gemini"])
        self.verification = kwargs.get("verification", defaults["verification"])
        self.category = kwargs.get("category", defaults["category"])
        self.fail = kwargs.get("fail", False)
        self.prompts: List[str] = []

    async def verify_transaction(self, prompt: str) -> VerificationResult:
        """Return the configured verification answer."""
        self.prompts.append(prompt)
        if self.fail:
            raise RuntimeError("Mock API error: verification unavailable")
        return self.verification_from_data(self.verification)

    async def predict_category(self, prompt: str) -> CategoryPrediction:
        """Return the configured category answer."""
        self.prompts.append(prompt)
        if self.fail:
            raise RuntimeError("Mock API error: categorization unavailable")
        return self.prediction_from_data(self.category)
