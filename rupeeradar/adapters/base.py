"""Base LLM adapter interface."""
import json
from abc import ABC, abstractmethod
from typing import Any, Dict

from rupeeradar.models.classification import CategoryPrediction, VerificationResult


class LLMAdapter(ABC):
    """Abstract base class for LLM adapters."""

    def __init__(self, model_id: str, **kwargs):
        """
        Initialize the adapter.

        Args:
            model_id: Identifier for the model (e.g., "gemini-2.0-flash-001", "gpt-4o-mini")
            **kwargs: Additional provider-specific configuration
        """
        self.model_id = model_id
        self.config = kwargs

    @abstractmethod
    async def verify_transaction(self, prompt: str) -> VerificationResult:
        """
        Ask the model whether an SMS describes a completed money movement.

        Args:
            prompt: Verification prompt including the SMS text

        Returns:
            VerificationResult with the model's answer and confidence
        """
        pass

    @abstractmethod
    async def predict_category(self, prompt: str) -> CategoryPrediction:
        """
        Ask the model to pick a spending category for a transaction.

        Args:
            prompt: Categorization prompt listing the allowed categories

        Returns:
            CategoryPrediction with category name and confidence
        """
        pass

    @staticmethod
    def parse_json_content(content: str) -> Dict[str, Any]:
        """Extract a JSON object from a response that may use markdown code blocks."""
        if "```json" in content:
            content = content.split("```json")[1].split("```")[0].strip()
        elif "```" in content:
            content = content.split("```")[1].split("```")[0].strip()
        return json.loads(content)

    @staticmethod
    def verification_from_data(data: Dict[str, Any]) -> VerificationResult:
        return VerificationResult(
            is_transaction=bool(data.get("is_transaction", True)),
            confidence=min(max(float(data.get("confidence", 0.5)), 0.0), 1.0),
            reason=data.get("reason"),
        )

    @staticmethod
    def prediction_from_data(data: Dict[str, Any]) -> CategoryPrediction:
        return CategoryPrediction(
            category=str(data.get("category", "Others")).strip(),
            confidence=min(max(float(data.get("confidence", 0.5)), 0.0), 1.0),
        )
