"""Anthropic Claude LLM adapter."""
from anthropic import AsyncAnthropic

from rupeeradar.adapters.base import LLMAdapter
from rupeeradar.config import settings
from rupeeradar.models.classification import CategoryPrediction, VerificationResult


class AnthropicAdapter(LLMAdapter):
    """Anthropic Claude API adapter."""

    def __init__(self, model_id: str = "claude-3-5-haiku-latest", **kwargs):
        super().__init__(model_id, **kwargs)
        api_key = kwargs.get("api_key") or settings.anthropic_api_key
        if not api_key:
            raise ValueError("Anthropic API key required")
        self.client = AsyncAnthropic(api_key=api_key)

    async def _complete(self, prompt: str) -> str:
        response = await self.client.messages.create(
            model=self.model_id,
            max_tokens=512,
            temperature=0.2,
            messages=[
                {"role": "user", "content": f"{prompt}\n\nRespond with valid JSON only."}
            ],
        )
        return response.content[0].text

    async def verify_transaction(self, prompt: str) -> VerificationResult:
        """Verify an SMS using Anthropic API."""
        try:
            content = await self._complete(prompt)
            return self.verification_from_data(self.parse_json_content(content))
        except Exception as e:
            raise RuntimeError(f"Anthropic API error: {str(e)}")

    async def predict_category(self, prompt: str) -> CategoryPrediction:
        """Categorize a transaction using Anthropic API."""
        try:
            content = await self._complete(prompt)
            return self.prediction_from_data(self.parse_json_content(content))
        except Exception as e:
            raise RuntimeError(f"Anthropic API error: {str(e)}")
