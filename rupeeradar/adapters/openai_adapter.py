"""OpenAI LLM adapter."""
from openai import AsyncOpenAI

from rupeeradar.adapters.base import LLMAdapter
from rupeeradar.config import settings
from rupeeradar.models.classification import CategoryPrediction, VerificationResult


class OpenAIAdapter(LLMAdapter):
    """OpenAI API adapter."""

    SYSTEM_PROMPT = "You classify Indian bank SMS messages. Always respond with valid JSON."

    def __init__(self, model_id: str = "gpt-4o-mini", **kwargs):
        super().__init__(model_id, **kwargs)
        api_key = kwargs.get("api_key") or settings.openai_api_key
        if not api_key:
            raise ValueError("OpenAI API key required")
        self.client = AsyncOpenAI(api_key=api_key)

    async def _complete(self, prompt: str) -> str:
        response = await self.client.chat.completions.create(
            model=self.model_id,
            messages=[
                {"role": "system", "content": self.SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=0.2,
            response_format={"type": "json_object"},
        )
        return response.choices[0].message.content

    async def verify_transaction(self, prompt: str) -> VerificationResult:
        """Verify an SMS using OpenAI API."""
        try:
            content = await self._complete(prompt)
            return self.verification_from_data(self.parse_json_content(content))
        except Exception as e:
            raise RuntimeError(f"OpenAI API error: {str(e)}")

    async def predict_category(self, prompt: str) -> CategoryPrediction:
        """Categorize a transaction using OpenAI API."""
        try:
            content = await self._complete(prompt)
            return self.prediction_from_data(self.parse_json_content(content))
        except Exception as e:
            raise RuntimeError(f"OpenAI API error: {str(e)}")
