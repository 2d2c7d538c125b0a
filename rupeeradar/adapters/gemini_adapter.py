"""Google Gemini LLM adapter."""
import google.generativeai as genai

from rupeeradar.adapters.base import LLMAdapter
from rupeeradar.config import settings
from rupeeradar.models.classification import CategoryPrediction, VerificationResult


class GeminiAdapter(LLMAdapter):
    """Google Gemini API adapter."""

    def __init__(self, model_id: str = "gemini-2.0-flash-001", **kwargs):
        super().__init__(model_id, **kwargs)
        api_key = kwargs.get("api_key") or settings.google_api_key
        if not api_key:
            raise ValueError("Google API key required")
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model_id)
        self.temperature = kwargs.get("temperature", 0.4)
        self.max_output_tokens = kwargs.get("max_output_tokens", 1024)

    async def _generate(self, prompt: str) -> str:
        generation_config = genai.types.GenerationConfig(
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
        )
        response = await self.model.generate_content_async(
            f"{prompt}\n\nRespond with valid JSON only.",
            generation_config=generation_config,
        )
        return response.text

    async def verify_transaction(self, prompt: str) -> VerificationResult:
        """Verify an SMS using Gemini API."""
        try:
            content = await self._generate(prompt)
            return self.verification_from_data(self.parse_json_content(content))
        except Exception as e:
            raise RuntimeError(f"Gemini API error: {str(e)}")

    async def predict_category(self, prompt: str) -> CategoryPrediction:
        """Categorize a transaction using Gemini API."""
        try:
            content = await self._generate(prompt)
            return self.prediction_from_data(self.parse_json_content(content))
        except Exception as e:
            raise RuntimeError(f"Gemini API error: {str(e)}")
