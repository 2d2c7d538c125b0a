"""Optional LLM confidence check for inbox messages."""
import logging
from typing import Optional

from rupeeradar.adapters.base import LLMAdapter
from rupeeradar.config import settings
from rupeeradar.models.classification import VerificationResult
from rupeeradar.services.prompts import PromptBuilder
from rupeeradar.utils.privacy import mask_digits

logger = logging.getLogger(__name__)


class TransactionVerifier:
    """Asks an LLM whether an SMS is really a transaction. Fails open."""

    def __init__(self, adapter: LLMAdapter, confidence_threshold: Optional[float] = None):
        self.adapter = adapter
        self.confidence_threshold = (
            settings.verification_confidence_threshold
            if confidence_threshold is None
            else confidence_threshold
        )
        self.prompt_builder = PromptBuilder()

    async def verify(self, sms_text: str) -> VerificationResult:
        prompt = self.prompt_builder.build_verification_prompt(sms_text)
        try:
            return await self.adapter.verify_transaction(prompt)
        except Exception as e:
            logger.warning(
                "AI verification failed for %r, falling back to pattern matching: %s",
                mask_digits(sms_text)[:60],
                e,
            )
            return VerificationResult.fail_open(str(e))

    def should_skip(self, result: VerificationResult) -> bool:
        """Only a confident "not a transaction" answer skips a message."""
        return not result.is_transaction and result.confidence > self.confidence_threshold
