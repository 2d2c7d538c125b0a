"""Result wrappers for best-effort AI enrichment calls."""
from typing import Optional

from pydantic import BaseModel, Field


class VerificationResult(BaseModel):
    """Answer to "is this SMS really a transaction?"."""

    is_transaction: bool
    confidence: float = Field(..., ge=0.0, le=1.0)
    reason: Optional[str] = None
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def fail_open(cls, error: str) -> "VerificationResult":
        """Fallback when the check could not run: assume it is a transaction."""
        return cls(is_transaction=True, confidence=0.0, error=error)


class CategoryPrediction(BaseModel):
    """Category suggested by an LLM for a transaction description."""

    category: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def fallback(cls, error: Optional[str] = None) -> "CategoryPrediction":
        return cls(category="Others", confidence=0.0, error=error)
