from .prompts import PromptBuilder
from .categorization import CategoryEngine, categorize_sync
from .verification import TransactionVerifier
from .ingestion import IngestionService, TransactionNotRecognized
from .poller import ProcessedCache, PollerState, SMSPoller
from .analytics import category_totals, is_anomalous

__all__ = [
    "PromptBuilder",
    "CategoryEngine",
    "categorize_sync",
    "TransactionVerifier",
    "IngestionService",
    "TransactionNotRecognized",
    "ProcessedCache",
    "PollerState",
    "SMSPoller",
    "category_totals",
    "is_anomalous",
]
