"""Manual-paste ingestion: one pasted SMS to a categorized, confirmed transaction."""
import asyncio
import logging

from rupeeradar.models.transaction import Transaction
from rupeeradar.parsing.extractor import extract_transaction
from rupeeradar.services.categorization import CategoryEngine
from rupeeradar.storage.database import TransactionStore
from rupeeradar.utils.privacy import mask_digits, redact_transaction

logger = logging.getLogger(__name__)

NOT_RECOGNIZED_MESSAGE = "Could not identify transaction details from the SMS. Please check the format."


class TransactionNotRecognized(ValueError):
    """The pasted text does not contain a recognizable transaction."""

    def __init__(self, message: str = NOT_RECOGNIZED_MESSAGE):
        super().__init__(message)


class IngestionService:
    """Preview-then-confirm flow for SMS text pasted by the user."""

    def __init__(self, store: TransactionStore, categorizer: CategoryEngine):
        self.store = store
        self.categorizer = categorizer

    async def preview(self, sms_text: str) -> Transaction:
        """
        Extract and categorize a pasted SMS without persisting it.

        Raises:
            TransactionNotRecognized: If no transaction could be extracted
        """
        transaction = extract_transaction(sms_text)
        if transaction is None:
            logger.info("No transaction found in pasted SMS %r", mask_digits(sms_text or "")[:60])
            raise TransactionNotRecognized()

        transaction = await self.categorizer.categorize_transaction(transaction)
        logger.debug("Preview ready: %s", redact_transaction(transaction))
        return transaction

    async def confirm(self, transaction: Transaction) -> Transaction:
        """
        Persist a transaction the user confirmed.

        Raises:
            StorageError: If the store could not write the record
        """
        saved = await asyncio.to_thread(self.store.save_transaction, transaction)
        logger.info("Saved transaction %s", saved.id)
        return saved
