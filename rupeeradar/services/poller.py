"""
Automatic inbox polling.

Every poll_interval seconds the poller reads the newest inbox messages, keeps
those that look financial, and turns each into at most one stored
transaction. A tick that fires while the previous one is still running is
dropped, not queued.
"""
import asyncio
import inspect
import logging
from collections import OrderedDict
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Set, Union

from rupeeradar.config import settings
from rupeeradar.models.api import PollResult, PollStatus
from rupeeradar.models.sms import InboxAvailability, SMSMessage
from rupeeradar.models.transaction import Transaction
from rupeeradar.parsing.extractor import extract_transaction
from rupeeradar.parsing.senders import bank_from_sender, is_financial_sender, is_transaction_sms
from rupeeradar.services.categorization import CategoryEngine
from rupeeradar.services.verification import TransactionVerifier
from rupeeradar.sources.inbox import InboxSource, check_inbox_availability
from rupeeradar.storage.database import TransactionStore
from rupeeradar.utils.formatting import notification_text
from rupeeradar.utils.privacy import mask_digits

logger = logging.getLogger(__name__)

TransactionCallback = Callable[[Transaction], Union[None, Awaitable[None]]]


class PollerState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    FILTERING = "filtering"
    EXTRACTING = "extracting"


class ProcessedCache:
    """Bounded set of recently processed message ids, oldest evicted first."""

    def __init__(self, capacity: int = 100):
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._ids: "OrderedDict[str, None]" = OrderedDict()

    def __contains__(self, message_id: str) -> bool:
        return message_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def add(self, message_id: str):
        if message_id in self._ids:
            return
        if len(self._ids) >= self.capacity:
            # Drop the oldest quarter in one go
            for _ in range(max(1, self.capacity // 4)):
                self._ids.popitem(last=False)
        self._ids[message_id] = None


class SMSPoller:
    """Polls an inbox source and ingests new transaction messages exactly once."""

    def __init__(
        self,
        source: InboxSource,
        store: TransactionStore,
        categorizer: CategoryEngine,
        verifier: Optional[TransactionVerifier] = None,
        cache: Optional[ProcessedCache] = None,
        batch_size: Optional[int] = None,
        poll_interval: Optional[float] = None,
    ):
        self.source = source
        self.store = store
        self.categorizer = categorizer
        self.verifier = verifier
        self.cache = cache if cache is not None else ProcessedCache(settings.processed_cache_size)
        self.batch_size = batch_size or settings.inbox_batch_size
        self.poll_interval = poll_interval or settings.poll_interval_seconds

        self.availability: InboxAvailability = check_inbox_availability(source)
        self.state = PollerState.IDLE
        self.last_seen_id: Optional[str] = None

        self._processing = False
        self._subscribers: List[TransactionCallback] = []
        self._timer: Optional[asyncio.Task] = None
        self._ticks: Set[asyncio.Task] = set()

    @property
    def is_available(self) -> bool:
        return self.availability.available

    @property
    def is_listening(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def subscribe(self, callback: TransactionCallback) -> Callable[[], None]:
        """Register a "new transaction" listener. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def _notify(self, transaction: Transaction):
        for callback in list(self._subscribers):
            try:
                result = callback(transaction)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error("Transaction subscriber %r failed: %s", callback, e)

    def _is_candidate(self, sms: SMSMessage) -> bool:
        if sms.id in self.cache:
            return False
        return is_financial_sender(sms.address) or is_transaction_sms(sms.body)

    async def poll_once(self) -> PollResult:
        """
        Run one Fetching -> Filtering -> Extracting cycle.

        Returns:
            PollResult describing what the tick did
        """
        if self._processing:
            logger.debug("Previous poll still running, skipping tick")
            return PollResult(status=PollStatus.SKIPPED_IN_FLIGHT)

        self._processing = True
        try:
            self.state = PollerState.FETCHING
            try:
                messages = await self.source.list_messages(self.batch_size)
            except Exception as e:
                logger.error("Failed to read SMS inbox: %s", e)
                return PollResult(status=PollStatus.FAILED, error=str(e))

            if not messages:
                return PollResult(status=PollStatus.EMPTY)

            if messages[0].id == self.last_seen_id:
                return PollResult(status=PollStatus.UNCHANGED, fetched=len(messages))
            self.last_seen_id = messages[0].id

            self.state = PollerState.FILTERING
            candidates = [sms for sms in messages if self._is_candidate(sms)]

            self.state = PollerState.EXTRACTING
            new_transactions = []
            for sms in candidates:
                try:
                    transaction = await self.process_message(sms)
                except Exception as e:
                    logger.error("Error processing SMS %s: %s", sms.id, e)
                    continue
                if transaction is not None:
                    new_transactions.append(transaction)

            if new_transactions:
                logger.info(
                    "Ingested %d new transactions from %d candidates",
                    len(new_transactions),
                    len(candidates),
                )
            return PollResult(
                status=PollStatus.PROCESSED,
                fetched=len(messages),
                candidates=len(candidates),
                transactions=new_transactions,
            )
        finally:
            self.state = PollerState.IDLE
            self._processing = False

    async def process_message(self, sms: SMSMessage) -> Optional[Transaction]:
        """
        Turn one inbox message into a stored transaction.

        Returns:
            The stored transaction, or None when the message was skipped

        Raises:
            StorageError: If the record could not be persisted
        """
        if sms.id in self.cache:
            return None

        if not is_transaction_sms(sms.body):
            return None

        if self.verifier is not None and is_financial_sender(sms.address):
            verification = await self.verifier.verify(sms.body)
            if self.verifier.should_skip(verification):
                logger.info(
                    "SMS %s skipped, not a transaction (confidence %.2f)",
                    sms.id,
                    verification.confidence,
                )
                return None

        transaction = extract_transaction(sms.body)
        if transaction is None:
            logger.debug("No transaction in SMS %s: %r", sms.id, mask_digits(sms.body)[:60])
            return None

        # Marked before categorize/persist so a failing message is not retried every tick
        self.cache.add(sms.id)

        if not transaction.bank:
            sender_bank = bank_from_sender(sms.address)
            if sender_bank:
                transaction = transaction.model_copy(update={"bank": sender_bank})

        transaction = await self.categorizer.categorize_transaction(transaction)
        await asyncio.to_thread(self.store.save_transaction, transaction)
        logger.info("New transaction: %s", mask_digits(notification_text(transaction)))

        await self._notify(transaction)
        return transaction

    async def _run_timer(self):
        while True:
            await asyncio.sleep(self.poll_interval)
            tick = asyncio.create_task(self.poll_once())
            self._ticks.add(tick)
            tick.add_done_callback(self._ticks.discard)

    def start(self) -> bool:
        """Start polling on the running event loop. Returns False if unavailable."""
        if not self.is_available:
            logger.warning("SMS listener not started: %s", self.availability.reason)
            return False
        if self.is_listening:
            return True

        self._timer = asyncio.create_task(self._run_timer())
        logger.info("SMS listener started, polling every %.1fs", self.poll_interval)
        return True

    async def stop(self):
        """Stop the timer; a tick already in flight is allowed to finish."""
        if self._timer is not None:
            self._timer.cancel()
            try:
                await self._timer
            except asyncio.CancelledError:
                pass
            self._timer = None
            logger.info("SMS listener stopped")

        if self._ticks:
            await asyncio.gather(*list(self._ticks), return_exceptions=True)
