"""FastAPI main application."""
import logging
from contextlib import asynccontextmanager
from datetime import date
from functools import lru_cache
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from rupeeradar import __version__
from rupeeradar.adapters.base import LLMAdapter
from rupeeradar.adapters.factory import adapter_from_settings
from rupeeradar.config import settings
from rupeeradar.models.api import (
    ClearResponse,
    InboxStatus,
    PollResult,
    SeedResponse,
    SMSParseRequest,
    SpendingSummary,
)
from rupeeradar.models.transaction import Transaction, TransactionFilter, TransactionType
from rupeeradar.services.analytics import category_totals, is_anomalous
from rupeeradar.services.categorization import CategoryEngine
from rupeeradar.services.ingestion import IngestionService, TransactionNotRecognized
from rupeeradar.services.poller import SMSPoller
from rupeeradar.services.verification import TransactionVerifier
from rupeeradar.sources.inbox import InboxSource, JsonlInbox
from rupeeradar.storage.database import (
    DuplicateTransactionError,
    StorageError,
    TransactionStore,
    get_store,
)

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

_poller: Optional[SMSPoller] = None


@lru_cache
def get_adapter() -> Optional[LLMAdapter]:
    """The configured LLM adapter, built once; None when AI is not configured."""
    if not (settings.enable_ai_categorization or settings.enable_ai_verification):
        return None
    return adapter_from_settings()


def get_categorizer() -> CategoryEngine:
    adapter = get_adapter() if settings.enable_ai_categorization else None
    return CategoryEngine(adapter)


def get_ingestion_service(
    store: TransactionStore = Depends(get_store),
    categorizer: CategoryEngine = Depends(get_categorizer),
) -> IngestionService:
    return IngestionService(store, categorizer)


def get_poller() -> Optional[SMSPoller]:
    return _poller


def build_inbox_source() -> Optional[InboxSource]:
    if settings.sms_inbox_path:
        return JsonlInbox(settings.sms_inbox_path)
    return None


def build_poller(store: TransactionStore) -> Optional[SMSPoller]:
    source = build_inbox_source()
    if source is None:
        return None

    adapter = get_adapter()
    verifier = None
    if adapter is not None and settings.enable_ai_verification:
        verifier = TransactionVerifier(adapter)

    return SMSPoller(source, store, get_categorizer(), verifier=verifier)


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _poller
    _poller = build_poller(get_store())

    if _poller is None:
        logger.info("No SMS inbox configured; manual paste only")
    elif not _poller.is_available:
        logger.warning("SMS inbox unavailable: %s", _poller.availability.reason)
    elif settings.auto_start_listener:
        _poller.start()

    yield

    if _poller is not None:
        await _poller.stop()


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": settings.app_name, "version": __version__}


@app.post("/sms/parse", response_model=Transaction)
async def parse_sms(
    request: SMSParseRequest,
    service: IngestionService = Depends(get_ingestion_service),
):
    """
    Extract and categorize a pasted SMS for confirmation.

    Nothing is stored; POST the returned transaction to /transactions to save it.
    """
    try:
        return await service.preview(request.text)
    except TransactionNotRecognized as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/transactions", response_model=Transaction, status_code=201)
async def save_transaction(
    transaction: Transaction,
    service: IngestionService = Depends(get_ingestion_service),
):
    """Persist a confirmed transaction."""
    try:
        return await service.confirm(transaction)
    except DuplicateTransactionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageError as e:
        logger.error("Saving transaction %s failed: %s", transaction.id, e)
        raise HTTPException(status_code=500, detail="Could not save transaction")


@app.get("/transactions", response_model=List[Transaction])
async def list_transactions(
    start_date: Optional[date] = Query(None, description="Earliest date (inclusive)"),
    end_date: Optional[date] = Query(None, description="Latest date (inclusive)"),
    category: Optional[str] = Query(None),
    min_amount: Optional[float] = Query(None, ge=0),
    max_amount: Optional[float] = Query(None, ge=0),
    type: Optional[TransactionType] = Query(None),
    bank: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Text to look for in description or SMS"),
    store: TransactionStore = Depends(get_store),
):
    """List stored transactions, optionally filtered."""
    filters = TransactionFilter(
        start_date=start_date,
        end_date=end_date,
        category=category,
        min_amount=min_amount,
        max_amount=max_amount,
        type=type,
        bank=bank,
        search=search,
    )
    try:
        return store.get_filtered_transactions(filters)
    except StorageError as e:
        logger.error("Reading transactions failed: %s", e)
        raise HTTPException(status_code=500, detail="Could not read transactions")


@app.delete("/transactions", response_model=ClearResponse)
async def clear_transactions(store: TransactionStore = Depends(get_store)):
    """Delete all stored transactions."""
    try:
        removed = store.clear_all_transactions()
    except StorageError as e:
        logger.error("Clearing transactions failed: %s", e)
        raise HTTPException(status_code=500, detail="Could not clear transactions")
    return ClearResponse(removed=removed, message=f"Removed {removed} transactions")


@app.post("/transactions/sample", response_model=SeedResponse)
async def add_sample_transactions(store: TransactionStore = Depends(get_store)):
    """Seed demo transactions into an empty store."""
    try:
        added = store.add_sample_transactions()
    except StorageError as e:
        logger.error("Adding sample transactions failed: %s", e)
        raise HTTPException(status_code=500, detail="Could not add sample transactions")
    if added:
        message = f"Added {added} sample transactions"
    else:
        message = "Sample data not added: transactions already exist"
    return SeedResponse(added=added, message=message)


@app.get("/transactions/summary", response_model=SpendingSummary)
async def spending_summary(store: TransactionStore = Depends(get_store)):
    """Debit totals per category and unusually large debits."""
    try:
        transactions = store.get_all_transactions()
    except StorageError as e:
        logger.error("Reading transactions failed: %s", e)
        raise HTTPException(status_code=500, detail="Could not read transactions")
    debits = [tx for tx in transactions if tx.type == TransactionType.DEBIT]
    credits = [tx for tx in transactions if tx.type == TransactionType.CREDIT]

    return SpendingSummary(
        total_debit=round(sum(tx.amount for tx in debits), 2),
        total_credit=round(sum(tx.amount for tx in credits), 2),
        categories=category_totals(transactions),
        anomalies=[tx.id for tx in debits if is_anomalous(tx, debits)],
    )


@app.get("/inbox/status", response_model=InboxStatus)
async def inbox_status(poller: Optional[SMSPoller] = Depends(get_poller)):
    """Whether automatic SMS reading is available and running."""
    if poller is None:
        return InboxStatus(available=False, reason="No SMS inbox configured")

    return InboxStatus(
        available=poller.is_available,
        reason=poller.availability.reason,
        listening=poller.is_listening,
        state=poller.state.value,
        last_seen_id=poller.last_seen_id,
    )


@app.post("/inbox/poll", response_model=PollResult)
async def poll_inbox(poller: Optional[SMSPoller] = Depends(get_poller)):
    """Run one polling tick now."""
    if poller is None or not poller.is_available:
        raise HTTPException(status_code=503, detail="SMS inbox reading is not available")
    return await poller.poll_once()


def run():
    import uvicorn

    uvicorn.run("rupeeradar.main:app", host="0.0.0.0", port=8000, reload=settings.debug)


if __name__ == "__main__":
    run()
