from .database import (
    DuplicateTransactionError,
    StorageError,
    TransactionStore,
    get_store,
)

__all__ = [
    "DuplicateTransactionError",
    "StorageError",
    "TransactionStore",
    "get_store",
]
