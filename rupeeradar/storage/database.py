"""Key-value transaction storage using SQLite."""
import json
import logging
import sqlite3
import threading
from contextlib import contextmanager
from datetime import date, datetime, timedelta
from typing import List, Optional

from pydantic import ValidationError

from rupeeradar.config import settings
from rupeeradar.models.transaction import Transaction, TransactionFilter, TransactionType

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """A transaction could not be read from or written to the store."""


class DuplicateTransactionError(StorageError):
    """A transaction with the same id is already stored."""


# (days ago, amount, description, category, type, bank)
SAMPLE_TRANSACTIONS = [
    (2, 1499, "Amazon.in - Books", "Shopping", TransactionType.DEBIT, "HDFC"),
    (5, 1299, "Swiggy Order - Food Delivery", "Food & Dining", TransactionType.DEBIT, "HDFC"),
    (10, 2499, "Mobile Bill - Airtel", "Bills & Utilities", TransactionType.DEBIT, "HDFC"),
    (12, 5999, "Rent Payment", "Home", TransactionType.DEBIT, "SBI"),
    (15, 799, "Netflix Subscription", "Entertainment", TransactionType.DEBIT, "ICICI"),
    (18, 450, "Uber Ride", "Transport", TransactionType.DEBIT, "HDFC"),
    (20, 3500, "Doctor Visit - Apollo Hospital", "Health", TransactionType.DEBIT, "SBI"),
    (25, 2199, "Flipkart - Headphones", "Shopping", TransactionType.DEBIT, "ICICI"),
    (28, 1800, "Restaurant - Birthday dinner", "Food & Dining", TransactionType.DEBIT, "HDFC"),
    (29, 9800, "Flight Tickets - MakeMyTrip", "Travel", TransactionType.DEBIT, "SBI"),
    (1, 45000, "Salary Credit", "Income", TransactionType.CREDIT, "HDFC"),
    (15, 5000, "Freelance Payment", "Income", TransactionType.CREDIT, "ICICI"),
    (8, 2500, "Investment Dividend", "Investment", TransactionType.CREDIT, "SBI"),
    (3, 899, "Gym Membership", "Health", TransactionType.DEBIT, "HDFC"),
    (6, 349, "Spotify Premium", "Entertainment", TransactionType.DEBIT, "HDFC"),
]


class TransactionStore:
    """
    Storage for transactions.

    The whole collection lives as one JSON array under a namespaced key in a
    key-value table; every insert is a read-modify-write of that value, so
    writes hold a lock and an immediate SQLite write transaction.
    """

    def __init__(self, db_path: Optional[str] = None, key: Optional[str] = None):
        self.db_path = db_path or settings.database_path
        self.key = key or settings.storage_key
        self._write_lock = threading.Lock()
        self._init_db()

    def _init_db(self):
        """Initialize database tables."""
        with self._get_conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()

    @contextmanager
    def _get_conn(self):
        """Get database connection."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.Error as e:
            raise StorageError(f"Database error: {e}") from e
        finally:
            conn.close()

    @contextmanager
    def _writing(self):
        """Connection for a read-modify-write of the collection."""
        with self._write_lock, self._get_conn() as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                conn.rollback()
                raise

    def _read(self, conn: sqlite3.Connection) -> List[dict]:
        row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (self.key,)).fetchone()
        if not row:
            return []
        try:
            return json.loads(row["value"])
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt transaction data under {self.key!r}: {e}") from e

    def _write(self, conn: sqlite3.Connection, items: List[dict]):
        conn.execute("""
            INSERT OR REPLACE INTO kv_store (key, value, updated_at)
            VALUES (?, ?, ?)
        """, (
            self.key,
            json.dumps(items, ensure_ascii=False),
            datetime.utcnow().isoformat(),
        ))
        conn.commit()

    def save_transaction(self, transaction: Transaction) -> Transaction:
        """Append one transaction to the stored collection."""
        with self._writing() as conn:
            items = self._read(conn)
            if any(item.get("id") == transaction.id for item in items):
                raise DuplicateTransactionError(f"Transaction {transaction.id} already stored")
            items.append(transaction.model_dump(mode="json"))
            self._write(conn, items)
        logger.debug("Stored transaction %s (%d total)", transaction.id, len(items))
        return transaction

    def get_all_transactions(self) -> List[Transaction]:
        """Get all stored transactions in insertion order."""
        with self._get_conn() as conn:
            items = self._read(conn)

        transactions = []
        for item in items:
            try:
                transactions.append(Transaction(**item))
            except ValidationError as e:
                logger.warning("Skipping unreadable stored transaction %s: %s", item.get("id"), e)
        return transactions

    def get_filtered_transactions(self, filters: TransactionFilter) -> List[Transaction]:
        return [tx for tx in self.get_all_transactions() if filters.matches(tx)]

    def count(self) -> int:
        with self._get_conn() as conn:
            return len(self._read(conn))

    def clear_all_transactions(self) -> int:
        """Remove the whole collection. Returns the number of records removed."""
        with self._writing() as conn:
            removed = len(self._read(conn))
            conn.execute("DELETE FROM kv_store WHERE key = ?", (self.key,))
            conn.commit()
        logger.info("Cleared %d transactions", removed)
        return removed

    def add_sample_transactions(self) -> int:
        """Seed demo transactions into an empty store. Returns the number added."""
        with self._writing() as conn:
            if self._read(conn):
                logger.info("Sample data not added: transactions already exist")
                return 0

            today = date.today()
            samples = [
                Transaction(
                    amount=amount,
                    date=(today - timedelta(days=days_ago)).strftime("%d-%m-%y"),
                    description=description,
                    category=category,
                    type=tx_type,
                    bank=bank,
                )
                for days_ago, amount, description, category, tx_type, bank in SAMPLE_TRANSACTIONS
            ]
            self._write(conn, [tx.model_dump(mode="json") for tx in samples])

        logger.info("Added %d sample transactions", len(samples))
        return len(samples)


# Global instance
_transaction_store = None


def get_store() -> TransactionStore:
    """Get the transaction store instance."""
    global _transaction_store
    if _transaction_store is None:
        _transaction_store = TransactionStore()
    return _transaction_store
