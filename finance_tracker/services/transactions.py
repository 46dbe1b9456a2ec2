"""
Transaction Store

CRUD over the single persisted transaction list.

The list is stored newest-first: add() prepends. Every mutation is a
read-modify-write of the whole list, serialized by an asyncio.Lock so
that concurrent callers in one process cannot lose each other's updates.
Separate processes sharing one data file are NOT coordinated.
"""

import asyncio
from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import uuid4

import structlog
from pydantic import TypeAdapter

from finance_tracker.config import StorageSettings, get_settings
from finance_tracker.models.transaction import Transaction, TransactionFields
from finance_tracker.services.storage import NotFoundError, StorageAdapter


_TRANSACTIONS = TypeAdapter(list[Transaction])


class TransactionStore:
    """Persisted, ordered list of transactions."""

    def __init__(
        self,
        adapter: StorageAdapter,
        settings: Optional[StorageSettings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            adapter: Typed storage access
            settings: Storage settings (key names). Defaults to global settings.
            clock: Source of `created_at` timestamps. Defaults to UTC now.
        """
        settings = settings or get_settings().storage
        self._adapter = adapter
        self._key = settings.transactions_key
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._lock = asyncio.Lock()
        self._logger = structlog.get_logger(__name__)

    def _write(self, transactions: list[Transaction]) -> None:
        self._adapter.write(self._key, transactions, _TRANSACTIONS)

    def list_transactions(self) -> list[Transaction]:
        """The full list in stored (newest-first) order."""
        return self._adapter.read(self._key, _TRANSACTIONS, [])

    def get(self, transaction_id: str) -> Optional[Transaction]:
        """Find a transaction by ID."""
        for transaction in self.list_transactions():
            if transaction.id == transaction_id:
                return transaction
        return None

    async def add(self, fields: TransactionFields) -> Transaction:
        """
        Create a transaction and prepend it to the list.

        Returns:
            The created record, with its new `id` and `created_at`
        """
        async with self._lock:
            transactions = self.list_transactions()
            existing_ids = {t.id for t in transactions}

            transaction_id = str(uuid4())
            while transaction_id in existing_ids:
                transaction_id = str(uuid4())

            transaction = Transaction(
                id=transaction_id,
                created_at=self._clock(),
                **fields.model_dump(),
            )
            self._write([transaction, *transactions])

        self._logger.debug("transaction_added", transaction_id=transaction.id)
        return transaction

    async def update(
        self,
        transaction_id: str,
        fields: TransactionFields,
    ) -> Transaction:
        """
        Replace the mutable fields of a transaction.

        `id` and `created_at` are kept.

        Raises:
            NotFoundError: If no transaction has this ID
        """
        async with self._lock:
            transactions = self.list_transactions()
            for index, existing in enumerate(transactions):
                if existing.id == transaction_id:
                    updated = existing.with_fields(fields)
                    transactions[index] = updated
                    self._write(transactions)
                    return updated

        raise NotFoundError(f"Transaction {transaction_id} not found")

    async def remove(self, transaction_id: str) -> bool:
        """
        Delete a transaction. No-op if absent.

        Returns:
            True if a record was deleted
        """
        async with self._lock:
            transactions = self.list_transactions()
            remaining = [t for t in transactions if t.id != transaction_id]
            if len(remaining) == len(transactions):
                return False
            self._write(remaining)
            return True
