"""Shared fixtures: every store runs against process memory unless a test asks for a file."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from finance_tracker.config import AppSettings, StorageSettings
from finance_tracker.models.transaction import Transaction, TransactionType
from finance_tracker.services.credentials import CredentialStore
from finance_tracker.services.storage import InMemoryStore, StorageAdapter
from finance_tracker.services.transactions import TransactionStore


@pytest.fixture
def storage_settings():
    return StorageSettings(backend="memory")


@pytest.fixture
def app_settings():
    return AppSettings()


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def adapter(memory_store):
    return StorageAdapter(memory_store)


@pytest.fixture
def credential_store(adapter, storage_settings):
    return CredentialStore(adapter, storage_settings)


@pytest.fixture
def transaction_store(adapter, storage_settings):
    return TransactionStore(adapter, storage_settings)


def _build_transaction(
    transaction_type: TransactionType = TransactionType.EXPENSE,
    amount: str = "10",
    category: str = "Food & Dining",
    description: str = "",
    day: date = date(2024, 3, 1),
    transaction_id: str = "t-1",
) -> Transaction:
    return Transaction(
        id=transaction_id,
        type=transaction_type,
        amount=Decimal(amount),
        category=category,
        description=description,
        date=day,
        created_at=datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def make_transaction():
    """Factory for Transaction records with sensible defaults."""
    return _build_transaction
