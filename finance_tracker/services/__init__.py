"""Services package."""

from finance_tracker.services.credentials import (
    AlreadyExistsError,
    AuthenticationError,
    CredentialStore,
    InvalidCredentialsError,
)
from finance_tracker.services.storage import (
    DuplicateError,
    InMemoryStore,
    JsonFileStore,
    KeyValueStoreInterface,
    NotFoundError,
    StorageAdapter,
    StorageError,
)
from finance_tracker.services.transactions import TransactionStore

__all__ = [
    # Credential store
    "AlreadyExistsError",
    "AuthenticationError",
    "CredentialStore",
    "InvalidCredentialsError",
    # Transaction store
    "TransactionStore",
    # Storage services
    "DuplicateError",
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStoreInterface",
    "NotFoundError",
    "StorageAdapter",
    "StorageError",
]
