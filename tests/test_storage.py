"""
Tests for the key-value backends and the typed storage adapter.
"""

import json

import pytest
from pydantic import TypeAdapter

from finance_tracker.models.transaction import Transaction
from finance_tracker.services.storage import (
    InMemoryStore,
    JsonFileStore,
    StorageAdapter,
    StorageError,
)
from finance_tracker.services.transactions import TransactionStore


TRANSACTIONS = TypeAdapter(list[Transaction])


class TestInMemoryStore:
    """Tests for the process-local backend."""

    def test_get_missing_key(self, memory_store):
        assert memory_store.get("nope") is None

    def test_set_get_remove(self, memory_store):
        memory_store.set("k", "v")
        assert memory_store.get("k") == "v"
        assert memory_store.keys() == ["k"]

        memory_store.remove("k")
        memory_store.remove("k")
        assert memory_store.get("k") is None

    def test_initial_values_are_copied(self):
        initial = {"k": "v"}
        store = InMemoryStore(initial)
        store.set("k", "changed")
        assert initial["k"] == "v"


class TestJsonFileStore:
    """Tests for the JSON file backend."""

    def test_missing_file_is_empty(self, tmp_path):
        store = JsonFileStore(tmp_path / "data.json")
        assert store.get("k") is None
        assert store.keys() == []

    def test_values_persist_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "data.json"
        JsonFileStore(path).set("finance-transactions", "[]")

        reopened = JsonFileStore(path)
        assert reopened.get("finance-transactions") == "[]"
        assert json.loads(path.read_text(encoding="utf-8")) == {
            "finance-transactions": "[]",
        }

    def test_no_temp_files_left_behind(self, tmp_path):
        store = JsonFileStore(tmp_path / "data.json")
        store.set("a", "1")
        store.set("b", "2")
        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]

    def test_remove(self, tmp_path):
        store = JsonFileStore(tmp_path / "data.json")
        store.set("a", "1")
        store.remove("a")
        store.remove("a")
        assert store.get("a") is None

    def test_non_string_values_are_returned_as_json_text(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"finance-transactions": []}), encoding="utf-8")
        assert JsonFileStore(path).get("finance-transactions") == "[]"

    def test_corrupt_file_raises_storage_error(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")
        store = JsonFileStore(path)

        with pytest.raises(StorageError):
            store.get("k")
        with pytest.raises(StorageError):
            store.set("k", "v")

        # The broken file is left for the user to inspect
        assert path.read_text(encoding="utf-8") == "{not json"

    def test_invalid_utf8_raises_storage_error(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_bytes(b'{"k": "\xff"}')
        with pytest.raises(StorageError):
            JsonFileStore(path).get("k")

    def test_non_object_document_raises_storage_error(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileStore(path).keys()


class TestStorageAdapter:
    """read() falls back to the default; write() overwrites the key."""

    def test_read_absent_key_returns_default(self, adapter):
        assert adapter.read("finance-transactions", TRANSACTIONS, []) == []

    def test_write_then_read(self, adapter, make_transaction):
        transactions = [make_transaction(transaction_id="a"), make_transaction(transaction_id="b")]
        adapter.write("finance-transactions", transactions, TRANSACTIONS)
        assert adapter.read("finance-transactions", TRANSACTIONS, []) == transactions

    def test_write_uses_camel_case_keys(self, adapter, memory_store, make_transaction):
        adapter.write("finance-transactions", [make_transaction()], TRANSACTIONS)
        stored = json.loads(memory_store.get("finance-transactions"))
        assert "createdAt" in stored[0]

    def test_malformed_json_returns_default_and_keeps_value(self, memory_store):
        memory_store.set("finance-transactions", "{oops")
        adapter = StorageAdapter(memory_store)

        assert adapter.read("finance-transactions", TRANSACTIONS, []) == []
        assert memory_store.get("finance-transactions") == "{oops"

    def test_wrong_shape_returns_default(self, memory_store):
        memory_store.set("finance-transactions", json.dumps({"not": "a list"}))
        adapter = StorageAdapter(memory_store)
        assert adapter.read("finance-transactions", TRANSACTIONS, []) == []

    def test_unreadable_backend_returns_default(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("garbage", encoding="utf-8")
        adapter = StorageAdapter(JsonFileStore(path))
        assert adapter.read("finance-transactions", TRANSACTIONS, []) == []

    def test_invalid_utf8_file_returns_default(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_bytes(b'{"finance-transactions": "\xff\xfe"}')
        store = TransactionStore(StorageAdapter(JsonFileStore(path)))

        assert store.list_transactions() == []

    def test_remove_is_idempotent(self, adapter, memory_store):
        memory_store.set("k", "1")
        adapter.remove("k")
        adapter.remove("k")
        assert memory_store.get("k") is None
