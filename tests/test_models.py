"""
Tests for Finance Tracker models

Test strategy:
1. Unit tests for individual components (models, validators, aggregation)
2. Flow tests against an in-memory store
3. No files outside pytest's tmp_path
"""

import json
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from finance_tracker.models.transaction import (
    DEFAULT_CATEGORIES,
    DEFAULT_CATEGORY_COLOR,
    Transaction,
    TransactionFields,
    TransactionType,
    categories_for_type,
    category_color,
    find_category,
    transaction_to_dict,
)
from finance_tracker.models.user import Credential, Session, User
from finance_tracker.models.validation import ValidationIssue, ValidationResult
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestTransactionModels:
    """Tests for transaction-related Pydantic models."""

    def test_transaction_fields_creation(self):
        """Test TransactionFields accepts form-style values."""
        fields = TransactionFields(
            type="income",
            amount="1000",
            category="Salary",
            description="March salary",
            date="2024-03-01",
        )
        assert fields.type == TransactionType.INCOME
        assert fields.amount == Decimal("1000")
        assert fields.date == date(2024, 3, 1)

    def test_transaction_fields_strip_whitespace(self):
        """Test that whitespace is stripped from text fields."""
        fields = TransactionFields(
            type="expense",
            amount="5",
            category="  Shopping ",
            description=" socks  ",
            date=date(2024, 3, 1),
        )
        assert fields.category == "Shopping"
        assert fields.description == "socks"

    def test_transaction_rejects_negative_amount(self):
        """Amounts are magnitudes; the sign comes from the type."""
        with pytest.raises(ValidationError):
            TransactionFields(
                type="expense",
                amount=Decimal("-100"),
                category="Shopping",
                date=date(2024, 3, 1),
            )

    def test_transaction_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            TransactionFields(
                type="transfer",
                amount="1",
                category="Shopping",
                date=date(2024, 3, 1),
            )

    def test_transaction_stored_form_uses_camel_case(self, make_transaction):
        """Stored JSON keeps the localStorage layout (createdAt)."""
        data = transaction_to_dict(make_transaction())
        assert "createdAt" in data
        assert "created_at" not in data
        assert data["type"] == "expense"
        assert data["date"] == "2024-03-01"
        assert data["amount"] == 10

    def test_transaction_loads_localstorage_record(self):
        """A record exported from localStorage (numeric amount) loads."""
        raw = json.dumps({
            "id": "1709294400000",
            "type": "income",
            "amount": 1000,
            "category": "Salary",
            "description": "March",
            "date": "2024-03-01",
            "createdAt": "2024-03-01T12:00:00.000Z",
        })
        transaction = Transaction.model_validate_json(raw)
        assert transaction.id == "1709294400000"
        assert transaction.amount == Decimal("1000")
        assert transaction.created_at.tzinfo is not None

    @pytest.mark.parametrize("amount", ["0.01", "12.5", "1234.56", "99999999.99"])
    def test_amount_survives_json_round_trip(self, make_transaction, amount):
        """Two-decimal amounts well inside float precision reload unchanged."""
        original = make_transaction(amount=amount)
        reloaded = Transaction.model_validate_json(original.model_dump_json(by_alias=True))
        assert reloaded.amount == Decimal(amount)

    def test_with_fields_keeps_identity(self, make_transaction):
        original = make_transaction(transaction_id="keep-me")
        new_fields = TransactionFields(
            type="income",
            amount="42",
            category="Freelance",
            description="gig",
            date=date(2024, 4, 2),
        )
        updated = original.with_fields(new_fields)
        assert updated.id == "keep-me"
        assert updated.created_at == original.created_at
        assert updated.editable_fields == new_fields

    def test_signed_amount(self, make_transaction):
        assert make_transaction(amount="5").signed_amount == Decimal("-5")
        income = make_transaction(transaction_type=TransactionType.INCOME, amount="5")
        assert income.signed_amount == Decimal("5")


class TestCategories:
    """Tests for the static category table."""

    def test_category_names_are_unique(self):
        names = [c.name for c in DEFAULT_CATEGORIES]
        assert len(names) == len(set(names))

    def test_categories_for_type(self):
        income = categories_for_type(TransactionType.INCOME)
        expense = categories_for_type(TransactionType.EXPENSE)
        assert [c.name for c in income] == [
            "Salary", "Freelance", "Investment", "Other Income",
        ]
        assert len(expense) == 8
        assert all(c.type == TransactionType.EXPENSE for c in expense)

    def test_find_category(self):
        assert find_category("Food & Dining").color == "#EF4444"
        assert find_category("Groceries") is None

    def test_category_color_fallback(self):
        assert category_color("Salary") == "#10B981"
        assert category_color("Unknown") == DEFAULT_CATEGORY_COLOR


class TestUserModels:
    """Tests for user, credential and session records."""

    def test_user_round_trip_uses_camel_case(self):
        user = User(
            id="u1",
            email="a@x.com",
            name="A",
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        data = user.model_dump(mode="json", by_alias=True)
        assert set(data) == {"id", "email", "name", "createdAt"}
        assert User.model_validate(data) == user

    def test_credential_matches_exactly(self):
        credential = Credential(email="a@x.com", password="pw", userId="u1")
        assert credential.user_id == "u1"
        assert credential.matches("a@x.com", "pw")
        assert not credential.matches("A@x.com", "pw")
        assert not credential.matches("a@x.com", "PW")

    def test_session_defaults_to_anonymous(self):
        session = Session()
        assert session.is_authenticated is False
        assert session.user_id is None


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        event = AuditEvent(
            event_type=AuditEventType.TRANSACTION_CREATED,
            description="Transaction added",
        )
        assert event.event_type == AuditEventType.TRANSACTION_CREATED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        event = AuditEvent(
            event_type=AuditEventType.DATA_EXPORTED,
            description="Exported",
            details={"row_count": 3},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "data_exported"
        assert log_dict["details"]["row_count"] == 3

    def test_login_failed_never_carries_password(self):
        correlation_id = uuid4()
        event = AuditEventBuilder.login_failed(
            email="a@x.com",
            correlation_id=correlation_id,
        )
        assert event.severity == AuditSeverity.WARNING
        assert event.correlation_id == correlation_id
        assert event.details == {"email": "a@x.com"}

    def test_transaction_created_builder(self):
        event = AuditEventBuilder.transaction_created(
            transaction_id="t-1",
            transaction_type="expense",
            amount="12.50",
            category="Shopping",
        )
        assert event.entity_id == "t-1"
        assert event.entity_type == "transaction"
        assert event.is_user_action is True


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="missing",
                    message="Amount is required",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1
        assert result.error_messages == ["Amount is required"]

    def test_validation_result_warnings_only(self):
        result = ValidationResult(
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="category",
                    issue_type="unknown_category",
                    message="Not a known category",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0

    def test_issue_severity_is_constrained(self):
        with pytest.raises(ValidationError):
            ValidationIssue(
                field="amount",
                issue_type="missing",
                message="x",
                severity="fatal",
            )


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
