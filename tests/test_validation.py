"""
Tests for submission validation.

Validation is presence checks plus type coercion: a declined submission
comes back as a ValidationResult, never as an exception.
"""

from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.models.transaction import TransactionType
from finance_tracker.validation import TransactionValidator, validate_signup


@pytest.fixture
def validator():
    return TransactionValidator(today=lambda: date(2024, 3, 15))


def submission(**overrides):
    data = {
        "type": "expense",
        "amount": "300",
        "category": "Food & Dining",
        "description": "Dinner",
        "date": "2024-03-05",
    }
    data.update(overrides)
    return data


class TestTransactionValidator:
    """Tests for TransactionValidator.validate()."""

    def test_valid_submission(self, validator):
        result = validator.validate(submission())

        assert result.is_valid
        assert result.issues == []
        assert result.parsed.type == TransactionType.EXPENSE
        assert result.parsed.amount == Decimal("300")
        assert result.parsed.date == date(2024, 3, 5)

    @pytest.mark.parametrize("field", ["amount", "category", "description"])
    def test_missing_required_field(self, validator, field):
        result = validator.validate(submission(**{field: ""}))

        assert not result.is_valid
        assert result.parsed is None
        assert [i.field for i in result.issues] == [field]
        assert result.issues[0].issue_type == "missing"

    def test_all_missing_reported_together(self, validator):
        result = validator.validate({})
        assert result.error_messages == [
            "Amount is required",
            "Category is required",
            "Description is required",
        ]

    def test_whitespace_only_counts_as_missing(self, validator):
        result = validator.validate(submission(description="   "))
        assert result.error_messages == ["Description is required"]

    def test_type_and_date_default(self, validator):
        data = submission()
        del data["type"]
        del data["date"]

        result = validator.validate(data)

        assert result.is_valid
        assert result.parsed.type == TransactionType.EXPENSE
        assert result.parsed.date == date(2024, 3, 15)

    @pytest.mark.parametrize("amount", ["abc", "-5", "1.234"])
    def test_unusable_amount(self, validator, amount):
        result = validator.validate(submission(amount=amount))

        assert not result.is_valid
        assert result.issues[0].field == "amount"
        assert result.issues[0].issue_type == "invalid_value"

    def test_unknown_type(self, validator):
        result = validator.validate(submission(type="transfer"))
        assert not result.is_valid
        assert result.issues[0].field == "type"

    def test_category_of_other_type_is_only_a_warning(self, validator):
        result = validator.validate(submission(category="Salary"))

        assert result.is_valid
        assert result.parsed.category == "Salary"
        assert result.warnings == ["'Salary' is not a known expense category"]

    def test_unknown_category_is_only_a_warning(self, validator):
        result = validator.validate(submission(category="Pet Food"))
        assert result.is_valid
        assert result.issues[0].severity == "warning"

    def test_amount_zero_is_accepted(self, validator):
        result = validator.validate(submission(amount="0"))
        assert result.is_valid


class TestUserFriendlySummary:
    def test_clean_result(self, validator):
        result = validator.validate(submission())
        assert validator.get_user_friendly_summary(result) == "Transaction saved."

    def test_lists_errors(self, validator):
        result = validator.validate(submission(amount=""))
        summary = validator.get_user_friendly_summary(result)
        assert "Please fill in the missing details:" in summary
        assert "Amount is required" in summary

    def test_lists_warnings(self, validator):
        result = validator.validate(submission(category="Pet Food"))
        summary = validator.get_user_friendly_summary(result)
        assert summary.startswith("Please double-check:")


class TestValidateSignup:
    def test_complete_signup(self):
        assert validate_signup("a@x.com", "pw", "A").is_valid

    def test_missing_name(self):
        result = validate_signup("a@x.com", "pw", " ")
        assert not result.is_valid
        assert result.error_messages == ["Name is required"]

    def test_missing_everything(self):
        result = validate_signup("", "", "")
        assert result.error_count == 3
