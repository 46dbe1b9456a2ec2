"""
Finance Tracker Orchestrator

Coordinates the flows a presentation layer drives:

AUTH FLOW:
1. Signup form → presence checks → CredentialStore.signup
2. Login form → CredentialStore.login
3. Logout → CredentialStore.logout

TRANSACTION FLOW:
1. Add/edit form → TransactionValidator (declines, never raises)
2. Valid fields → TransactionStore.add / update
3. Every query (dashboard, list, export) recomputes from the full list

Each flow method returns a value plus a user-facing message, so the
presentation layer never needs to interpret exceptions.
"""

from collections.abc import Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional, Union
from uuid import UUID

import structlog

from finance_tracker.analytics import (
    expense_breakdown_series,
    filter_by_month,
    format_currency,
    format_percentage,
    format_signed,
    income_vs_expenses_series,
    month_label,
    recent_transactions,
    search_transactions,
    summarize,
)
from finance_tracker.audit import AuditLogger, AuditTrail, create_correlation_id
from finance_tracker.config import AppSettings, Settings, get_settings
from finance_tracker.export import export_filename, to_csv, write_csv
from finance_tracker.models.summary import DashboardView
from finance_tracker.models.transaction import Transaction, TransactionType
from finance_tracker.models.user import User
from finance_tracker.models.validation import ValidationIssue, ValidationResult
from finance_tracker.services.credentials import (
    AlreadyExistsError,
    CredentialStore,
    InvalidCredentialsError,
)
from finance_tracker.services.storage import (
    InMemoryStore,
    JsonFileStore,
    KeyValueStoreInterface,
    NotFoundError,
    StorageAdapter,
)
from finance_tracker.services.transactions import TransactionStore
from finance_tracker.validation import TransactionValidator, validate_signup


logger = structlog.get_logger(__name__)


class AuthFlow:
    """
    Orchestrates signup, login and logout.

    Messages match what the auth page shows. Login failures never say
    whether the email or the password was wrong.
    """

    SIGNUP_CONFLICT_MESSAGE = "User with this email already exists"
    LOGIN_FAILED_MESSAGE = "Invalid email or password"

    def __init__(
        self,
        credential_store: CredentialStore,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._credentials = credential_store
        self._audit_logger = audit_logger

    def current_user(self) -> Optional[User]:
        """The user restored from the last session, if any."""
        return self._credentials.current_session()

    async def signup(
        self,
        email: str,
        password: str,
        name: str,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Optional[User], str]:
        """
        Register and log in.

        Returns:
            (user, message); user is None if signup was declined
        """
        correlation_id = correlation_id or create_correlation_id()

        checks = validate_signup(email, password, name)
        if not checks.is_valid:
            message = checks.error_messages[0]
            if self._audit_logger:
                await self._audit_logger.log_signup_rejected(
                    email=email,
                    reason=message,
                    correlation_id=correlation_id,
                )
            return None, message

        try:
            user = await self._credentials.signup(email, password, name.strip())
        except AlreadyExistsError:
            if self._audit_logger:
                await self._audit_logger.log_signup_rejected(
                    email=email,
                    reason="email already registered",
                    correlation_id=correlation_id,
                )
            return None, self.SIGNUP_CONFLICT_MESSAGE

        if self._audit_logger:
            await self._audit_logger.log_user_signed_up(
                user_id=user.id,
                email=user.email,
                correlation_id=correlation_id,
            )

        return user, f"Welcome, {user.name}!"

    async def login(
        self,
        email: str,
        password: str,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Optional[User], str]:
        """
        Log in.

        Returns:
            (user, message); user is None on invalid credentials
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            user = await self._credentials.login(email, password)
        except InvalidCredentialsError:
            if self._audit_logger:
                await self._audit_logger.log_login_failed(
                    email=email,
                    correlation_id=correlation_id,
                )
            return None, self.LOGIN_FAILED_MESSAGE

        if self._audit_logger:
            await self._audit_logger.log_login_succeeded(
                user_id=user.id,
                correlation_id=correlation_id,
            )

        return user, f"Welcome back, {user.name}!"

    async def logout(self, correlation_id: Optional[UUID] = None) -> None:
        """Log out. Safe to call with no active session."""
        user = self._credentials.current_session()
        self._credentials.logout()

        if self._audit_logger:
            await self._audit_logger.log_logged_out(
                user_id=user.id if user else None,
                correlation_id=correlation_id,
            )


class TransactionFlow:
    """
    Orchestrates transaction edits and derived views.

    Derived views (dashboard, filtered list, export) are recomputed from
    the full stored list on every call.
    """

    def __init__(
        self,
        transaction_store: TransactionStore,
        validator: Optional[TransactionValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        app_settings: Optional[AppSettings] = None,
    ):
        self._store = transaction_store
        self._validator = validator or TransactionValidator()
        self._audit_logger = audit_logger
        self._settings = app_settings or get_settings().app

    async def submit(
        self,
        data: Mapping[str, Any],
        transaction_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Optional[Transaction], ValidationResult]:
        """
        Validate a form submission, then add it (or update an existing record).

        Args:
            data: Raw form values
            transaction_id: ID of the record being edited; None to add

        Returns:
            (transaction, validation_result); transaction is None if the
            submission was declined or the edited record no longer exists
        """
        correlation_id = correlation_id or create_correlation_id()

        result = self._validator.validate(data)
        if not result.is_valid:
            if self._audit_logger:
                await self._audit_logger.log_validation_failed(
                    issues=[
                        {"field": i.field, "type": i.issue_type, "message": i.message}
                        for i in result.issues
                    ],
                    correlation_id=correlation_id,
                )
            return None, result

        fields = result.parsed

        if transaction_id is None:
            transaction = await self._store.add(fields)
            if self._audit_logger:
                await self._audit_logger.log_transaction_created(
                    transaction_id=transaction.id,
                    transaction_type=transaction.type.value,
                    amount=str(transaction.amount),
                    category=transaction.category,
                    correlation_id=correlation_id,
                )
            return transaction, result

        before = self._store.get(transaction_id)
        try:
            transaction = await self._store.update(transaction_id, fields)
        except NotFoundError:
            # Deleted in the meantime (e.g. from another view)
            not_found = result.model_copy(update={
                "is_valid": False,
                "parsed": None,
                "issues": [*result.issues, ValidationIssue(
                    field="id",
                    issue_type="not_found",
                    message="This transaction no longer exists",
                    severity="error",
                )],
            })
            return None, not_found

        if self._audit_logger:
            changed = []
            if before is not None:
                old_values = before.editable_fields.model_dump()
                changed = [
                    name for name, value in fields.model_dump().items()
                    if old_values.get(name) != value
                ]
            await self._audit_logger.log_transaction_updated(
                transaction_id=transaction.id,
                changed_fields=changed,
                correlation_id=correlation_id,
            )
        return transaction, result

    async def delete(
        self,
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Delete a transaction. Returns False if it did not exist."""
        existed = await self._store.remove(transaction_id)
        if self._audit_logger:
            await self._audit_logger.log_transaction_deleted(
                transaction_id=transaction_id,
                existed=existed,
                correlation_id=correlation_id,
            )
        return existed

    def transactions(
        self,
        search: str = "",
        transaction_type: Optional[TransactionType] = None,
        category: Optional[str] = None,
    ) -> list[Transaction]:
        """The transaction list view, optionally filtered."""
        return search_transactions(
            self._store.list_transactions(),
            search=search,
            transaction_type=transaction_type,
            category=category,
        )

    def display_amount(self, transaction: Transaction) -> str:
        """Signed amount in the configured currency, as the list views show it."""
        return format_signed(transaction, self._settings.currency_symbol)

    def dashboard(self, reference: Optional[Union[date, datetime]] = None) -> DashboardView:
        """
        Everything the dashboard shows.

        Stats and charts cover the calendar month containing `reference`
        (default: today). Recent transactions are drawn from the full list.
        """
        reference = reference or date.today()
        all_transactions = self._store.list_transactions()
        this_month = filter_by_month(all_transactions, reference)
        summary = summarize(this_month)
        symbol = self._settings.currency_symbol

        return DashboardView(
            period_label=month_label(reference),
            summary=summary,
            stat_cards={
                "Total Income": format_currency(summary.total_income, symbol),
                "Total Expenses": format_currency(summary.total_expenses, symbol),
                "Net Income": format_currency(summary.net_income, symbol),
                "Savings Rate": format_percentage(summary.savings_rate),
            },
            recent_transactions=recent_transactions(
                all_transactions,
                self._settings.recent_transactions_limit,
            ),
            expense_breakdown=expense_breakdown_series(this_month),
            income_vs_expenses=income_vs_expenses_series(this_month),
        )

    async def export_csv(
        self,
        today: Optional[date] = None,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[str, bytes]:
        """
        Build the CSV download.

        Returns:
            (filename, content)
        """
        transactions = self._store.list_transactions()
        filename = export_filename(today, self._settings.export_filename_prefix)
        content = to_csv(transactions)

        if self._audit_logger:
            await self._audit_logger.log_data_exported(
                filename=filename,
                row_count=len(transactions),
                correlation_id=correlation_id,
            )
        return filename, content

    async def export_to_directory(
        self,
        directory: Union[str, Path],
        today: Optional[date] = None,
        correlation_id: Optional[UUID] = None,
    ) -> Path:
        """Write the CSV download into a directory."""
        transactions = self._store.list_transactions()
        try:
            path = write_csv(
                transactions,
                directory,
                today,
                self._settings.export_filename_prefix,
            )
        except OSError as e:
            if self._audit_logger:
                await self._audit_logger.log_storage_error(
                    operation="export",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_data_exported(
                filename=path.name,
                row_count=len(transactions),
                correlation_id=correlation_id,
            )
        return path


def create_store(settings: Optional[Settings] = None) -> KeyValueStoreInterface:
    """Build the key-value backend selected in settings."""
    storage_settings = (settings or get_settings()).storage
    if storage_settings.backend == "memory":
        return InMemoryStore()
    return JsonFileStore(storage_settings.data_path)


def create_app_components(
    settings: Optional[Settings] = None,
    store: Optional[KeyValueStoreInterface] = None,
    audit_trail: Optional[AuditTrail] = None,
) -> tuple[AuthFlow, TransactionFlow]:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use. Defaults to the cached global settings.
        store: Key-value backend. Defaults to the one selected in settings.
        audit_trail: Keeps audit events in memory if given.

    Returns:
        (auth_flow, transaction_flow)
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    store = store or create_store(settings)
    adapter = StorageAdapter(store)
    audit_logger = AuditLogger(audit_trail)

    credential_store = CredentialStore(adapter, storage_settings)
    transaction_store = TransactionStore(adapter, storage_settings)

    logger.info(
        "app_components_created",
        backend=type(store).__name__,
        session_restored=credential_store.session.is_authenticated,
    )

    auth_flow = AuthFlow(
        credential_store=credential_store,
        audit_logger=audit_logger,
    )
    transaction_flow = TransactionFlow(
        transaction_store=transaction_store,
        audit_logger=audit_logger,
        app_settings=settings.app,
    )

    return auth_flow, transaction_flow
