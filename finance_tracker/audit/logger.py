"""
Audit Logger

DESIGN DECISION: Every mutation and every authentication attempt is logged.
This provides:
1. Traceability of changes to stored data
2. Debugging capability
3. A history the user can be shown

The audit logger:
- Never raises (a logging failure must not undo a saved transaction)
- Supports correlation IDs to trace related events
- Optionally keeps events in an in-memory AuditTrail
"""

from typing import Optional
from uuid import UUID, uuid4

import structlog

from finance_tracker.audit.trail import AuditTrail
from finance_tracker.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory AuditTrail (for display), if one is given
    """

    def __init__(
        self,
        trail: Optional[AuditTrail] = None,
    ):
        """
        Initialize audit logger.

        Args:
            trail: Where to keep events for later inspection.
                   If None, only logs locally.
        """
        self._trail = trail
        self._logger = structlog.get_logger(__name__)

    @property
    def trail(self) -> Optional[AuditTrail]:
        return self._trail

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Appends to the trail if available.

        Returns True if the trail append succeeded (or no trail configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._trail is not None:
            try:
                return self._trail.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_trail_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_transaction_created(
        self,
        transaction_id: str,
        transaction_type: str,
        amount: str,
        category: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a new transaction."""
        event = AuditEventBuilder.transaction_created(
            transaction_id=transaction_id,
            transaction_type=transaction_type,
            amount=amount,
            category=category,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_transaction_updated(
        self,
        transaction_id: str,
        changed_fields: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an edit."""
        event = AuditEventBuilder.transaction_updated(
            transaction_id=transaction_id,
            changed_fields=changed_fields,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_transaction_deleted(
        self,
        transaction_id: str,
        existed: bool,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a delete (including deletes of unknown IDs)."""
        event = AuditEventBuilder.transaction_deleted(
            transaction_id=transaction_id,
            existed=existed,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_validation_failed(
        self,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a declined submission."""
        event = AuditEventBuilder.validation_failed(
            issues=issues,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_user_signed_up(
        self,
        user_id: str,
        email: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.user_signed_up(
            user_id=user_id,
            email=email,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_signup_rejected(
        self,
        email: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.signup_rejected(
            email=email,
            reason=reason,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_login_succeeded(
        self,
        user_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.login_succeeded(
            user_id=user_id,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_login_failed(
        self,
        email: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a failed login. The password is never logged."""
        event = AuditEventBuilder.login_failed(
            email=email,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_logged_out(
        self,
        user_id: Optional[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.logged_out(
            user_id=user_id,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_data_exported(
        self,
        filename: str,
        row_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.data_exported(
            filename=filename,
            row_count=row_count,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_storage_error(
        self,
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a backend read/write failure."""
        event = AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        await self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., a form submission).
    Pass it through all subsequent operations.
    """
    return uuid4()
