"""Audit logging package."""

from finance_tracker.audit.logger import AuditLogger, create_correlation_id
from finance_tracker.audit.trail import AuditTrail

__all__ = ["AuditLogger", "AuditTrail", "create_correlation_id"]
