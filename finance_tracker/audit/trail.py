"""
In-Memory Audit Trail

Keeps the most recent audit events of this process so the presentation
layer (or a test) can show what just happened. Append-only: events are
never modified, the oldest fall off once the trail is full.
"""

from collections import deque
from typing import Optional
from uuid import UUID

from finance_tracker.models.audit import AuditEvent, AuditEventType


class AuditTrail:
    """Bounded, append-only list of audit events."""

    def __init__(self, max_events: int = 1000):
        self._events: deque[AuditEvent] = deque(maxlen=max_events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_correlation_id(self, correlation_id: UUID) -> list[AuditEvent]:
        """All events of one user action, in chronological order."""
        return [e for e in self._events if e.correlation_id == correlation_id]

    def get_events_by_type(self, event_type: AuditEventType) -> list[AuditEvent]:
        return [e for e in self._events if e.event_type == event_type]

    def get_recent_events(self, limit: Optional[int] = 100) -> list[AuditEvent]:
        """Most recent events, newest first."""
        events = list(reversed(self._events))
        return events if limit is None else events[:limit]

    def __len__(self) -> int:
        return len(self._events)
