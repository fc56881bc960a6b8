"""In-memory audit storage, the default when no audit file is configured."""

from campaign_escrow.models.audit import AuditEvent
from campaign_escrow.services.storage.interface import AuditStorageInterface


class InMemoryAuditStorage(AuditStorageInterface):
    """Keeps events in a list in arrival order."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_events_by_campaign(
        self,
        campaign_id: int,
    ) -> list[AuditEvent]:
        events = [e for e in self._events if e.campaign_id == campaign_id]
        # sort is stable, so same-timestamp events keep arrival order
        events.sort(key=lambda e: e.timestamp)
        return events

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]

    def __len__(self) -> int:
        return len(self._events)
