"""
Abstract Audit Storage Interface

DESIGN DECISION: We define an abstract interface for audit persistence.
This allows us to:
1. Keep events in memory for tests and short-lived processes
2. Write them to an append-only file in deployments
3. Swap in a real event store later without touching the ledger

Campaign and contribution state is not persisted through this interface;
only the audit trail is.
"""

from abc import ABC, abstractmethod

from campaign_escrow.models.audit import AuditEvent


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Args:
            event: The audit event to log

        Returns:
            True if logged successfully

        Raises:
            StorageError: If the backend could not be written
        """
        pass

    @abstractmethod
    async def get_events_by_campaign(
        self,
        campaign_id: int,
    ) -> list[AuditEvent]:
        """
        Get all events for one campaign.

        Args:
            campaign_id: The campaign identifier

        Returns:
            List of events in chronological order
        """
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Args:
            limit: Maximum number of events to return

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass
