"""
Audit Logger

DESIGN DECISION: Every ledger operation is logged, whether it succeeded,
was rejected, or failed at the transfer step.

The audit logger:
- Is async so it composes with the ledger's async operations
- Never breaks a ledger operation if persistence fails
- Is the single place where the public event stream is emitted
"""

from datetime import datetime
from typing import Optional

import structlog

from campaign_escrow.errors import EscrowError
from campaign_escrow.models.audit import AuditEvent, AuditEventBuilder
from campaign_escrow.services.storage import AuditStorageInterface


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
    2. Audit storage (for persistence and later reconciliation)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("campaign_escrow.audit")

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage is not None:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_campaign_created(
        self,
        campaign_id: int,
        creator: str,
        goal: int,
        deadline: datetime,
        timestamp: datetime,
    ) -> None:
        """Log CampaignCreated."""
        event = AuditEventBuilder.campaign_created(
            campaign_id=campaign_id,
            creator=creator,
            goal=goal,
            deadline=deadline,
            timestamp=timestamp,
        )
        await self.log(event)

    async def log_contribution_made(
        self,
        campaign_id: int,
        contributor: str,
        amount: int,
        timestamp: datetime,
    ) -> None:
        """Log ContributionMade."""
        event = AuditEventBuilder.contribution_made(
            campaign_id=campaign_id,
            contributor=contributor,
            amount=amount,
            timestamp=timestamp,
        )
        await self.log(event)

    async def log_funds_claimed(
        self,
        campaign_id: int,
        creator: str,
        amount: int,
        timestamp: datetime,
    ) -> None:
        """Log FundsClaimed."""
        event = AuditEventBuilder.funds_claimed(
            campaign_id=campaign_id,
            creator=creator,
            amount=amount,
            timestamp=timestamp,
        )
        await self.log(event)

    async def log_refund_issued(
        self,
        campaign_id: int,
        contributor: str,
        amount: int,
        timestamp: datetime,
    ) -> None:
        """Log RefundIssued."""
        event = AuditEventBuilder.refund_issued(
            campaign_id=campaign_id,
            contributor=contributor,
            amount=amount,
            timestamp=timestamp,
        )
        await self.log(event)

    async def log_operation_rejected(
        self,
        operation: str,
        error: EscrowError,
        actor: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> None:
        """Log a precondition failure."""
        if actor is not None and not isinstance(actor, str):
            # rejected for a malformed identity; keep the record loggable
            actor = repr(actor)
        event = AuditEventBuilder.operation_rejected(
            operation=operation,
            error_code=error.kind.value,
            error_message=error.message,
            actor=actor,
            campaign_id=error.campaign_id,
            timestamp=timestamp,
        )
        await self.log(event)

    async def log_transfer_failed(
        self,
        operation: str,
        direction: str,
        counterparty: str,
        amount: int,
        campaign_id: int,
        error_message: str,
        timestamp: Optional[datetime] = None,
    ) -> None:
        """Log an asset transfer that did not go through."""
        event = AuditEventBuilder.transfer_failed(
            operation=operation,
            direction=direction,
            counterparty=counterparty,
            amount=amount,
            campaign_id=campaign_id,
            error_message=error_message,
            timestamp=timestamp,
        )
        await self.log(event)
