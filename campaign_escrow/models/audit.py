"""
Audit Models for the Campaign Escrow Ledger

Every accepted operation emits one event, and every rejected or failed
operation leaves a trace as well. This provides:
1. The externally observable event stream (created, contributed, claimed, refunded)
2. Debugging information when a transfer fails
3. Ability to reconstruct a campaign's history

DESIGN DECISION: Audit logs are append-only. Events are never consumed by the
ledger itself; they are only observed.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Ledger events (the public event stream)
    CAMPAIGN_CREATED = "campaign_created"
    CONTRIBUTION_MADE = "contribution_made"
    FUNDS_CLAIMED = "funds_claimed"
    REFUND_ISSUED = "refund_issued"

    # Operational events
    OPERATION_REJECTED = "operation_rejected"
    TRANSFER_FAILED = "transfer_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of the audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred, as read from the ledger clock"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - which campaign and who acted
    campaign_id: Optional[int] = Field(
        default=None,
        description="Campaign this event relates to"
    )
    actor: Optional[str] = Field(
        default=None,
        description="Identity of the caller (creator or contributor)"
    )
    amount: Optional[int] = Field(
        default=None,
        ge=0,
        description="Asset units moved or pledged"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "campaign_id": self.campaign_id,
            "actor": self.actor,
            "amount": self.amount,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }

    def to_json_line(self) -> str:
        """Serialize as a single line for append-only file storage."""
        return json.dumps(self.to_log_dict(), sort_keys=True)


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.campaign_created(1, "alice", 100, deadline, now)
        event = AuditEventBuilder.refund_issued(1, "bob", 30, now)
    """

    @staticmethod
    def campaign_created(
        campaign_id: int,
        creator: str,
        goal: int,
        deadline: datetime,
        timestamp: datetime,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CAMPAIGN_CREATED,
            timestamp=timestamp,
            campaign_id=campaign_id,
            actor=creator,
            amount=goal,
            description=f"Campaign {campaign_id} created with goal {goal}",
            details={
                "goal": goal,
                "deadline": deadline.isoformat(),
            },
        )

    @staticmethod
    def contribution_made(
        campaign_id: int,
        contributor: str,
        amount: int,
        timestamp: datetime,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONTRIBUTION_MADE,
            timestamp=timestamp,
            campaign_id=campaign_id,
            actor=contributor,
            amount=amount,
            description=f"Contribution of {amount} to campaign {campaign_id}",
        )

    @staticmethod
    def funds_claimed(
        campaign_id: int,
        creator: str,
        amount: int,
        timestamp: datetime,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FUNDS_CLAIMED,
            timestamp=timestamp,
            campaign_id=campaign_id,
            actor=creator,
            amount=amount,
            description=f"Campaign {campaign_id} claimed: {amount} released",
        )

    @staticmethod
    def refund_issued(
        campaign_id: int,
        contributor: str,
        amount: int,
        timestamp: datetime,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REFUND_ISSUED,
            timestamp=timestamp,
            campaign_id=campaign_id,
            actor=contributor,
            amount=amount,
            description=f"Refund of {amount} from campaign {campaign_id}",
        )

    @staticmethod
    def operation_rejected(
        operation: str,
        error_code: str,
        error_message: str,
        actor: Optional[str] = None,
        campaign_id: Optional[int] = None,
        timestamp: Optional[datetime] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OPERATION_REJECTED,
            severity=AuditSeverity.WARNING,
            timestamp=timestamp or _utcnow(),
            campaign_id=campaign_id,
            actor=actor,
            description=f"{operation} rejected: {error_code}",
            details={
                "operation": operation,
            },
            error_code=error_code,
            error_message=error_message,
        )

    @staticmethod
    def transfer_failed(
        operation: str,
        direction: str,
        counterparty: str,
        amount: int,
        campaign_id: int,
        error_message: str,
        timestamp: Optional[datetime] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSFER_FAILED,
            severity=AuditSeverity.ERROR,
            timestamp=timestamp or _utcnow(),
            campaign_id=campaign_id,
            actor=counterparty,
            amount=amount,
            description=f"{operation} transfer ({direction}) failed",
            details={
                "operation": operation,
                "direction": direction,
            },
            error_code="transfer_failed",
            error_message=error_message,
        )
