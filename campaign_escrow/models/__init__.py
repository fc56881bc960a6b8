"""
Data Models Package

This package contains all Pydantic models used by the escrow ledger.
All data handed to callers or written to the audit trail conforms to these schemas.
"""

from campaign_escrow.models.campaign import (
    Campaign,
    CampaignDetails,
    CampaignState,
    Contribution,
    ReconciliationReport,
)
from campaign_escrow.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Campaign models
    "Campaign",
    "CampaignDetails",
    "CampaignState",
    "Contribution",
    "ReconciliationReport",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
