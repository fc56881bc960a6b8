"""
Main Orchestrator for the Campaign Escrow Ledger

This module ties the components together:
1. Campaign Registry + Contribution Ledger sharing one lock table, clock and audit logger
2. Audit storage chosen from configuration
3. Administrative housekeeping behind the administrator capability

DESIGN DECISION: Housekeeping never mutates campaigns or balances. An
administrator can inspect and reconcile, but cannot move funds or change
outcomes. Creator and contributor rights stay with the ledger's own checks.
"""

from typing import Optional

import structlog

from campaign_escrow.audit import AuditLogger
from campaign_escrow.config import get_settings
from campaign_escrow.errors import UnauthorizedError
from campaign_escrow.ledger import CampaignLocks, CampaignRegistry, ContributionLedger
from campaign_escrow.models.audit import AuditEvent
from campaign_escrow.models.campaign import CampaignState, ReconciliationReport
from campaign_escrow.services.access import AdministratorPolicy, StaticAdministratorPolicy
from campaign_escrow.services.clock import Clock, SystemClock
from campaign_escrow.services.custody import AssetTransferInterface
from campaign_escrow.services.storage import (
    AuditStorageInterface,
    InMemoryAuditStorage,
    JsonLinesAuditStorage,
)


class HousekeepingFlow:
    """
    Operational housekeeping for administrators.

    Every method checks the administrator capability first and raises
    UnauthorizedError for anyone else.
    """

    def __init__(
        self,
        registry: CampaignRegistry,
        ledger: ContributionLedger,
        admin_policy: AdministratorPolicy,
        audit_storage: Optional[AuditStorageInterface] = None,
    ):
        self._registry = registry
        self._ledger = ledger
        self._admin_policy = admin_policy
        self._audit_storage = audit_storage
        self._logger = structlog.get_logger(__name__)

    def _require_admin(self, caller: str, operation: str) -> None:
        if not self._admin_policy.is_administrator(caller):
            self._logger.warning("housekeeping_denied", caller=caller, operation=operation)
            raise UnauthorizedError(f"{operation} requires the administrator capability")

    async def reconcile(self, caller: str, campaign_id: int) -> ReconciliationReport:
        """
        Check a campaign's total against its ledger entries.

        Runs under the campaign lock so the figures come from one consistent
        moment.
        """
        self._require_admin(caller, "reconcile")
        campaign = self._registry.require(campaign_id)

        async with self._registry.locks.for_campaign(campaign_id):
            now = self._registry.clock.now()
            state = campaign.state_at(now)
            outstanding = self._ledger.outstanding_total(campaign_id)
            refunded = self._ledger.refunded_total(campaign_id)
            contributor_count = len(self._ledger.contributors(campaign_id))
            funds_raised = campaign.funds_raised

        discrepancy = funds_raised - (outstanding + refunded)
        custody = 0 if state == CampaignState.CLAIMED else outstanding

        report = ReconciliationReport(
            campaign_id=campaign_id,
            state=state,
            funds_raised=funds_raised,
            outstanding_pledges=outstanding,
            refunded_total=refunded,
            contributor_count=contributor_count,
            custody_balance=custody,
            is_balanced=discrepancy == 0,
            discrepancy=discrepancy or None,
        )
        if not report.is_balanced:
            self._logger.error(
                "reconciliation_mismatch",
                campaign_id=campaign_id,
                discrepancy=discrepancy,
            )
        return report

    async def audit_trail(self, caller: str, campaign_id: int) -> list[AuditEvent]:
        """All recorded events for a campaign, oldest first."""
        self._require_admin(caller, "audit_trail")
        self._registry.require(campaign_id)
        if self._audit_storage is None:
            return []
        return await self._audit_storage.get_events_by_campaign(campaign_id)


def create_audit_storage() -> AuditStorageInterface:
    """File-backed storage when ESCROW_AUDIT_LOG_PATH is set, otherwise in-memory."""
    if get_settings().audit.log_path:
        return JsonLinesAuditStorage()
    return InMemoryAuditStorage()


def create_app_components(
    asset_adapter: AssetTransferInterface,
    clock: Optional[Clock] = None,
    audit_storage: Optional[AuditStorageInterface] = None,
    admin_policy: Optional[AdministratorPolicy] = None,
) -> tuple[CampaignRegistry, ContributionLedger, HousekeepingFlow]:
    """
    Factory function to create all ledger components.

    Args:
        asset_adapter: The external asset ledger used for custody.
        clock: Time source. Defaults to the UTC wall clock.
        audit_storage: Where audit events are persisted.
                       Defaults to the configured storage.
        admin_policy: Administrator capability check.
                      Defaults to the configured administrator list.

    Returns:
        (registry, ledger, housekeeping)
    """
    if audit_storage is None:
        audit_storage = create_audit_storage()
    audit_logger = AuditLogger(audit_storage)

    registry = CampaignRegistry(
        asset_adapter=asset_adapter,
        clock=clock or SystemClock(),
        audit_logger=audit_logger,
        locks=CampaignLocks(),
    )
    ledger = ContributionLedger(registry)
    housekeeping = HousekeepingFlow(
        registry=registry,
        ledger=ledger,
        admin_policy=admin_policy or StaticAdministratorPolicy.from_settings(),
        audit_storage=audit_storage,
    )

    return registry, ledger, housekeeping
