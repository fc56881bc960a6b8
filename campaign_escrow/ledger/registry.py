"""
Campaign Registry

Owns every Campaign record and its lifecycle:
1. Create → allocate the next id, fix goal and deadline
2. Contribute → funds_raised grows (driven by the Contribution Ledger)
3. Claim → creator withdraws the total once, after a successful deadline

DESIGN DECISION: Identifiers are dense and start at 1, so existence is a
range check (0 < id <= count). The counter is never reset and ids are never
reused.

DESIGN DECISION: State changes before the external effect. A claim marks the
campaign completed before asking the custody adapter to pay out, and puts
the flag back if the payout did not happen. Callers only ever see full
success or a single TransferFailedError with nothing changed.
"""

from datetime import timedelta
from typing import Optional

from campaign_escrow.audit import AuditLogger
from campaign_escrow.errors import (
    EscrowError,
    InvalidArgumentError,
    NotFoundError,
    TransferFailedError,
)
from campaign_escrow.ledger.locks import CampaignLocks
from campaign_escrow.models.campaign import Campaign, CampaignDetails, CampaignState
from campaign_escrow.services.clock import Clock, SystemClock
from campaign_escrow.services.custody import AssetTransferInterface
from campaign_escrow.validation import check_caller, check_claim, check_new_campaign


SECONDS_PER_DAY = 86400


class CampaignRegistry:
    """
    The set of campaigns, their identifiers and their lifecycle state.

    All mutations happen under the campaign lock from the shared
    CampaignLocks table; the Contribution Ledger uses the same table.
    """

    def __init__(
        self,
        asset_adapter: AssetTransferInterface,
        clock: Optional[Clock] = None,
        audit_logger: Optional[AuditLogger] = None,
        locks: Optional[CampaignLocks] = None,
    ):
        self._assets = asset_adapter
        self._clock = clock or SystemClock()
        self._audit_logger = audit_logger or AuditLogger()
        self._locks = locks if locks is not None else CampaignLocks()

        self._campaigns: dict[int, Campaign] = {}
        self._count = 0

    @property
    def asset_adapter(self) -> AssetTransferInterface:
        return self._assets

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def locks(self) -> CampaignLocks:
        return self._locks

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def campaign_count(self) -> int:
        return self._count

    def exists(self, campaign_id: int) -> bool:
        return (
            isinstance(campaign_id, int)
            and not isinstance(campaign_id, bool)
            and 0 < campaign_id <= self._count
        )

    def require(self, campaign_id: int) -> Campaign:
        """
        Return the live record for a campaign.

        Only the ledger components may hold this; callers get snapshots.

        Raises:
            NotFoundError: If the id was never allocated
        """
        if not self.exists(campaign_id):
            raise NotFoundError(f"Campaign {campaign_id!r} does not exist")
        return self._campaigns[campaign_id]

    def get_campaign_details(self, campaign_id: int) -> CampaignDetails:
        """Read-only snapshot of one campaign. No side effects."""
        return self.require(campaign_id).snapshot(self._clock.now())

    def list_campaigns(
        self,
        state: Optional[CampaignState] = None,
        creator: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[CampaignDetails]:
        """
        List campaigns in id order with optional filters.

        Args:
            state: Only campaigns currently in this lifecycle state
            creator: Only campaigns created by this identity
            limit: Maximum number of results
            offset: Number of matching results to skip
        """
        now = self._clock.now()
        results = []
        for campaign_id in range(1, self._count + 1):
            details = self._campaigns[campaign_id].snapshot(now)
            if state is not None and details.state != state:
                continue
            if creator is not None and details.creator != creator:
                continue
            results.append(details)
        return results[offset:offset + limit]

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    async def create_campaign(
        self,
        caller: str,
        goal: int,
        duration_days: int,
    ) -> int:
        """
        Open a new campaign owned by the caller.

        The deadline is fixed now: creation time plus duration_days * 86400s.

        Returns:
            The new campaign id (the first campaign is 1)

        Raises:
            InvalidArgumentError: If the caller is not a non-empty identity, or
                goal or duration is not a positive integer
        """
        now = None
        try:
            check_new_campaign(caller, goal, duration_days)
            async with self._locks.allocation:
                now = self._clock.now()
                try:
                    deadline = now + timedelta(seconds=duration_days * SECONDS_PER_DAY)
                except OverflowError:
                    raise InvalidArgumentError(
                        f"Duration of {duration_days} days is out of range"
                    ) from None

                campaign = Campaign(
                    campaign_id=self._count + 1,
                    creator=caller,
                    goal=goal,
                    deadline=deadline,
                    created_at=now,
                )
                self._campaigns[campaign.campaign_id] = campaign
                self._count = campaign.campaign_id
        except EscrowError as e:
            if now is None:
                now = self._clock.now()
            await self._audit_logger.log_operation_rejected(
                "create_campaign", e, actor=caller, timestamp=now
            )
            raise

        await self._audit_logger.log_campaign_created(
            campaign_id=campaign.campaign_id,
            creator=caller,
            goal=goal,
            deadline=deadline,
            timestamp=now,
        )
        return campaign.campaign_id

    async def claim_funds(self, caller: str, campaign_id: int) -> int:
        """
        Release a successful campaign's full total to its creator.

        Checks, first failure wins: valid caller identity, exists, caller is
        creator, deadline passed, goal reached, not already claimed.

        Returns:
            The amount transferred to the creator

        Raises:
            InvalidArgumentError, NotFoundError, UnauthorizedError,
            CampaignStillActiveError,
            GoalNotMetError, AlreadyClaimedError, TransferFailedError
        """
        now = None
        try:
            check_caller(caller)
            campaign = self.require(campaign_id)
            async with self._locks.for_campaign(campaign_id):
                now = self._clock.now()
                check_claim(campaign, caller, now)
                amount = campaign.funds_raised

                campaign.is_completed = True
                delivered = False
                cause = None
                try:
                    delivered = await self._assets.push_to(campaign.creator, amount)
                except Exception as e:
                    cause = e
                finally:
                    if not delivered:
                        campaign.is_completed = False

                if not delivered:
                    reason = str(cause) if cause else "adapter declined payout"
                    await self._audit_logger.log_transfer_failed(
                        operation="claim_funds",
                        direction="push",
                        counterparty=campaign.creator,
                        amount=amount,
                        campaign_id=campaign_id,
                        error_message=reason,
                        timestamp=now,
                    )
                    raise TransferFailedError(
                        f"Payout of {amount} to creator failed: {reason}", campaign_id
                    ) from cause
        except TransferFailedError:
            raise
        except EscrowError as e:
            if now is None:
                now = self._clock.now()
            await self._audit_logger.log_operation_rejected(
                "claim_funds", e, actor=caller, timestamp=now
            )
            raise

        await self._audit_logger.log_funds_claimed(
            campaign_id=campaign_id,
            creator=caller,
            amount=amount,
            timestamp=now,
        )
        return amount

    # =========================================================================
    # LEDGER HOOKS
    # =========================================================================

    def record_contribution(self, campaign: Campaign, amount: int) -> None:
        """
        Add an accepted contribution to the campaign total.

        Called by the Contribution Ledger only, under the campaign lock and
        only after the asset pull succeeded. check_contribution has already
        rejected completed campaigns, so the total of a claimed campaign never
        changes.
        """
        campaign.funds_raised = campaign.funds_raised + amount
