"""
Contribution Ledger

Owns the per-(campaign, contributor) pledge balances.

DESIGN DECISION: An absent entry reads as zero, and a refunded entry is set
to zero rather than deleted. That single rule covers both "never pledged"
and "already refunded", so a second refund fails with NoContributionError
without a separate refunded flag.

Ordering around the custody adapter:
- Pull-in (contribute): credit the balance and the campaign total only
  after the debit succeeded.
- Push-out (refund): zero the balance before initiating the payout, and
  restore it if the payout did not happen.
"""

from campaign_escrow.errors import EscrowError, TransferFailedError
from campaign_escrow.ledger.registry import CampaignRegistry
from campaign_escrow.models.campaign import Contribution
from campaign_escrow.validation import check_caller, check_contribution, check_refund


class ContributionLedger:
    """
    Pledge balances keyed by campaign, then contributor.

    Shares the registry's custody adapter, clock, audit logger and lock
    table. A contribution updates both the balance and the campaign total
    atomically, and claims pay out of the custody the pledges went into.
    """

    def __init__(self, registry: CampaignRegistry):
        self._registry = registry
        self._assets = registry.asset_adapter
        self._clock = registry.clock
        self._locks = registry.locks
        self._audit_logger = registry.audit_logger

        self._balances: dict[int, dict[str, int]] = {}
        self._refunded: dict[int, int] = {}

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def balance_of(self, campaign_id: int, contributor: str) -> int:
        """Current pledge; zero if the contributor never pledged or was refunded."""
        return self._balances.get(campaign_id, {}).get(contributor, 0)

    def get_contribution(self, campaign_id: int, contributor: str) -> Contribution:
        self._registry.require(campaign_id)
        return Contribution(
            campaign_id=campaign_id,
            contributor=contributor,
            amount=self.balance_of(campaign_id, contributor),
        )

    def contributors(self, campaign_id: int) -> list[Contribution]:
        """Every contributor ever recorded for the campaign, including refunded ones."""
        self._registry.require(campaign_id)
        return [
            Contribution(campaign_id=campaign_id, contributor=who, amount=amount)
            for who, amount in self._balances.get(campaign_id, {}).items()
        ]

    def outstanding_total(self, campaign_id: int) -> int:
        return sum(self._balances.get(campaign_id, {}).values())

    def refunded_total(self, campaign_id: int) -> int:
        return self._refunded.get(campaign_id, 0)

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    async def contribute(self, caller: str, campaign_id: int, amount: int) -> int:
        """
        Pledge `amount` to an open campaign.

        The asset is pulled from the caller first; only a successful pull
        changes any state. Overfunding past the goal is accepted.

        Returns:
            The caller's cumulative pledge to this campaign

        Raises:
            InvalidArgumentError, NotFoundError, CampaignEndedError,
            TransferFailedError
        """
        now = None
        try:
            check_caller(caller)
            campaign = self._registry.require(campaign_id)
            async with self._locks.for_campaign(campaign_id):
                now = self._clock.now()
                check_contribution(campaign, amount, now)

                pulled = False
                cause = None
                try:
                    pulled = await self._assets.pull_from(caller, amount)
                except Exception as e:
                    cause = e

                if not pulled:
                    reason = str(cause) if cause else "adapter declined debit"
                    await self._audit_logger.log_transfer_failed(
                        operation="contribute",
                        direction="pull",
                        counterparty=caller,
                        amount=amount,
                        campaign_id=campaign_id,
                        error_message=reason,
                        timestamp=now,
                    )
                    raise TransferFailedError(
                        f"Could not pull {amount} from contributor: {reason}", campaign_id
                    ) from cause

                self._registry.record_contribution(campaign, amount)
                entries = self._balances.setdefault(campaign_id, {})
                balance = entries.get(caller, 0) + amount
                entries[caller] = balance
        except TransferFailedError:
            raise
        except EscrowError as e:
            if now is None:
                now = self._clock.now()
            await self._audit_logger.log_operation_rejected(
                "contribute", e, actor=caller, timestamp=now
            )
            raise

        await self._audit_logger.log_contribution_made(
            campaign_id=campaign_id,
            contributor=caller,
            amount=amount,
            timestamp=now,
        )
        return balance

    async def refund(self, caller: str, campaign_id: int) -> int:
        """
        Return the caller's whole pledge from a campaign that missed its goal.

        Checks, first failure wins: valid caller identity, exists, deadline
        passed, goal missed, caller's balance > 0.

        Returns:
            The amount transferred back to the caller

        Raises:
            InvalidArgumentError, NotFoundError, CampaignStillActiveError,
            GoalMetError, NoContributionError, TransferFailedError
        """
        now = None
        try:
            check_caller(caller)
            campaign = self._registry.require(campaign_id)
            async with self._locks.for_campaign(campaign_id):
                now = self._clock.now()
                balance = self.balance_of(campaign_id, caller)
                check_refund(campaign, balance, now)

                entries = self._balances[campaign_id]
                entries[caller] = 0
                delivered = False
                cause = None
                try:
                    delivered = await self._assets.push_to(caller, balance)
                except Exception as e:
                    cause = e
                finally:
                    if not delivered:
                        entries[caller] = balance

                if not delivered:
                    reason = str(cause) if cause else "adapter declined payout"
                    await self._audit_logger.log_transfer_failed(
                        operation="refund",
                        direction="push",
                        counterparty=caller,
                        amount=balance,
                        campaign_id=campaign_id,
                        error_message=reason,
                        timestamp=now,
                    )
                    raise TransferFailedError(
                        f"Refund of {balance} failed: {reason}", campaign_id
                    ) from cause

                self._refunded[campaign_id] = self.refunded_total(campaign_id) + balance
        except TransferFailedError:
            raise
        except EscrowError as e:
            if now is None:
                now = self._clock.now()
            await self._audit_logger.log_operation_rejected(
                "refund", e, actor=caller, timestamp=now
            )
            raise

        await self._audit_logger.log_refund_issued(
            campaign_id=campaign_id,
            contributor=caller,
            amount=balance,
            timestamp=now,
        )
        return balance
