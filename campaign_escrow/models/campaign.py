"""
Core Data Models for the Campaign Escrow Ledger

These models define the records owned by the Campaign Registry and the
Contribution Ledger, plus the read-only snapshots handed to callers.

DESIGN DECISION: Amounts are integers in fixed asset units. There is no
fractional accounting, so every sum in the ledger is exact.

DESIGN DECISION: Callers only ever receive immutable snapshots
(CampaignDetails, Contribution). The mutable Campaign record never leaves
the registry.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS
# =============================================================================

class CampaignState(str, Enum):
    """
    Lifecycle state of a campaign, derived at read time.

    OPEN -> EXPIRED_SUCCESS -> CLAIMED
    OPEN -> EXPIRED_FAILURE (contributors refund individually)

    There is no way back to OPEN and no cancellation.
    """
    OPEN = "open"
    EXPIRED_SUCCESS = "expired_success"
    EXPIRED_FAILURE = "expired_failure"
    CLAIMED = "claimed"


# =============================================================================
# CAMPAIGN
# =============================================================================

class Campaign(BaseModel):
    """
    A fundraising campaign as stored by the registry.

    funds_raised only grows through recorded contributions and is frozen
    once is_completed is set.
    """
    model_config = ConfigDict(validate_assignment=True)

    campaign_id: int = Field(
        ...,
        ge=1,
        description="Sequential identifier, first campaign is 1"
    )
    creator: str = Field(
        ...,
        min_length=1,
        description="Identity allowed to claim the funds"
    )
    goal: int = Field(
        ...,
        gt=0,
        description="Target amount in asset units"
    )
    deadline: datetime = Field(
        ...,
        description="Absolute time after which the campaign is expired"
    )
    created_at: datetime
    funds_raised: int = Field(
        default=0,
        ge=0,
        description="Running total of accepted contributions"
    )
    is_completed: bool = Field(
        default=False,
        description="Set exactly once, by a successful claim"
    )

    @field_validator('deadline', 'created_at')
    @classmethod
    def require_timezone(cls, v: datetime) -> datetime:
        """Naive datetimes would make deadline comparisons ambiguous."""
        if v.tzinfo is None:
            raise ValueError("Timestamps must be timezone-aware")
        return v

    def is_open(self, now: datetime) -> bool:
        return now < self.deadline

    def goal_reached(self) -> bool:
        return self.funds_raised >= self.goal

    def state_at(self, now: datetime) -> CampaignState:
        """Compute the lifecycle state at the given time."""
        if self.is_completed:
            return CampaignState.CLAIMED
        if self.is_open(now):
            return CampaignState.OPEN
        if self.goal_reached():
            return CampaignState.EXPIRED_SUCCESS
        return CampaignState.EXPIRED_FAILURE

    def snapshot(self, now: datetime) -> "CampaignDetails":
        return CampaignDetails(
            campaign_id=self.campaign_id,
            creator=self.creator,
            goal=self.goal,
            deadline=self.deadline,
            funds_raised=self.funds_raised,
            is_completed=self.is_completed,
            state=self.state_at(now),
        )


class CampaignDetails(BaseModel):
    """Read-only view of a campaign returned by queries."""
    model_config = ConfigDict(frozen=True)

    campaign_id: int
    creator: str
    goal: int
    deadline: datetime
    funds_raised: int
    is_completed: bool
    state: CampaignState

    def as_tuple(self) -> tuple[str, int, datetime, int, bool]:
        """(creator, goal, deadline, funds_raised, is_completed)"""
        return (
            self.creator,
            self.goal,
            self.deadline,
            self.funds_raised,
            self.is_completed,
        )


# =============================================================================
# CONTRIBUTIONS
# =============================================================================

class Contribution(BaseModel):
    """
    A contributor's cumulative pledge to one campaign.

    A zero amount is a valid terminal state: it means either "never
    contributed" or "already refunded". Both reject a refund the same way.
    """
    model_config = ConfigDict(frozen=True)

    campaign_id: int = Field(..., ge=1)
    contributor: str
    amount: int = Field(default=0, ge=0)


# =============================================================================
# HOUSEKEEPING
# =============================================================================

class ReconciliationReport(BaseModel):
    """
    Result of comparing a campaign's recorded total with its ledger entries.

    Before a claim, funds_raised must equal outstanding pledges plus
    everything already refunded. custody_balance is what this ledger still
    owes out of custody for the campaign.
    """
    model_config = ConfigDict(frozen=True)

    campaign_id: int
    state: CampaignState
    funds_raised: int
    outstanding_pledges: int
    refunded_total: int
    contributor_count: int
    custody_balance: int
    is_balanced: bool
    discrepancy: Optional[int] = Field(
        default=None,
        description="funds_raised minus (outstanding + refunded), when non-zero"
    )
