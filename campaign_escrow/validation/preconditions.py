"""
Operation Preconditions

DESIGN DECISION: Every precondition is checked before any state is touched,
in a fixed order, and the first failing check decides the error. This keeps
errors deterministic: a caller who is both the wrong identity and early
always sees UnauthorizedError, never a mix.

Existence of the campaign is checked by the registry lookup itself, which
always runs first.

IMPORTANT: These checks NEVER mutate. They only read the campaign record,
the caller's balance and the time the operation sampled.
"""

from datetime import datetime
from typing import Any

from campaign_escrow.errors import (
    AlreadyClaimedError,
    CampaignEndedError,
    CampaignStillActiveError,
    GoalMetError,
    GoalNotMetError,
    InvalidArgumentError,
    NoContributionError,
    UnauthorizedError,
)
from campaign_escrow.models.campaign import Campaign


def _is_positive_int(value: Any) -> bool:
    # bool is an int subclass; True must not count as one asset unit
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def check_caller(caller: Any) -> None:
    """Every operation runs on behalf of a non-empty string identity."""
    if not isinstance(caller, str) or not caller:
        raise InvalidArgumentError(
            f"Caller identity must be a non-empty string, got {caller!r}"
        )


def check_new_campaign(creator: Any, goal: Any, duration_days: Any) -> None:
    """Creator must be a non-empty identity; goal and duration positive integers."""
    check_caller(creator)
    if not _is_positive_int(goal):
        raise InvalidArgumentError(f"Goal must be a positive integer, got {goal!r}")
    if not _is_positive_int(duration_days):
        raise InvalidArgumentError(
            f"Duration must be a positive number of days, got {duration_days!r}"
        )


def check_claim(campaign: Campaign, caller: str, now: datetime) -> None:
    """
    Claim preconditions, in order:
    creator, deadline passed, goal reached, not yet claimed.
    """
    cid = campaign.campaign_id
    if caller != campaign.creator:
        raise UnauthorizedError("Only the campaign creator may claim funds", cid)
    if campaign.is_open(now):
        raise CampaignStillActiveError(
            f"Campaign {cid} is open until {campaign.deadline.isoformat()}", cid
        )
    if not campaign.goal_reached():
        raise GoalNotMetError(
            f"Campaign {cid} raised {campaign.funds_raised} of {campaign.goal}", cid
        )
    if campaign.is_completed:
        raise AlreadyClaimedError(f"Campaign {cid} has already been claimed", cid)


def check_contribution(campaign: Campaign, amount: Any, now: datetime) -> None:
    """Contribution preconditions: not claimed, still open, then a positive amount."""
    cid = campaign.campaign_id
    if campaign.is_completed:
        raise CampaignEndedError(f"Campaign {cid} has been claimed", cid)
    if not campaign.is_open(now):
        raise CampaignEndedError(
            f"Campaign {cid} ended at {campaign.deadline.isoformat()}", cid
        )
    if not _is_positive_int(amount):
        raise InvalidArgumentError(
            f"Contribution must be a positive integer, got {amount!r}", cid
        )


def check_refund(campaign: Campaign, balance: int, now: datetime) -> None:
    """
    Refund preconditions, in order:
    deadline passed, goal missed, caller holds a non-zero pledge.
    """
    cid = campaign.campaign_id
    if campaign.is_open(now):
        raise CampaignStillActiveError(
            f"Campaign {cid} is open until {campaign.deadline.isoformat()}", cid
        )
    if campaign.goal_reached():
        raise GoalMetError(
            f"Campaign {cid} reached its goal; pledges are not refundable", cid
        )
    if balance <= 0:
        raise NoContributionError(
            f"No refundable contribution to campaign {cid}", cid
        )
