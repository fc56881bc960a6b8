"""
Escrow Error Taxonomy

DESIGN DECISION: Every failure surfaces as a distinct exception class with a
stable machine-readable kind. Callers (and tests) assert on the cause,
never on "something failed".

Precondition errors are raised before any state is touched.
TransferFailedError is the only error that can follow a tentative local
change, and the ledger rolls that change back before raising it.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Stable error kinds exposed to callers."""
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    CAMPAIGN_STILL_ACTIVE = "campaign_still_active"
    CAMPAIGN_ENDED = "campaign_ended"
    GOAL_NOT_MET = "goal_not_met"
    GOAL_MET = "goal_met"
    ALREADY_CLAIMED = "already_claimed"
    NO_CONTRIBUTION = "no_contribution"
    TRANSFER_FAILED = "transfer_failed"


class EscrowError(Exception):
    """Base exception for all ledger operations."""

    kind: ErrorKind

    def __init__(self, message: str, campaign_id: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.campaign_id = campaign_id


class InvalidArgumentError(EscrowError):
    """Goal, duration or amount is not a positive integer."""
    kind = ErrorKind.INVALID_ARGUMENT


class NotFoundError(EscrowError):
    """Campaign id outside the allocated range."""
    kind = ErrorKind.NOT_FOUND


class UnauthorizedError(EscrowError):
    """Caller identity does not hold the required role."""
    kind = ErrorKind.UNAUTHORIZED


class CampaignStillActiveError(EscrowError):
    """Operation requires the deadline to have passed."""
    kind = ErrorKind.CAMPAIGN_STILL_ACTIVE


class CampaignEndedError(EscrowError):
    """Operation requires the campaign to still be open."""
    kind = ErrorKind.CAMPAIGN_ENDED


class GoalNotMetError(EscrowError):
    """Claim attempted on a campaign below its goal."""
    kind = ErrorKind.GOAL_NOT_MET


class GoalMetError(EscrowError):
    """Refund attempted on a campaign that reached its goal."""
    kind = ErrorKind.GOAL_MET


class AlreadyClaimedError(EscrowError):
    kind = ErrorKind.ALREADY_CLAIMED


class NoContributionError(EscrowError):
    """Caller has no outstanding pledge (never pledged, or already refunded)."""
    kind = ErrorKind.NO_CONTRIBUTION


class TransferFailedError(EscrowError):
    """The asset-transfer adapter reported failure; no state was changed."""
    kind = ErrorKind.TRANSFER_FAILED
