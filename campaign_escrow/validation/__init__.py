"""Precondition checks for ledger operations."""

from campaign_escrow.validation.preconditions import (
    check_caller,
    check_claim,
    check_contribution,
    check_new_campaign,
    check_refund,
)

__all__ = [
    "check_caller",
    "check_claim",
    "check_contribution",
    "check_new_campaign",
    "check_refund",
]
