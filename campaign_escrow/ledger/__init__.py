"""
Ledger Core

The Campaign Registry and the Contribution Ledger. They share one lock table
and are always used together.
"""

from campaign_escrow.ledger.contributions import ContributionLedger
from campaign_escrow.ledger.locks import CampaignLocks
from campaign_escrow.ledger.registry import SECONDS_PER_DAY, CampaignRegistry

__all__ = [
    "CampaignLocks",
    "CampaignRegistry",
    "ContributionLedger",
    "SECONDS_PER_DAY",
]
