"""
Custody Services Package

The asset-transfer adapter contract and an in-memory reference implementation.
"""

from campaign_escrow.services.custody.interface import AssetTransferInterface
from campaign_escrow.services.custody.in_memory import InMemoryAssetLedger

__all__ = [
    "AssetTransferInterface",
    "InMemoryAssetLedger",
]
