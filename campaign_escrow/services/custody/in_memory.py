"""
In-Memory Asset Ledger

A reference implementation of the asset-transfer contract that keeps account
balances in a dict. Used for tests, simulations and local development.

Pulls fail when the payer cannot cover the amount. Pushes fail when custody
cannot cover it, which would indicate an accounting bug in the caller.
"""

from collections import defaultdict
from typing import Optional

import structlog

from campaign_escrow.services.custody.interface import AssetTransferInterface


class InMemoryAssetLedger(AssetTransferInterface):
    """Account balances plus a single custody balance."""

    def __init__(self, balances: Optional[dict[str, int]] = None):
        self._balances: defaultdict[str, int] = defaultdict(int, balances or {})
        self._custody = 0
        self._logger = structlog.get_logger(__name__)

    @property
    def custody_balance(self) -> int:
        return self._custody

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def mint(self, account: str, amount: int) -> None:
        """Credit an account out of thin air (test and simulation setup)."""
        if amount <= 0:
            raise ValueError("Mint amount must be positive")
        self._balances[account] += amount

    async def pull_from(self, payer: str, amount: int) -> bool:
        if amount <= 0 or self._balances.get(payer, 0) < amount:
            self._logger.info(
                "asset_pull_declined",
                payer=payer,
                amount=amount,
                available=self._balances.get(payer, 0),
            )
            return False
        self._balances[payer] -= amount
        self._custody += amount
        return True

    async def push_to(self, payee: str, amount: int) -> bool:
        if amount <= 0 or self._custody < amount:
            self._logger.warning(
                "asset_push_declined",
                payee=payee,
                amount=amount,
                custody=self._custody,
            )
            return False
        self._custody -= amount
        self._balances[payee] += amount
        return True
