"""
Asset-Transfer Adapter Contract

DESIGN DECISION: The ledger never moves value itself. It asks an external
fungible-asset ledger to pull funds from a payer into custody, or to push
funds out of custody to a payee.

The contract is deliberately minimal:
- A transfer either fully happens (True) or does not happen at all (False).
- The adapter keeps no state about campaigns.
- Raising an exception is treated exactly like returning False.

Each ledger operation makes at most one adapter call, and that call is the
only point where the operation suspends.
"""

from abc import ABC, abstractmethod


class AssetTransferInterface(ABC):
    """
    Abstract interface for moving a fungible asset in and out of custody.

    Any asset backend (a token ledger, a payment processor, an internal
    wallet service) must implement these methods.
    """

    @abstractmethod
    async def pull_from(self, payer: str, amount: int) -> bool:
        """
        Move `amount` from the payer's account into escrow custody.

        Args:
            payer: Identity being debited
            amount: Positive number of asset units

        Returns:
            True if the debit was applied, False if nothing moved
        """
        pass

    @abstractmethod
    async def push_to(self, payee: str, amount: int) -> bool:
        """
        Move `amount` out of escrow custody to the payee.

        Args:
            payee: Identity being credited
            amount: Positive number of asset units

        Returns:
            True if the credit was applied, False if nothing moved
        """
        pass
