"""
Administrator Capability

DESIGN DECISION: The administrator role is a capability check, not a fixed
identity stored in ledger state. Creator and contributor checks are plain
identity comparisons done by the ledger; only housekeeping operations ask
this policy.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from campaign_escrow.config import get_settings


class AdministratorPolicy(ABC):
    """Decides whether an identity may run housekeeping operations."""

    @abstractmethod
    def is_administrator(self, identity: str) -> bool:
        pass


class StaticAdministratorPolicy(AdministratorPolicy):
    """A fixed set of administrator identities."""

    def __init__(self, identities: Iterable[str] = ()):
        self._identities = frozenset(identities)

    @classmethod
    def from_settings(cls, administrators: Optional[list[str]] = None) -> "StaticAdministratorPolicy":
        """Build from ESCROW administrators configuration unless given explicitly."""
        if administrators is None:
            administrators = get_settings().app.administrators_list
        return cls(administrators)

    def is_administrator(self, identity: str) -> bool:
        return identity in self._identities
