"""
Shared fixtures.

All tests run against the in-memory asset ledger, a manual clock and
in-memory audit storage. No network, no files outside tmp_path.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from campaign_escrow.orchestrator import create_app_components
from campaign_escrow.services.access import StaticAdministratorPolicy
from campaign_escrow.services.clock import ManualClock
from campaign_escrow.services.custody import InMemoryAssetLedger
from campaign_escrow.services.storage import InMemoryAuditStorage


START = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
ONE_DAY = timedelta(days=1)


class FlakyAssetLedger(InMemoryAssetLedger):
    """In-memory ledger whose next pull or push can be made to fail."""

    def __init__(self, balances: Optional[dict[str, int]] = None):
        super().__init__(balances)
        self.fail_next_pull: Optional[object] = None
        self.fail_next_push: Optional[object] = None
        self.pull_calls = 0
        self.push_calls = 0

    async def pull_from(self, payer: str, amount: int) -> bool:
        self.pull_calls += 1
        failure, self.fail_next_pull = self.fail_next_pull, None
        if isinstance(failure, BaseException):
            raise failure
        if failure is False:
            return False
        return await super().pull_from(payer, amount)

    async def push_to(self, payee: str, amount: int) -> bool:
        self.push_calls += 1
        failure, self.fail_next_push = self.fail_next_push, None
        if isinstance(failure, BaseException):
            raise failure
        if failure is False:
            return False
        return await super().push_to(payee, amount)


class SlowAssetLedger(InMemoryAssetLedger):
    """Yields to the event loop inside every transfer to expose interleavings."""

    def __init__(self, balances: Optional[dict[str, int]] = None):
        super().__init__(balances)
        self.in_flight = 0
        self.max_in_flight = 0

    async def _pause(self) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        self.in_flight -= 1

    async def pull_from(self, payer: str, amount: int) -> bool:
        await self._pause()
        return await super().pull_from(payer, amount)

    async def push_to(self, payee: str, amount: int) -> bool:
        await self._pause()
        return await super().push_to(payee, amount)


class CountingClock(ManualClock):
    """Manual clock that records how often it was read."""

    def __init__(self, start: Optional[datetime] = None):
        super().__init__(start)
        self.reads = 0

    def now(self) -> datetime:
        self.reads += 1
        return super().now()


@pytest.fixture
def clock() -> CountingClock:
    return CountingClock(START)


@pytest.fixture
def assets() -> FlakyAssetLedger:
    return FlakyAssetLedger({"alice": 1_000, "bob": 1_000, "carol": 1_000})


@pytest.fixture
def audit_storage() -> InMemoryAuditStorage:
    return InMemoryAuditStorage()


@pytest.fixture
def components(assets, clock, audit_storage):
    return create_app_components(
        asset_adapter=assets,
        clock=clock,
        audit_storage=audit_storage,
        admin_policy=StaticAdministratorPolicy({"ops"}),
    )


@pytest.fixture
def registry(components):
    return components[0]


@pytest.fixture
def ledger(components):
    return components[1]


@pytest.fixture
def housekeeping(components):
    return components[2]


@pytest.fixture
def slow_assets() -> SlowAssetLedger:
    return SlowAssetLedger({"alice": 1_000, "bob": 1_000, "carol": 1_000})


@pytest.fixture
def slow_components(slow_assets, clock, audit_storage):
    return create_app_components(
        asset_adapter=slow_assets,
        clock=clock,
        audit_storage=audit_storage,
        admin_policy=StaticAdministratorPolicy({"ops"}),
    )
