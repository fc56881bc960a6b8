"""
Per-Campaign Lock Table

Every mutating operation on a campaign runs entirely under that campaign's
lock, including the awaited asset transfer. Two contributions to the same
campaign therefore never interleave their read-modify-write of funds_raised,
and a claim never observes a total that another task is about to change.

Operations on different campaigns proceed concurrently.

The allocation lock guards the identifier counter together with the insert
of the new record.

NOTE: asyncio locks are not reentrant. An asset adapter must not call back
into the ledger for the same campaign from inside pull_from/push_to.
"""

import asyncio


class CampaignLocks:
    """Lazily created asyncio locks keyed by campaign id."""

    def __init__(self):
        self._locks: dict[int, asyncio.Lock] = {}
        self.allocation = asyncio.Lock()

    def for_campaign(self, campaign_id: int) -> asyncio.Lock:
        lock = self._locks.get(campaign_id)
        if lock is None:
            lock = self._locks[campaign_id] = asyncio.Lock()
        return lock

    def __len__(self) -> int:
        return len(self._locks)
