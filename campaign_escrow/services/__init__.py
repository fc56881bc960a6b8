"""Services package."""

from campaign_escrow.services.access import (
    AdministratorPolicy,
    StaticAdministratorPolicy,
)
from campaign_escrow.services.clock import Clock, ManualClock, SystemClock
from campaign_escrow.services.custody import (
    AssetTransferInterface,
    InMemoryAssetLedger,
)
from campaign_escrow.services.storage import (
    AuditStorageInterface,
    InMemoryAuditStorage,
    JsonLinesAuditStorage,
    StorageError,
)

__all__ = [
    # Access
    "AdministratorPolicy",
    "StaticAdministratorPolicy",
    # Clock
    "Clock",
    "ManualClock",
    "SystemClock",
    # Custody
    "AssetTransferInterface",
    "InMemoryAssetLedger",
    # Audit storage
    "AuditStorageInterface",
    "InMemoryAuditStorage",
    "JsonLinesAuditStorage",
    "StorageError",
]
