"""
Audit Storage Services Package

Provides the abstract audit storage interface and its implementations:
in-memory (default) and an append-only JSON lines file.
"""

from campaign_escrow.services.storage.interface import (
    AuditStorageInterface,
    StorageError,
)
from campaign_escrow.services.storage.memory import InMemoryAuditStorage
from campaign_escrow.services.storage.jsonl import JsonLinesAuditStorage

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    # Exceptions
    "StorageError",
    # Implementations
    "InMemoryAuditStorage",
    "JsonLinesAuditStorage",
]
