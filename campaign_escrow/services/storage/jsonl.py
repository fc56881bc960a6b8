"""
JSON Lines Audit Storage

DESIGN DECISION: Deployments that want a durable audit trail without running
a database get an append-only file with one JSON event per line.

TRADEOFFS:
- Reads scan the whole file (fine for an audit trail that is rarely queried)
- No cross-process locking (one ledger process owns the file)

Writes are retried with exponential backoff on OSError, since transient
filesystem errors (NFS hiccups, full disk being cleaned) are the common case.
"""

from pathlib import Path
from typing import Optional

import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from campaign_escrow.config import get_settings
from campaign_escrow.models.audit import AuditEvent
from campaign_escrow.services.storage.interface import (
    AuditStorageInterface,
    StorageError,
)


class JsonLinesAuditStorage(AuditStorageInterface):
    """
    File-backed audit storage.

    Each event is serialized with AuditEvent.to_json_line() and appended
    to the configured path.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        retry_attempts: Optional[int] = None,
    ):
        settings = get_settings().audit
        path = path or settings.log_path
        if not path:
            raise StorageError("No audit log path configured (ESCROW_AUDIT_LOG_PATH)")
        self._path = Path(path)
        self._retry_attempts = retry_attempts or settings.retry_attempts
        self._logger = structlog.get_logger(__name__)

    @property
    def path(self) -> Path:
        return self._path

    def _write_line(self, line: str) -> None:
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")

    def _read_events(self) -> list[AuditEvent]:
        if not self._path.exists():
            return []

        events = []
        with self._path.open("r", encoding="utf-8") as fh:
            for lineno, line in enumerate(fh, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    events.append(AuditEvent.model_validate_json(line))
                except ValueError as e:
                    raise StorageError(
                        f"Corrupt audit record at {self._path}:{lineno}: {e}"
                    ) from e
        return events

    async def append_event(self, event: AuditEvent) -> bool:
        """Append an audit event, retrying transient write failures."""
        line = event.to_json_line()
        try:
            # backoff awaits asyncio.sleep; the loop is never blocked
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._retry_attempts),
                wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
                retry=retry_if_exception_type(OSError),
                reraise=True,
            ):
                with attempt:
                    self._write_line(line)
        except OSError as e:
            self._logger.error(
                "audit_file_write_failed",
                path=str(self._path),
                attempts=self._retry_attempts,
                error=str(e),
            )
            raise StorageError(f"Failed to write audit event: {e}") from e
        return True

    async def get_events_by_campaign(
        self,
        campaign_id: int,
    ) -> list[AuditEvent]:
        try:
            events = [e for e in self._read_events() if e.campaign_id == campaign_id]
        except OSError as e:
            raise StorageError(f"Failed to read audit events: {e}") from e
        events.sort(key=lambda e: e.timestamp)
        return events

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        try:
            events = self._read_events()
        except OSError as e:
            raise StorageError(f"Failed to read audit events: {e}") from e
        events.reverse()
        return events[:limit]
