"""Audit logging package."""

from campaign_escrow.audit.logger import AuditLogger

__all__ = ["AuditLogger"]
