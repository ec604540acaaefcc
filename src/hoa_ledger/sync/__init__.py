"""Outbox and remote mirror for engine state."""

from hoa_ledger.sync.records import SyncRecord, SyncReport, SyncTable
from hoa_ledger.sync.remote import RemoteMirror

__all__ = ["RemoteMirror", "SyncRecord", "SyncReport", "SyncTable"]
