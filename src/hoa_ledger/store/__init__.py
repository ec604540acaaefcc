"""Snapshot persistence."""

from hoa_ledger.store.files import JsonFileStore
from hoa_ledger.store.snapshot import AccountRecord, EntryRecord, Snapshot

__all__ = ["AccountRecord", "EntryRecord", "JsonFileStore", "Snapshot"]
