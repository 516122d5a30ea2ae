"""Record store abstractions over the JSON-file datastore."""

from .store import JsonRecordStore, MemoryRecordStore, RecordStore

__all__ = ["RecordStore", "JsonRecordStore", "MemoryRecordStore"]
