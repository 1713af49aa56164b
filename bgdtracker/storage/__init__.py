"""Persistent store backends."""
from bgdtracker.storage.backends import JsonFileBackend, MemoryBackend, StorageBackend

__all__ = ["JsonFileBackend", "MemoryBackend", "StorageBackend"]
