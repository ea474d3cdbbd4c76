"""Adapters - I/O implementations of ports."""

from .file_kv import FileKeyValueStore
from .memory_kv import MemoryKeyValueStore
from .storage import TASKS_KEY, KeyValueTaskStore

__all__ = [
    "FileKeyValueStore",
    "MemoryKeyValueStore",
    "KeyValueTaskStore",
    "TASKS_KEY",
]
