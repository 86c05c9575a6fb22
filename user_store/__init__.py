"""Local persistence for user records and session pointers."""

from .directory import UserDirectory
from .session import SessionContext, SessionHolder
from .storage import KeyValueStore, MemoryKeyValueStore, SQLiteKeyValueStore

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SQLiteKeyValueStore",
    "SessionContext",
    "SessionHolder",
    "UserDirectory",
]
