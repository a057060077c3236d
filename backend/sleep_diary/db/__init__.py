from .base import JournalStore
from .handle import StoreHandle, StoreState
from .memory_store import MemorySnapshotStore
from .sqlite_store import SQLiteStore


def create_store(settings) -> JournalStore:
    """Build the backend named by ``settings.STORAGE_BACKEND``"""
    backend = settings.STORAGE_BACKEND.lower()

    if backend == "sqlite":
        settings.ensure_data_dir()
        return SQLiteStore(str(settings.database_path))

    if backend == "memory":
        settings.ensure_data_dir()
        return MemorySnapshotStore(
            snapshot_path=str(settings.snapshot_path),
            flush_interval=settings.SNAPSHOT_INTERVAL_SECONDS
        )

    raise ValueError(f"Unknown storage backend: {settings.STORAGE_BACKEND}")


__all__ = [
    "JournalStore",
    "StoreHandle",
    "StoreState",
    "MemorySnapshotStore",
    "SQLiteStore",
    "create_store"
]
