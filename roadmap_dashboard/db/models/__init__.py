# roadmap_dashboard/db/models/__init__.py

from .storage_entry import StorageEntry

__all__ = [
    "StorageEntry",
]
