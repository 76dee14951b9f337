"""
Storage package exports.

get_storage() builds the store selected by settings.STORAGE_BACKEND once
per process.
"""

from functools import lru_cache

from core.config import settings
from storage.base import ALL_CATEGORIES, Storage
from storage.memory import MemoryStorage
from storage.database import DatabaseStorage
from storage.seed import SAMPLE_PRODUCTS, seed_catalog

BACKENDS = ("memory", "database")


def build_storage(backend: str) -> Storage:
    if backend == "memory":
        return MemoryStorage()
    if backend == "database":
        from core.database import engine
        return DatabaseStorage(engine)
    raise ValueError(f"Unknown storage backend {backend!r}, expected one of {BACKENDS}")


@lru_cache
def get_storage() -> Storage:
    return build_storage(settings.STORAGE_BACKEND)


__all__ = ["ALL_CATEGORIES", "Storage", "MemoryStorage", "DatabaseStorage",
           "SAMPLE_PRODUCTS", "seed_catalog", "build_storage", "get_storage"]
