from reportflow.config.settings import Settings
from reportflow.storage.base import BaseRecordStore
from reportflow.storage.connection import create_pool
from reportflow.storage.memory_store import MemoryRecordStore
from reportflow.storage.postgres_store import PostgresRecordStore


class RecordStoreFactory:
    """Creates the record store selected by ``settings.record_store``."""

    BACKENDS = ("postgres", "memory")

    @classmethod
    def create(cls, settings: Settings) -> BaseRecordStore:
        backend = settings.record_store.lower()
        if backend == "memory":
            return MemoryRecordStore()
        if backend == "postgres":
            return PostgresRecordStore(create_pool(settings))
        raise ValueError(
            f"Unknown record store '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
