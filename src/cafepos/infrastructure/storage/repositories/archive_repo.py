from __future__ import annotations

from pydantic import TypeAdapter

from cafepos.application.ports.repositories import ArchiveRepository
from cafepos.application.ports.storage import KeyValueStore
from cafepos.domain.archive.entities import SaleSession
from cafepos.infrastructure.storage.records import (
    SaleSessionRecord,
    from_sale_session,
    to_sale_session,
)
from cafepos.infrastructure.storage.repositories.json_collection import (
    JsonCollection,
    load_entities,
)

ARCHIVE_KEY = "cafe-archive"

_ARCHIVE_ADAPTER = TypeAdapter(list[SaleSessionRecord])


class JsonArchiveRepository(ArchiveRepository):
    def __init__(self, store: KeyValueStore, currency: str) -> None:
        self._collection = JsonCollection(store, ARCHIVE_KEY, _ARCHIVE_ADAPTER)
        self._currency = currency

    def list_sessions(self) -> list[SaleSession]:
        return load_entities(
            self._collection,
            lambda record: to_sale_session(record, self._currency),
        )

    def save_sessions(self, sessions: list[SaleSession]) -> None:
        self._collection.write([from_sale_session(session) for session in sessions])
