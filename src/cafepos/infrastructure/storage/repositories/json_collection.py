from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from cafepos.application.metrics.sales_lifecycle import record_stored_collection_malformed
from cafepos.application.ports.storage import KeyValueStore

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")
EntityT = TypeVar("EntityT")


class MalformedStoredDataError(Exception):
    pass


class JsonCollection(Generic[RecordT]):
    """One JSON array stored under a single key."""

    def __init__(self, store: KeyValueStore, key: str, adapter: TypeAdapter[list[RecordT]]) -> None:
        self._store = store
        self._key = key
        self._adapter = adapter

    @property
    def key(self) -> str:
        return self._key

    def read(self) -> list[RecordT]:
        raw = self._store.get(self._key)
        if raw is None or not raw.strip():
            return []
        try:
            return self._adapter.validate_json(raw)
        except ValidationError as exc:
            raise MalformedStoredDataError(
                f"stored collection {self._key} failed validation: {exc.error_count()} errors"
            ) from exc

    def write(self, records: list[RecordT]) -> None:
        self._store.set(self._key, self._adapter.dump_json(records, by_alias=True).decode("utf-8"))


def load_entities(
    collection: JsonCollection[RecordT],
    convert: Callable[[RecordT], EntityT],
) -> list[EntityT]:
    """Read and convert a collection; an unreadable collection reads as empty."""
    try:
        return [convert(record) for record in collection.read()]
    except (MalformedStoredDataError, ValueError) as exc:
        logger.warning(
            "stored_collection_malformed",
            extra={"key": collection.key, "error": str(exc)},
        )
        record_stored_collection_malformed(collection.key)
        return []
