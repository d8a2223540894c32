from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Engine, delete, select
from sqlalchemy.orm import Session

from cafepos.application.ports.storage import KeyValueStore
from cafepos.infrastructure.db.models.kv_entry import Base, KeyValueEntryModel
from cafepos.infrastructure.db.session import get_engine


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(engine)


class SqlAlchemyKeyValueStore(KeyValueStore):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()
        create_schema(self._engine)

    def get(self, key: str) -> str | None:
        statement = select(KeyValueEntryModel.value).where(KeyValueEntryModel.key == key)
        with Session(self._engine) as session:
            return session.execute(statement).scalar_one_or_none()

    def set(self, key: str, value: str) -> None:
        with Session(self._engine) as session, session.begin():
            session.merge(
                KeyValueEntryModel(
                    key=key,
                    value=value,
                    updated_at=datetime.now(timezone.utc),
                )
            )

    def remove(self, key: str) -> None:
        with Session(self._engine) as session, session.begin():
            session.execute(delete(KeyValueEntryModel).where(KeyValueEntryModel.key == key))
