# vehicle_tracker/core/base_repository.py
from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

TModel = TypeVar("TModel")


class BaseRepository(Generic[TModel]):
    model: type[TModel]

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, model: TModel) -> TModel:
        self._session.add(model)
        self._session.flush()
        return model

    def get_by_id(self, entity_id: int) -> TModel | None:
        stmt = select(self.model).where(self.model.id == int(entity_id))
        return self._session.execute(stmt).scalar_one_or_none()

    def delete(self, model: TModel) -> None:
        self._session.delete(model)
        self._session.flush()
