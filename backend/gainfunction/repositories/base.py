# gainfunction/repositories/base.py
from __future__ import annotations
from contextlib import contextmanager
from typing import Any, AsyncIterator, Callable, Generic, Iterable, Iterator, Optional, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gainfunction.live import observer_for

R = TypeVar("R", bound=BaseModel)  # read schema returned to callers
T = TypeVar("T")

class BaseRepository(Generic[R]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style.

    Subclasses set ``model`` (ORM class) and ``read_schema`` (frozen pydantic
    model). Rows never leave the repository; callers get read schemas.
    Writes follow replace-on-conflict semantics keyed by ``key_fields``.
    """
    model: Any
    read_schema: type[R]
    key_fields: tuple[str, ...] = ("id",)

    def __init__(self, db: Session):
        self.db = db

    @property
    def table(self) -> str:
        return self.model.__tablename__

    # MAPPING
    def to_read(self, row) -> R:
        return self.read_schema.model_validate(row)

    def fetch(self, stmt) -> list[R]:
        return [self.to_read(r) for r in self.db.execute(stmt).scalars().all()]

    def key_of(self, record: BaseModel) -> Any:
        values = tuple(getattr(record, f, None) for f in self.key_fields)
        return values[0] if len(values) == 1 else values

    def _row_for(self, record: BaseModel):
        key = self.key_of(record)
        if key is None or (isinstance(key, tuple) and None in key):
            return None
        return self.db.get(self.model, key)

    # LIVE
    def observe(self, query: Callable[[], T], *tables: str) -> AsyncIterator[T]:
        """Live variant of ``query``; re-runs after commits touching ``tables``."""
        return observer_for(self.db).observe(query, *(tables or (self.table,)))

    # WRITES
    @contextmanager
    def writing(self) -> Iterator[None]:
        """Commit on success; roll back and re-raise on any database error."""
        try:
            yield
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def commit(self) -> None:
        with self.writing():
            pass

    def _put(self, record: BaseModel):
        data = record.model_dump()
        if self._row_for(record) is not None:
            row = self.db.merge(self.model(**data))
        else:
            if "id" in self.key_fields and data.get("id") is None:
                data.pop("id", None)
            row = self.model(**data)
            self.db.add(row)
        self.db.flush()
        return row

    def insert(self, record: BaseModel) -> Any:
        """Insert ``record``; an existing row with the same key is replaced."""
        with self.writing():
            key = self.key_of(self._put(record))
        return key

    def insert_many(self, records: Iterable[BaseModel]) -> list[Any]:
        with self.writing():
            keys = [self.key_of(self._put(r)) for r in records]
        return keys

    def update(self, record: BaseModel) -> Optional[R]:
        row = self._row_for(record)
        if row is None:
            return None
        with self.writing():
            for field, value in record.model_dump().items():
                if field not in self.key_fields:
                    setattr(row, field, value)
        self.db.refresh(row)
        return self.to_read(row)

    def delete(self, record: BaseModel) -> bool:
        row = self._row_for(record)
        if row is None:
            return False
        with self.writing():
            self.db.delete(row)
        return True
