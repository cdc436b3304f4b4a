from __future__ import annotations
from typing import AsyncIterator, Iterable, Optional
from sqlalchemy import select
from gainfunction.models import ExerciseDefinition
from gainfunction.repositories.base import BaseRepository
from gainfunction.schemas.exercise_definition import ExerciseDefinitionRead

class ExerciseDefinitionRepository(BaseRepository[ExerciseDefinitionRead]):
    """Catalog access. Inserts ignore names that already exist."""
    model = ExerciseDefinition
    read_schema = ExerciseDefinitionRead
    key_fields = ("name",)

    # READS
    def get_by_name(self, name: str) -> Optional[ExerciseDefinitionRead]:
        row = self.db.get(ExerciseDefinition, name)
        return self.to_read(row) if row else None

    def exists(self, name: str) -> bool:
        stmt = select(ExerciseDefinition.name).where(ExerciseDefinition.name == name).limit(1)
        return self.db.execute(stmt).first() is not None

    def list_all(self, *, custom: bool | None = None) -> list[ExerciseDefinitionRead]:
        stmt = select(ExerciseDefinition)
        if custom is not None:
            stmt = stmt.where(ExerciseDefinition.is_custom == custom)
        return self.fetch(stmt.order_by(ExerciseDefinition.name.asc()))

    def observe_all(self) -> AsyncIterator[list[ExerciseDefinitionRead]]:
        return self.observe(self.list_all)

    def observe_custom(self) -> AsyncIterator[list[ExerciseDefinitionRead]]:
        return self.observe(lambda: self.list_all(custom=True))

    def observe_predefined(self) -> AsyncIterator[list[ExerciseDefinitionRead]]:
        return self.observe(lambda: self.list_all(custom=False))

    # WRITES
    def _add_if_missing(self, record: ExerciseDefinitionRead) -> Optional[str]:
        if self.db.get(ExerciseDefinition, record.name) is not None:
            return None
        self.db.add(ExerciseDefinition(**record.model_dump()))
        self.db.flush()
        return record.name

    def insert(self, record: ExerciseDefinitionRead) -> Optional[str]:
        """Returns the name, or None when it was already present."""
        with self.writing():
            name = self._add_if_missing(record)
        return name

    def insert_many(self, records: Iterable[ExerciseDefinitionRead]) -> list[str]:
        with self.writing():
            names = [n for n in (self._add_if_missing(r) for r in records) if n is not None]
        return names
