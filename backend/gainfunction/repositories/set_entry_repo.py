from __future__ import annotations
from typing import AsyncIterator, Optional
from sqlalchemy import delete, select, func
from gainfunction.models import SetEntry
from gainfunction.repositories.base import BaseRepository
from gainfunction.schemas.set_entry import SetEntryRead

class SetEntryRepository(BaseRepository[SetEntryRead]):
    model = SetEntry
    read_schema = SetEntryRead

    def get(self, set_entry_id: int) -> Optional[SetEntryRead]:
        row = self.db.get(SetEntry, set_entry_id)
        return self.to_read(row) if row else None

    def list_for_exercise_log(self, exercise_log_id: int) -> list[SetEntryRead]:
        stmt = select(SetEntry).where(SetEntry.exercise_log_id == exercise_log_id)\
                               .order_by(SetEntry.set_number.asc(), SetEntry.id.asc())
        return self.fetch(stmt)

    def observe_for_exercise_log(self, exercise_log_id: int) -> AsyncIterator[list[SetEntryRead]]:
        return self.observe(lambda: self.list_for_exercise_log(exercise_log_id))

    def count_for_exercise_log(self, exercise_log_id: int) -> int:
        stmt = select(func.count()).select_from(SetEntry).where(SetEntry.exercise_log_id == exercise_log_id)
        return self.db.execute(stmt).scalar_one()

    def next_set_number(self, exercise_log_id: int) -> int:
        max_no = self.db.execute(
            select(func.max(SetEntry.set_number)).where(SetEntry.exercise_log_id == exercise_log_id)
        ).scalar_one()
        return (max_no or 0) + 1

    def delete_all_for_exercise_log(self, exercise_log_id: int) -> int:
        with self.writing():
            result = self.db.execute(delete(SetEntry).where(SetEntry.exercise_log_id == exercise_log_id))
        return result.rowcount
