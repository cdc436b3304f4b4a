from __future__ import annotations
from typing import AsyncIterator, Optional
from sqlalchemy import delete, select, update, func
from gainfunction.models import TemplateExerciseEntry
from gainfunction.repositories.base import BaseRepository
from gainfunction.schemas.template import TemplateExerciseRead

class TemplateExerciseRepository(BaseRepository[TemplateExerciseRead]):
    model = TemplateExerciseEntry
    read_schema = TemplateExerciseRead
    key_fields = ("template_id", "exercise_name")

    def get(self, template_id: int, exercise_name: str) -> Optional[TemplateExerciseRead]:
        row = self.db.get(TemplateExerciseEntry, (template_id, exercise_name))
        return self.to_read(row) if row else None

    def list_for_template(self, template_id: int) -> list[TemplateExerciseRead]:
        stmt = select(TemplateExerciseEntry).where(TemplateExerciseEntry.template_id == template_id)\
                                            .order_by(TemplateExerciseEntry.order_position.asc(),
                                                      TemplateExerciseEntry.exercise_name.asc())
        return self.fetch(stmt)

    def observe_for_template(self, template_id: int) -> AsyncIterator[list[TemplateExerciseRead]]:
        return self.observe(lambda: self.list_for_template(template_id))

    def count_for_template(self, template_id: int) -> int:
        stmt = select(func.count()).select_from(TemplateExerciseEntry)\
                                   .where(TemplateExerciseEntry.template_id == template_id)
        return self.db.execute(stmt).scalar_one()

    def delete_all_for_template(self, template_id: int) -> int:
        with self.writing():
            result = self.db.execute(
                delete(TemplateExerciseEntry).where(TemplateExerciseEntry.template_id == template_id)
            )
        return result.rowcount

    def update_position(self, template_id: int, exercise_name: str, position: int) -> None:
        with self.writing():
            self.db.execute(
                update(TemplateExerciseEntry)
                .where(TemplateExerciseEntry.template_id == template_id,
                       TemplateExerciseEntry.exercise_name == exercise_name)
                .values(order_position=position)
            )
