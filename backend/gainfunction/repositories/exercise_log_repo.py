from __future__ import annotations
from typing import AsyncIterator, Optional
from sqlalchemy import select, func
from gainfunction.models import ExerciseLog, Workout
from gainfunction.repositories.base import BaseRepository
from gainfunction.schemas.exercise_log import ExerciseLogRead

class ExerciseLogRepository(BaseRepository[ExerciseLogRead]):
    model = ExerciseLog
    read_schema = ExerciseLogRead

    def get(self, exercise_log_id: int) -> Optional[ExerciseLogRead]:
        row = self.db.get(ExerciseLog, exercise_log_id)
        return self.to_read(row) if row else None

    def list_for_workout(self, workout_id: int) -> list[ExerciseLogRead]:
        stmt = select(ExerciseLog).where(ExerciseLog.workout_id == workout_id).order_by(ExerciseLog.id.asc())
        return self.fetch(stmt)

    def observe_for_workout(self, workout_id: int) -> AsyncIterator[list[ExerciseLogRead]]:
        return self.observe(lambda: self.list_for_workout(workout_id))

    def count_for_workout(self, workout_id: int) -> int:
        stmt = select(func.count()).select_from(ExerciseLog).where(ExerciseLog.workout_id == workout_id)
        return self.db.execute(stmt).scalar_one()

    def list_by_exercise_name(self, exercise_name: str) -> list[ExerciseLogRead]:
        """Every log of ``exercise_name`` across workouts, most recent workout first."""
        stmt = select(ExerciseLog).join(Workout, ExerciseLog.workout_id == Workout.id)\
                                  .where(ExerciseLog.exercise_name == exercise_name)\
                                  .order_by(Workout.date.desc(), ExerciseLog.id.asc())
        return self.fetch(stmt)
