from __future__ import annotations
from typing import AsyncIterator, Optional
from sqlalchemy import select
from gainfunction.models import Workout
from gainfunction.repositories.base import BaseRepository
from gainfunction.schemas.workout import WorkoutRead

class WorkoutRepository(BaseRepository[WorkoutRead]):
    model = Workout
    read_schema = WorkoutRead

    # READS
    def get(self, workout_id: int) -> Optional[WorkoutRead]:
        row = self.db.get(Workout, workout_id)
        return self.to_read(row) if row else None

    def list_all(self) -> list[WorkoutRead]:
        # newest first; id breaks ties so equal dates keep insertion order reversed
        return self.fetch(select(Workout).order_by(Workout.date.desc(), Workout.id.desc()))

    def observe_all(self) -> AsyncIterator[list[WorkoutRead]]:
        return self.observe(self.list_all)

    def list_in_date_range(self, start: int, end: int) -> list[WorkoutRead]:
        """Workouts with ``start <= date <= end``, newest first."""
        stmt = select(Workout).where(Workout.date.between(start, end))\
                              .order_by(Workout.date.desc(), Workout.id.desc())
        return self.fetch(stmt)
