"""
Exercise catalog use-cases: browsing the catalog and adding custom exercises.
"""
import logging
from typing import AsyncIterator, Optional

from gainfunction.repositories.exercise_definition_repo import ExerciseDefinitionRepository
from gainfunction.schemas.exercise_definition import ExerciseDefinitionRead

log = logging.getLogger(__name__)


class ExerciseService:
    def __init__(self, exercise_definitions: ExerciseDefinitionRepository):
        self.exercise_definitions = exercise_definitions

    def get_all_exercises(self) -> AsyncIterator[list[ExerciseDefinitionRead]]:
        return self.exercise_definitions.observe_all()

    def get_custom_exercises(self) -> AsyncIterator[list[ExerciseDefinitionRead]]:
        """Only user-created exercises."""
        return self.exercise_definitions.observe_custom()

    def get_predefined_exercises(self) -> AsyncIterator[list[ExerciseDefinitionRead]]:
        """Only the seeded catalog."""
        return self.exercise_definitions.observe_predefined()

    def get_exercise(self, name: str) -> Optional[ExerciseDefinitionRead]:
        return self.exercise_definitions.get_by_name(name)

    def add_custom_exercise(self, name: str) -> bool:
        """Add a user-created exercise.

        Returns False without writing when the exact (trimmed) name is already
        in the catalog. The check and the insert are separate round trips, so
        two concurrent callers could both pass the check.
        """
        name = name.strip()
        if self.exercise_definitions.exists(name):
            log.info("custom exercise %r already exists", name)
            return False
        self.exercise_definitions.insert(ExerciseDefinitionRead(name=name, is_custom=True))
        return True
