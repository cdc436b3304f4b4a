"""
Template use-cases: template CRUD and the exercises prescribed inside a template.
"""
import logging
from typing import AsyncIterator, Optional

from gainfunction.repositories.template_exercise_repo import TemplateExerciseRepository
from gainfunction.repositories.template_repo import TemplateRepository
from gainfunction.schemas.template import TemplateCreate, TemplateExerciseRead, TemplateRead

log = logging.getLogger(__name__)


class TemplateService:
    def __init__(self, templates: TemplateRepository, template_exercises: TemplateExerciseRepository):
        self.templates = templates
        self.template_exercises = template_exercises

    # TEMPLATES
    def get_all_templates(self) -> AsyncIterator[list[TemplateRead]]:
        return self.templates.observe_all()

    def get_template_by_id(self, template_id: int) -> Optional[TemplateRead]:
        return self.templates.get(template_id)

    def search_templates(self, query: str) -> list[TemplateRead]:
        return self.templates.search_by_name(query)

    def create_template(self, name: str, description: Optional[str] = None) -> int:
        template_id = self.templates.insert(TemplateCreate(name=name, description=description))
        log.info("created template %s (%r)", template_id, name)
        return template_id

    def update_template(self, template: TemplateRead) -> Optional[TemplateRead]:
        """Returns the stored record, or None when the template no longer exists."""
        return self.templates.update(template)

    def delete_template(self, template: TemplateRead) -> None:
        # entries go with it through ON DELETE CASCADE
        self.templates.delete(template)
        log.info("deleted template %s", template.id)

    # TEMPLATE EXERCISES
    def get_exercises_for_template(self, template_id: int) -> AsyncIterator[list[TemplateExerciseRead]]:
        return self.template_exercises.observe_for_template(template_id)

    def add_exercise_to_template(
        self,
        template_id: int,
        exercise_name: str,
        default_sets: int = 3,
        default_reps: int = 10,
        default_weight: Optional[float] = None,
    ) -> bool:
        """Append an exercise to a template.

        Returns False when the template already holds ``exercise_name``; the
        existing entry is left untouched. Numeric bounds are the caller's job.
        """
        if self.template_exercises.get(template_id, exercise_name) is not None:
            return False
        position = self.template_exercises.count_for_template(template_id)
        self.template_exercises.insert(
            TemplateExerciseRead(
                template_id=template_id,
                exercise_name=exercise_name,
                default_sets=default_sets,
                default_reps=default_reps,
                default_weight=default_weight,
                order_position=position,
            )
        )
        return True

    def remove_exercise_from_template(self, template_id: int, exercise_name: str) -> bool:
        entry = self.template_exercises.get(template_id, exercise_name)
        if entry is None:
            return False
        return self.template_exercises.delete(entry)

    def update_template_exercise(self, entry: TemplateExerciseRead) -> None:
        self.template_exercises.update(entry)

    def move_exercise(self, template_id: int, exercise_name: str, position: int) -> None:
        self.template_exercises.update_position(template_id, exercise_name, position)
