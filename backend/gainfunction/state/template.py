"""
State for the template list and template detail screens.

Both screens share one holder so that deleting the template that is open in
the detail view can clear the selection. The detail view combines a one-shot
template lookup with the live entries of that template; changing the
selection cancels the running subscription and bumps ``_generation`` so a
late emission for a previous template is dropped instead of applied.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Optional

from gainfunction.schemas.exercise_definition import ExerciseDefinitionRead
from gainfunction.schemas.template import TemplateExerciseRead, TemplateRead
from gainfunction.services.exercise_service import ExerciseService
from gainfunction.services.template_service import TemplateService
from gainfunction.state.base import StateFlow, StateHolder, is_valid_name

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TemplateListUiState:
    templates: tuple[TemplateRead, ...] = ()
    is_loading: bool = False
    error: Optional[str] = None
    show_add_template_dialog: bool = False
    new_template_name: str = ""
    new_template_description: str = ""
    is_valid_template_name: bool = False
    template_added_message: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TemplateDetailUiState:
    template: Optional[TemplateRead] = None
    exercises: tuple[TemplateExerciseRead, ...] = ()
    available_exercises: tuple[ExerciseDefinitionRead, ...] = ()
    is_loading: bool = False
    error: Optional[str] = None
    template_name: str = ""
    template_description: str = ""
    is_valid_template_name: bool = False
    # exercise picker
    show_exercise_picker_dialog: bool = False
    exercise_to_add: Optional[str] = None
    default_sets: int = 3
    default_reps: int = 8
    default_weight: Optional[float] = None
    save_message: Optional[str] = None


def _blank_to_none(text: str) -> Optional[str]:
    text = text.strip()
    return text or None


class TemplateStateHolder(StateHolder):
    def __init__(self, template_service: TemplateService, exercise_service: ExerciseService):
        super().__init__()
        self.template_service = template_service
        self.exercise_service = exercise_service

        self.list_state: StateFlow[TemplateListUiState] = StateFlow(TemplateListUiState())
        self.detail_state: StateFlow[TemplateDetailUiState] = StateFlow(TemplateDetailUiState())

        self._selected_template_id: Optional[int] = None
        self._generation = 0
        self._detail_task: Optional[asyncio.Task] = None

        self._load_templates()
        self._load_available_exercises()

    @property
    def selected_template_id(self) -> Optional[int]:
        return self._selected_template_id

    # SUBSCRIPTIONS
    def _load_templates(self) -> None:
        self.list_state.update(lambda s: replace(s, is_loading=True, error=None))
        self.launch(self._collect_templates(), name="templates")

    async def _collect_templates(self) -> None:
        try:
            async for templates in self.template_service.get_all_templates():
                self.list_state.update(lambda s: replace(s, templates=tuple(templates), is_loading=False))
        except Exception as e:
            log.exception("template subscription failed")
            self.list_state.update(
                lambda s: replace(s, error=f"Failed to load templates: {e}", is_loading=False)
            )

    def _load_available_exercises(self) -> None:
        self.launch(self._collect_available_exercises(), name="available-exercises")

    async def _collect_available_exercises(self) -> None:
        try:
            async for exercises in self.exercise_service.get_all_exercises():
                self.detail_state.update(lambda s: replace(s, available_exercises=tuple(exercises)))
        except Exception as e:
            log.exception("exercise subscription failed")
            self.detail_state.update(lambda s: replace(s, error=f"Failed to load exercises: {e}"))

    async def _observe_template(self, template_id: int, generation: int) -> None:
        try:
            template = self.template_service.get_template_by_id(template_id)
            async for entries in self.template_service.get_exercises_for_template(template_id):
                if generation != self._generation:
                    return
                self.detail_state.update(lambda s: replace(
                    s,
                    template=template,
                    exercises=tuple(entries),
                    template_name=template.name if template else "",
                    template_description=(template.description or "") if template else "",
                    is_valid_template_name=bool(template and template.name.strip()),
                    is_loading=False,
                    error=None,
                ))
        except Exception as e:
            if generation != self._generation:
                return
            log.exception("loading template %s failed", template_id)
            self.detail_state.update(
                lambda s: replace(s, error=f"Error loading template: {e}", is_loading=False)
            )

    def select_template(self, template_id: Optional[int]) -> None:
        """Open ``template_id`` in the detail view, or start a new one with None."""
        if self._detail_task is not None:
            self._detail_task.cancel()
            self._detail_task = None
        self._generation += 1
        self._selected_template_id = template_id

        if template_id is None:
            self.detail_state.update(lambda s: replace(
                s,
                template=None,
                exercises=(),
                template_name="",
                template_description="",
                is_valid_template_name=False,
                is_loading=False,
                error=None,
            ))
            return

        self.detail_state.update(lambda s: replace(s, is_loading=True, error=None))
        self._detail_task = self.launch(
            self._observe_template(template_id, self._generation), name=f"template-{template_id}"
        )

    # LIST INTENTS
    def update_new_template_name(self, name: str) -> None:
        self.list_state.update(lambda s: replace(
            s, new_template_name=name, is_valid_template_name=is_valid_name(name), template_added_message=None
        ))

    def update_new_template_description(self, description: str) -> None:
        self.list_state.update(lambda s: replace(s, new_template_description=description))

    def show_add_template_dialog(self) -> None:
        self.list_state.update(lambda s: replace(s, show_add_template_dialog=True))

    def hide_add_template_dialog(self) -> None:
        self.list_state.update(lambda s: replace(
            s,
            show_add_template_dialog=False,
            new_template_name="",
            new_template_description="",
            is_valid_template_name=False,
        ))

    def create_template(self):
        """Submit the add dialog; the returned task resolves to the new id."""
        name = self.list_state.value.new_template_name.strip()
        description = _blank_to_none(self.list_state.value.new_template_description)
        if not is_valid_name(name):
            return None
        return self.launch(self._create_template(name, description))

    async def _create_template(self, name: str, description: Optional[str]) -> Optional[int]:
        try:
            template_id = self.template_service.create_template(name, description)
        except Exception as e:
            log.exception("creating template %r failed", name)
            self.list_state.update(lambda s: replace(s, error=f"Failed to create template: {e}"))
            return None
        self.list_state.update(lambda s: replace(
            s,
            show_add_template_dialog=False,
            new_template_name="",
            new_template_description="",
            is_valid_template_name=False,
            template_added_message=f"Template '{name}' created successfully",
        ))
        return template_id

    def delete_template(self, template: TemplateRead):
        return self.launch(self._delete_template(template))

    async def _delete_template(self, template: TemplateRead) -> None:
        try:
            self.template_service.delete_template(template)
        except Exception as e:
            log.exception("deleting template %s failed", template.id)
            self.list_state.update(lambda s: replace(s, error=f"Failed to delete template: {e}"))
            return
        self.list_state.update(lambda s: replace(s, template_added_message=f"Template '{template.name}' deleted"))
        if self._selected_template_id == template.id:
            self.select_template(None)

    def clear_list_messages(self) -> None:
        self.list_state.update(lambda s: replace(s, error=None, template_added_message=None))

    # DETAIL INTENTS
    def update_template_name(self, name: str) -> None:
        self.detail_state.update(lambda s: replace(
            s, template_name=name, is_valid_template_name=is_valid_name(name), save_message=None
        ))

    def update_template_description(self, description: str) -> None:
        self.detail_state.update(lambda s: replace(s, template_description=description, save_message=None))

    def save_template(self):
        current = self.detail_state.value
        name = current.template_name.strip()
        if not is_valid_name(name):
            return None
        return self.launch(self._save_template(
            self._selected_template_id, current.template, name, _blank_to_none(current.template_description)
        ))

    async def _save_template(
        self,
        template_id: Optional[int],
        loaded: Optional[TemplateRead],
        name: str,
        description: Optional[str],
    ) -> None:
        try:
            if template_id is None:
                template_id = self.template_service.create_template(name, description)
                self.select_template(template_id)
                message = "Template created successfully"
            else:
                # detail may still show the previous selection while loading
                if loaded is None or loaded.id != template_id:
                    loaded = self.template_service.get_template_by_id(template_id)
                stored = None
                if loaded is not None:
                    stored = self.template_service.update_template(
                        loaded.model_copy(update={"name": name, "description": description})
                    )
                if stored is None:
                    self.detail_state.update(lambda s: replace(s, error="Template no longer exists"))
                    return
                # the running subscription holds the old record; restart it
                self.select_template(template_id)
                message = "Template updated successfully"
        except Exception as e:
            log.exception("saving template %r failed", name)
            self.detail_state.update(lambda s: replace(s, error=f"Failed to save template: {e}"))
            return
        self.detail_state.update(lambda s: replace(s, save_message=message))

    def show_exercise_picker_dialog(self) -> None:
        self.detail_state.update(lambda s: replace(s, show_exercise_picker_dialog=True))

    def hide_exercise_picker_dialog(self) -> None:
        self.detail_state.update(lambda s: replace(s, show_exercise_picker_dialog=False, exercise_to_add=None))

    def select_exercise_to_add(self, exercise_name: str) -> None:
        self.detail_state.update(lambda s: replace(s, exercise_to_add=exercise_name))

    def update_default_sets(self, sets: int) -> None:
        self.detail_state.update(lambda s: replace(s, default_sets=sets))

    def update_default_reps(self, reps: int) -> None:
        self.detail_state.update(lambda s: replace(s, default_reps=reps))

    def update_default_weight(self, weight: Optional[float]) -> None:
        self.detail_state.update(lambda s: replace(s, default_weight=weight))

    def add_exercise_to_template(self):
        template_id = self._selected_template_id
        current = self.detail_state.value
        if template_id is None or current.exercise_to_add is None:
            return None
        # weight is required here even though storage allows NULL
        if current.default_weight is None or current.default_weight <= 0:
            self.detail_state.update(lambda s: replace(s, error="Please enter a weight value"))
            return None
        return self.launch(self._add_exercise_to_template(
            template_id, current.exercise_to_add, current.default_sets, current.default_reps, current.default_weight
        ))

    async def _add_exercise_to_template(
        self, template_id: int, exercise_name: str, sets: int, reps: int, weight: float
    ) -> None:
        try:
            added = self.template_service.add_exercise_to_template(
                template_id=template_id,
                exercise_name=exercise_name,
                default_sets=sets,
                default_reps=reps,
                default_weight=weight,
            )
        except Exception as e:
            log.exception("adding %r to template %s failed", exercise_name, template_id)
            self.detail_state.update(lambda s: replace(s, error=f"Failed to add exercise: {e}"))
            return

        if added:
            self.detail_state.update(lambda s: replace(
                s,
                show_exercise_picker_dialog=False,
                exercise_to_add=None,
                default_weight=None,
                save_message="Exercise added to template",
            ))
        else:
            self.detail_state.update(lambda s: replace(s, error="This exercise is already in the template"))

    def remove_exercise_from_template(self, exercise_name: str):
        template_id = self._selected_template_id
        if template_id is None:
            return None
        return self.launch(self._remove_exercise_from_template(template_id, exercise_name))

    async def _remove_exercise_from_template(self, template_id: int, exercise_name: str) -> None:
        try:
            self.template_service.remove_exercise_from_template(template_id, exercise_name)
        except Exception as e:
            log.exception("removing %r from template %s failed", exercise_name, template_id)
            self.detail_state.update(lambda s: replace(s, error=f"Failed to remove exercise: {e}"))
            return
        self.detail_state.update(lambda s: replace(s, save_message="Exercise removed from template"))

    def update_template_exercise(self, entry: TemplateExerciseRead):
        return self.launch(self._update_template_exercise(entry))

    async def _update_template_exercise(self, entry: TemplateExerciseRead) -> None:
        try:
            self.template_service.update_template_exercise(entry)
        except Exception as e:
            log.exception("updating %r in template %s failed", entry.exercise_name, entry.template_id)
            self.detail_state.update(lambda s: replace(s, error=f"Failed to update exercise: {e}"))
            return
        self.detail_state.update(lambda s: replace(s, save_message="Exercise updated"))

    def clear_detail_messages(self) -> None:
        self.detail_state.update(lambda s: replace(s, error=None, save_message=None))
