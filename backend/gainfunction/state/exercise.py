from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from gainfunction.schemas.exercise_definition import ExerciseDefinitionRead
from gainfunction.services.exercise_service import ExerciseService
from gainfunction.state.base import StateFlow, StateHolder, is_valid_name

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExerciseUiState:
    exercises: tuple[ExerciseDefinitionRead, ...] = ()
    is_loading: bool = False
    error: Optional[str] = None
    show_add_exercise_dialog: bool = False
    new_exercise_name: str = ""
    is_valid_exercise_name: bool = False
    exercise_added_message: Optional[str] = None


class ExerciseStateHolder(StateHolder):
    """Exercise catalog screen."""

    def __init__(self, exercise_service: ExerciseService):
        super().__init__()
        self.exercise_service = exercise_service
        self.state: StateFlow[ExerciseUiState] = StateFlow(ExerciseUiState())
        self._load_exercises()

    def _load_exercises(self) -> None:
        self.state.update(lambda s: replace(s, is_loading=True, error=None))
        self.launch(self._collect_exercises(), name="exercises")

    async def _collect_exercises(self) -> None:
        try:
            async for exercises in self.exercise_service.get_all_exercises():
                self.state.update(lambda s: replace(s, exercises=tuple(exercises), is_loading=False))
        except Exception as e:
            log.exception("exercise subscription failed")
            self.state.update(
                lambda s: replace(s, error=f"Failed to load exercises: {e}", is_loading=False)
            )

    # INTENTS
    def update_new_exercise_name(self, name: str) -> None:
        self.state.update(lambda s: replace(
            s,
            new_exercise_name=name,
            is_valid_exercise_name=is_valid_name(name),
            exercise_added_message=None,
        ))

    def show_add_exercise_dialog(self) -> None:
        self.state.update(lambda s: replace(s, show_add_exercise_dialog=True))

    def hide_add_exercise_dialog(self) -> None:
        self.state.update(lambda s: replace(
            s, show_add_exercise_dialog=False, new_exercise_name="", is_valid_exercise_name=False
        ))

    def add_custom_exercise(self):
        """Submit the dialog. Returns the running task, or None for invalid input."""
        name = self.state.value.new_exercise_name.strip()
        if not is_valid_name(name):
            return None
        return self.launch(self._add_custom_exercise(name))

    async def _add_custom_exercise(self, name: str) -> None:
        try:
            added = self.exercise_service.add_custom_exercise(name)
        except Exception as e:
            log.exception("adding exercise %r failed", name)
            self.state.update(lambda s: replace(s, error=f"Failed to add exercise: {e}"))
            return

        if added:
            self.state.update(lambda s: replace(
                s,
                show_add_exercise_dialog=False,
                new_exercise_name="",
                is_valid_exercise_name=False,
                exercise_added_message=f"Exercise '{name}' added successfully",
            ))
        else:
            self.state.update(lambda s: replace(s, error="An exercise with this name already exists"))

    def clear_messages(self) -> None:
        self.state.update(lambda s: replace(s, error=None, exercise_added_message=None))
