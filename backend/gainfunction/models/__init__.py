from gainfunction.models.workout import Workout
from gainfunction.models.exercise_log import ExerciseLog
from gainfunction.models.set_entry import SetEntry
from gainfunction.models.template import Template
from gainfunction.models.template_exercise import TemplateExerciseEntry
from gainfunction.models.exercise_definition import ExerciseDefinition

__all__ = [
    "Workout", "ExerciseLog", "SetEntry",
    "Template", "TemplateExerciseEntry",
    "ExerciseDefinition",
]
