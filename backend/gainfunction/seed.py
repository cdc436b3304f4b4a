import logging

from sqlalchemy.orm import Session

from gainfunction.repositories.exercise_definition_repo import ExerciseDefinitionRepository
from gainfunction.schemas.exercise_definition import ExerciseDefinitionRead

log = logging.getLogger(__name__)

DEFAULT_EXERCISES: tuple[str, ...] = (
    # Chest
    "Bench Press", "Incline Bench Press", "Decline Bench Press", "Dumbbell Bench Press",
    "Incline Dumbbell Press", "Decline Dumbbell Press", "Chest Fly", "Cable Crossover",
    "Push-Up", "Dips",
    # Back
    "Pull-Up", "Chin-Up", "Lat Pulldown", "Seated Cable Row", "Bent-Over Row",
    "T-Bar Row", "Dumbbell Row", "Face Pull", "Reverse Fly", "Deadlift",
    # Shoulders
    "Overhead Press", "Military Press", "Arnold Press", "Lateral Raise", "Front Raise",
    "Upright Row", "Shrug",
    # Arms
    "Bicep Curl", "Hammer Curl", "Preacher Curl", "Concentration Curl", "Tricep Extension",
    "Tricep Pushdown", "Skull Crusher", "Close-Grip Bench Press",
    # Legs
    "Squat", "Front Squat", "Leg Press", "Lunge", "Romanian Deadlift", "Leg Extension",
    "Leg Curl", "Calf Raise", "Hip Thrust", "Glute Bridge",
    # Core
    "Crunch", "Sit-Up", "Plank", "Russian Twist", "Leg Raise", "Mountain Climber",
    "Ab Wheel Rollout",
)


def preload_exercise_definitions(db: Session) -> int:
    """Insert the built-in catalog; names already present are left alone."""
    repo = ExerciseDefinitionRepository(db)
    inserted = repo.insert_many(
        ExerciseDefinitionRead(name=name, is_custom=False) for name in DEFAULT_EXERCISES
    )
    log.info("seeded %d exercise definitions", len(inserted))
    return len(inserted)
