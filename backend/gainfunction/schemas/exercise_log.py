from typing import Annotated
from pydantic import BaseModel, ConfigDict, Field, field_validator

ExerciseStr = Annotated[str, Field(max_length=120)]

class ExerciseLogBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    exercise_name: ExerciseStr
    notes: str | None = None

    @field_validator("exercise_name")
    @classmethod
    def exercise_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("exercise_name cannot be blank")
        return v2

class ExerciseLogIn(ExerciseLogBase):
    """Request body; the workout comes from the URL."""

class ExerciseLogCreate(ExerciseLogBase):
    workout_id: int

class ExerciseLogRead(ExerciseLogCreate):
    id: int

    model_config = ConfigDict(frozen=True, from_attributes=True)
