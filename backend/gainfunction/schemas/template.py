from typing import Annotated
from pydantic import BaseModel, ConfigDict, Field, StringConstraints

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
PosInt = Annotated[int, Field(ge=1)]

class TemplateCreate(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str | None = None

class TemplateRead(TemplateCreate):
    id: int

    model_config = ConfigDict(frozen=True, from_attributes=True)

class TemplateExerciseRead(BaseModel):
    template_id: int
    exercise_name: str
    default_sets: int = 3
    default_reps: int = 10
    default_weight: float | None = None
    order_position: int = 0

    model_config = ConfigDict(frozen=True, from_attributes=True)

# HTTP bodies
class TemplateIn(BaseModel):
    name: NameStr
    description: Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)] | None = None

class TemplateExerciseIn(BaseModel):
    exercise_name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
    default_sets: PosInt = 3
    default_reps: PosInt = 10
    default_weight: Annotated[float, Field(gt=0)]

class TemplateExerciseUpdate(BaseModel):
    default_sets: PosInt | None = None
    default_reps: PosInt | None = None
    default_weight: Annotated[float, Field(gt=0)] | None = None
    order_position: Annotated[int, Field(ge=0)] | None = None
