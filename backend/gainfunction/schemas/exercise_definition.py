from typing import Annotated
from pydantic import BaseModel, ConfigDict, StringConstraints

class ExerciseDefinitionRead(BaseModel):
    name: str
    is_custom: bool

    model_config = ConfigDict(frozen=True, from_attributes=True)

class CustomExerciseIn(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
