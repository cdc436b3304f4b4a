from typing import Annotated
from pydantic import BaseModel, ConfigDict, Field

PosInt = Annotated[int, Field(ge=1)]
NonNegInt = Annotated[int, Field(ge=0)]
NonNegFloat = Annotated[float, Field(ge=0, le=1000)]

class SetEntryBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    set_number: PosInt
    reps: NonNegInt
    weight: NonNegFloat
    rest_time_seconds: NonNegInt | None = None

class SetEntryIn(BaseModel):
    # Optional: if omitted, the server appends after the last set of the log
    set_number: PosInt | None = None
    reps: NonNegInt
    weight: NonNegFloat
    rest_time_seconds: NonNegInt | None = None

class SetEntryCreate(SetEntryBase):
    exercise_log_id: int

class SetEntryRead(SetEntryCreate):
    id: int

    model_config = ConfigDict(frozen=True, from_attributes=True)
