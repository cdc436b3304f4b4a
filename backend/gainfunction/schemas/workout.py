from typing import Annotated
from pydantic import BaseModel, ConfigDict, Field, StringConstraints

NotesStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]
Minutes = Annotated[int, Field(ge=0)]

class WorkoutBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: int  # epoch millis
    template_name: str | None = None
    duration: Minutes | None = None
    notes: NotesStr | None = None

class WorkoutCreate(WorkoutBase):
    pass

class WorkoutRead(WorkoutBase):
    id: int

    model_config = ConfigDict(frozen=True, from_attributes=True)
