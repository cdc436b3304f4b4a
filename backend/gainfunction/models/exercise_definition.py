from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, String
from gainfunction.db import Base

class ExerciseDefinition(Base):
    __tablename__ = "exercise_definitions"
    name: Mapped[str] = mapped_column(String(120), primary_key=True)
    # False for the seeded catalog, True for user-added entries
    is_custom: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
