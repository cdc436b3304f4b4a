from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String, Text
from gainfunction.db import Base

class Template(Base):
    __tablename__ = "templates"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # length rule (1..50 after trim) lives in the state holders, not here
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    exercises = relationship(
        "TemplateExerciseEntry", back_populates="template", cascade="all, delete-orphan", passive_deletes=True
    )
