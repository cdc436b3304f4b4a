from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import BigInteger, Integer, String, Text
from gainfunction.db import Base

class Workout(Base):
    __tablename__ = "workouts"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)  # epoch millis
    template_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    exercise_logs = relationship(
        "ExerciseLog", back_populates="workout", cascade="all, delete-orphan", passive_deletes=True
    )
