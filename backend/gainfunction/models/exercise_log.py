from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, String, Text
from gainfunction.db import Base

class ExerciseLog(Base):
    __tablename__ = "exercise_logs"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workout_id: Mapped[int] = mapped_column(ForeignKey("workouts.id", ondelete="CASCADE"), index=True)
    exercise_name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    workout = relationship("Workout", back_populates="exercise_logs")
    sets = relationship(
        "SetEntry", back_populates="exercise_log", cascade="all, delete-orphan", passive_deletes=True
    )
