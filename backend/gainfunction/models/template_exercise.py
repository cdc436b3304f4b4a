from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, String, Float
from gainfunction.db import Base

class TemplateExerciseEntry(Base):
    """One exercise prescription inside a template.

    ``exercise_name`` is a soft reference to ``exercise_definitions.name``;
    no foreign key is enforced so templates survive catalog edits.
    """
    __tablename__ = "template_exercises"
    template_id: Mapped[int] = mapped_column(
        ForeignKey("templates.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    exercise_name: Mapped[str] = mapped_column(String(120), primary_key=True)
    default_sets: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    default_reps: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    default_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    order_position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    template = relationship("Template", back_populates="exercises")
