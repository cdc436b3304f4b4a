"""
Process-wide composition: one store, one session, repositories and services.

State holders are built per screen from ``container.exercise_service`` and
``container.template_service``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from gainfunction.db import init_database, make_engine, make_session_factory
from gainfunction.repositories.exercise_definition_repo import ExerciseDefinitionRepository
from gainfunction.repositories.exercise_log_repo import ExerciseLogRepository
from gainfunction.repositories.set_entry_repo import SetEntryRepository
from gainfunction.repositories.template_exercise_repo import TemplateExerciseRepository
from gainfunction.repositories.template_repo import TemplateRepository
from gainfunction.repositories.workout_repo import WorkoutRepository
from gainfunction.services.exercise_service import ExerciseService
from gainfunction.services.template_service import TemplateService
from gainfunction.settings import Settings, get_settings

log = logging.getLogger(__name__)


@dataclass
class Container:
    engine: Engine
    session_factory: sessionmaker
    db: Session
    workouts: WorkoutRepository = field(init=False)
    exercise_logs: ExerciseLogRepository = field(init=False)
    set_entries: SetEntryRepository = field(init=False)
    templates: TemplateRepository = field(init=False)
    template_exercises: TemplateExerciseRepository = field(init=False)
    exercise_definitions: ExerciseDefinitionRepository = field(init=False)
    exercise_service: ExerciseService = field(init=False)
    template_service: TemplateService = field(init=False)

    def __post_init__(self) -> None:
        self.workouts = WorkoutRepository(self.db)
        self.exercise_logs = ExerciseLogRepository(self.db)
        self.set_entries = SetEntryRepository(self.db)
        self.templates = TemplateRepository(self.db)
        self.template_exercises = TemplateExerciseRepository(self.db)
        self.exercise_definitions = ExerciseDefinitionRepository(self.db)
        self.exercise_service = ExerciseService(self.exercise_definitions)
        self.template_service = TemplateService(self.templates, self.template_exercises)

    def close(self) -> None:
        self.db.close()
        self.engine.dispose()


def build_container(settings: Optional[Settings] = None) -> Container:
    settings = settings or get_settings()
    engine = make_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    factory = make_session_factory(engine)
    created = init_database(
        engine, factory, schema_version=settings.SCHEMA_VERSION, seed=settings.SEED_EXERCISES
    )
    log.info("store ready at %s (created=%s)", settings.DATABASE_URL, created)
    return Container(engine=engine, session_factory=factory, db=factory())
