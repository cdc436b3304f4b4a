# gainfunction/deps/services.py
from fastapi import Depends
from sqlalchemy.orm import Session

from gainfunction.db import get_db
from gainfunction.repositories.exercise_definition_repo import ExerciseDefinitionRepository
from gainfunction.repositories.template_exercise_repo import TemplateExerciseRepository
from gainfunction.repositories.template_repo import TemplateRepository
from gainfunction.services.exercise_service import ExerciseService
from gainfunction.services.template_service import TemplateService

def get_exercise_service(db: Session = Depends(get_db)) -> ExerciseService:
    return ExerciseService(ExerciseDefinitionRepository(db))

def get_template_service(db: Session = Depends(get_db)) -> TemplateService:
    return TemplateService(TemplateRepository(db), TemplateExerciseRepository(db))
