from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from gainfunction.db import get_db
from gainfunction.deps.services import get_exercise_service
from gainfunction.repositories.exercise_log_repo import ExerciseLogRepository
from gainfunction.schemas.exercise_definition import CustomExerciseIn, ExerciseDefinitionRead
from gainfunction.schemas.exercise_log import ExerciseLogRead
from gainfunction.services.exercise_service import ExerciseService

router = APIRouter(prefix="/exercises", tags=["exercises"])

@router.get("", response_model=list[ExerciseDefinitionRead])
def list_exercises(
    custom: bool | None = Query(None, description="true: user-added only, false: built-in only"),
    service: ExerciseService = Depends(get_exercise_service),
):
    return service.exercise_definitions.list_all(custom=custom)

@router.post("", response_model=ExerciseDefinitionRead, status_code=status.HTTP_201_CREATED)
def add_custom_exercise(payload: CustomExerciseIn, service: ExerciseService = Depends(get_exercise_service)):
    if not service.add_custom_exercise(payload.name):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="exercise already exists")
    return service.get_exercise(payload.name)

@router.get("/{name}", response_model=ExerciseDefinitionRead)
def get_exercise(name: str, service: ExerciseService = Depends(get_exercise_service)):
    exercise = service.get_exercise(name)
    if not exercise:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    return exercise

@router.get("/{name}/history", response_model=list[ExerciseLogRead])
def exercise_history(name: str, db: Session = Depends(get_db)):
    # most recent workout first
    return ExerciseLogRepository(db).list_by_exercise_name(name)
