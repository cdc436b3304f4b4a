from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from gainfunction.db import get_db
from gainfunction.repositories.exercise_log_repo import ExerciseLogRepository
from gainfunction.repositories.set_entry_repo import SetEntryRepository
from gainfunction.repositories.workout_repo import WorkoutRepository
from gainfunction.schemas.exercise_log import ExerciseLogCreate, ExerciseLogIn, ExerciseLogRead
from gainfunction.schemas.set_entry import SetEntryCreate, SetEntryIn, SetEntryRead
from gainfunction.schemas.workout import WorkoutCreate, WorkoutRead

router = APIRouter(tags=["workouts"])

def _workout_or_404(db: Session, workout_id: int) -> WorkoutRead:
    workout = WorkoutRepository(db).get(workout_id)
    if not workout:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    return workout

def _log_or_404(db: Session, exercise_log_id: int) -> ExerciseLogRead:
    log = ExerciseLogRepository(db).get(exercise_log_id)
    if not log:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise log not found")
    return log

@router.post("/workouts", response_model=WorkoutRead, status_code=status.HTTP_201_CREATED)
def create_workout(payload: WorkoutCreate, db: Session = Depends(get_db)):
    repo = WorkoutRepository(db)
    return repo.get(repo.insert(payload))

@router.get("/workouts", response_model=list[WorkoutRead])
def list_workouts(
    db: Session = Depends(get_db),
    start: int | None = Query(None, description="epoch millis, inclusive"),
    end: int | None = Query(None, description="epoch millis, inclusive"),
):
    repo = WorkoutRepository(db)
    if start is None and end is None:
        return repo.list_all()
    return repo.list_in_date_range(start if start is not None else 0,
                                   end if end is not None else 2**63 - 1)

@router.get("/workouts/{workout_id}", response_model=WorkoutRead)
def get_workout(workout_id: int, db: Session = Depends(get_db)):
    return _workout_or_404(db, workout_id)

@router.put("/workouts/{workout_id}", response_model=WorkoutRead)
def update_workout(workout_id: int, payload: WorkoutCreate, db: Session = Depends(get_db)):
    workout = _workout_or_404(db, workout_id)
    return WorkoutRepository(db).update(workout.model_copy(update=payload.model_dump()))

@router.delete("/workouts/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_workout(workout_id: int, db: Session = Depends(get_db)):
    # exercise logs and their sets cascade
    WorkoutRepository(db).delete(_workout_or_404(db, workout_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/workouts/{workout_id}/exercises", response_model=ExerciseLogRead, status_code=status.HTTP_201_CREATED)
def add_exercise_log(workout_id: int, payload: ExerciseLogIn, db: Session = Depends(get_db)):
    _workout_or_404(db, workout_id)
    repo = ExerciseLogRepository(db)
    log_id = repo.insert(ExerciseLogCreate(workout_id=workout_id, **payload.model_dump()))
    return repo.get(log_id)

@router.get("/workouts/{workout_id}/exercises", response_model=list[ExerciseLogRead])
def list_exercise_logs(workout_id: int, db: Session = Depends(get_db)):
    _workout_or_404(db, workout_id)
    return ExerciseLogRepository(db).list_for_workout(workout_id)

@router.delete("/exercise-logs/{exercise_log_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exercise_log(exercise_log_id: int, db: Session = Depends(get_db)):
    ExerciseLogRepository(db).delete(_log_or_404(db, exercise_log_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/exercise-logs/{exercise_log_id}/sets", response_model=SetEntryRead, status_code=status.HTTP_201_CREATED)
def add_set(exercise_log_id: int, payload: SetEntryIn, db: Session = Depends(get_db)):
    _log_or_404(db, exercise_log_id)
    repo = SetEntryRepository(db)
    data = payload.model_dump()
    if data["set_number"] is None:
        data["set_number"] = repo.next_set_number(exercise_log_id)
    set_id = repo.insert(SetEntryCreate(exercise_log_id=exercise_log_id, **data))
    return repo.get(set_id)

@router.get("/exercise-logs/{exercise_log_id}/sets", response_model=list[SetEntryRead])
def list_sets(exercise_log_id: int, db: Session = Depends(get_db)):
    _log_or_404(db, exercise_log_id)
    return SetEntryRepository(db).list_for_exercise_log(exercise_log_id)
