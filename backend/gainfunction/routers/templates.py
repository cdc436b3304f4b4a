from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from gainfunction.deps.services import get_template_service
from gainfunction.schemas.template import (
    TemplateExerciseIn, TemplateExerciseRead, TemplateExerciseUpdate, TemplateIn, TemplateRead,
)
from gainfunction.services.template_service import TemplateService

router = APIRouter(prefix="/templates", tags=["templates"])

def _template_or_404(service: TemplateService, template_id: int) -> TemplateRead:
    template = service.get_template_by_id(template_id)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return template

@router.get("", response_model=list[TemplateRead])
def list_templates(
    q: str | None = Query(None, max_length=50, description="case-insensitive name search"),
    service: TemplateService = Depends(get_template_service),
):
    if q:
        return service.search_templates(q)
    return service.templates.list_all()

@router.post("", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
def create_template(payload: TemplateIn, service: TemplateService = Depends(get_template_service)):
    template_id = service.create_template(payload.name, payload.description)
    return service.get_template_by_id(template_id)

@router.get("/{template_id}", response_model=TemplateRead)
def get_template(template_id: int, service: TemplateService = Depends(get_template_service)):
    return _template_or_404(service, template_id)

@router.put("/{template_id}", response_model=TemplateRead)
def update_template(template_id: int, payload: TemplateIn, service: TemplateService = Depends(get_template_service)):
    template = _template_or_404(service, template_id)
    service.update_template(template.model_copy(update=payload.model_dump()))
    return service.get_template_by_id(template_id)

@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(template_id: int, service: TemplateService = Depends(get_template_service)):
    service.delete_template(_template_or_404(service, template_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# Exercises inside a template

@router.get("/{template_id}/exercises", response_model=list[TemplateExerciseRead])
def list_template_exercises(template_id: int, service: TemplateService = Depends(get_template_service)):
    _template_or_404(service, template_id)
    return service.template_exercises.list_for_template(template_id)

@router.post("/{template_id}/exercises", response_model=TemplateExerciseRead, status_code=status.HTTP_201_CREATED)
def add_template_exercise(
    template_id: int,
    payload: TemplateExerciseIn,
    service: TemplateService = Depends(get_template_service),
):
    _template_or_404(service, template_id)
    added = service.add_exercise_to_template(
        template_id=template_id,
        exercise_name=payload.exercise_name,
        default_sets=payload.default_sets,
        default_reps=payload.default_reps,
        default_weight=payload.default_weight,
    )
    if not added:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="exercise already in template")
    return service.template_exercises.get(template_id, payload.exercise_name)

@router.patch("/{template_id}/exercises/{exercise_name}", response_model=TemplateExerciseRead)
def update_template_exercise(
    template_id: int,
    exercise_name: str,
    payload: TemplateExerciseUpdate,
    service: TemplateService = Depends(get_template_service),
):
    entry = service.template_exercises.get(template_id, exercise_name)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not in template")
    service.update_template_exercise(entry.model_copy(update=payload.model_dump(exclude_none=True)))
    return service.template_exercises.get(template_id, exercise_name)

@router.delete("/{template_id}/exercises/{exercise_name}", status_code=status.HTTP_204_NO_CONTENT)
def remove_template_exercise(
    template_id: int,
    exercise_name: str,
    service: TemplateService = Depends(get_template_service),
):
    if not service.remove_exercise_from_template(template_id, exercise_name):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not in template")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
