"""
Templates router.

This router contains endpoints for:
- /templates - List workout templates as selectable options
- /templates/{template_id}/exercises - Seed a session from a template
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from api.deps import get_workout_service, require_site_access
from api.schemas import TemplateExercisesResponse, TemplateOptionResponse
from application.services import WorkoutService

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Templates"],
    dependencies=[Depends(require_site_access)],
)


@router.get("/templates", response_model=List[TemplateOptionResponse])
def list_templates(service: WorkoutService = Depends(get_workout_service)):
    """List templates, oldest first."""
    options = service.load_workout_template_options()
    return [TemplateOptionResponse(id=str(o.id), label=o.label) for o in options]


@router.get("/templates/{template_id}/exercises", response_model=TemplateExercisesResponse)
def get_template_exercises(
    template_id: str,
    service: WorkoutService = Depends(get_workout_service),
):
    """
    Get a template's exercises as empty session exercises.

    Each exercise gets the session id ``exercise-<template exercise id>``;
    ``template_exercise_map`` maps those ids back for saving.
    An invalid template id is rejected with 400.
    """
    seeded = service.load_template_exercises(template_id)
    return TemplateExercisesResponse.from_domain(seeded)
