"""
Router package for the Workout Tracker API.

This package contains all API routers organized by domain:
- health: Liveness endpoint
- templates: Workout templates and their exercises
- workouts: Workout validation and saving
- exercises: Exercise weight history
"""

from api.routers.health import router as health_router
from api.routers.templates import router as templates_router
from api.routers.workouts import router as workouts_router
from api.routers.exercises import router as exercises_router

__all__ = [
    "health_router",
    "templates_router",
    "workouts_router",
    "exercises_router",
]
