"""
API Routers Package
"""

from .history import router as history_router
from .workouts import router as workouts_router

__all__ = ['history_router', 'workouts_router']
