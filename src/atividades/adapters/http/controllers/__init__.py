"""Routers expostos pela aplicação FastAPI."""

from .auth_controller import router as auth_router
from .home_controller import router as home_router
from .todos_controller import router as todos_router

__all__ = [
    "auth_router",
    "home_router",
    "todos_router",
]
