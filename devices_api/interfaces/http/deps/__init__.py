"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .settings import get_app_settings

__all__ = [
    "get_app_settings",
    "get_db_session",
]
