"""Database dependencies for FastAPI."""

from app.config.database import get_db

__all__ = ["get_db"]
