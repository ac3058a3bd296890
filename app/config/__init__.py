"""Configuration module."""

from .database import get_db
from .settings import settings

__all__ = ["settings", "get_db"]
