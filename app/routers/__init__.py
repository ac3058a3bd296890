"""API routers."""

from . import auth, media, properties, users

__all__ = ["auth", "users", "properties", "media"]
