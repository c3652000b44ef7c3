"""Core app configuration, database and security helpers."""

from gatehouse.core.config import Settings, get_settings
from gatehouse.core.database import get_db

__all__ = ["Settings", "get_settings", "get_db"]
