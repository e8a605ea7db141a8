"""Core application components package."""

from .config import settings
from .database import Database, get_db
from .deps import AdminAccess, CurveCache, DbSession, get_curve_cache, require_admin

__all__ = [
    "settings",
    "Database",
    "get_db",
    "AdminAccess",
    "DbSession",
    "CurveCache",
    "get_curve_cache",
    "require_admin",
]
