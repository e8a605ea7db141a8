"""FastAPI dependencies for admin gating, caching and database access."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from market_report.core.config import settings
from market_report.core.database import get_db
from market_report.services.cache import TTLCache

# Type alias for dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]


async def require_admin() -> bool:
    """Dependency to require admin mode for access."""
    if not settings.admin_mode:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access restricted",
        )
    return True


# Type alias for admin-only access
AdminAccess = Annotated[bool, Depends(require_admin)]


def get_curve_cache(request: Request) -> TTLCache:
    """Dependency that provides the application's yield curve cache."""
    cache: TTLCache = request.app.state.curve_cache
    return cache


CurveCache = Annotated[TTLCache, Depends(get_curve_cache)]
