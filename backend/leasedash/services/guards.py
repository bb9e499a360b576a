"""
Cross-cutting wrappers for report entry points.

authorization_guard rejects calls without an authenticated session before
any work happens. failure_boundary converts any load/compute failure into a
generic failed result, logged, with no partial data.
"""
import logging
from functools import wraps
from typing import Optional

from leasedash.models import CallerSession, ReportResult

logger = logging.getLogger(__name__)

UNAUTHORIZED = "Unauthorized"


def is_authenticated(session: Optional[CallerSession]) -> bool:
    return session is not None and bool(session.user_id)


def authorization_guard(func):
    """Entry point's first argument must be the caller's session."""
    @wraps(func)
    async def wrapper(session: Optional[CallerSession], *args, **kwargs):
        if not is_authenticated(session):
            logger.warning(f"[AUTH] Rejected unauthenticated call to {func.__name__}")
            return ReportResult.fail(UNAUTHORIZED)
        return await func(session, *args, **kwargs)
    return wrapper


def failure_boundary(report_name: str):
    """Decorator factory: `Failed to fetch <report_name>` on any exception."""
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception:
                logger.exception(f"Error fetching {report_name}")
                return ReportResult.fail(f"Failed to fetch {report_name}")
        return wrapper
    return decorator
