"""
Repository plumbing shared by all persistence classes.

Repositories wrap an ``AsyncSession`` (one per request) and are the only
code that talks to the database. Connectivity failures are re-raised as
``StorageUnavailable`` so callers can tell "system down" from "no rows".
"""

import functools
import logging

from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.exceptions import StorageUnavailable
from jobboard.middleware.metrics import record_storage_failure

logger = logging.getLogger(__name__)

STORAGE_ERRORS = (OperationalError, InterfaceError, DisconnectionError, ConnectionError)


def translate_storage_errors(func):
    """Decorator for async repository methods."""

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except STORAGE_ERRORS as e:
            logger.error(f"Storage error in {type(self).__name__}.{func.__name__}: {e}")
            record_storage_failure(type(self).__name__)
            await self._rollback_quietly()
            raise StorageUnavailable(str(e)) from e

    return wrapper


class BaseRepository:
    """
    Base class holding the request session.

    Attributes:
        session: SQLAlchemy async session for database queries
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def dialect_name(self) -> str:
        return self.session.get_bind().dialect.name

    async def _rollback_quietly(self) -> None:
        try:
            await self.session.rollback()
        except STORAGE_ERRORS as e:
            logger.warning(f"Rollback after storage error failed: {e}")
