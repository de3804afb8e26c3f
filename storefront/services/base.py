# storefront/services/base.py
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import StoreError, ValidationError
from ..models import INT_MAX

logger = logging.getLogger(__name__)


@asynccontextmanager
async def store_operation(session: AsyncSession, operation: str) -> AsyncIterator[None]:
    """Translate driver and SQL failures inside the block into StoreError.

    The session is rolled back so no partial write survives the failure.
    Storefront exceptions raised in the block pass through untouched.
    """
    try:
        yield
    except (SQLAlchemyError, OSError, OverflowError, asyncio.TimeoutError) as exc:
        logger.exception("Store failure while %s", operation)
        try:
            await session.rollback()
        except SQLAlchemyError:
            logger.warning("Rollback failed after store failure while %s", operation)
        raise StoreError(operation) from exc


def is_storable_id(value) -> bool:
    """True when ``value`` could be a key in an INTEGER id column."""
    # bool is an int subclass but never a valid id or quantity
    return isinstance(value, int) and not isinstance(value, bool) and 0 < value <= INT_MAX


def require_positive_int(name: str, value) -> int:
    if not is_storable_id(value):
        raise ValidationError(
            f"{name} must be a positive integer no greater than {INT_MAX}",
            details={name: value},
        )
    return value
