"""
Translation of driver errors into application-level store errors.
"""

import logging
from functools import wraps

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from authcore.app.repositories.errors import DuplicateRecordError, StoreUnavailableError

logger = logging.getLogger(__name__)


def translate_store_errors(operation_name: str):
    """Decorate an async repository method so SQLAlchemy failures surface as store errors."""

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except IntegrityError as exc:
                logger.warning(f"Constraint violation during {operation_name}")
                raise DuplicateRecordError(operation_name) from exc
            except SQLAlchemyError as exc:
                # Parameters may carry hashes, only the error type is logged
                logger.error(
                    f"Store failure during {operation_name}: {type(exc).__name__}"
                )
                raise StoreUnavailableError(operation_name) from exc

        return wrapper

    return decorator
