import asyncio
import logging
import time
from contextlib import asynccontextmanager
from functools import wraps
from typing import AsyncGenerator, Optional

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_db_session, session_commit, session_rollback

logger = logging.getLogger(__name__)


class TransactionManager:
    """
    Utility class for running a unit of work as one database transaction,
    with rollback on any failure and retry for transient lock errors.
    """

    # Transactions running longer than this are logged
    TRANSACTION_TIMEOUT = 30

    # Retry configuration
    MAX_RETRIES = 3
    RETRY_DELAY_BASE = 0.1  # Base delay in seconds

    @staticmethod
    @asynccontextmanager
    async def atomic_transaction(session: Optional[AsyncSession] = None,
                                 timeout: Optional[int] = None) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for atomic database transactions.

        Commits when the block exits normally, rolls back and re-raises otherwise.
        When no session is passed a fresh one is opened and closed around the block.

        Usage:
            async with TransactionManager.atomic_transaction(session) as session:
                await ProductRepository.decrement_stock_if_available(...)
                await OrderRepository.create(...)
        """
        timeout = timeout or TransactionManager.TRANSACTION_TIMEOUT

        if session is None:
            async with get_db_session() as own_session:
                async with TransactionManager.atomic_transaction(own_session, timeout) as s:
                    yield s
            return

        transaction_start = time.monotonic()
        logger.debug("Transaction started")
        try:
            yield session

            duration = time.monotonic() - transaction_start
            if duration > timeout:
                logger.warning(f"Transaction exceeded timeout: {duration:.2f}s > {timeout}s")

            await session_commit(session)
            logger.debug(f"Transaction committed successfully in {duration:.2f}s")
        except Exception as e:
            try:
                await session_rollback(session)
                logger.info(f"Transaction rolled back due to error: {str(e)}")
            except Exception as rollback_error:
                logger.critical(f"Failed to rollback transaction: {str(rollback_error)}")
            raise

    @staticmethod
    def with_retry(max_retries: Optional[int] = None, delay_base: Optional[float] = None):
        """
        Decorator for automatic retry of database operations with exponential backoff.

        Only OperationalError (e.g. "database is locked") is retried; domain
        errors such as insufficient stock propagate on the first attempt.
        """
        max_retries = max_retries or TransactionManager.MAX_RETRIES
        delay_base = delay_base or TransactionManager.RETRY_DELAY_BASE

        def decorator(func):
            @wraps(func)
            async def wrapper(*args, **kwargs):
                for attempt in range(max_retries + 1):
                    try:
                        return await func(*args, **kwargs)
                    except OperationalError as e:
                        if attempt == max_retries:
                            logger.error(f"Function {func.__name__} failed after {max_retries} retries: {str(e)}")
                            raise
                        delay = delay_base * (2 ** attempt)
                        logger.warning(f"Attempt {attempt + 1} failed for {func.__name__}, "
                                       f"retrying in {delay:.2f}s: {str(e)}")
                        await asyncio.sleep(delay)

            return wrapper
        return decorator
