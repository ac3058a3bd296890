"""Transaction management utilities."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class TransactionManager:
    """Context manager for database transactions with automatic rollback."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self._in_transaction = False

    async def __aenter__(self):
        """Start transaction context."""
        self._in_transaction = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit transaction context with commit or rollback."""
        if not self._in_transaction:
            return False

        if exc_type is not None:
            await self.db.rollback()
            logger.debug(f"Transaction rolled back due to {exc_type.__name__}: {exc_val}")
            return False  # Don't suppress exceptions

        try:
            await self.db.commit()
            logger.debug("Transaction committed successfully")
        except Exception:
            logger.error("Transaction commit failed, rolling back", exc_info=True)
            await self.db.rollback()
            raise

        return False


@asynccontextmanager
async def transaction_scope(db: AsyncSession) -> AsyncGenerator[TransactionManager, None]:
    """
    Async context manager for database transactions.

    Usage:
        async with transaction_scope(db) as tx:
            prop = await service.load_for_update(property_id)
            require(principal, ResourceOwnership.of_property(prop), OWNER_OR_ADMIN, msg)
            prop.title = "New title"
            # Automatic commit on success, rollback on exception
    """
    tx_manager = TransactionManager(db)
    async with tx_manager:
        yield tx_manager


@asynccontextmanager
async def atomic_operation(db: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    """
    Simple atomic operation context manager.

    Load, authorization decision and write all happen inside the block so the
    decision cannot go stale before the write commits.

    Usage:
        async with atomic_operation(db) as session:
            session.add(favorite)
    """
    async with transaction_scope(db):
        yield db
