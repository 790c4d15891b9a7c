"""Unit of Work pattern for atomic transactions."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.value_objects import ExecutionID

from .event_store import EventStore
from .repositories.coupon_repository_impl import SqlAlchemyCouponRepository
from .repositories.order_repository_impl import SqlAlchemyOrderRepository
from .repositories.product_repository_impl import SqlAlchemyProductRepository


class UnitOfWork:
    """
    Unit of Work pattern for atomic transactions.

    Responsibilities:
    1. Manage SQLAlchemy session lifecycle
    2. Propagate ExecutionID across all operations
    3. Atomic commit/rollback of all repository operations
    4. Lazy initialization of repositories
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        execution_id: Optional[ExecutionID] = None,
    ) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory
            execution_id: Reuse an existing trace id (one is generated otherwise)
        """
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._execution_id: Optional[ExecutionID] = execution_id

        # Lazy-loaded repositories
        self._order_repository: Optional[SqlAlchemyOrderRepository] = None
        self._product_repository: Optional[SqlAlchemyProductRepository] = None
        self._coupon_repository: Optional[SqlAlchemyCouponRepository] = None
        self._event_store: Optional[EventStore] = None

    async def __aenter__(self) -> "UnitOfWork":
        """Start transaction scope."""
        self._session = self._session_factory()
        if self._execution_id is None:
            self._execution_id = ExecutionID.generate()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Rollback on exception, always close. Uncommitted work is discarded."""
        try:
            if exc_type is not None:
                await self._session.rollback()
        finally:
            await self._session.close()

    def _require_session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._session

    @property
    def execution_id(self) -> ExecutionID:
        """Get current execution ID for tracing.

        Returns:
            ExecutionID value object
        """
        if self._execution_id is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._execution_id

    @property
    def orders(self) -> SqlAlchemyOrderRepository:
        """Lazy-load order repository."""
        session = self._require_session()
        if self._order_repository is None:
            self._order_repository = SqlAlchemyOrderRepository(session)
        return self._order_repository

    @property
    def products(self) -> SqlAlchemyProductRepository:
        """Lazy-load product repository."""
        session = self._require_session()
        if self._product_repository is None:
            self._product_repository = SqlAlchemyProductRepository(session)
        return self._product_repository

    @property
    def coupons(self) -> SqlAlchemyCouponRepository:
        """Lazy-load coupon repository."""
        session = self._require_session()
        if self._coupon_repository is None:
            self._coupon_repository = SqlAlchemyCouponRepository(session)
        return self._coupon_repository

    @property
    def events(self) -> EventStore:
        """Lazy-load event store bound to this transaction."""
        session = self._require_session()
        if self._event_store is None:
            self._event_store = EventStore(session)
        return self._event_store

    async def commit(self) -> None:
        """Commit all pending changes."""
        await self._require_session().commit()

    async def rollback(self) -> None:
        """Rollback all pending changes."""
        await self._require_session().rollback()


def create_uow(
    session_factory: async_sessionmaker,
    execution_id: Optional[ExecutionID] = None,
) -> UnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy async session factory
        execution_id: Optional trace id shared across several units of work

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(session_factory, execution_id)
