"""SQLAlchemy implementation of CouponRepository."""

from typing import Optional

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities.catalog import Coupon, normalize_coupon_code
from core.domain.repositories.catalog_repository import CouponRepository

from ..mappers import CouponMapper
from ..models.catalog_model import CouponModel


class SqlAlchemyCouponRepository(CouponRepository):
    """Concrete implementation of CouponRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, coupon: Coupon) -> None:
        self._session.add(CouponMapper.to_persistence(coupon))
        await self._session.flush()

    async def find_by_code(self, code: str) -> Optional[Coupon]:
        result = await self._session.execute(
            select(CouponModel).where(CouponModel.code == normalize_coupon_code(code))
        )
        model = result.scalar_one_or_none()
        return CouponMapper.to_domain(model) if model else None

    async def increment_usage(self, code: str) -> bool:
        result = await self._session.execute(
            update(CouponModel)
            .where(CouponModel.code == normalize_coupon_code(code))
            .where(
                or_(
                    CouponModel.usage_limit.is_(None),
                    CouponModel.used_count < CouponModel.usage_limit,
                )
            )
            .values(used_count=CouponModel.used_count + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
