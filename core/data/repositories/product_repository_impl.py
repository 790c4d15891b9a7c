"""SQLAlchemy implementation of ProductRepository."""

from typing import Dict, Iterable

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities.catalog import Product
from core.domain.repositories.catalog_repository import ProductRepository

from ..mappers import ProductMapper
from ..models.catalog_model import ProductModel


class SqlAlchemyProductRepository(ProductRepository):
    """Concrete implementation of ProductRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, product: Product) -> None:
        self._session.add(ProductMapper.to_persistence(product))
        await self._session.flush()

    async def find_many(self, product_ids: Iterable[str]) -> Dict[str, Product]:
        ids = list(set(product_ids))
        if not ids:
            return {}

        result = await self._session.execute(
            select(ProductModel).where(ProductModel.id.in_(ids))
        )
        return {
            model.id: ProductMapper.to_domain(model)
            for model in result.scalars().all()
        }

    async def decrement_stock(self, product_id: str, quantity: int) -> bool:
        # Guarded decrement: the stock check and the write are one statement.
        result = await self._session.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .where(ProductModel.stock >= quantity)
            .values(stock=ProductModel.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
