import logging

from sqlalchemy import select, func, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush, session_refresh
from enums.product_category import ProductCategory
from models.product import Product, ProductDTO

logger = logging.getLogger(__name__)


class ProductRepository:

    @staticmethod
    async def create(product_dto: ProductDTO, session: AsyncSession) -> ProductDTO:
        product = Product(**product_dto.to_row())
        session.add(product)
        await session_flush(session)
        await session_refresh(session, product)
        return ProductDTO.model_validate(product, from_attributes=True)

    @staticmethod
    async def get_by_id(product_id: int, session: AsyncSession) -> ProductDTO | None:
        stmt = select(Product).where(Product.id == product_id).execution_options(populate_existing=True)
        product = await session_execute(stmt, session)
        product = product.scalar()
        if product is not None:
            return ProductDTO.model_validate(product, from_attributes=True)
        else:
            return None

    @staticmethod
    async def get_page(offset: int, limit: int, session: AsyncSession,
                       category: ProductCategory | None = None) -> list[ProductDTO]:
        stmt = select(Product)
        if category is not None:
            stmt = stmt.where(Product.category == category)
        stmt = stmt.order_by(Product.created_at.desc(), Product.id.desc()).offset(offset).limit(limit)
        products = await session_execute(stmt, session)
        return [ProductDTO.model_validate(p, from_attributes=True) for p in products.scalars().all()]

    @staticmethod
    async def count(session: AsyncSession, category: ProductCategory | None = None) -> int:
        stmt = select(func.count()).select_from(Product)
        if category is not None:
            stmt = stmt.where(Product.category == category)
        total = await session_execute(stmt, session)
        return total.scalar_one()

    @staticmethod
    async def update(product_id: int, product_dto: ProductDTO, session: AsyncSession) -> ProductDTO | None:
        values = product_dto.to_row()
        if values:
            stmt = (update(Product)
                    .where(Product.id == product_id)
                    .values(**values, updated_at=func.now())
                    .execution_options(synchronize_session=False))
            result = await session_execute(stmt, session)
            if result.rowcount == 0:
                return None
        stmt = select(Product).where(Product.id == product_id).execution_options(populate_existing=True)
        product = await session_execute(stmt, session)
        product = product.scalar()
        return ProductDTO.model_validate(product, from_attributes=True) if product is not None else None

    @staticmethod
    async def delete(product_id: int, session: AsyncSession) -> bool:
        stmt = delete(Product).where(Product.id == product_id)
        result = await session_execute(stmt, session)
        return result.rowcount > 0

    @staticmethod
    async def decrement_stock_if_available(product_id: int, quantity: int, session: AsyncSession) -> bool:
        """
        Atomically take `quantity` units from stock.

        The check and the decrement happen in one conditional UPDATE, so two
        concurrent orders can never both take the last unit.

        Returns:
            True if stock was decremented, False if stock < quantity (or product missing)
        """
        stmt = (update(Product)
                .where(Product.id == product_id, Product.stock >= quantity)
                .values(stock=Product.stock - quantity, updated_at=func.now())
                .execution_options(synchronize_session=False))
        result = await session_execute(stmt, session)
        return result.rowcount == 1

    @staticmethod
    async def get_category_stats(session: AsyncSession) -> list[dict]:
        stmt = (select(Product.category,
                       func.count(Product.id),
                       func.avg(Product.price),
                       func.min(Product.price),
                       func.max(Product.price),
                       func.sum(Product.stock))
                .group_by(Product.category)
                .order_by(Product.category))
        rows = await session_execute(stmt, session)
        return [
            {
                'category': category.value if isinstance(category, ProductCategory) else category,
                'count': count,
                'avg_price': round(float(avg_price or 0.0), 2),
                'min_price': float(min_price or 0.0),
                'max_price': float(max_price or 0.0),
                'total_stock': int(total_stock or 0),
            }
            for category, count, avg_price, min_price, max_price, total_stock in rows.all()
        ]
