import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from enums.product_category import ProductCategory
from exceptions import ProductNotFoundException, ProductInUseException
from models.product import ProductDTO
from repositories.product import ProductRepository
from utils.transaction_manager import TransactionManager

logger = logging.getLogger(__name__)


class ProductService:

    @staticmethod
    async def get_products_page(page: int, limit: int, session: AsyncSession,
                                category: ProductCategory | None = None) -> tuple[list[ProductDTO], int]:
        offset = (page - 1) * limit
        products = await ProductRepository.get_page(offset, limit, session, category=category)
        total = await ProductRepository.count(session, category=category)
        return products, total

    @staticmethod
    async def get_product(product_id: int, session: AsyncSession) -> ProductDTO:
        product = await ProductRepository.get_by_id(product_id, session)
        if product is None:
            raise ProductNotFoundException(product_id)
        return product

    @staticmethod
    async def create_product(product_dto: ProductDTO, session: AsyncSession) -> ProductDTO:
        async with TransactionManager.atomic_transaction(session):
            product = await ProductRepository.create(product_dto, session)
        logger.info(f"Product {product.id} '{product.name}' created in {product.category.value}")
        return product

    @staticmethod
    async def update_product(product_id: int, product_dto: ProductDTO, session: AsyncSession) -> ProductDTO:
        """Partial update: only fields present in the request are written."""
        async with TransactionManager.atomic_transaction(session):
            product = await ProductRepository.update(product_id, product_dto, session)
            if product is None:
                raise ProductNotFoundException(product_id)
        logger.info(f"Product {product_id} updated: {sorted(product_dto.model_fields_set)}")
        return product

    @staticmethod
    async def delete_product(product_id: int, session: AsyncSession) -> None:
        try:
            async with TransactionManager.atomic_transaction(session):
                deleted = await ProductRepository.delete(product_id, session)
                if not deleted:
                    raise ProductNotFoundException(product_id)
        except IntegrityError:
            # Order lines keep a foreign key to the product
            raise ProductInUseException(product_id)
        logger.info(f"Product {product_id} deleted")
