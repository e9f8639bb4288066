"""
Product catalog endpoints. Reads are public, writes and stats are admin only.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

import config
from enums.product_category import ProductCategory
from models.user import UserDTO
from services.analytics import AnalyticsService
from services.product import ProductService
from utils.pagination import build_pagination
from web.dependencies import get_session, require_admin
from web.schemas import ProductCreateRequest, ProductUpdateRequest, success, success_page

logger = logging.getLogger(__name__)

product_router = APIRouter(prefix="/api/v1/products", tags=["products"])


@product_router.get("")
async def get_products(category: ProductCategory | None = Query(None),
                       page: int = Query(1, ge=1),
                       limit: int = Query(config.PAGE_ENTRIES, ge=1, le=100),
                       session: AsyncSession = Depends(get_session)):
    products, total = await ProductService.get_products_page(page, limit, session, category=category)
    return success_page(products, build_pagination(page, limit, total))


@product_router.get("/stats/all")
async def get_product_stats(admin: UserDTO = Depends(require_admin),
                            session: AsyncSession = Depends(get_session)):
    stats = await AnalyticsService.get_product_stats(session)
    return success([row.model_dump(mode='json') for row in stats])


@product_router.get("/{product_id}")
async def get_product(product_id: int, session: AsyncSession = Depends(get_session)):
    product = await ProductService.get_product(product_id, session)
    return success(product)


@product_router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(request: ProductCreateRequest,
                         admin: UserDTO = Depends(require_admin),
                         session: AsyncSession = Depends(get_session)):
    product = await ProductService.create_product(request.to_dto(), session)
    return success(product)


@product_router.put("/{product_id}")
async def update_product(product_id: int, request: ProductUpdateRequest,
                         admin: UserDTO = Depends(require_admin),
                         session: AsyncSession = Depends(get_session)):
    product = await ProductService.update_product(product_id, request.to_dto(), session)
    return success(product)


@product_router.delete("/{product_id}")
async def delete_product(product_id: int,
                         admin: UserDTO = Depends(require_admin),
                         session: AsyncSession = Depends(get_session)):
    await ProductService.delete_product(product_id, session)
    logger.info(f"Admin {admin.id} deleted product {product_id}")
    return success({})
