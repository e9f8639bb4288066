"""
Order endpoints.

Access:
- Any authenticated user may place orders and read their own orders
- Admins may list every order, change status/payment status and read stats
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

import config
from models.order import OrderRequestDTO
from models.user import UserDTO
from services.analytics import AnalyticsService
from services.order import OrderService
from utils.pagination import build_pagination
from web.dependencies import get_session, get_current_user, require_admin
from web.schemas import StatusUpdateRequest, PaymentStatusUpdateRequest, success, success_page

logger = logging.getLogger(__name__)

order_router = APIRouter(prefix="/api/v1/orders", tags=["orders"])


@order_router.post("", status_code=status.HTTP_201_CREATED)
async def create_order(request: OrderRequestDTO,
                       user: UserDTO = Depends(get_current_user),
                       session: AsyncSession = Depends(get_session)):
    order = await OrderService.create_order(user, request, session)
    return success(order)


@order_router.get("/my")
async def get_my_orders(page: int = Query(1, ge=1),
                        limit: int = Query(config.PAGE_ENTRIES, ge=1, le=100),
                        user: UserDTO = Depends(get_current_user),
                        session: AsyncSession = Depends(get_session)):
    orders, total = await OrderService.get_orders_page(page, limit, session, user_id=user.id)
    return success_page(orders, build_pagination(page, limit, total))


@order_router.get("/stats/all")
async def get_order_stats(admin: UserDTO = Depends(require_admin),
                          session: AsyncSession = Depends(get_session)):
    stats = await AnalyticsService.get_order_stats(session)
    return success(stats)


@order_router.get("")
async def get_orders(page: int = Query(1, ge=1),
                     limit: int = Query(config.PAGE_ENTRIES, ge=1, le=100),
                     admin: UserDTO = Depends(require_admin),
                     session: AsyncSession = Depends(get_session)):
    orders, total = await OrderService.get_orders_page(page, limit, session)
    return success_page(orders, build_pagination(page, limit, total))


@order_router.get("/{order_id}")
async def get_order(order_id: int,
                    user: UserDTO = Depends(get_current_user),
                    session: AsyncSession = Depends(get_session)):
    order = await OrderService.get_order(order_id, user, session)
    return success(order)


@order_router.put("/{order_id}/status")
async def update_order_status(order_id: int, request: StatusUpdateRequest,
                              admin: UserDTO = Depends(require_admin),
                              session: AsyncSession = Depends(get_session)):
    order = await OrderService.update_status(order_id, request.status, session)
    logger.info(f"Admin {admin.id} set order {order_id} to {request.status.value}")
    return success(order)


@order_router.put("/{order_id}/payment-status")
async def update_payment_status(order_id: int, request: PaymentStatusUpdateRequest,
                                admin: UserDTO = Depends(require_admin),
                                session: AsyncSession = Depends(get_session)):
    order = await OrderService.update_payment_status(order_id, request.payment_status, session)
    logger.info(f"Admin {admin.id} set order {order_id} payment to {request.payment_status.value}")
    return success(order)
