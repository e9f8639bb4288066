import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush, session_refresh
from enums.order_status import OrderStatus
from enums.payment_status import PaymentStatus
from models.order import Order, OrderDTO
from models.orderItem import OrderItem

logger = logging.getLogger(__name__)


class OrderRepository:

    @staticmethod
    async def create(order_dto: OrderDTO, session: AsyncSession) -> OrderDTO:
        order = Order(
            user_id=order_dto.user_id,
            total_amount=order_dto.total_amount,
            status=order_dto.status or OrderStatus.PENDING,
            payment_status=order_dto.payment_status or PaymentStatus.PENDING,
            payment_method=order_dto.payment_method,
            shipping_address=order_dto.shipping_address.model_dump(),
            items=[
                OrderItem(
                    product_id=item.product_id,
                    position=position,
                    quantity=item.quantity,
                    price=item.price,
                    customization=item.customization.model_dump(mode='json', exclude_none=True)
                    if item.customization else None,
                )
                for position, item in enumerate(order_dto.items)
            ],
        )
        session.add(order)
        await session_flush(session)
        await session_refresh(session, order)
        return OrderDTO.model_validate(order, from_attributes=True)

    @staticmethod
    async def get_by_id(order_id: int, session: AsyncSession) -> OrderDTO | None:
        stmt = select(Order).where(Order.id == order_id)
        order = await session_execute(stmt, session)
        order = order.scalar()
        if order is not None:
            return OrderDTO.model_validate(order, from_attributes=True)
        else:
            return None

    @staticmethod
    async def get_page(offset: int, limit: int, session: AsyncSession,
                       user_id: int | None = None) -> list[OrderDTO]:
        """
        Get one page of orders, newest first.

        Args:
            offset: Number of orders to skip
            limit: Page size
            user_id: Restrict to one user's orders (None = all orders)
        """
        stmt = select(Order)
        if user_id is not None:
            stmt = stmt.where(Order.user_id == user_id)
        stmt = stmt.order_by(Order.created_at.desc(), Order.id.desc()).offset(offset).limit(limit)
        orders = await session_execute(stmt, session)
        return [OrderDTO.model_validate(order, from_attributes=True) for order in orders.scalars().all()]

    @staticmethod
    async def count(session: AsyncSession, user_id: int | None = None) -> int:
        stmt = select(func.count()).select_from(Order)
        if user_id is not None:
            stmt = stmt.where(Order.user_id == user_id)
        total = await session_execute(stmt, session)
        return total.scalar_one()

    @staticmethod
    async def update_status(order_id: int, status: OrderStatus, session: AsyncSession) -> OrderDTO | None:
        return await OrderRepository._set_fields(order_id, session, status=status)

    @staticmethod
    async def update_payment_status(order_id: int, payment_status: PaymentStatus,
                                    session: AsyncSession) -> OrderDTO | None:
        return await OrderRepository._set_fields(order_id, session, payment_status=payment_status)

    @staticmethod
    async def _set_fields(order_id: int, session: AsyncSession, **values) -> OrderDTO | None:
        stmt = select(Order).where(Order.id == order_id)
        order = await session_execute(stmt, session)
        order = order.scalar()
        if order is None:
            return None
        for field, value in values.items():
            setattr(order, field, value)
        await session_flush(session)
        await session_refresh(session, order)
        return OrderDTO.model_validate(order, from_attributes=True)

    @staticmethod
    async def get_totals(session: AsyncSession) -> tuple[int, float, float]:
        """Returns (order count, revenue, average order value)."""
        stmt = select(func.count(Order.id), func.sum(Order.total_amount), func.avg(Order.total_amount))
        result = await session_execute(stmt, session)
        count, revenue, average = result.one()
        return int(count or 0), float(revenue or 0.0), float(average or 0.0)

    @staticmethod
    async def get_status_distribution(session: AsyncSession) -> dict[OrderStatus, int]:
        stmt = select(Order.status, func.count(Order.id)).group_by(Order.status)
        result = await session_execute(stmt, session)
        return {status: count for status, count in result.all()}

    @staticmethod
    async def get_daily_totals(days: int, session: AsyncSession) -> list[tuple[str, int, float]]:
        """
        Revenue and order count per calendar day, most recent `days` days that have orders.

        Returns:
            List of (YYYY-MM-DD, order count, revenue), date descending
        """
        day = func.date(Order.created_at)
        stmt = (select(day, func.count(Order.id), func.sum(Order.total_amount))
                .group_by(day)
                .order_by(day.desc())
                .limit(days))
        result = await session_execute(stmt, session)
        return [(str(d), int(count), float(revenue or 0.0)) for d, count, revenue in result.all()]
