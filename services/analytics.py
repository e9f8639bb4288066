"""
Analytics Service - aggregate order and catalog statistics for the admin dashboard.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from enums.order_status import OrderStatus
from models.order import OrderStatsDTO, DailyOrdersDTO
from models.product import CategoryStatsDTO
from repositories.order import OrderRepository
from repositories.product import ProductRepository

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Read-only reporting over orders and products"""

    # Number of most recent days (with orders) in the daily breakdown
    DAILY_ORDERS_DAYS = 7

    @staticmethod
    async def get_order_stats(session: AsyncSession) -> OrderStatsDTO:
        """
        Totals, per-status counts and the daily breakdown.

        Every status appears in the distribution, with 0 when no order has it.
        """
        total_orders, total_revenue, average_order_value = await OrderRepository.get_totals(session)
        distribution = await OrderRepository.get_status_distribution(session)
        daily = await OrderRepository.get_daily_totals(AnalyticsService.DAILY_ORDERS_DAYS, session)

        return OrderStatsDTO(
            total_orders=total_orders,
            total_revenue=round(total_revenue, 2),
            average_order_value=round(average_order_value, 2),
            status_distribution={status: distribution.get(status, 0) for status in OrderStatus},
            daily_orders=[DailyOrdersDTO(date=day, count=count, revenue=round(revenue, 2))
                          for day, count, revenue in daily],
        )

    @staticmethod
    async def get_product_stats(session: AsyncSession) -> list[CategoryStatsDTO]:
        rows = await ProductRepository.get_category_stats(session)
        logger.debug(f"[Analytics] Product stats computed for {len(rows)} categories")
        return [CategoryStatsDTO.model_validate(row) for row in rows]
