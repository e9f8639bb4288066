"""
Unit Tests for order listing, single fetch, status updates and statistics.
"""

import pytest

from enums.order_status import OrderStatus
from enums.payment_status import PaymentStatus
from enums.user_role import UserRole
from exceptions import OrderNotFoundException, OrderOwnershipException
from services.analytics import AnalyticsService
from services.order import OrderService
from utils.pagination import build_pagination


class TestOrderPages:

    @pytest.mark.asyncio
    async def test_second_page_of_25_orders(self, test_session, make_product, make_user, order_request):
        user = await make_user()
        product = await make_product(stock=100)
        created = [await OrderService.create_order(user, order_request((product.id, 1)), test_session)
                   for _ in range(25)]

        orders, total = await OrderService.get_orders_page(2, 10, test_session, user_id=user.id)
        pagination = build_pagination(2, 10, total)

        # Newest first: page 2 holds the 11th..20th newest orders
        newest_first = [order.id for order in reversed(created)]
        assert [order.id for order in orders] == newest_first[10:20]
        assert total == 25
        assert pagination.prev.page == 1 and pagination.prev.limit == 10
        assert pagination.next.page == 3 and pagination.next.limit == 10

    @pytest.mark.asyncio
    async def test_user_only_sees_own_orders(self, test_session, make_product, make_user, order_request):
        alice = await make_user("alice@example.com")
        bob = await make_user("bob@example.com")
        product = await make_product(stock=10)
        await OrderService.create_order(alice, order_request((product.id, 1)), test_session)
        await OrderService.create_order(bob, order_request((product.id, 1)), test_session)
        await OrderService.create_order(bob, order_request((product.id, 1)), test_session)

        alice_orders, alice_total = await OrderService.get_orders_page(1, 10, test_session, user_id=alice.id)
        all_orders, all_total = await OrderService.get_orders_page(1, 10, test_session)

        assert alice_total == 1
        assert {order.user_id for order in alice_orders} == {alice.id}
        assert all_total == 3
        assert len(all_orders) == 3


class TestGetOrder:

    @pytest.mark.asyncio
    async def test_owner_and_admin_can_read(self, test_session, make_product, make_user, order_request):
        owner = await make_user("owner@example.com")
        admin = await make_user("admin@example.com", role=UserRole.ADMIN)
        product = await make_product()
        order = await OrderService.create_order(owner, order_request((product.id, 1)), test_session)

        assert (await OrderService.get_order(order.id, owner, test_session)).id == order.id
        assert (await OrderService.get_order(order.id, admin, test_session)).id == order.id

    @pytest.mark.asyncio
    async def test_other_user_is_rejected(self, test_session, make_product, make_user, order_request):
        owner = await make_user("owner@example.com")
        stranger = await make_user("stranger@example.com")
        product = await make_product()
        order = await OrderService.create_order(owner, order_request((product.id, 1)), test_session)

        with pytest.raises(OrderOwnershipException) as exc_info:
            await OrderService.get_order(order.id, stranger, test_session)

        assert exc_info.value.message == "Not authorized to access this order"

    @pytest.mark.asyncio
    async def test_missing_order(self, test_session, make_user):
        user = await make_user()

        with pytest.raises(OrderNotFoundException) as exc_info:
            await OrderService.get_order(404, user, test_session)

        assert exc_info.value.message == "Order not found with id of 404"


class TestStatusUpdates:

    @pytest.mark.asyncio
    async def test_any_status_can_be_set(self, test_session, make_product, make_user, order_request):
        user = await make_user()
        product = await make_product()
        order = await OrderService.create_order(user, order_request((product.id, 1)), test_session)

        delivered = await OrderService.update_status(order.id, OrderStatus.DELIVERED, test_session)
        # No transition rules: straight back to pending is allowed
        pending = await OrderService.update_status(order.id, OrderStatus.PENDING, test_session)

        assert delivered.status == OrderStatus.DELIVERED
        assert delivered.tracking.current_status == "Order has been delivered"
        assert pending.status == OrderStatus.PENDING
        assert pending.updated_at is not None

    @pytest.mark.asyncio
    async def test_payment_status_is_independent(self, test_session, make_product, make_user, order_request):
        user = await make_user()
        product = await make_product()
        order = await OrderService.create_order(user, order_request((product.id, 1)), test_session)

        updated = await OrderService.update_payment_status(order.id, PaymentStatus.COMPLETED, test_session)

        assert updated.payment_status == PaymentStatus.COMPLETED
        assert updated.status == OrderStatus.PENDING

    @pytest.mark.asyncio
    async def test_update_missing_order(self, test_session):
        with pytest.raises(OrderNotFoundException):
            await OrderService.update_status(77, OrderStatus.SHIPPED, test_session)


class TestOrderStats:

    @pytest.mark.asyncio
    async def test_stats_without_orders(self, test_session):
        stats = await AnalyticsService.get_order_stats(test_session)

        assert stats.total_orders == 0
        assert stats.total_revenue == 0.0
        assert stats.average_order_value == 0.0
        assert stats.status_distribution == {status: 0 for status in OrderStatus}
        assert stats.daily_orders == []

    @pytest.mark.asyncio
    async def test_stats_aggregate_orders(self, test_session, make_product, make_user, order_request):
        user = await make_user()
        shirt = await make_product("Classic Tee", price=10.0, stock=10)
        cap = await make_product("Logo Cap", price=5.0, stock=10)
        first = await OrderService.create_order(user, order_request((shirt.id, 2), (cap.id, 1)), test_session)
        await OrderService.create_order(user, order_request((cap.id, 1)), test_session)
        await OrderService.update_status(first.id, OrderStatus.SHIPPED, test_session)

        stats = await AnalyticsService.get_order_stats(test_session)

        assert stats.total_orders == 2
        assert stats.total_revenue == 30.0
        assert stats.average_order_value == 15.0
        assert stats.status_distribution[OrderStatus.SHIPPED] == 1
        assert stats.status_distribution[OrderStatus.PENDING] == 1
        assert stats.status_distribution[OrderStatus.CANCELLED] == 0
        assert len(stats.daily_orders) == 1
        assert stats.daily_orders[0].count == 2
        assert stats.daily_orders[0].revenue == 30.0
